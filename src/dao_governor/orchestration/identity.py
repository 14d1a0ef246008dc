from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

from eth_utils import from_wei, to_wei

from dao_governor.domain import ProposalCall, ProposalIdentity, derive_proposal_identity
from dao_governor.evm.calldata import MintCall

DEFAULT_PROPOSAL_DESCRIPTION = "Proposal #1: Mint 100 tokens to the proposer"
DEFAULT_MINT_AMOUNT = "100"


def parse_token_amount(raw_amount: str | int | Decimal) -> int:
    """Whole-token amount (18 decimals) to base units, like ethers ``parseEther``."""
    try:
        amount = Decimal(str(raw_amount).strip())
    except InvalidOperation as exc:
        raise ValueError(f"amount {raw_amount!r} is not a number") from exc
    if not amount.is_finite():
        raise ValueError(f"amount {raw_amount!r} is not a number")
    if amount < 0:
        raise ValueError("amount must be non-negative")
    exponent = amount.as_tuple().exponent
    if not isinstance(exponent, int) or exponent < -18:
        raise ValueError("amount has more than 18 decimal places")
    return int(to_wei(amount, "ether"))


def format_token_amount(base_units: int) -> str:
    return str(from_wei(base_units, "ether"))


def build_mint_proposal(
    token_address: str,
    recipient: str,
    amount: int,
    description: str = DEFAULT_PROPOSAL_DESCRIPTION,
) -> ProposalIdentity:
    """One call to ``token.mint(recipient, amount)`` with no native value attached."""
    calldata = MintCall(recipient=recipient, amount=amount).to_bytes()
    return derive_proposal_identity(
        [ProposalCall(target=token_address, value=0, calldata=calldata)],
        description,
    )


def write_manifest(identity: ProposalIdentity, path: Path) -> None:
    path.write_text(json.dumps(identity.as_dict(), indent=2, sort_keys=True) + "\n", encoding="utf-8")


def load_manifest(path: Path) -> ProposalIdentity:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"proposal manifest {path} is not valid JSON") from exc
    if not isinstance(data, dict):
        raise ValueError(f"proposal manifest {path} must contain a JSON object")
    return ProposalIdentity.from_dict(data)
