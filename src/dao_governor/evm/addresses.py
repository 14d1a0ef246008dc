from __future__ import annotations

from eth_utils import is_address, to_checksum_address


def normalize_address(raw_value: str, *, field_name: str) -> str:
    candidate = raw_value.strip()
    if not candidate:
        raise ValueError(f"{field_name} is required")

    if not is_address(candidate):
        raise ValueError(f"{field_name} must be a valid EVM address")
    return to_checksum_address(candidate)


def parse_proposal_id(raw_value: str) -> int:
    """Accept a proposal id as printed by the ledger tooling: decimal or 0x-hex."""
    candidate = raw_value.strip()
    if not candidate:
        raise ValueError("proposal_id is required")

    try:
        proposal_id = int(candidate, 16) if candidate.lower().startswith("0x") else int(candidate, 10)
    except ValueError as exc:
        raise ValueError("proposal_id must be a decimal or 0x-prefixed hex integer") from exc

    if proposal_id < 0 or proposal_id >= 2**256:
        raise ValueError("proposal_id must fit in uint256")
    return proposal_id
