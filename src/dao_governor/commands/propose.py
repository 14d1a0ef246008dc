from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from dao_governor.config import AppSettings
from dao_governor.errors import ConfigurationError, GovernanceError, ReceiptDecodeError
from dao_governor.evm.addresses import normalize_address
from dao_governor.evm.transactions import CancellationToken
from dao_governor.observability.logging import get_logger
from dao_governor.orchestration.client import GovernanceClient, build_governance_client
from dao_governor.orchestration.identity import (
    DEFAULT_MINT_AMOUNT,
    DEFAULT_PROPOSAL_DESCRIPTION,
    build_mint_proposal,
    parse_token_amount,
    write_manifest,
)
from dao_governor.types import CommandResult, CommandStatus

COMMAND = "propose"


def run_propose(
    args: Namespace,
    settings: AppSettings,
    *,
    client: GovernanceClient | None = None,
    cancel: CancellationToken | None = None,
) -> CommandResult:
    try:
        return _propose(args, settings, client=client, cancel=cancel)
    except GovernanceError as exc:
        get_logger("propose").warning("command_failed", command=COMMAND, **exc.as_details())
        return CommandResult.from_error(COMMAND, exc)


def _propose(
    args: Namespace,
    settings: AppSettings,
    *,
    client: GovernanceClient | None,
    cancel: CancellationToken | None,
) -> CommandResult:
    logger = get_logger("propose")
    settings.require("governor_address", "token_address", "private_key")

    client = client or build_governance_client(settings, token=True)
    governor = client.require_governor()
    token = client.require_token()
    submitter = client.require_submitter()
    proposer = submitter.sender

    description = str(getattr(args, "description", None) or DEFAULT_PROPOSAL_DESCRIPTION)
    try:
        recipient = normalize_address(
            str(getattr(args, "recipient", None) or proposer),
            field_name="recipient",
        )
        amount = parse_token_amount(getattr(args, "amount", None) or DEFAULT_MINT_AMOUNT)
        identity = build_mint_proposal(token.address, recipient, amount, description)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc

    derived_proposal_id = identity.proposal_id()
    logger.info(
        "proposal_identity_derived",
        proposal_id=str(derived_proposal_id),
        fingerprint=identity.fingerprint,
        description=description,
        governor_address=governor.address,
        token_address=token.address,
    )

    manifest_out = getattr(args, "manifest_out", None)
    manifest_path = Path(manifest_out) if manifest_out else None
    if manifest_path is not None and not manifest_path.parent.is_dir():
        raise ConfigurationError(
            f"manifest directory {manifest_path.parent} does not exist",
            manifest_path=str(manifest_path),
        )

    confirmation = submitter.submit("propose", governor.propose_function(identity), cancel=cancel)

    try:
        proposal_id = governor.decode_proposal_created(confirmation.receipt)
    except ReceiptDecodeError as exc:
        exc.context["derived_proposal_id"] = str(derived_proposal_id)
        exc.context["fingerprint"] = identity.fingerprint
        exc.context["transaction"] = confirmation.record.as_dict()
        raise

    if proposal_id != derived_proposal_id:
        logger.warning(
            "proposal_id_differs_from_derivation",
            proposal_id=str(proposal_id),
            derived_proposal_id=str(derived_proposal_id),
        )

    written_manifest = None
    manifest_error = None
    if manifest_path is not None:
        try:
            write_manifest(identity, manifest_path)
            written_manifest = str(manifest_path)
        except OSError as exc:
            # the proposal exists on chain; report it with the write failure
            manifest_error = str(exc)
            logger.warning(
                "manifest_write_failed",
                proposal_id=str(proposal_id),
                manifest_path=str(manifest_path),
                error=manifest_error,
            )

    snapshot = client.reader().read(proposal_id)
    voting_delay = governor.voting_delay()
    logger.info("proposal_submitted", proposal_id=str(proposal_id), state=snapshot.state.label)

    return CommandResult(
        command=COMMAND,
        status=CommandStatus.WAITING,
        details={
            "proposal_id": str(proposal_id),
            "derived_proposal_id": str(derived_proposal_id),
            "matches_derivation": proposal_id == derived_proposal_id,
            "fingerprint": identity.fingerprint,
            "description": description,
            "proposer": proposer,
            "state": snapshot.state.label,
            "voting_delay_blocks": voting_delay,
            "transaction": confirmation.record.as_dict(),
            "manifest": identity.as_dict(),
            "manifest_path": written_manifest,
            "manifest_error": manifest_error,
        },
    )
