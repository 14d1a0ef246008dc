from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from dao_governor.config import AppSettings
from dao_governor.domain import ProposalIdentity
from dao_governor.errors import (
    ConfigurationError,
    GovernanceError,
    RemoteRevertError,
    StateIneligibleError,
)
from dao_governor.evm.addresses import normalize_address
from dao_governor.evm.transactions import CancellationToken
from dao_governor.observability.logging import get_logger
from dao_governor.orchestration.client import GovernanceClient, build_governance_client
from dao_governor.orchestration.identity import (
    DEFAULT_MINT_AMOUNT,
    DEFAULT_PROPOSAL_DESCRIPTION,
    build_mint_proposal,
    format_token_amount,
    load_manifest,
    parse_token_amount,
)
from dao_governor.orchestration.inputs import resolve_proposal_id
from dao_governor.orchestration.lifecycle import (
    LifecycleAction,
    require_execute_eligibility,
    verify_identity,
)
from dao_governor.types import CommandResult, CommandStatus

COMMAND = "execute"


def _execution_identity(args: Namespace, token_address: str, executor: str) -> ProposalIdentity:
    """Rebuild the propose-time identity, from a manifest or from the same flags."""
    manifest = getattr(args, "manifest", None)
    try:
        if manifest:
            return load_manifest(Path(manifest))

        recipient = normalize_address(
            str(getattr(args, "recipient", None) or executor),
            field_name="recipient",
        )
        return build_mint_proposal(
            token_address,
            recipient,
            parse_token_amount(getattr(args, "amount", None) or DEFAULT_MINT_AMOUNT),
            str(getattr(args, "description", None) or DEFAULT_PROPOSAL_DESCRIPTION),
        )
    except OSError as exc:
        raise ConfigurationError(f"cannot read proposal manifest: {exc}") from exc
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc


def run_execute_proposal(
    args: Namespace,
    settings: AppSettings,
    *,
    client: GovernanceClient | None = None,
    cancel: CancellationToken | None = None,
) -> CommandResult:
    try:
        return _execute_proposal(args, settings, client=client, cancel=cancel)
    except GovernanceError as exc:
        get_logger("execute").warning("command_failed", command=COMMAND, **exc.as_details())
        return CommandResult.from_error(COMMAND, exc)


def _execute_proposal(
    args: Namespace,
    settings: AppSettings,
    *,
    client: GovernanceClient | None,
    cancel: CancellationToken | None,
) -> CommandResult:
    logger = get_logger("execute")
    settings.require("governor_address", "token_address", "private_key")
    proposal_id = resolve_proposal_id(args, settings)

    client = client or build_governance_client(settings, token=True)
    governor = client.require_governor()
    token = client.require_token()
    submitter = client.require_submitter()
    executor = submitter.sender

    snapshot = client.reader().read(proposal_id)
    try:
        decision = require_execute_eligibility(snapshot.state)
    except StateIneligibleError as exc:
        exc.context.update(snapshot.as_dict())
        raise

    if decision.action == LifecycleAction.ALREADY_EXECUTED:
        balance = token.balance_of(executor)
        logger.info("proposal_already_executed", proposal_id=str(proposal_id))
        return CommandResult(
            command=COMMAND,
            status=CommandStatus.ALREADY_EXECUTED,
            details={
                **snapshot.as_dict(),
                "message": decision.reason,
                "account": executor,
                "token_balance": format_token_amount(balance),
                "token_balance_base_units": str(balance),
            },
        )

    identity = _execution_identity(args, token.address, executor)
    verify_identity(identity, proposal_id)

    balance_before = token.balance_of(executor)
    logger.info(
        "executing_proposal",
        proposal_id=str(proposal_id),
        state=snapshot.state.label,
        fingerprint=identity.fingerprint,
    )
    try:
        confirmation = submitter.submit("execute", governor.execute_function(identity), cancel=cancel)
    except RemoteRevertError as exc:
        exc.context["proposal_id"] = str(proposal_id)
        exc.context["state"] = snapshot.state.label
        raise

    balance_after = token.balance_of(executor)
    return CommandResult(
        command=COMMAND,
        status=CommandStatus.CONFIRMED,
        details={
            "proposal_id": str(proposal_id),
            "previous_state": snapshot.state.label,
            "fingerprint": identity.fingerprint,
            "execution_event_seen": governor.decode_proposal_executed(confirmation.receipt, proposal_id),
            "account": executor,
            "token_balance": format_token_amount(balance_after),
            "token_balance_base_units": str(balance_after),
            "token_balance_change_base_units": str(balance_after - balance_before),
            "transaction": confirmation.record.as_dict(),
        },
    )
