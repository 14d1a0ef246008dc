from __future__ import annotations

from argparse import Namespace

from dao_governor.config import AppSettings
from dao_governor.errors import ConfigurationError, GovernanceError
from dao_governor.evm.addresses import normalize_address
from dao_governor.evm.transactions import CancellationToken
from dao_governor.observability.logging import get_logger
from dao_governor.orchestration.client import GovernanceClient, build_governance_client
from dao_governor.orchestration.identity import format_token_amount
from dao_governor.types import CommandResult, CommandStatus

COMMAND = "delegate"


def run_delegate(
    args: Namespace,
    settings: AppSettings,
    *,
    client: GovernanceClient | None = None,
    cancel: CancellationToken | None = None,
) -> CommandResult:
    """Delegate token voting power; votes only count once delegated, even to oneself."""
    try:
        settings.require("token_address", "private_key")
        client = client or build_governance_client(settings, governor=False, token=True)
        token = client.require_token()
        submitter = client.require_submitter()

        try:
            delegatee = normalize_address(
                str(getattr(args, "delegatee", None) or submitter.sender),
                field_name="delegatee",
            )
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        confirmation = submitter.submit("delegate", token.delegate_function(delegatee), cancel=cancel)
        votes = token.get_votes(delegatee)
    except GovernanceError as exc:
        get_logger("delegate").warning("command_failed", command=COMMAND, **exc.as_details())
        return CommandResult.from_error(COMMAND, exc)

    return CommandResult(
        command=COMMAND,
        status=CommandStatus.CONFIRMED,
        details={
            "delegator": submitter.sender,
            "delegatee": delegatee,
            "voting_power": format_token_amount(votes),
            "voting_power_base_units": str(votes),
            "transaction": confirmation.record.as_dict(),
        },
    )
