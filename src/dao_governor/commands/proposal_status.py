from __future__ import annotations

from argparse import Namespace

from dao_governor.config import AppSettings
from dao_governor.domain import ProposalState, is_terminal_state
from dao_governor.errors import ConfigurationError, GovernanceError
from dao_governor.evm.addresses import normalize_address
from dao_governor.evm.transactions import CancellationToken
from dao_governor.orchestration.client import GovernanceClient, build_governance_client
from dao_governor.orchestration.inputs import resolve_proposal_id
from dao_governor.orchestration.lifecycle import decide_next_action
from dao_governor.types import CommandResult, CommandStatus

COMMAND = "status"


def run_proposal_status(
    args: Namespace,
    settings: AppSettings,
    *,
    client: GovernanceClient | None = None,
    cancel: CancellationToken | None = None,
) -> CommandResult:
    try:
        settings.require("governor_address")
        proposal_id = resolve_proposal_id(args, settings)

        raw_voter = str(getattr(args, "voter", None) or "").strip()
        try:
            voter = normalize_address(raw_voter, field_name="voter") if raw_voter else None
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        client = client or build_governance_client(settings, signer=False)
        governor = client.require_governor()
        snapshot = client.reader().read(proposal_id)
        has_voted = (
            voter is not None
            and snapshot.state == ProposalState.ACTIVE
            and governor.has_voted(proposal_id, voter)
        )
        decision = decide_next_action(snapshot.state, has_voted=has_voted)
    except GovernanceError as exc:
        return CommandResult.from_error(COMMAND, exc)

    return CommandResult(
        command=COMMAND,
        status=CommandStatus.OBSERVED,
        details={
            **snapshot.as_dict(),
            **decision.as_dict(),
            "terminal": is_terminal_state(snapshot.state),
            "voter": voter,
            "has_voted": has_voted if voter is not None else None,
        },
    )
