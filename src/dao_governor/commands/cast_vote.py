from __future__ import annotations

from argparse import Namespace

from dao_governor.config import AppSettings
from dao_governor.domain import ProposalState, VoteSupport
from dao_governor.errors import (
    ConfigurationError,
    GovernanceError,
    RemoteRevertError,
    StateIneligibleError,
)
from dao_governor.evm.transactions import CancellationToken
from dao_governor.observability.logging import get_logger
from dao_governor.orchestration.client import GovernanceClient, build_governance_client
from dao_governor.orchestration.inputs import resolve_proposal_id
from dao_governor.orchestration.lifecycle import require_vote_eligibility
from dao_governor.types import CommandResult, CommandStatus

COMMAND = "vote"
DEFAULT_REASON = "I support this proposal"


def run_cast_vote(
    args: Namespace,
    settings: AppSettings,
    *,
    client: GovernanceClient | None = None,
    cancel: CancellationToken | None = None,
) -> CommandResult:
    try:
        return _cast_vote(args, settings, client=client, cancel=cancel)
    except GovernanceError as exc:
        get_logger("vote").warning("command_failed", command=COMMAND, **exc.as_details())
        return CommandResult.from_error(COMMAND, exc)


def _cast_vote(
    args: Namespace,
    settings: AppSettings,
    *,
    client: GovernanceClient | None,
    cancel: CancellationToken | None,
) -> CommandResult:
    logger = get_logger("vote")
    settings.require("governor_address", "private_key")
    proposal_id = resolve_proposal_id(args, settings)

    try:
        support = VoteSupport.from_label(str(getattr(args, "support", None) or VoteSupport.FOR.name))
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    raw_reason = getattr(args, "reason", None)
    reason = DEFAULT_REASON if raw_reason is None else str(raw_reason)

    client = client or build_governance_client(settings)
    governor = client.require_governor()
    submitter = client.require_submitter()
    voter = submitter.sender

    snapshot = client.reader().read(proposal_id)
    has_voted = snapshot.state == ProposalState.ACTIVE and governor.has_voted(proposal_id, voter)
    try:
        require_vote_eligibility(snapshot.state, has_voted=has_voted)
    except StateIneligibleError as exc:
        exc.context.update(snapshot.as_dict())
        exc.context["voter"] = voter
        if snapshot.state == ProposalState.PENDING:
            exc.context["voting_delay_blocks"] = governor.voting_delay()
        raise

    logger.info(
        "casting_vote",
        proposal_id=str(proposal_id),
        voter=voter,
        support=support.label,
        reason=reason,
    )
    try:
        confirmation = submitter.submit(
            "vote",
            governor.cast_vote_function(proposal_id, support, reason),
            cancel=cancel,
        )
    except RemoteRevertError as exc:
        exc.context["proposal_id"] = str(proposal_id)
        exc.context["voter"] = voter
        raise

    weight = governor.decode_vote_weight(confirmation.receipt)
    after = client.reader().read(proposal_id)

    return CommandResult(
        command=COMMAND,
        status=CommandStatus.CONFIRMED,
        details={
            **after.as_dict(),
            "voter": voter,
            "support": support.label,
            "reason": reason,
            "weight": str(weight) if weight is not None else None,
            "voting_period_blocks": governor.voting_period(),
            "transaction": confirmation.record.as_dict(),
        },
    )
