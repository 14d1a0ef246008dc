"""Decision table for a single proposal's lifecycle.

The ledger drives every transition; this module only looks at an observed
state and says which action, if any, is legal to attempt next.

| observed state     | action                                  |
|--------------------|-----------------------------------------|
| Pending            | wait                                    |
| Active             | cast vote, or already voted             |
| Succeeded, Queued  | execute                                 |
| Executed           | already executed (no-op)                |
| Defeated, Canceled, Expired | terminal                       |
| anything else      | UnknownProposalStateError               |
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from dao_governor.domain import (
    EXECUTABLE_STATES,
    ProposalIdentity,
    ProposalState,
    decode_proposal_state,
)
from dao_governor.errors import IdentityMismatchError, StateIneligibleError


class LifecycleAction(StrEnum):
    WAIT = "wait"
    CAST_VOTE = "cast_vote"
    ALREADY_VOTED = "already_voted"
    EXECUTE = "execute"
    ALREADY_EXECUTED = "already_executed"
    TERMINAL = "terminal"


STATE_REASONS: dict[ProposalState, str] = {
    ProposalState.PENDING: "voting delay has not elapsed; wait for the proposal to become active",
    ProposalState.ACTIVE: "proposal is inside its voting window",
    ProposalState.CANCELED: "proposal was canceled",
    ProposalState.DEFEATED: "proposal was defeated in voting; create a new proposal if needed",
    ProposalState.SUCCEEDED: "proposal passed and can be executed",
    ProposalState.QUEUED: "proposal is queued and can be executed once its timelock allows",
    ProposalState.EXPIRED: "proposal expired without being executed; it must be recreated",
    ProposalState.EXECUTED: "proposal has already been executed",
}


@dataclass(slots=True, frozen=True)
class LifecycleDecision:
    state: ProposalState
    action: LifecycleAction
    reason: str

    @property
    def submits_transaction(self) -> bool:
        return self.action in {LifecycleAction.CAST_VOTE, LifecycleAction.EXECUTE}

    def as_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.label,
            "next_action": self.action.value,
            "reason": self.reason,
        }


def decide_next_action(raw_state: ProposalState | int, *, has_voted: bool = False) -> LifecycleDecision:
    state = decode_proposal_state(raw_state)
    reason = STATE_REASONS[state]

    if state == ProposalState.PENDING:
        return LifecycleDecision(state, LifecycleAction.WAIT, reason)

    if state == ProposalState.ACTIVE:
        if has_voted:
            return LifecycleDecision(state, LifecycleAction.ALREADY_VOTED, "this account has already voted")
        return LifecycleDecision(state, LifecycleAction.CAST_VOTE, reason)

    if state in EXECUTABLE_STATES:
        return LifecycleDecision(state, LifecycleAction.EXECUTE, reason)

    if state == ProposalState.EXECUTED:
        return LifecycleDecision(state, LifecycleAction.ALREADY_EXECUTED, reason)

    return LifecycleDecision(state, LifecycleAction.TERMINAL, reason)


def require_vote_eligibility(raw_state: ProposalState | int, *, has_voted: bool) -> LifecycleDecision:
    decision = decide_next_action(raw_state, has_voted=has_voted)
    if decision.action != LifecycleAction.CAST_VOTE:
        raise StateIneligibleError(
            f"cannot vote: {decision.reason}",
            state=decision.state.label,
            next_action=decision.action.value,
        )
    return decision


def require_execute_eligibility(raw_state: ProposalState | int) -> LifecycleDecision:
    """Return an execute or already-executed decision; raise for every other state."""
    decision = decide_next_action(raw_state)
    if decision.action not in {LifecycleAction.EXECUTE, LifecycleAction.ALREADY_EXECUTED}:
        raise StateIneligibleError(
            f"cannot execute: {decision.reason}",
            state=decision.state.label,
            next_action=decision.action.value,
        )
    return decision


def verify_identity(identity: ProposalIdentity, proposal_id: int) -> None:
    derived = identity.proposal_id()
    if derived != proposal_id:
        raise IdentityMismatchError(
            "recomputed proposal id does not match; the proposal parameters differ from propose time",
            proposal_id=str(proposal_id),
            derived_proposal_id=str(derived),
            fingerprint=identity.fingerprint,
            description=identity.description,
        )
