from __future__ import annotations

from enum import IntEnum

from dao_governor.errors import UnknownProposalStateError


class ProposalState(IntEnum):
    PENDING = 0
    ACTIVE = 1
    CANCELED = 2
    DEFEATED = 3
    SUCCEEDED = 4
    QUEUED = 5
    EXPIRED = 6
    EXECUTED = 7

    @property
    def label(self) -> str:
        return self.name.capitalize()


TERMINAL_STATES: frozenset[ProposalState] = frozenset(
    {
        ProposalState.CANCELED,
        ProposalState.DEFEATED,
        ProposalState.EXPIRED,
        ProposalState.EXECUTED,
    }
)

EXECUTABLE_STATES: frozenset[ProposalState] = frozenset(
    {
        ProposalState.SUCCEEDED,
        ProposalState.QUEUED,
    }
)


def decode_proposal_state(raw_state: object) -> ProposalState:
    """Map the ledger's raw enum ordinal onto ``ProposalState``.

    The ledger owns this enumeration and may extend it; anything outside the
    known range raises instead of being treated as actionable.
    """
    if isinstance(raw_state, ProposalState):
        return raw_state
    if isinstance(raw_state, bool) or not isinstance(raw_state, int):
        raise UnknownProposalStateError(raw_state)
    try:
        return ProposalState(raw_state)
    except ValueError as exc:
        raise UnknownProposalStateError(raw_state) from exc


def is_terminal_state(state: ProposalState) -> bool:
    return state in TERMINAL_STATES
