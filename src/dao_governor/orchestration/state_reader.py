from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from dao_governor.domain import ProposalState, VotingWindow


class GovernorReader(Protocol):
    def state(self, proposal_id: int) -> ProposalState:
        ...

    def voting_window(self, proposal_id: int) -> VotingWindow:
        ...

    def current_block(self) -> int:
        ...


@dataclass(slots=True, frozen=True)
class ProposalSnapshot:
    """One fresh observation of a proposal; never cached across decisions.

    ``estimated_minutes_remaining`` multiplies the remaining blocks by an
    average block interval. It is a heuristic for humans, not a timer.
    """

    proposal_id: int
    state: ProposalState
    current_block: int
    window: VotingWindow | None
    average_block_seconds: float

    @property
    def blocks_remaining(self) -> int | None:
        if self.window is None:
            return None
        return self.window.blocks_remaining(self.current_block)

    @property
    def estimated_minutes_remaining(self) -> int | None:
        if self.window is None:
            return None
        return self.window.estimate_minutes_remaining(self.current_block, self.average_block_seconds)

    def as_dict(self) -> dict[str, Any]:
        return {
            "proposal_id": str(self.proposal_id),
            "state": self.state.label,
            "current_block": self.current_block,
            "voting_window": self.window.as_dict() if self.window else None,
            "blocks_remaining": self.blocks_remaining,
            "estimated_minutes_remaining": self.estimated_minutes_remaining,
            "average_block_seconds": self.average_block_seconds,
        }


class ProposalStateReader:
    def __init__(self, governor: GovernorReader, *, average_block_seconds: float = 12.0) -> None:
        self._governor = governor
        self._average_block_seconds = average_block_seconds

    def read(self, proposal_id: int) -> ProposalSnapshot:
        # an unknown id raises IdentityMismatchError from the adapter
        state = self._governor.state(proposal_id)
        window = None
        if state != ProposalState.PENDING:
            window = self._governor.voting_window(proposal_id)
        return ProposalSnapshot(
            proposal_id=proposal_id,
            state=state,
            current_block=self._governor.current_block(),
            window=window,
            average_block_seconds=self._average_block_seconds,
        )
