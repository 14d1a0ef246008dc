"""Domain models for the proposal lifecycle."""

from dao_governor.domain.proposal_identity import (
    ProposalCall,
    ProposalIdentity,
    derive_proposal_identity,
)
from dao_governor.domain.proposal_state import (
    EXECUTABLE_STATES,
    ProposalState,
    decode_proposal_state,
    is_terminal_state,
)
from dao_governor.domain.transaction_record import TransactionRecord
from dao_governor.domain.vote import VoteSupport
from dao_governor.domain.voting_window import VotingWindow

__all__ = [
    "EXECUTABLE_STATES",
    "ProposalCall",
    "ProposalIdentity",
    "ProposalState",
    "TransactionRecord",
    "VoteSupport",
    "VotingWindow",
    "decode_proposal_state",
    "derive_proposal_identity",
    "is_terminal_state",
]
