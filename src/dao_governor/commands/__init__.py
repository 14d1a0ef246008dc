"""Command handlers for the dao-governor CLI."""

from dao_governor.commands.cast_vote import run_cast_vote
from dao_governor.commands.delegate import run_delegate
from dao_governor.commands.execute_proposal import run_execute_proposal
from dao_governor.commands.proposal_status import run_proposal_status
from dao_governor.commands.propose import run_propose

__all__ = [
    "run_cast_vote",
    "run_delegate",
    "run_execute_proposal",
    "run_proposal_status",
    "run_propose",
]
