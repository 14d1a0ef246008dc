from __future__ import annotations

import pytest

from dao_governor.domain import ProposalState, decode_proposal_state, is_terminal_state
from dao_governor.errors import StateIneligibleError, UnknownProposalStateError


def test_decodes_every_known_ordinal() -> None:
    labels = [decode_proposal_state(ordinal).label for ordinal in range(8)]

    assert labels == [
        "Pending",
        "Active",
        "Canceled",
        "Defeated",
        "Succeeded",
        "Queued",
        "Expired",
        "Executed",
    ]


@pytest.mark.parametrize("raw_state", [8, -1, 255, "1", None, True])
def test_out_of_range_state_fails_loudly(raw_state: object) -> None:
    with pytest.raises(UnknownProposalStateError) as excinfo:
        decode_proposal_state(raw_state)

    assert excinfo.value.context["raw_state"] == str(raw_state)


def test_unknown_state_is_a_state_ineligibility() -> None:
    assert issubclass(UnknownProposalStateError, StateIneligibleError)


def test_terminal_states() -> None:
    assert is_terminal_state(ProposalState.EXECUTED)
    assert is_terminal_state(ProposalState.DEFEATED)
    assert not is_terminal_state(ProposalState.SUCCEEDED)
    assert not is_terminal_state(ProposalState.ACTIVE)
