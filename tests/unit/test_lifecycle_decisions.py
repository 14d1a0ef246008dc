from __future__ import annotations

import pytest
from eth_utils import to_checksum_address

from dao_governor.domain import ProposalState
from dao_governor.errors import IdentityMismatchError, StateIneligibleError, UnknownProposalStateError
from dao_governor.orchestration.identity import build_mint_proposal
from dao_governor.orchestration.lifecycle import (
    LifecycleAction,
    decide_next_action,
    require_execute_eligibility,
    require_vote_eligibility,
    verify_identity,
)

TOKEN = to_checksum_address("0x" + "7b" * 20)
PROPOSER = to_checksum_address("0x" + "8c" * 20)


@pytest.mark.parametrize(
    ("state", "action"),
    [
        (ProposalState.PENDING, LifecycleAction.WAIT),
        (ProposalState.ACTIVE, LifecycleAction.CAST_VOTE),
        (ProposalState.CANCELED, LifecycleAction.TERMINAL),
        (ProposalState.DEFEATED, LifecycleAction.TERMINAL),
        (ProposalState.SUCCEEDED, LifecycleAction.EXECUTE),
        (ProposalState.QUEUED, LifecycleAction.EXECUTE),
        (ProposalState.EXPIRED, LifecycleAction.TERMINAL),
        (ProposalState.EXECUTED, LifecycleAction.ALREADY_EXECUTED),
    ],
)
def test_decision_table(state: ProposalState, action: LifecycleAction) -> None:
    decision = decide_next_action(state)

    assert decision.state == state
    assert decision.action == action


def test_active_and_already_voted_is_not_a_vote() -> None:
    decision = decide_next_action(ProposalState.ACTIVE, has_voted=True)

    assert decision.action == LifecycleAction.ALREADY_VOTED
    assert not decision.submits_transaction


def test_raw_ordinal_is_decoded() -> None:
    assert decide_next_action(4).action == LifecycleAction.EXECUTE


def test_unrecognized_state_fails_fast() -> None:
    with pytest.raises(UnknownProposalStateError):
        decide_next_action(9)


def test_defeated_reason_points_to_a_new_proposal() -> None:
    decision = decide_next_action(ProposalState.DEFEATED)

    assert "defeated" in decision.reason
    assert "new proposal" in decision.reason


def test_vote_allowed_only_when_active_and_not_voted() -> None:
    decision = require_vote_eligibility(ProposalState.ACTIVE, has_voted=False)

    assert decision.action == LifecycleAction.CAST_VOTE
    assert decision.submits_transaction


def test_vote_rejected_when_already_voted() -> None:
    with pytest.raises(StateIneligibleError) as excinfo:
        require_vote_eligibility(ProposalState.ACTIVE, has_voted=True)

    assert excinfo.value.context["next_action"] == "already_voted"


@pytest.mark.parametrize(
    "state",
    [ProposalState.PENDING, ProposalState.SUCCEEDED, ProposalState.EXECUTED, ProposalState.DEFEATED],
)
def test_vote_rejected_outside_active(state: ProposalState) -> None:
    with pytest.raises(StateIneligibleError) as excinfo:
        require_vote_eligibility(state, has_voted=False)

    assert excinfo.value.context["state"] == state.label
    assert excinfo.value.retryable is False


def test_execute_on_executed_is_a_no_op_decision() -> None:
    decision = require_execute_eligibility(ProposalState.EXECUTED)

    assert decision.action == LifecycleAction.ALREADY_EXECUTED
    assert not decision.submits_transaction


@pytest.mark.parametrize("state", [ProposalState.SUCCEEDED, ProposalState.QUEUED])
def test_execute_allowed_from_succeeded_and_queued(state: ProposalState) -> None:
    assert require_execute_eligibility(state).action == LifecycleAction.EXECUTE


@pytest.mark.parametrize(
    "state",
    [
        ProposalState.PENDING,
        ProposalState.ACTIVE,
        ProposalState.CANCELED,
        ProposalState.DEFEATED,
        ProposalState.EXPIRED,
    ],
)
def test_execute_rejected_for_other_states(state: ProposalState) -> None:
    with pytest.raises(StateIneligibleError, match="cannot execute"):
        require_execute_eligibility(state)


def test_verify_identity_accepts_matching_id() -> None:
    identity = build_mint_proposal(TOKEN, PROPOSER, 100 * 10**18)

    verify_identity(identity, identity.proposal_id())


def test_verify_identity_rejects_different_parameters() -> None:
    proposed = build_mint_proposal(TOKEN, PROPOSER, 100 * 10**18)
    recomputed = build_mint_proposal(TOKEN, PROPOSER, 99 * 10**18)

    with pytest.raises(IdentityMismatchError) as excinfo:
        verify_identity(recomputed, proposed.proposal_id())

    assert excinfo.value.context["proposal_id"] == str(proposed.proposal_id())
    assert excinfo.value.context["derived_proposal_id"] == str(recomputed.proposal_id())
