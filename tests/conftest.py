from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest
from eth_abi import decode
from eth_utils import to_checksum_address

from dao_governor.config import AppSettings
from dao_governor.domain import (
    ProposalIdentity,
    ProposalState,
    TransactionRecord,
    VoteSupport,
    VotingWindow,
    decode_proposal_state,
)
from dao_governor.errors import IdentityMismatchError, ReceiptDecodeError
from dao_governor.evm.transactions import CancellationToken, Confirmation
from dao_governor.observability.logging import configure_logging
from dao_governor.orchestration.client import GovernanceClient

GOVERNOR_ADDRESS = to_checksum_address("0x" + "6a" * 20)
TOKEN_ADDRESS = to_checksum_address("0x" + "7b" * 20)
SIGNER_ADDRESS = to_checksum_address("0x" + "8c" * 20)
TEST_PRIVATE_KEY = "0x" + "01" * 32


@dataclass
class FakeLedger:
    """In-memory stand-in for the Governor + token pair."""

    raw_state: int = int(ProposalState.PENDING)
    known_proposals: set[int] = field(default_factory=set)
    window: VotingWindow = field(default_factory=lambda: VotingWindow(start_block=110, end_block=160))
    block_number: int = 100
    voters: set[str] = field(default_factory=set)
    balances: dict[str, int] = field(default_factory=dict)
    votes: dict[str, int] = field(default_factory=dict)
    voting_delay: int = 1
    voting_period: int = 50
    state_reads: int = 0
    emit_proposal_created: bool = True


@dataclass(frozen=True)
class FakeCall:
    action: str
    apply: Callable[[], list[dict[str, Any]]]


class FakeGovernor:
    address = GOVERNOR_ADDRESS

    def __init__(self, ledger: FakeLedger) -> None:
        self._ledger = ledger

    def state(self, proposal_id: int) -> ProposalState:
        self._ledger.state_reads += 1
        if proposal_id not in self._ledger.known_proposals:
            raise IdentityMismatchError(
                "ledger rejected the proposal id as unknown; re-derive the proposal identity",
                proposal_id=str(proposal_id),
                revert_reason="execution reverted: Governor: unknown proposal id",
            )
        return decode_proposal_state(self._ledger.raw_state)

    def voting_window(self, proposal_id: int) -> VotingWindow:
        return self._ledger.window

    def current_block(self) -> int:
        return self._ledger.block_number

    def voting_delay(self) -> int:
        return self._ledger.voting_delay

    def voting_period(self) -> int:
        return self._ledger.voting_period

    def has_voted(self, proposal_id: int, account: str) -> bool:
        return account in self._ledger.voters

    def propose_function(self, identity: ProposalIdentity) -> FakeCall:
        def apply() -> list[dict[str, Any]]:
            proposal_id = identity.proposal_id()
            self._ledger.known_proposals.add(proposal_id)
            self._ledger.raw_state = int(ProposalState.PENDING)
            if not self._ledger.emit_proposal_created:
                return []
            return [{"event": "ProposalCreated", "args": {"proposalId": proposal_id}}]

        return FakeCall("propose", apply)

    def cast_vote_function(self, proposal_id: int, support: VoteSupport, reason: str = "") -> FakeCall:
        def apply() -> list[dict[str, Any]]:
            self._ledger.voters.add(SIGNER_ADDRESS)
            weight = self._ledger.votes.get(SIGNER_ADDRESS, 0)
            return [{"event": "VoteCast", "args": {"weight": weight, "support": int(support)}}]

        return FakeCall("vote", apply)

    def execute_function(self, identity: ProposalIdentity) -> FakeCall:
        def apply() -> list[dict[str, Any]]:
            for calldata in identity.calldatas:
                recipient, amount = decode(["address", "uint256"], calldata[4:])
                recipient = to_checksum_address(recipient)
                self._ledger.balances[recipient] = self._ledger.balances.get(recipient, 0) + amount
            self._ledger.raw_state = int(ProposalState.EXECUTED)
            return [{"event": "ProposalExecuted", "args": {"proposalId": identity.proposal_id()}}]

        return FakeCall("execute", apply)

    def decode_proposal_created(self, receipt: dict[str, Any]) -> int:
        for event in receipt["events"]:
            if event["event"] == "ProposalCreated":
                return int(event["args"]["proposalId"])
        raise ReceiptDecodeError(
            "propose was confirmed but no ProposalCreated event was found in the receipt",
            raw_receipt={"transaction_hash": receipt["transactionHash"], "logs": []},
        )

    def decode_vote_weight(self, receipt: dict[str, Any]) -> int | None:
        for event in receipt["events"]:
            if event["event"] == "VoteCast":
                return int(event["args"]["weight"])
        return None

    def decode_proposal_executed(self, receipt: dict[str, Any], proposal_id: int) -> bool:
        return any(
            event["event"] == "ProposalExecuted" and event["args"]["proposalId"] == proposal_id
            for event in receipt["events"]
        )


class FakeToken:
    address = TOKEN_ADDRESS

    def __init__(self, ledger: FakeLedger) -> None:
        self._ledger = ledger

    def balance_of(self, account: str) -> int:
        return self._ledger.balances.get(account, 0)

    def get_votes(self, account: str) -> int:
        return self._ledger.votes.get(account, 0)

    def delegate_function(self, delegatee: str) -> FakeCall:
        def apply() -> list[dict[str, Any]]:
            self._ledger.votes[delegatee] = self._ledger.balances.get(SIGNER_ADDRESS, 0)
            return []

        return FakeCall("delegate", apply)


class FakeSubmitter:
    sender = SIGNER_ADDRESS

    def __init__(self, ledger: FakeLedger) -> None:
        self._ledger = ledger
        self.submitted: list[str] = []
        self.error: Exception | None = None

    def submit(self, action: str, call: FakeCall, *, cancel: CancellationToken | None = None) -> Confirmation:
        if self.error is not None:
            raise self.error
        self.submitted.append(action)
        events = call.apply()
        self._ledger.block_number += 1
        tx_hash = "0x" + f"{len(self.submitted):064x}"
        receipt = {
            "transactionHash": tx_hash,
            "blockNumber": self._ledger.block_number,
            "status": 1,
            "events": events,
        }
        record = TransactionRecord(
            action=action,
            tx_hash=tx_hash,
            block_number=self._ledger.block_number,
            status=1,
            gas_used=21000,
        )
        return Confirmation(record=record, receipt=receipt)


@pytest.fixture(autouse=True)
def _stderr_logging() -> None:
    configure_logging("DEBUG")


@pytest.fixture
def ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def submitter(ledger: FakeLedger) -> FakeSubmitter:
    return FakeSubmitter(ledger)


@pytest.fixture
def client(ledger: FakeLedger, submitter: FakeSubmitter) -> GovernanceClient:
    return GovernanceClient(
        governor=FakeGovernor(ledger),  # type: ignore[arg-type]
        token=FakeToken(ledger),  # type: ignore[arg-type]
        submitter=submitter,  # type: ignore[arg-type]
        average_block_seconds=12.0,
    )


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        governor_address=GOVERNOR_ADDRESS,
        token_address=TOKEN_ADDRESS,
        private_key=TEST_PRIVATE_KEY,
        proposal_id="",
    )
