from __future__ import annotations

from typing import Any

from web3 import Web3
from web3.contract import Contract
from web3.exceptions import ContractLogicError
from web3.logs import DISCARD

from dao_governor.domain import (
    ProposalIdentity,
    ProposalState,
    VoteSupport,
    VotingWindow,
    decode_proposal_state,
)
from dao_governor.errors import IdentityMismatchError, ReceiptDecodeError
from dao_governor.evm.abi import GOVERNOR_ABI
from dao_governor.evm.addresses import normalize_address
from dao_governor.evm.transactions import summarize_receipt


class GovernorAdapter:
    """Adapter boundary for the Governor contract.

    Reads are plain ``eth_call``s; state-changing entry points are returned as
    unsent contract functions so the transaction submitter owns signing and
    confirmation.
    """

    def __init__(self, contract: Contract, w3: Web3) -> None:
        self._contract = contract
        self._w3 = w3

    @classmethod
    def connect(cls, w3: Web3, address: str) -> GovernorAdapter:
        checksum = normalize_address(address, field_name="governor_address")
        return cls(w3.eth.contract(address=checksum, abi=GOVERNOR_ABI), w3)

    @property
    def address(self) -> str:
        return str(self._contract.address)

    def state(self, proposal_id: int) -> ProposalState:
        try:
            raw_state = self._contract.functions.state(proposal_id).call()
        except ContractLogicError as exc:
            raise IdentityMismatchError(
                "ledger rejected the proposal id as unknown; re-derive the proposal identity",
                proposal_id=str(proposal_id),
                governor_address=self.address,
                revert_reason=exc.message,
            ) from exc
        return decode_proposal_state(raw_state)

    def voting_window(self, proposal_id: int) -> VotingWindow:
        return VotingWindow(
            start_block=int(self._contract.functions.proposalSnapshot(proposal_id).call()),
            end_block=int(self._contract.functions.proposalDeadline(proposal_id).call()),
        )

    def voting_delay(self) -> int:
        return int(self._contract.functions.votingDelay().call())

    def voting_period(self) -> int:
        return int(self._contract.functions.votingPeriod().call())

    def has_voted(self, proposal_id: int, account: str) -> bool:
        return bool(self._contract.functions.hasVoted(proposal_id, account).call())

    def current_block(self) -> int:
        return int(self._w3.eth.block_number)

    def propose_function(self, identity: ProposalIdentity) -> Any:
        return self._contract.functions.propose(
            list(identity.targets),
            list(identity.values),
            list(identity.calldatas),
            identity.description,
        )

    def cast_vote_function(self, proposal_id: int, support: VoteSupport, reason: str = "") -> Any:
        if reason:
            return self._contract.functions.castVoteWithReason(proposal_id, int(support), reason)
        return self._contract.functions.castVote(proposal_id, int(support))

    def execute_function(self, identity: ProposalIdentity) -> Any:
        return self._contract.functions.execute(
            list(identity.targets),
            list(identity.values),
            list(identity.calldatas),
            identity.description_hash,
        )

    def decode_proposal_created(self, receipt: Any) -> int:
        """Ledger-assigned proposal id, read from the ``ProposalCreated`` event by name."""
        for event in self._events(receipt, "ProposalCreated"):
            return int(event["args"]["proposalId"])
        raise ReceiptDecodeError(
            "propose was confirmed but no ProposalCreated event was found in the receipt",
            raw_receipt=summarize_receipt(receipt),
            governor_address=self.address,
        )

    def decode_vote_weight(self, receipt: Any) -> int | None:
        for event in self._events(receipt, "VoteCast"):
            return int(event["args"]["weight"])
        return None

    def decode_proposal_executed(self, receipt: Any, proposal_id: int) -> bool:
        return any(
            int(event["args"]["proposalId"]) == proposal_id
            for event in self._events(receipt, "ProposalExecuted")
        )

    def _events(self, receipt: Any, event_name: str) -> list[Any]:
        event = getattr(self._contract.events, event_name)
        return [
            decoded
            for decoded in event().process_receipt(receipt, errors=DISCARD)
            if decoded["event"] == event_name
        ]
