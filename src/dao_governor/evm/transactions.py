"""Signing, broadcasting and confirmation of state-changing requests.

Confirmation has no fixed timeout: the ledger's inclusion latency governs.
Callers that need a deadline hold a ``CancellationToken`` and cancel it;
nothing local is mutated before a receipt is observed, so cancelling is
always safe.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Protocol

from eth_utils import to_hex
from requests.exceptions import RequestException
from web3 import Web3
from web3.exceptions import ContractLogicError, TransactionNotFound, Web3Exception

from dao_governor.domain import TransactionRecord
from dao_governor.errors import (
    ConfirmationCancelledError,
    RemoteRevertError,
    SubmissionRejectedError,
)
from dao_governor.observability.logging import get_logger
from dao_governor.types import JsonDict

NO_REVERT_REASON = "execution reverted without a reason string"


class Signer(Protocol):
    address: str

    def sign_transaction(self, transaction_dict: dict[str, Any]) -> Any:
        ...


class CancellationToken:
    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        return self._event.wait(timeout)


@dataclass(slots=True, frozen=True)
class Confirmation:
    record: TransactionRecord
    receipt: Any


def _hex(value: Any) -> str:
    if isinstance(value, str):
        return value
    return to_hex(value)


def summarize_receipt(receipt: Any) -> JsonDict:
    """JSON-safe view of a receipt, enough for a human to recover ids by hand."""
    return {
        "transaction_hash": _hex(receipt["transactionHash"]),
        "block_number": int(receipt["blockNumber"]),
        "status": int(receipt["status"]),
        "logs": [
            {
                "address": str(log["address"]),
                "topics": [_hex(topic) for topic in log["topics"]],
                "data": _hex(log["data"]),
            }
            for log in receipt.get("logs", [])
        ],
    }


class TransactionSubmitter:
    def __init__(self, w3: Web3, signer: Signer, *, poll_interval_seconds: float = 2.0) -> None:
        self._w3 = w3
        self._signer = signer
        self._poll_interval_seconds = poll_interval_seconds
        self._logger = get_logger("transaction_submitter")

    @property
    def sender(self) -> str:
        return str(self._signer.address)

    def submit(
        self,
        action: str,
        contract_function: Any,
        *,
        cancel: CancellationToken | None = None,
    ) -> Confirmation:
        transaction = self._build(action, contract_function)
        tx_hash = self._send(action, transaction)
        receipt = self.wait_for_confirmation(tx_hash, action=action, cancel=cancel)

        record = TransactionRecord(
            action=action,
            tx_hash=tx_hash,
            block_number=int(receipt["blockNumber"]),
            status=int(receipt["status"]),
            gas_used=receipt.get("gasUsed"),
        )
        if record.status != 1:
            revert_reason = self._replay_revert_reason(transaction, record.block_number)
            self._logger.warning(
                "transaction_reverted",
                action=action,
                tx_hash=tx_hash,
                block_number=record.block_number,
                revert_reason=revert_reason,
            )
            raise RemoteRevertError(
                f"{action} was included but reverted",
                revert_reason=revert_reason,
                tx_hash=tx_hash,
                action=action,
                block_number=record.block_number,
            )

        self._logger.info("transaction_confirmed", **record.as_dict())
        return Confirmation(record=record, receipt=receipt)

    def wait_for_confirmation(
        self,
        tx_hash: str,
        *,
        action: str = "",
        cancel: CancellationToken | None = None,
    ) -> Any:
        token = cancel or CancellationToken()
        polls = 0
        while True:
            if token.cancelled:
                raise ConfirmationCancelledError(tx_hash, action=action)
            try:
                return self._w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                polls += 1
                self._logger.debug("awaiting_confirmation", action=action, tx_hash=tx_hash, polls=polls)
            except (Web3Exception, RequestException) as exc:
                # already broadcast; a flaky node must not lose the hash
                polls += 1
                self._logger.warning(
                    "confirmation_poll_failed",
                    action=action,
                    tx_hash=tx_hash,
                    polls=polls,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
            if token.wait(self._poll_interval_seconds):
                raise ConfirmationCancelledError(tx_hash, action=action)

    def _build(self, action: str, contract_function: Any) -> dict[str, Any]:
        try:
            return dict(
                contract_function.build_transaction(
                    {
                        "from": self.sender,
                        "nonce": self._w3.eth.get_transaction_count(self.sender, "pending"),
                        "chainId": self._w3.eth.chain_id,
                    }
                )
            )
        except ContractLogicError as exc:
            raise RemoteRevertError(
                f"{action} rejected by the ledger before broadcast",
                revert_reason=exc.message,
                action=action,
                sender=self.sender,
            ) from exc
        except (Web3Exception, ValueError) as exc:
            raise SubmissionRejectedError(
                f"{action} could not be prepared: {exc}",
                action=action,
                sender=self.sender,
            ) from exc

    def _send(self, action: str, transaction: dict[str, Any]) -> str:
        signed = self._signer.sign_transaction(transaction)
        try:
            tx_hash = _hex(self._w3.eth.send_raw_transaction(signed.raw_transaction))
        except (Web3Exception, ValueError) as exc:
            raise SubmissionRejectedError(
                f"{action} was rejected by the node before inclusion: {exc}",
                action=action,
                sender=self.sender,
                nonce=transaction.get("nonce"),
            ) from exc

        self._logger.info("transaction_submitted", action=action, tx_hash=tx_hash, nonce=transaction.get("nonce"))
        return tx_hash

    def _replay_revert_reason(self, transaction: dict[str, Any], block_number: int) -> str:
        call = {key: transaction[key] for key in ("from", "to", "data", "value") if key in transaction}
        try:
            self._w3.eth.call(call, block_number)
        except ContractLogicError as exc:
            return exc.message
        except (Web3Exception, ValueError) as exc:
            return f"revert reason unavailable: {exc}"
        return NO_REVERT_REASON
