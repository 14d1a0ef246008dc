"""Error taxonomy for the proposal lifecycle.

Each error keeps the diagnostic context (addresses, proposal id, observed
state, transaction hash, underlying ledger message) so the top-level caller
can report it without re-deriving anything.
"""
from __future__ import annotations

from typing import Any

from dao_governor.types import JsonDict


class GovernanceError(Exception):
    retryable: bool = False

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context: JsonDict = context
        super().__init__(message)

    def as_details(self) -> JsonDict:
        return {
            "error": self.message,
            "error_type": type(self).__name__,
            "retryable": self.retryable,
            **self.context,
        }


class ConfigurationError(GovernanceError):
    """A required address, credential or input is missing or malformed."""


class IdentityMismatchError(GovernanceError):
    """The ledger does not know the proposal id, or it differs from the recomputed one.

    Never retry without re-deriving the proposal identity first.
    """


class StateIneligibleError(GovernanceError):
    """The requested action is not legal for the observed proposal state."""


class UnknownProposalStateError(StateIneligibleError):
    def __init__(self, raw_state: object) -> None:
        super().__init__(
            f"unrecognized proposal state reported by the ledger: {raw_state!r}",
            raw_state=str(raw_state),
        )


class SubmissionRejectedError(GovernanceError):
    """Rejected before inclusion; safe to resubmit with unchanged parameters."""

    retryable = True


class RemoteRevertError(GovernanceError):
    """The ledger rejected the call on business rules.

    ``tx_hash`` is None when the revert surfaced while simulating the call,
    before anything was broadcast.
    """

    def __init__(self, message: str, *, revert_reason: str, tx_hash: str | None = None, **context: Any) -> None:
        self.revert_reason = revert_reason
        self.tx_hash = tx_hash
        super().__init__(message, revert_reason=revert_reason, tx_hash=tx_hash, **context)


class ConfirmationCancelledError(GovernanceError):
    def __init__(self, tx_hash: str, **context: Any) -> None:
        self.tx_hash = tx_hash
        super().__init__(
            "confirmation wait cancelled; the transaction may still be included",
            tx_hash=tx_hash,
            **context,
        )


class ReceiptDecodeError(GovernanceError):
    def __init__(self, message: str, *, raw_receipt: JsonDict, **context: Any) -> None:
        self.raw_receipt = raw_receipt
        super().__init__(message, raw_receipt=raw_receipt, **context)
