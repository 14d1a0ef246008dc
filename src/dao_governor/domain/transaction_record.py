from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class TransactionRecord:
    action: str
    tx_hash: str
    block_number: int
    status: int
    gas_used: int | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "tx_hash": self.tx_hash,
            "block_number": self.block_number,
            "status": self.status,
            "gas_used": self.gas_used,
        }
