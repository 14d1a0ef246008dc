from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class VotingWindow:
    """Block-height bounds of a proposal's vote, as reported by the ledger."""

    start_block: int
    end_block: int

    def blocks_remaining(self, current_block: int) -> int:
        return max(self.end_block - current_block, 0)

    def estimate_seconds_remaining(self, current_block: int, average_block_seconds: float) -> float:
        """Heuristic wall-clock estimate; block times vary, so never use it as a timer."""
        return self.blocks_remaining(current_block) * average_block_seconds

    def estimate_minutes_remaining(self, current_block: int, average_block_seconds: float) -> int:
        return math.floor(self.estimate_seconds_remaining(current_block, average_block_seconds) / 60)

    def as_dict(self) -> dict[str, Any]:
        return {
            "start_block": self.start_block,
            "end_block": self.end_block,
        }
