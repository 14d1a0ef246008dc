from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dao_governor.errors import GovernanceError

JsonDict = dict[str, Any]


class CommandStatus(StrEnum):
    WAITING = "waiting"
    CONFIRMED = "confirmed"
    ALREADY_EXECUTED = "already_executed"
    OBSERVED = "observed"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class CommandResult:
    command: str
    status: CommandStatus
    details: JsonDict = field(default_factory=dict)

    @classmethod
    def from_error(cls, command: str, exc: GovernanceError) -> CommandResult:
        return cls(command=command, status=CommandStatus.FAILED, details=exc.as_details())

    def to_dict(self) -> JsonDict:
        return {
            "command": self.command,
            "status": self.status.value,
            "details": self.details,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
