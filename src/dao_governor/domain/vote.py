from __future__ import annotations

from enum import IntEnum


class VoteSupport(IntEnum):
    AGAINST = 0
    FOR = 1
    ABSTAIN = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_label(cls, raw_value: str) -> VoteSupport:
        normalized = raw_value.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError("support must be one of: for, against, abstain") from exc
