"""Content-addressed identity of a governance proposal.

A proposal is identified by the Governor's ``hashProposal`` rule::

    uint256(keccak256(abi.encode(targets, values, calldatas, keccak256(description))))

Voting and execution recompute this from the propose-time inputs, so every
byte that goes in here must be reproduced exactly on later invocations.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from eth_abi import encode
from eth_utils import is_address, keccak, to_bytes, to_checksum_address, to_hex

PROPOSAL_HASH_TYPES = ["address[]", "uint256[]", "bytes[]", "bytes32"]
UINT256_MAX = 2**256 - 1


@dataclass(slots=True, frozen=True)
class ProposalCall:
    target: str
    value: int
    calldata: bytes


@dataclass(slots=True, frozen=True)
class ProposalIdentity:
    targets: tuple[str, ...]
    values: tuple[int, ...]
    calldatas: tuple[bytes, ...]
    description: str

    def ensure_canonical(self) -> None:
        if not self.targets:
            raise ValueError("a proposal needs at least one call")
        if not len(self.targets) == len(self.values) == len(self.calldatas):
            raise ValueError("targets, values and calldatas must have equal length")
        for target in self.targets:
            if not is_address(target):
                raise ValueError(f"target {target!r} is not a valid address")
        for value in self.values:
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError("values must be non-negative integers")
            if value > UINT256_MAX:
                raise ValueError("values must fit in uint256")

    @property
    def description_hash(self) -> bytes:
        return keccak(text=self.description)

    @property
    def fingerprint(self) -> str:
        return to_hex(self.description_hash)

    def proposal_id(self) -> int:
        self.ensure_canonical()
        encoded = encode(
            PROPOSAL_HASH_TYPES,
            [list(self.targets), list(self.values), list(self.calldatas), self.description_hash],
        )
        return int.from_bytes(keccak(encoded), byteorder="big")

    def as_dict(self) -> dict[str, Any]:
        return {
            "targets": list(self.targets),
            "values": list(self.values),
            "calldatas": [to_hex(calldata) for calldata in self.calldatas],
            "description": self.description,
            "fingerprint": self.fingerprint,
            "proposal_id": str(self.proposal_id()),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProposalIdentity:
        """Rebuild an identity from a manifest written by ``as_dict``.

        Derived fields (``fingerprint``, ``proposal_id``) are ignored; they are
        always recomputed.
        """
        try:
            targets = data["targets"]
            values = data["values"]
            calldatas = data["calldatas"]
            description = data["description"]
        except KeyError as exc:
            raise ValueError(f"proposal manifest is missing {exc.args[0]!r}") from exc

        if not isinstance(description, str):
            raise ValueError("proposal manifest description must be a string")
        if not all(isinstance(item, list) for item in (targets, values, calldatas)):
            raise ValueError("proposal manifest targets, values and calldatas must be lists")
        if not len(targets) == len(values) == len(calldatas):
            raise ValueError("targets, values and calldatas must have equal length")

        calls = [
            ProposalCall(
                target=str(target),
                value=int(value),
                calldata=to_bytes(hexstr=str(calldata)),
            )
            for target, value, calldata in zip(targets, values, calldatas)
        ]
        return derive_proposal_identity(calls, description)


def derive_proposal_identity(calls: Sequence[ProposalCall], description: str) -> ProposalIdentity:
    invalid = [call.target for call in calls if not is_address(call.target)]
    if invalid:
        raise ValueError(f"target {invalid[0]!r} is not a valid address")

    identity = ProposalIdentity(
        targets=tuple(to_checksum_address(call.target) for call in calls),
        values=tuple(call.value for call in calls),
        calldatas=tuple(bytes(call.calldata) for call in calls),
        description=description,
    )
    identity.ensure_canonical()
    return identity
