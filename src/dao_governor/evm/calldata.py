from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

MINT_SIGNATURE = "mint(address,uint256)"


def encode_function_call(signature: str, arg_types: Sequence[str], args: Sequence[Any]) -> bytes:
    """Selector plus ABI-encoded arguments, as the token contract expects them."""
    if len(arg_types) != len(args):
        raise ValueError(f"{signature} expects {len(arg_types)} arguments, got {len(args)}")
    return function_signature_to_4byte_selector(signature) + encode(list(arg_types), list(args))


@dataclass(slots=True, frozen=True)
class MintCall:
    recipient: str
    amount: int

    def to_bytes(self) -> bytes:
        if self.amount < 0:
            raise ValueError("amount must be non-negative")
        if self.amount >= 2**256:
            raise ValueError("amount must fit in uint256")
        return encode_function_call(
            MINT_SIGNATURE,
            ("address", "uint256"),
            (to_checksum_address(self.recipient), self.amount),
        )
