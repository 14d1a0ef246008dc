from __future__ import annotations

from typing import Any

from web3 import Web3
from web3.contract import Contract

from dao_governor.evm.abi import TOKEN_ABI
from dao_governor.evm.addresses import normalize_address


class TokenAdapter:
    """Adapter boundary for the governed ERC20Votes token."""

    def __init__(self, contract: Contract) -> None:
        self._contract = contract

    @classmethod
    def connect(cls, w3: Web3, address: str) -> TokenAdapter:
        checksum = normalize_address(address, field_name="token_address")
        return cls(w3.eth.contract(address=checksum, abi=TOKEN_ABI))

    @property
    def address(self) -> str:
        return str(self._contract.address)

    def balance_of(self, account: str) -> int:
        return int(self._contract.functions.balanceOf(account).call())

    def get_votes(self, account: str) -> int:
        return int(self._contract.functions.getVotes(account).call())

    def delegate_function(self, delegatee: str) -> Any:
        return self._contract.functions.delegate(delegatee)
