from __future__ import annotations

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3

from dao_governor.config import AppSettings
from dao_governor.errors import ConfigurationError


class Web3ClientFactory:
    """Thin factory for the HTTP-backed Web3 client and the local signing account."""

    def __init__(self, settings: AppSettings) -> None:
        self._settings = settings

    def create(self) -> Web3:
        return Web3(Web3.HTTPProvider(self._settings.rpc_url))

    def signer(self) -> LocalAccount:
        self._settings.require("private_key")
        secret = self._settings.private_key
        try:
            return Account.from_key(secret.get_secret_value().strip() if secret else "")
        except (ValueError, TypeError) as exc:
            # the key itself must never reach the error context
            raise ConfigurationError("PRIVATE_KEY is not a valid signing key") from exc
