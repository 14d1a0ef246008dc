from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from dao_governor.errors import ConfigurationError


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"

    rpc_url: str = Field(
        default="http://127.0.0.1:8545",
        validation_alias=AliasChoices("rpc_url", "holesky_url", "sepolia_url"),
    )
    governor_address: str = ""
    token_address: str = ""
    private_key: SecretStr | None = None
    proposal_id: str = ""

    average_block_seconds: float = Field(default=12.0, gt=0)
    confirmation_poll_seconds: float = Field(default=2.0, gt=0)

    def require(self, *field_names: str) -> None:
        missing = [name for name in field_names if not self._is_set(name)]
        if missing:
            env_names = ", ".join(name.upper() for name in missing)
            raise ConfigurationError(
                f"missing required configuration: {env_names}",
                missing=[name.upper() for name in missing],
            )

    def _is_set(self, field_name: str) -> bool:
        value = getattr(self, field_name)
        if isinstance(value, SecretStr):
            value = value.get_secret_value()
        return bool(value and str(value).strip())


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
