from __future__ import annotations

from dataclasses import dataclass

from dao_governor.config import AppSettings
from dao_governor.errors import ConfigurationError
from dao_governor.evm.governor_adapter import GovernorAdapter
from dao_governor.evm.rpc_client import Web3ClientFactory
from dao_governor.evm.token_adapter import TokenAdapter
from dao_governor.evm.transactions import TransactionSubmitter
from dao_governor.orchestration.state_reader import ProposalStateReader


@dataclass(slots=True)
class GovernanceClient:
    """Ledger collaborators for one command invocation."""

    governor: GovernorAdapter | None = None
    token: TokenAdapter | None = None
    submitter: TransactionSubmitter | None = None
    average_block_seconds: float = 12.0

    def reader(self) -> ProposalStateReader:
        return ProposalStateReader(self.require_governor(), average_block_seconds=self.average_block_seconds)

    def require_governor(self) -> GovernorAdapter:
        if self.governor is None:
            raise ConfigurationError("governor contract is not configured")
        return self.governor

    def require_token(self) -> TokenAdapter:
        if self.token is None:
            raise ConfigurationError("token contract is not configured")
        return self.token

    def require_submitter(self) -> TransactionSubmitter:
        if self.submitter is None:
            raise ConfigurationError("signing account is not configured")
        return self.submitter


def build_governance_client(
    settings: AppSettings,
    *,
    governor: bool = True,
    token: bool = False,
    signer: bool = True,
) -> GovernanceClient:
    factory = Web3ClientFactory(settings)
    w3 = factory.create()

    try:
        governor_adapter = GovernorAdapter.connect(w3, settings.governor_address) if governor else None
        token_adapter = TokenAdapter.connect(w3, settings.token_address) if token else None
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc

    submitter = None
    if signer:
        submitter = TransactionSubmitter(
            w3,
            factory.signer(),
            poll_interval_seconds=settings.confirmation_poll_seconds,
        )

    return GovernanceClient(
        governor=governor_adapter,
        token=token_adapter,
        submitter=submitter,
        average_block_seconds=settings.average_block_seconds,
    )
