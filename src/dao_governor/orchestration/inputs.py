from __future__ import annotations

from argparse import Namespace

from dao_governor.config import AppSettings
from dao_governor.errors import ConfigurationError
from dao_governor.evm.addresses import parse_proposal_id


def resolve_proposal_id(args: Namespace, settings: AppSettings) -> int:
    """Positional argument first, then the PROPOSAL_ID setting."""
    raw_value = str(getattr(args, "proposal_id", None) or "").strip() or settings.proposal_id.strip()
    if not raw_value:
        raise ConfigurationError(
            "provide a proposal ID as a command line argument or set PROPOSAL_ID",
        )

    try:
        return parse_proposal_id(raw_value)
    except ValueError as exc:
        raise ConfigurationError(str(exc), proposal_id=raw_value) from exc
