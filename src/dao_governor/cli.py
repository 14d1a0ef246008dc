from __future__ import annotations

import json
import signal
from argparse import ArgumentParser, Namespace
from collections.abc import Sequence
from types import FrameType
from typing import Any, Protocol

from dao_governor.commands import (
    run_cast_vote,
    run_delegate,
    run_execute_proposal,
    run_proposal_status,
    run_propose,
)
from dao_governor.config import AppSettings, get_settings
from dao_governor.domain import VoteSupport
from dao_governor.evm.transactions import CancellationToken
from dao_governor.observability.logging import configure_logging
from dao_governor.orchestration.identity import DEFAULT_MINT_AMOUNT, DEFAULT_PROPOSAL_DESCRIPTION
from dao_governor.types import CommandResult, CommandStatus


class CommandHandler(Protocol):
    def __call__(
        self,
        args: Namespace,
        settings: AppSettings,
        *,
        cancel: CancellationToken | None = None,
    ) -> CommandResult:
        ...


COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "propose": run_propose,
    "vote": run_cast_vote,
    "execute": run_execute_proposal,
    "delegate": run_delegate,
    "status": run_proposal_status,
}


def _add_identity_arguments(parser: ArgumentParser) -> None:
    parser.add_argument("--description", default=DEFAULT_PROPOSAL_DESCRIPTION)
    parser.add_argument("--amount", default=DEFAULT_MINT_AMOUNT, help="whole tokens to mint")
    parser.add_argument("--recipient", default=None, help="mint recipient (default: signing account)")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="dao-governor", description="Governor proposal lifecycle CLI")
    parser.add_argument("--json", action="store_true", help="emit machine-readable JSON output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    propose = subparsers.add_parser("propose")
    _add_identity_arguments(propose)
    propose.add_argument("--manifest-out", default=None, help="write the proposal manifest to this path")

    vote = subparsers.add_parser("vote")
    vote.add_argument("proposal_id", nargs="?", default=None)
    vote.add_argument(
        "--support",
        default=VoteSupport.FOR.name.lower(),
        choices=[support.name.lower() for support in VoteSupport],
    )
    vote.add_argument("--reason", default=None)

    execute = subparsers.add_parser("execute")
    execute.add_argument("proposal_id", nargs="?", default=None)
    _add_identity_arguments(execute)
    execute.add_argument("--manifest", default=None, help="proposal manifest written by propose")

    delegate = subparsers.add_parser("delegate")
    delegate.add_argument("--delegatee", default=None)

    status = subparsers.add_parser("status")
    status.add_argument("proposal_id", nargs="?", default=None)
    status.add_argument("--voter", default=None)

    return parser


def _emit_result(result: CommandResult, *, as_json: bool) -> None:
    if as_json:
        print(result.to_json())
        return

    print(f"{result.command}: {result.status.value}")
    if result.details:
        print(json.dumps(result.details, indent=2, sort_keys=True))


def _install_interrupt_handler(token: CancellationToken) -> Any:
    def _on_interrupt(signum: int, frame: FrameType | None) -> None:
        if token.cancelled:
            raise KeyboardInterrupt
        token.cancel()

    try:
        return signal.signal(signal.SIGINT, _on_interrupt)
    except ValueError:
        # not on the main thread
        return None


def entrypoint(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    settings = get_settings()
    configure_logging(settings.log_level)

    token = CancellationToken()
    previous = _install_interrupt_handler(token)
    try:
        handler = COMMAND_HANDLERS[str(args.command)]
        result = handler(args, settings, cancel=token)
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)

    _emit_result(result, as_json=bool(args.json))
    return 1 if result.status == CommandStatus.FAILED else 0


if __name__ == "__main__":
    raise SystemExit(entrypoint())
