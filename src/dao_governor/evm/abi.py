"""Minimal ABIs for the OpenZeppelin Governor and its ERC20Votes token.

Only the entries the lifecycle commands call or decode are listed.
"""
from __future__ import annotations

from typing import Any

_UINT256 = {"internalType": "uint256", "type": "uint256"}


def _arg(name: str, kind: str, *, indexed: bool | None = None) -> dict[str, Any]:
    entry: dict[str, Any] = {"internalType": kind, "name": name, "type": kind}
    if indexed is not None:
        entry["indexed"] = indexed
    return entry


def _view(name: str, inputs: list[dict[str, Any]], output: str) -> dict[str, Any]:
    return {
        "inputs": inputs,
        "name": name,
        "outputs": [{"internalType": output, "name": "", "type": output}],
        "stateMutability": "view",
        "type": "function",
    }


GOVERNOR_ABI: list[dict[str, Any]] = [
    {
        "inputs": [
            _arg("targets", "address[]"),
            _arg("values", "uint256[]"),
            _arg("calldatas", "bytes[]"),
            _arg("description", "string"),
        ],
        "name": "propose",
        "outputs": [{**_UINT256, "name": "proposalId"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [_arg("proposalId", "uint256"), _arg("support", "uint8")],
        "name": "castVote",
        "outputs": [{**_UINT256, "name": "balance"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            _arg("proposalId", "uint256"),
            _arg("support", "uint8"),
            _arg("reason", "string"),
        ],
        "name": "castVoteWithReason",
        "outputs": [{**_UINT256, "name": "balance"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            _arg("targets", "address[]"),
            _arg("values", "uint256[]"),
            _arg("calldatas", "bytes[]"),
            _arg("descriptionHash", "bytes32"),
        ],
        "name": "execute",
        "outputs": [{**_UINT256, "name": "proposalId"}],
        "stateMutability": "payable",
        "type": "function",
    },
    _view("state", [_arg("proposalId", "uint256")], "uint8"),
    _view("proposalSnapshot", [_arg("proposalId", "uint256")], "uint256"),
    _view("proposalDeadline", [_arg("proposalId", "uint256")], "uint256"),
    _view("votingDelay", [], "uint256"),
    _view("votingPeriod", [], "uint256"),
    _view("hasVoted", [_arg("proposalId", "uint256"), _arg("account", "address")], "bool"),
    {
        "anonymous": False,
        "inputs": [
            _arg("proposalId", "uint256", indexed=False),
            _arg("proposer", "address", indexed=False),
            _arg("targets", "address[]", indexed=False),
            _arg("values", "uint256[]", indexed=False),
            _arg("signatures", "string[]", indexed=False),
            _arg("calldatas", "bytes[]", indexed=False),
            _arg("voteStart", "uint256", indexed=False),
            _arg("voteEnd", "uint256", indexed=False),
            _arg("description", "string", indexed=False),
        ],
        "name": "ProposalCreated",
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [
            _arg("voter", "address", indexed=True),
            _arg("proposalId", "uint256", indexed=False),
            _arg("support", "uint8", indexed=False),
            _arg("weight", "uint256", indexed=False),
            _arg("reason", "string", indexed=False),
        ],
        "name": "VoteCast",
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [_arg("proposalId", "uint256", indexed=False)],
        "name": "ProposalExecuted",
        "type": "event",
    },
]

TOKEN_ABI: list[dict[str, Any]] = [
    {
        "inputs": [_arg("to", "address"), _arg("amount", "uint256")],
        "name": "mint",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [_arg("delegatee", "address")],
        "name": "delegate",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    _view("balanceOf", [_arg("account", "address")], "uint256"),
    _view("getVotes", [_arg("account", "address")], "uint256"),
]
