from __future__ import annotations

import pytest

from dao_governor.evm.addresses import normalize_address, parse_proposal_id


def test_normalize_address_returns_checksum_form() -> None:
    raw = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"

    assert normalize_address(f"  {raw}  ", field_name="recipient") == "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


def test_normalize_address_requires_value() -> None:
    with pytest.raises(ValueError, match="recipient is required"):
        normalize_address("   ", field_name="recipient")


def test_normalize_address_rejects_short_hex() -> None:
    with pytest.raises(ValueError, match="voter must be a valid EVM address"):
        normalize_address("0x1234", field_name="voter")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("42", 42),
        ("0x2a", 42),
        ("0X2A", 42),
        (str(2**256 - 1), 2**256 - 1),
    ],
)
def test_parse_proposal_id_accepts_decimal_and_hex(raw: str, expected: int) -> None:
    assert parse_proposal_id(raw) == expected


@pytest.mark.parametrize("raw", ["-1", str(2**256), "forty-two", "0xZZ"])
def test_parse_proposal_id_rejects_out_of_range_or_garbage(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_proposal_id(raw)
