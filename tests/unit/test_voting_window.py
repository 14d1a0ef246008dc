from __future__ import annotations

from dao_governor.domain import VotingWindow


def test_blocks_remaining_counts_to_window_end() -> None:
    window = VotingWindow(start_block=100, end_block=150)

    assert window.blocks_remaining(120) == 30


def test_blocks_remaining_never_negative() -> None:
    window = VotingWindow(start_block=100, end_block=150)

    assert window.blocks_remaining(175) == 0
    assert window.estimate_minutes_remaining(175, 12.0) == 0


def test_minutes_estimate_uses_average_block_interval() -> None:
    window = VotingWindow(start_block=100, end_block=150)

    # 30 blocks * 12 s = 360 s
    assert window.estimate_seconds_remaining(120, 12.0) == 360.0
    assert window.estimate_minutes_remaining(120, 12.0) == 6
    # 31 blocks * 12 s = 372 s, floored
    assert window.estimate_minutes_remaining(119, 12.0) == 6
    assert window.estimate_minutes_remaining(120, 2.0) == 1
