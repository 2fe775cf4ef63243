"""Tests for receiver list normalization."""

import pytest

from drips_sdk import DripsReceiver, InvalidArgumentError, SplitsReceiver
from drips_sdk.receivers import (
    format_drips_receivers,
    format_splits_receivers,
    normalize_drips_receivers,
    normalize_splits_receivers,
    user_id_to_int,
)


class TestNormalizeSplitsReceivers:
    """Tests for normalize_splits_receivers."""

    def test_sorts_and_drops_duplicates(self) -> None:
        """Should sort ascending and keep one entry per user ID."""
        result = normalize_splits_receivers(
            [
                SplitsReceiver(user_id="2", weight=100),
                SplitsReceiver(user_id="1", weight=1),
                SplitsReceiver(user_id="1", weight=1),
            ]
        )

        assert result == [
            SplitsReceiver(user_id="1", weight=1),
            SplitsReceiver(user_id="2", weight=100),
        ]

    def test_first_seen_duplicate_wins(self) -> None:
        """Among entries sharing a user ID, the earliest in the input is kept."""
        result = normalize_splits_receivers(
            [
                SplitsReceiver(user_id="5", weight=10),
                SplitsReceiver(user_id="3", weight=1),
                SplitsReceiver(user_id="5", weight=20),
            ]
        )

        assert [(r.user_id, r.weight) for r in result] == [("3", 1), ("5", 10)]

    def test_does_not_mutate_input(self) -> None:
        """Should return a new list."""
        receivers = [SplitsReceiver(user_id="2", weight=1), SplitsReceiver(user_id="1", weight=1)]

        normalize_splits_receivers(receivers)

        assert [r.user_id for r in receivers] == ["2", "1"]

    def test_empty_list(self) -> None:
        """Empty in, empty out."""
        assert normalize_splits_receivers([]) == []


class TestNormalizeDripsReceivers:
    """Tests for normalize_drips_receivers."""

    def test_numeric_not_lexicographic_order(self) -> None:
        """User ID 9 must sort before 10."""
        result = normalize_drips_receivers(
            [
                DripsReceiver(user_id="10", config=1),
                DripsReceiver(user_id="9", config=2),
            ]
        )

        assert [r.user_id for r in result] == ["9", "10"]

    def test_large_user_ids(self) -> None:
        """Should compare uint256-sized IDs numerically."""
        big = str(2**255)
        result = normalize_drips_receivers(
            [
                DripsReceiver(user_id=big, config=1),
                DripsReceiver(user_id="998697365313809816557299962230702436787341785997", config=1),
            ]
        )

        assert result[-1].user_id == big

    def test_config_passed_through(self) -> None:
        """Should not reinterpret the packed config."""
        receiver = DripsReceiver(user_id="1", config=2**256 - 1)

        assert normalize_drips_receivers([receiver])[0].config == 2**256 - 1

    def test_same_user_different_configs_keeps_first(self) -> None:
        """Receivers are keyed by user ID alone, so a second stream to the same user is dropped."""
        result = normalize_drips_receivers(
            [
                DripsReceiver(user_id="5", config=222),
                DripsReceiver(user_id="2", config=1),
                DripsReceiver(user_id="5", config=111),
            ]
        )

        assert [(r.user_id, r.config) for r in result] == [("2", 1), ("5", 222)]

    def test_empty_list(self) -> None:
        """Empty in, empty out (used to clear receivers)."""
        assert normalize_drips_receivers([]) == []


class TestFormatReceivers:
    """Tests for conversion to contract tuples."""

    def test_format_splits_receivers(self) -> None:
        """Should emit (int userId, weight) tuples, normalized."""
        tuples = format_splits_receivers(
            [
                SplitsReceiver(user_id="20", weight=2),
                SplitsReceiver(user_id="3", weight=1),
            ]
        )

        assert tuples == [(3, 1), (20, 2)]

    def test_format_drips_receivers(self) -> None:
        """Should emit (int userId, config) tuples, normalized."""
        tuples = format_drips_receivers([DripsReceiver(user_id="7", config=99), DripsReceiver(user_id="7", config=1)])

        assert tuples == [(7, 99)]

    def test_int_user_id_coerced_to_string(self) -> None:
        """Receivers accept int user IDs and store them as decimal strings."""
        assert SplitsReceiver(user_id=42, weight=1).user_id == "42"


class TestUserIdToInt:
    """Tests for user ID parsing."""

    def test_accepts_decimal_string_and_int(self) -> None:
        assert user_id_to_int("123") == 123
        assert user_id_to_int(123) == 123

    @pytest.mark.parametrize("bad", ["", "-1", "0x10", " 1", "1.5", -1, True, None, 1.0])
    def test_rejects_malformed(self, bad) -> None:
        """Should reject anything but a non-negative int or digit string."""
        with pytest.raises(InvalidArgumentError):
            user_id_to_int(bad)
