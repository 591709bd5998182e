"""Tests for date, age, size and reading-time formatting."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest

from blogctl.domain.formatting import (
    count_words,
    format_date,
    from_now,
    pretty_bytes,
    time_to_read,
)

NOW = datetime(2020, 1, 10, 12, 0, tzinfo=UTC)


class TestFormatDate:
    def test_default_format(self) -> None:
        assert format_date(date(2017, 8, 10)) == "10 August, 2017"

    def test_pads_day(self) -> None:
        assert format_date(date(2017, 9, 1)) == "01 September, 2017"

    def test_datetime_input(self) -> None:
        assert format_date(datetime(2018, 3, 4, 22, 15)) == "04 March, 2018"

    @pytest.mark.parametrize(
        ("day", "expected"),
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (13, "13th"), (22, "22nd")],
    )
    def test_ordinal_day(self, day: int, expected: str) -> None:
        assert format_date(date(2017, 8, day), "Do") == expected

    def test_short_tokens(self) -> None:
        assert format_date(date(2017, 8, 1), "Do MMM YY") == "1st Aug 17"
        assert format_date(date(2017, 8, 1), "M/D/YYYY") == "8/1/2017"
        assert format_date(date(2017, 8, 1), "YYYY-MM-DD") == "2017-08-01"

    def test_weekday(self) -> None:
        assert format_date(date(2017, 8, 10), "dddd, ddd") == "Thursday, Thu"

    def test_bracket_literal(self) -> None:
        assert format_date(date(2017, 8, 10), "[Posted in] YYYY") == "Posted in 2017"


class TestFromNow:
    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(seconds=30), "a few seconds ago"),
            (timedelta(seconds=60), "a minute ago"),
            (timedelta(minutes=10), "10 minutes ago"),
            (timedelta(hours=1), "an hour ago"),
            (timedelta(hours=5), "5 hours ago"),
            (timedelta(hours=24), "a day ago"),
            (timedelta(days=3), "3 days ago"),
            (timedelta(days=30), "a month ago"),
            (timedelta(days=90), "3 months ago"),
            (timedelta(days=400), "a year ago"),
            (timedelta(days=3 * 365), "3 years ago"),
        ],
    )
    def test_past_thresholds(self, delta: timedelta, expected: str) -> None:
        assert from_now(NOW - delta, NOW) == expected

    def test_future(self) -> None:
        assert from_now(NOW + timedelta(days=3), NOW) == "in 3 days"

    def test_naive_datetime_is_utc(self) -> None:
        assert from_now(datetime(2020, 1, 10, 7, 0), NOW) == "5 hours ago"

    def test_date_input(self) -> None:
        midnight = datetime(2020, 1, 10, tzinfo=UTC)
        assert from_now(date(2020, 1, 7), midnight) == "3 days ago"

    def test_defaults_to_current_time(self) -> None:
        assert from_now(datetime.now(UTC)) == "a few seconds ago"


class TestPrettyBytes:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (1, "1 B"),
            (999, "999 B"),
            (1000, "1 kB"),
            (1337, "1.34 kB"),
            (1_500_000, "1.5 MB"),
            (1_000_000_000, "1 GB"),
            (-1337, "-1.34 kB"),
        ],
    )
    def test_sizes(self, size: int, expected: str) -> None:
        assert pretty_bytes(size) == expected


class TestReadingTime:
    def test_count_words_collapses_whitespace(self) -> None:
        assert count_words("a b  c\n d") == 4

    @pytest.mark.parametrize(("words", "minutes"), [(0, 1), (265, 1), (530, 2), (1000, 4)])
    def test_time_to_read(self, words: int, minutes: int) -> None:
        assert time_to_read(words) == minutes
