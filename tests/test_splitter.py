"""Tests for day-boundary interval splitting."""

import pytest
from datetime import UTC, datetime, timedelta

from dateutil import tz

from timeledger.domain.errors import ValidationError
from timeledger.domain.splitter import split_interval

EST = tz.tzoffset("EST", -5 * 3600)


def _total(pieces):
    return sum((piece.duration for piece in pieces), timedelta(0))


def test_same_day_interval_is_unchanged():
    start = datetime(2024, 1, 15, 9, 0, tzinfo=EST)
    end = datetime(2024, 1, 15, 17, 0, tzinfo=EST)

    pieces = split_interval(start, end, "work", EST)

    assert len(pieces) == 1
    assert pieces[0].start == start
    assert pieces[0].end == end
    assert pieces[0].comment == "work"


def test_interval_crossing_midnight_is_split_in_two():
    start = datetime(2024, 1, 15, 22, 0, tzinfo=EST)
    end = datetime(2024, 1, 16, 2, 0, tzinfo=EST)

    pieces = split_interval(start, end, "night shift", EST)

    assert len(pieces) == 2
    first, second = pieces
    assert first.start == start
    assert first.end.astimezone(EST).date() == datetime(2024, 1, 15).date()
    assert first.end.astimezone(EST).hour == 23
    assert second.start == datetime(2024, 1, 16, 0, 0, tzinfo=EST)
    assert second.start.astimezone(EST).date() == datetime(2024, 1, 16).date()
    assert all(piece.comment == "night shift" for piece in pieces)


def test_split_conserves_duration_exactly():
    start = datetime(2024, 1, 15, 22, 0, tzinfo=EST)
    end = datetime(2024, 1, 16, 2, 0, tzinfo=EST)

    pieces = split_interval(start, end, "", EST)

    assert _total(pieces) == timedelta(hours=4)


def test_multi_day_interval_gets_a_piece_per_day():
    start = datetime(2024, 1, 15, 20, 0, tzinfo=EST)
    end = datetime(2024, 1, 18, 3, 30, tzinfo=EST)

    pieces = split_interval(start, end, "marathon", EST)

    assert len(pieces) == 4
    days = [piece.start.astimezone(EST).date().day for piece in pieces]
    assert days == [15, 16, 17, 18]
    assert _total(pieces) == end - start
    # Whole days in between start at midnight
    assert pieces[1].start == datetime(2024, 1, 16, 0, 0, tzinfo=EST)
    assert pieces[2].start == datetime(2024, 1, 17, 0, 0, tzinfo=EST)


def test_pieces_never_cross_midnight():
    start = datetime(2024, 3, 1, 23, 30, tzinfo=EST)
    end = datetime(2024, 3, 3, 0, 30, tzinfo=EST)

    for piece in split_interval(start, end, "", EST):
        assert piece.start.astimezone(EST).date() == piece.end.astimezone(EST).date()


def test_end_exactly_at_midnight_is_not_split():
    start = datetime(2024, 1, 15, 20, 0, tzinfo=EST)
    end = datetime(2024, 1, 16, 0, 0, tzinfo=EST)

    pieces = split_interval(start, end, "", EST)

    assert len(pieces) == 1
    assert pieces[0].end == end


def test_days_are_taken_in_the_given_timezone():
    # 22:00-02:00 EST is 03:00-07:00 UTC, a single UTC day
    start = datetime(2024, 1, 16, 3, 0, tzinfo=UTC)
    end = datetime(2024, 1, 16, 7, 0, tzinfo=UTC)

    assert len(split_interval(start, end, "", UTC)) == 1
    assert len(split_interval(start, end, "", EST)) == 2


def test_naive_datetimes_are_rejected():
    with pytest.raises(ValidationError):
        split_interval(datetime(2024, 1, 15, 9), datetime(2024, 1, 15, 10), "", EST)


def test_end_before_start_is_rejected():
    start = datetime(2024, 1, 15, 10, 0, tzinfo=EST)

    with pytest.raises(ValidationError):
        split_interval(start, start - timedelta(minutes=1), "", EST)
    with pytest.raises(ValidationError):
        split_interval(start, start, "", EST)
