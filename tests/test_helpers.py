import pytest
from datetime import datetime, timedelta, timezone

from services.log_filter import (
    DateRange,
    FromOnly,
    InvalidDate,
    NoFilter,
    ToOnly,
    resolve_log_filter,
)
from utils.helpers import MAX_INT64, format_date, parse_date, parse_duration, parse_limit


def test_parse_date():
    assert parse_date("2023-01-05") == datetime(2023, 1, 5)
    assert parse_date("2023-01-05T10:30:00") == datetime(2023, 1, 5, 10, 30)
    assert parse_date("05/01/2023") is None
    assert parse_date("2023-13-01") is None
    assert parse_date(None) is None


def test_parse_date_converts_aware_to_local():
    aware = datetime(2023, 1, 5, 12, tzinfo=timezone.utc)
    assert parse_date(aware.isoformat()) == aware.astimezone().replace(tzinfo=None)


def test_format_date_is_not_padded():
    assert format_date(datetime(2023, 2, 3)) == "3/2/2023"
    assert format_date(datetime(2023, 12, 25)) == "25/12/2023"


def test_parse_duration():
    assert parse_duration(30) == 30
    assert parse_duration("30") == 30
    assert isinstance(parse_duration("30.0"), int)
    assert parse_duration("12.5") == 12.5
    for value in ["ten", "", "  ", None, True, "nan", "inf", [5]]:
        assert parse_duration(value) is None


def test_resolve_log_filter_variants():
    assert resolve_log_filter(None, None) == NoFilter()
    assert resolve_log_filter("", "") == NoFilter()
    assert resolve_log_filter("2023-01-01", None) == FromOnly(datetime(2023, 1, 1))
    assert resolve_log_filter(None, "2023-01-01") == ToOnly(datetime(2023, 1, 1))
    assert resolve_log_filter("2023-01-01", "2023-02-01") == DateRange(
        datetime(2023, 1, 1), datetime(2023, 2, 1)
    )
    assert resolve_log_filter("bad", None) == InvalidDate("bad")
    assert resolve_log_filter("2023-01-01", "bad") == InvalidDate("bad")


def test_log_filter_queries():
    start, end = datetime(2023, 1, 1), datetime(2023, 2, 1)
    assert NoFilter().query() == {}
    assert FromOnly(start).query() == {"date": {"$gte": start}}
    assert ToOnly(end).query() == {"date": {"$lt": end + timedelta(days=1)}}
    assert DateRange(start, end).query() == {
        "date": {"$gte": start, "$lt": end + timedelta(days=1)}
    }
    with_time = datetime(2023, 2, 1, 18, 0)
    assert ToOnly(with_time).query() == {"date": {"$lte": with_time}}


def test_log_filter_response_dates():
    start, end = datetime(2023, 1, 1), datetime(2023, 2, 1)
    assert NoFilter().response_dates() == {}
    assert ToOnly(end).response_dates() == {"date_to": "1/2/2023"}
    assert DateRange(start, end).response_dates() == {
        "date_from": "1/1/2023",
        "date_to": "1/2/2023",
    }
    assert FromOnly(start).response_dates()["date_to"] == format_date(datetime.now())


def test_parse_limit():
    assert parse_limit(None) is None
    assert parse_limit("") is None
    assert parse_limit(" ") is None
    assert parse_limit("0") == 0
    assert parse_limit("3") == 3
    for value in ["many", "-1", "2.5", str(MAX_INT64 + 1)]:
        with pytest.raises(ValueError):
            parse_limit(value)
