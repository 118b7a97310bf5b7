"""Exercise log filter selection.

A request's ``from``/``to`` parameters are resolved once into exactly one
filter variant, which then drives both the store query and the date
fields echoed back in the log response.
"""

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Any, Dict, Optional, Union

from utils.helpers import format_date, parse_date


def _end_bound(value: datetime) -> Dict[str, datetime]:
    """Upper bound clause; a plain date covers the whole day."""
    # Midnight means a date without a time: include everything up to the next midnight
    if value.time() == time.min:
        return {"$lt": value + timedelta(days=1)}
    return {"$lte": value}


@dataclass(frozen=True)
class NoFilter:
    """Neither bound supplied."""

    def query(self) -> Dict[str, Any]:
        return {}

    def response_dates(self) -> Dict[str, str]:
        return {}


@dataclass(frozen=True)
class FromOnly:
    """Exercises on or after ``start``; the log runs up to today."""
    start: datetime

    def query(self) -> Dict[str, Any]:
        return {"date": {"$gte": self.start}}

    def response_dates(self) -> Dict[str, str]:
        return {
            "date_from": format_date(self.start),
            "date_to": format_date(datetime.now()),
        }


@dataclass(frozen=True)
class ToOnly:
    """Exercises on or before ``end``."""
    end: datetime

    def query(self) -> Dict[str, Any]:
        return {"date": _end_bound(self.end)}

    def response_dates(self) -> Dict[str, str]:
        return {"date_to": format_date(self.end)}


@dataclass(frozen=True)
class DateRange:
    """Exercises between ``start`` and ``end`` inclusive."""
    start: datetime
    end: datetime

    def query(self) -> Dict[str, Any]:
        return {"date": {"$gte": self.start, **_end_bound(self.end)}}

    def response_dates(self) -> Dict[str, str]:
        return {
            "date_from": format_date(self.start),
            "date_to": format_date(self.end),
        }


@dataclass(frozen=True)
class InvalidDate:
    """A supplied bound could not be parsed."""
    value: str


LogFilter = Union[NoFilter, FromOnly, ToOnly, DateRange, InvalidDate]


def resolve_log_filter(from_: Optional[str], to: Optional[str]) -> LogFilter:
    """Pick the single filter that applies to a log request.

    Empty strings are treated as absent.
    """
    start = end = None
    if from_:
        start = parse_date(from_)
        if start is None:
            return InvalidDate(from_)
    if to:
        end = parse_date(to)
        if end is None:
            return InvalidDate(to)
    
    if start is not None and end is not None:
        return DateRange(start, end)
    if start is not None:
        return FromOnly(start)
    if end is not None:
        return ToOnly(end)
    return NoFilter()
