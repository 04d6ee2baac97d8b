"""Temporal values recorded at a known precision, and their canonical forms."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum, IntEnum
from typing import Callable, Dict, Optional
import pandas as pd
import regex as re
from dateutil import parser

class Precision(IntEnum):
    """Recording granularity, ordered from coarsest to finest."""
    YEAR = 1
    MONTH = 2
    DAY = 3
    MINUTE = 4
    SECOND = 5
    MILLI = 6

class ValueKind(str, Enum):
    """Shape of a temporal value."""
    DATE = "date"
    DATE_TIME = "dateTime"

MAX_DATE_PRECISION = Precision.DAY

TEMPORAL_PATTERN = re.compile(
    r'^(?P<year>\d{4})'
    r'(?:-(?P<month>\d{2})'
    r'(?:-(?P<day>\d{2})'
    r'(?:T(?P<hour>\d{2}):(?P<minute>\d{2})'
    r'(?::(?P<second>\d{2})(?:\.(?P<fraction>\d{1,6}))?)?'
    r'(?P<zone>Z|[+-]\d{2}:\d{2})?'
    r')?)?)?$'
)

def _render_date_part(value: datetime, precision: Precision) -> str:
    if precision == Precision.YEAR:
        return f"{value.year:04d}"
    if precision == Precision.MONTH:
        return f"{value.year:04d}-{value.month:02d}"
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"

def _render_zone(value: datetime) -> str:
    offset = value.utcoffset()
    if offset is None:
        return ""
    if offset == timedelta(0):
        return "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"

def render_date(value: datetime, precision: Precision) -> str:
    """Canonical form of a date value; precision is capped at DAY."""
    return _render_date_part(value, min(precision, MAX_DATE_PRECISION))

def render_date_time(value: datetime, precision: Precision) -> str:
    """
    Canonical form of a date-time value.

    Up to DAY precision the form is the same as a date's. Finer precisions
    add the time of day and, when the value carries one, its zone.
    """
    if precision <= Precision.DAY:
        return _render_date_part(value, precision)

    text = f"{_render_date_part(value, Precision.DAY)}T{value.hour:02d}:{value.minute:02d}"
    if precision >= Precision.SECOND:
        text += f":{value.second:02d}"
    if precision == Precision.MILLI:
        text += f".{value.microsecond // 1000:03d}"
    return text + _render_zone(value)

RENDERERS: Dict[ValueKind, Callable[[datetime, Precision], str]] = {
    ValueKind.DATE: render_date,
    ValueKind.DATE_TIME: render_date_time,
}

@dataclass(frozen=True)
class TemporalValue:
    """An instant together with the precision it was recorded at."""
    kind: ValueKind
    value: datetime
    precision: Precision

    def __post_init__(self):
        """Reject null instants, validate precision against kind and normalise plain dates."""
        if self.value is None or pd.isna(self.value):
            raise ValueError("Temporal values require an instant, got a null value")
        if self.kind == ValueKind.DATE and self.precision > MAX_DATE_PRECISION:
            raise ValueError(
                f"Date values support at most {MAX_DATE_PRECISION.name} precision, "
                f"got {self.precision.name}"
            )
        if not isinstance(self.value, datetime):
            object.__setattr__(
                self,
                'value',
                datetime(self.value.year, self.value.month, self.value.day)
            )

    @classmethod
    def of_date(cls, value: date, precision: Precision = Precision.DAY) -> 'TemporalValue':
        return cls(ValueKind.DATE, value, precision)

    @classmethod
    def of_date_time(cls, value: datetime, precision: Precision = Precision.SECOND) -> 'TemporalValue':
        return cls(ValueKind.DATE_TIME, value, precision)

    @property
    def value_as_string(self) -> str:
        return RENDERERS[self.kind](self.value, self.precision)

    def at_precision(self, precision: Precision) -> 'TemporalValue':
        """Same instant and kind, rendered at ``precision``."""
        return TemporalValue(self.kind, self.value, precision)

    def __str__(self) -> str:
        return self.value_as_string

def detect_precision(match) -> Precision:
    if match.group('fraction'):
        return Precision.MILLI
    if match.group('second'):
        return Precision.SECOND
    if match.group('hour'):
        return Precision.MINUTE
    if match.group('day'):
        return Precision.DAY
    if match.group('month'):
        return Precision.MONTH
    return Precision.YEAR

def parse_temporal(text: str, kind: Optional[ValueKind] = None) -> TemporalValue:
    """
    Parse an ISO-8601 date or date-time, keeping the precision it was written at.

    Args:
        text: Value such as ``2020``, ``2020-05-01`` or ``2020-05-01T13:45:00Z``
        kind: Force a value kind; by default a time part makes it a date-time

    Returns:
        TemporalValue: Parsed value

    Raises:
        ValueError: If the text is not a valid date/date-time, or has a time
            part while ``kind`` is DATE
    """
    match = TEMPORAL_PATTERN.match(text)
    if not match:
        raise ValueError(f"Not an ISO-8601 date or date-time: {text!r}")

    precision = detect_precision(match)
    if kind is None:
        kind = ValueKind.DATE_TIME if precision > MAX_DATE_PRECISION else ValueKind.DATE

    return TemporalValue(kind, parser.isoparse(text), precision)
