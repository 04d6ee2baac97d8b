"""Coercion of raw field values into temporal values for matching."""

from typing import Any, Optional
from datetime import date, datetime
import logging
import pandas as pd

from core.temporal import Precision, TemporalValue, ValueKind, parse_temporal

class TemporalPreprocessor:
    """
    Turns raw values into ``TemporalValue`` instances.

    Accepts temporal values as-is, ``datetime`` (including pandas
    ``Timestamp``), ``date`` and ISO-8601 strings. Nulls and anything that
    cannot be read as a date produce ``None``.
    """

    def __init__(self, kind: Optional[ValueKind] = None):
        """
        Args:
            kind: Kind to parse strings as; inferred from the text when None
        """
        self.kind = kind

    def _handle_null(self, value: Any) -> bool:
        """Check if value is null/empty."""
        if isinstance(value, str):
            return not value.strip()
        return value is None or (pd.api.types.is_scalar(value) and pd.isna(value))

    def process(self, value: Any) -> Optional[TemporalValue]:
        if isinstance(value, TemporalValue):
            return value
        if self._handle_null(value):
            return None

        if isinstance(value, pd.Timestamp):
            value = value.to_pydatetime()

        if isinstance(value, datetime):
            precision = Precision.MILLI if value.microsecond else Precision.SECOND
            return TemporalValue.of_date_time(value, precision)
        if isinstance(value, date):
            return TemporalValue.of_date(value)

        if isinstance(value, str):
            try:
                return parse_temporal(value.strip(), self.kind)
            except ValueError as e:
                logging.warning(f"Error in temporal preprocessing: {e}")
                return None

        return None
