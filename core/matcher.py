"""Precision-aware equivalence of temporal values for record linkage."""

from typing import Any, Optional

from core.preprocessor import TemporalPreprocessor
from core.temporal import TemporalValue

class DateMatcher:
    """
    Decides whether two temporal values describe the same date or moment.

    Values recorded at different precisions are compared at the coarser of
    the two: the finer value is re-rendered at that precision, keeping its
    own kind, and the canonical strings are compared. Precision is never
    invented for the coarser side. The matcher holds no mutable state.
    """

    def __init__(self, preprocessor: Optional[TemporalPreprocessor] = None):
        self.preprocessor = preprocessor or TemporalPreprocessor()

    def match(self, left: Any, right: Any) -> bool:
        """
        Compare two temporal values.

        Args:
            left: First operand
            right: Second operand

        Returns:
            bool: True if both are temporal values that agree at the coarser
                precision; False otherwise, including for non-temporal operands
        """
        if not isinstance(left, TemporalValue) or not isinstance(right, TemporalValue):
            return False

        if left.precision == right.precision:
            return left.value_as_string == right.value_as_string

        if left.precision < right.precision:
            coarser, finer = left, right
        else:
            coarser, finer = right, left

        return coarser.value_as_string == finer.at_precision(coarser.precision).value_as_string

    def match_values(self, left: Any, right: Any) -> bool:
        """Like ``match`` but preprocesses raw operands (strings, dates, datetimes) first."""
        return self.match(
            self.preprocessor.process(left),
            self.preprocessor.process(right)
        )

_default_matcher = DateMatcher()

def matches(left: Any, right: Any) -> bool:
    """Module-level shortcut for ``DateMatcher().match``."""
    return _default_matcher.match(left, right)
