"""
Typed comparable wrapper around a condition literal.

FilterPropertyValue answers every comparison the operators need against a
subject value of unknown type. Coercion rules:

- Numbers: ints, floats and JSON-number strings compare numerically against a
  number (1 == 1.0 == "1"). Two strings always compare as text. Bools are
  never numbers.
- Bools: equal to bools and to the JSON strings "true"/"false".
- Strings: case-sensitive unless the caller asks otherwise; ordering is lexical.
- Dates: fixed ISO-8601 layouts or relative literals ("-7d"); naive means UTC.
- Sequences: a list literal matches when any element matches; None elements
  are ignored, and a list of only None counts as a null literal.

Anything that cannot give a definite answer raises an InconclusiveMatchError
subclass (or InvalidRegexError for a bad pattern); nothing is approximated
as False.
"""

from datetime import date, datetime
from typing import Any, Iterable, Optional

from ..config import get_config
from ..utils.datetime_utils import parse_absolute_datetime, parse_relative_datetime
from ..utils.helpers import coerce_number, to_property_string
from ..utils.regex_utils import try_compile_regex
from .errors import InvalidDateError, InvalidRegexError
from .types import Ordering, ValueType


def _order(lhs: Any, rhs: Any) -> Ordering:
    if lhs < rhs:
        return Ordering.LESS
    if lhs > rhs:
        return Ordering.GREATER
    return Ordering.EQUAL


class FilterPropertyValue:
    """Condition literal with comparison semantics."""

    def __init__(
        self,
        value: Any,
        relative_dates: Optional[bool] = None,
        max_relative_amount: Optional[int] = None,
    ):
        if value is None:
            raise ValueError("FilterPropertyValue requires a non-null literal; use create()")

        match_cfg = get_config().match
        self.value = value
        self.value_type = ValueType.from_value(value)
        self.relative_dates = match_cfg.relative_dates if relative_dates is None else relative_dates
        self.max_relative_amount = (
            match_cfg.max_relative_amount if max_relative_amount is None else max_relative_amount
        )

    @classmethod
    def create(cls, value: Any, **kwargs) -> Optional["FilterPropertyValue"]:
        """Wrap a literal, or return None for a null literal."""
        if value is None:
            return None
        if ValueType.from_value(value) == ValueType.LIST and value:
            if all(element is None for element in value):
                return None
        return cls(value, **kwargs)

    def __repr__(self) -> str:
        return f"FilterPropertyValue({self.value!r})"

    @property
    def elements(self) -> tuple:
        """Literal as a tuple of non-null scalars (single-element for scalar literals)."""
        if self.value_type == ValueType.LIST:
            return tuple(element for element in self.value if element is not None)
        return (self.value,)

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def is_exact_match(self, subject: Any, ignore_case: bool = False) -> bool:
        """
        Check whether the subject equals the literal.

        A None subject never matches. List literals match on any element.
        """
        if subject is None:
            return False
        return any(_scalar_equals(literal, subject, ignore_case) for literal in self.elements)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def compare_ordering(self, subject: Any) -> Ordering:
        """
        Order the subject relative to the literal.

        Returns Ordering.INCOMPARABLE rather than guessing when the types
        have no shared ordering (bools, lists, a non-numeric string against
        a numeric literal, ...).
        """
        literal = self.value
        literal_type = self.value_type
        subject_type = ValueType.from_value(subject)

        if subject_type in (ValueType.MISSING, ValueType.BOOL, ValueType.LIST, ValueType.UNKNOWN):
            return Ordering.INCOMPARABLE
        if literal_type in (ValueType.BOOL, ValueType.LIST, ValueType.UNKNOWN):
            return Ordering.INCOMPARABLE

        if literal_type == ValueType.DATE or subject_type == ValueType.DATE:
            return _compare_dates(subject, literal)

        literal_number = coerce_number(literal)
        subject_number = coerce_number(subject)

        if literal_number is not None and subject_number is not None:
            return _order(subject_number, literal_number)

        # Only string literals fall back to lexical ordering
        if literal_type == ValueType.STRING:
            return _order(to_property_string(subject), literal)

        return Ordering.INCOMPARABLE

    # ------------------------------------------------------------------
    # Substring
    # ------------------------------------------------------------------

    def contains_ignore_case(self, subject: Any) -> bool:
        """Case-insensitive substring test on the subject's string form."""
        if subject is None:
            return False
        haystack = to_property_string(subject).casefold()
        return any(to_property_string(literal).casefold() in haystack for literal in self.elements)

    # ------------------------------------------------------------------
    # Regex
    # ------------------------------------------------------------------

    def is_regex_match(self, subject: Any) -> bool:
        """
        Search the subject's string form with the literal as a pattern.

        Raises:
            InvalidRegexError: If any literal pattern is empty or does not compile
        """
        patterns = list(self._compiled_patterns())
        if subject is None:
            return False
        text = to_property_string(subject)
        return any(pattern.search(text) is not None for pattern in patterns)

    def _compiled_patterns(self) -> Iterable:
        for literal in self.elements:
            source = to_property_string(literal)
            compiled, error = try_compile_regex(source)
            if error:
                raise InvalidRegexError(source, error)
            yield compiled

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------

    def is_date_before(self, subject: Any, now: Optional[datetime] = None) -> bool:
        """
        Check subject < literal date.

        Raises:
            InvalidDateError: If literal or subject is not a parsable date
        """
        return self._subject_datetime(subject) < self.literal_datetime(now)

    def is_date_after(self, subject: Any, now: Optional[datetime] = None) -> bool:
        """
        Check subject > literal date.

        Raises:
            InvalidDateError: If literal or subject is not a parsable date
        """
        return self._subject_datetime(subject) > self.literal_datetime(now)

    def literal_datetime(self, now: Optional[datetime] = None) -> datetime:
        """
        Resolve the literal to an aware datetime.

        Relative literals are tried before absolute layouts when enabled.
        """
        literal = self.value
        if isinstance(literal, str) and self.relative_dates:
            relative = parse_relative_datetime(literal, now=now, max_amount=self.max_relative_amount)
            if relative is not None:
                return relative

        if isinstance(literal, (str, date)):
            parsed, error = parse_absolute_datetime(literal, "filter date")
            if error is None:
                return parsed
            raise InvalidDateError(error)

        raise InvalidDateError(
            f"Filter date must be a date or string, got {type(literal).__name__}"
        )

    @staticmethod
    def _subject_datetime(subject: Any) -> datetime:
        parsed, error = parse_absolute_datetime(subject, "property date")
        if error is not None:
            raise InvalidDateError(error)
        return parsed


def _scalar_equals(literal: Any, subject: Any, ignore_case: bool) -> bool:
    if literal is None:
        return False

    if isinstance(literal, bool) or isinstance(subject, bool):
        if isinstance(literal, bool) and isinstance(subject, bool):
            return literal == subject
        # JSON spelling on the other side
        return to_property_string(literal).lower() == to_property_string(subject).lower()

    if isinstance(literal, date) or isinstance(subject, date):
        return _compare_dates(subject, literal) == Ordering.EQUAL

    # Two strings compare as text ("01234" is a zip code, not 1234)
    if not (isinstance(literal, str) and isinstance(subject, str)):
        literal_number = coerce_number(literal)
        subject_number = coerce_number(subject)
        if literal_number is not None and subject_number is not None:
            return literal_number == subject_number

    literal_text = to_property_string(literal)
    subject_text = to_property_string(subject)
    if ignore_case:
        return literal_text.casefold() == subject_text.casefold()
    return literal_text == subject_text


def _compare_dates(subject: Any, literal: Any) -> Ordering:
    subject_dt, subject_err = parse_absolute_datetime(subject)
    literal_dt, literal_err = parse_absolute_datetime(literal)
    if subject_err or literal_err:
        return Ordering.INCOMPARABLE
    return _order(subject_dt, literal_dt)
