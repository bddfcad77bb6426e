"""
Property matching type definitions.

Enums and dataclasses for condition evaluation with strict typing.
"""

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum, auto
from typing import Any

from .errors import InconclusiveMatchError


class ReasonCode(IntEnum):
    """
    Reason codes for match outcomes.

    Every evaluation carries a ReasonCode explaining the result.
    These are machine-readable for logging/debugging.
    """

    # Success
    OK = 0  # Condition evaluated to a definite true/false

    # Missing data
    MISSING_PROPERTY = auto()  # Key absent from the property bag
    NULL_FILTER_VALUE = auto()  # Condition literal is None
    NULL_PROPERTY_VALUE = auto()  # Key present but value is None (NOT an error)

    # Type errors
    TYPE_MISMATCH = auto()  # Subject and literal have no ordering
    INVALID_DATE = auto()  # Literal or subject is not a parsable date

    # Flag data errors
    INVALID_REGEX = auto()  # Regex literal does not compile
    UNKNOWN_OPERATOR = auto()  # Wire operator name not in catalog
    INVALID_FILTER = auto()  # Filter payload malformed (no key, not a mapping)

    # Internal
    INTERNAL_ERROR = auto()  # Unexpected internal error


class ValueType(IntEnum):
    """
    Value types for loosely-typed property values.

    Bools are classified before ints so True never counts as numeric.
    """

    UNKNOWN = 0
    MISSING = auto()  # None or NaN
    BOOL = auto()
    INT = auto()
    FLOAT = auto()
    STRING = auto()
    DATE = auto()  # date or datetime
    LIST = auto()  # list/tuple/set of scalars

    @classmethod
    def from_value(cls, value: Any) -> "ValueType":
        """
        Determine ValueType from a Python value.

        Args:
            value: Any Python value

        Returns:
            Appropriate ValueType enum
        """
        if value is None:
            return cls.MISSING
        if isinstance(value, bool):
            return cls.BOOL
        if isinstance(value, int):
            return cls.INT
        if isinstance(value, float):
            if math.isnan(value):
                return cls.MISSING
            return cls.FLOAT
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, date):
            return cls.DATE
        if isinstance(value, (list, tuple, set, frozenset)):
            return cls.LIST
        return cls.UNKNOWN


class Ordering(Enum):
    """Ordering of a subject value relative to a filter literal."""

    LESS = auto()
    EQUAL = auto()
    GREATER = auto()
    INCOMPARABLE = auto()


class MatchStatus(str, Enum):
    """Three-way match result."""

    MATCHED = "matched"
    NOT_MATCHED = "not_matched"
    INCONCLUSIVE = "inconclusive"


@dataclass(frozen=True)
class MatchOutcome:
    """
    Result of matching one condition against one property bag.

    Contains:
    - status: matched, not matched, or inconclusive
    - reason: Why it evaluated this way
    - key/operator/message: Structured debug info for logging

    Inconclusive is not False; callers must branch on all three statuses
    (or call require() to get an exception instead).
    """

    status: MatchStatus
    reason: ReasonCode
    key: str | None = None
    operator: str | None = None
    message: str | None = None

    @classmethod
    def from_bool(
        cls,
        matched: bool,
        key: str,
        operator: str,
        reason: ReasonCode = ReasonCode.OK,
    ) -> "MatchOutcome":
        """Create a definite outcome from a comparison result."""
        return cls(
            status=MatchStatus.MATCHED if matched else MatchStatus.NOT_MATCHED,
            reason=reason,
            key=key,
            operator=operator,
        )

    @classmethod
    def matched(cls, key: str, operator: str) -> "MatchOutcome":
        return cls.from_bool(True, key, operator)

    @classmethod
    def not_matched(
        cls,
        key: str,
        operator: str,
        reason: ReasonCode = ReasonCode.OK,
    ) -> "MatchOutcome":
        return cls.from_bool(False, key, operator, reason)

    @classmethod
    def inconclusive(
        cls,
        reason: ReasonCode,
        message: str,
        key: str | None = None,
        operator: str | None = None,
    ) -> "MatchOutcome":
        """Create an outcome that defers to remote evaluation."""
        return cls(
            status=MatchStatus.INCONCLUSIVE,
            reason=reason,
            key=key,
            operator=operator,
            message=message,
        )

    @property
    def is_match(self) -> bool:
        return self.status == MatchStatus.MATCHED

    @property
    def is_inconclusive(self) -> bool:
        return self.status == MatchStatus.INCONCLUSIVE

    def require(self) -> bool:
        """
        Collapse to a bool, raising if the outcome is inconclusive.

        Raises:
            InconclusiveMatchError: If status is INCONCLUSIVE
        """
        if self.is_inconclusive:
            raise InconclusiveMatchError(self.message or self.reason.name)
        return self.is_match

    def to_dict(self) -> dict:
        """Convert to dict for logging/serialization."""
        return {
            "status": self.status.value,
            "reason": self.reason.name,
            "key": self.key,
            "operator": self.operator,
            "message": self.message,
        }
