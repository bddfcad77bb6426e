"""
Exception taxonomy for property matching.

- InconclusiveMatchError: the data at hand cannot decide the condition.
  Expected and recoverable; the caller falls back to remote evaluation.
- InvalidFilterError: the flag definition itself is malformed (unknown
  operator, bad regex). Callers may treat it as inconclusive but should
  log it as anomalous.
- InternalMatchError: the operator catalog and the matcher disagree.
  Never caught inside the engine.
"""


class PropertyMatchError(Exception):
    """Base class for all matching errors."""


class InconclusiveMatchError(PropertyMatchError):
    """The condition cannot be decided locally."""


class InvalidDateError(InconclusiveMatchError):
    """A date literal or subject value could not be parsed."""


class IncomparableValuesError(InconclusiveMatchError):
    """The subject and literal have no defined ordering."""


class InvalidFilterError(PropertyMatchError):
    """The filter definition is malformed."""


class InvalidOperatorError(InvalidFilterError, ValueError):
    """The wire operator name is not in the catalog."""

    def __init__(self, operator: object):
        self.operator = operator
        super().__init__(f"Unknown operator '{operator}'")


class InvalidRegexError(InvalidFilterError):
    """The regex literal does not compile."""

    def __init__(self, pattern: str, detail: str):
        self.pattern = pattern
        super().__init__(detail)


class InternalMatchError(PropertyMatchError):
    """An operator reached the matcher without a dispatch branch."""
