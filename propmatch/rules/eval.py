"""
Property matcher: decides one condition against one property bag.

Evaluation order per call:
1. Wrap the literal (skipped for is_set); null literal -> INCONCLUSIVE
2. Key absent from the bag -> INCONCLUSIVE
3. Value is None and operator is not is_not/is_set -> NOT_MATCHED
4. Dispatch on OperatorKind

Every call returns a MatchOutcome. Only InternalMatchError escapes.
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from ..utils.logger import get_logger
from .condition import Condition
from .errors import (
    IncomparableValuesError,
    InternalMatchError,
    InvalidDateError,
    InvalidFilterError,
    InvalidOperatorError,
    InvalidRegexError,
)
from .registry import OperatorKind
from .types import MatchOutcome, Ordering, ReasonCode
from .values import FilterPropertyValue

# Operators evaluated even when the supplied value is None
_NULL_COMPARED_OPERATORS = frozenset({OperatorKind.IS_NOT, OperatorKind.IS_SET})


def _ordering_holds(operator: OperatorKind, ordering: Ordering) -> bool:
    """Map an ordering of subject vs literal onto an ordering operator."""
    if ordering == Ordering.INCOMPARABLE:
        raise IncomparableValuesError(f"Operator '{operator.value}' has no ordering for these values")

    if operator == OperatorKind.GREATER_THAN:
        return ordering == Ordering.GREATER
    elif operator == OperatorKind.LESS_THAN:
        return ordering == Ordering.LESS
    elif operator == OperatorKind.GREATER_THAN_OR_EQUALS:
        return ordering in (Ordering.GREATER, Ordering.EQUAL)
    elif operator == OperatorKind.LESS_THAN_OR_EQUALS:
        return ordering in (Ordering.LESS, Ordering.EQUAL)
    raise InternalMatchError(f"Operator '{operator.value}' is not an ordering operator")


def dispatch_operator(
    operator: OperatorKind,
    value: Optional[FilterPropertyValue],
    subject: Any,
    now: Optional[datetime] = None,
) -> bool:
    """
    Run the comparison for one operator.

    Args:
        operator: Parsed operator
        value: Wrapped literal (None only for is_set)
        subject: Value from the property bag
        now: Reference instant for relative dates

    Returns:
        True if the condition holds

    Raises:
        InconclusiveMatchError: Comparison cannot be decided
        InvalidRegexError: Regex literal does not compile
        InternalMatchError: Operator has no branch here
    """
    if operator == OperatorKind.IS_SET:
        # Key presence was already checked
        return True

    if value is None:
        raise InternalMatchError(f"Operator '{operator.value}' reached dispatch without a literal")

    if operator == OperatorKind.EXACT:
        return value.is_exact_match(subject)
    elif operator == OperatorKind.IS_NOT:
        return not value.is_exact_match(subject)
    elif operator in (
        OperatorKind.GREATER_THAN,
        OperatorKind.LESS_THAN,
        OperatorKind.GREATER_THAN_OR_EQUALS,
        OperatorKind.LESS_THAN_OR_EQUALS,
    ):
        return _ordering_holds(operator, value.compare_ordering(subject))
    elif operator == OperatorKind.CONTAINS_IGNORE_CASE:
        return value.contains_ignore_case(subject)
    elif operator == OperatorKind.DOES_NOT_CONTAIN_IGNORE_CASE:
        return not value.contains_ignore_case(subject)
    elif operator == OperatorKind.REGEX:
        return value.is_regex_match(subject)
    elif operator == OperatorKind.NOT_REGEX:
        return not value.is_regex_match(subject)
    elif operator == OperatorKind.IS_DATE_BEFORE:
        return value.is_date_before(subject, now=now)
    elif operator == OperatorKind.IS_DATE_AFTER:
        return value.is_date_after(subject, now=now)
    else:
        raise InternalMatchError(f"Unknown operator: {operator!r}")


def _log_outcome(outcome: MatchOutcome) -> MatchOutcome:
    get_logger().outcome(
        outcome.status.name,
        outcome.key or "?",
        outcome.operator or "?",
        outcome.reason.name,
    )
    return outcome


def match_property(
    condition: Condition,
    properties: Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
) -> MatchOutcome:
    """
    Evaluate a condition against a subject's property bag.

    This is the main entry point for local evaluation.

    Args:
        condition: Parsed condition
        properties: Known property values for the user or group
        now: Reference instant for relative date literals (defaults to now, UTC)

    Returns:
        MatchOutcome (MATCHED, NOT_MATCHED or INCONCLUSIVE)

    Raises:
        InternalMatchError: Operator catalog and dispatch disagree
    """
    key = condition.key
    operator = condition.operator
    op_name = operator.value

    value = None
    if operator != OperatorKind.IS_SET:
        value = FilterPropertyValue.create(condition.value)
        if value is None:
            return _log_outcome(MatchOutcome.inconclusive(
                ReasonCode.NULL_FILTER_VALUE,
                "The filter property value is null",
                key=key,
                operator=op_name,
            ))

    if key not in properties:
        return _log_outcome(MatchOutcome.inconclusive(
            ReasonCode.MISSING_PROPERTY,
            f"No value provided for key '{key}'",
            key=key,
            operator=op_name,
        ))

    subject = properties[key]

    if subject is None and operator not in _NULL_COMPARED_OPERATORS:
        # A supplied null is a definite non-match, not missing data
        return _log_outcome(MatchOutcome.not_matched(key, op_name, ReasonCode.NULL_PROPERTY_VALUE))

    try:
        matched = dispatch_operator(operator, value, subject, now=now)
    except InvalidRegexError as exc:
        get_logger().anomaly("INVALID_REGEX", str(exc), key=key, operator=op_name)
        return _log_outcome(MatchOutcome.inconclusive(
            ReasonCode.INVALID_REGEX, str(exc), key=key, operator=op_name,
        ))
    except InvalidDateError as exc:
        return _log_outcome(MatchOutcome.inconclusive(
            ReasonCode.INVALID_DATE, str(exc), key=key, operator=op_name,
        ))
    except IncomparableValuesError as exc:
        return _log_outcome(MatchOutcome.inconclusive(
            ReasonCode.TYPE_MISMATCH, str(exc), key=key, operator=op_name,
        ))
    except InternalMatchError as exc:
        get_logger().error(f"Internal matcher error for {condition}: {exc}")
        raise

    return _log_outcome(MatchOutcome.from_bool(matched, key, op_name))


def match_property_dict(
    filter_property: Mapping[str, Any],
    properties: Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
) -> MatchOutcome:
    """
    Evaluate a wire-format filter dict.

    Malformed filters (unknown operator, missing key) become INCONCLUSIVE
    and are logged as anomalous flag data.

    Args:
        filter_property: Dict with "key", "value" and optional "operator"/"type"
        properties: Known property values for the user or group
        now: Reference instant for relative date literals

    Returns:
        MatchOutcome
    """
    try:
        condition = Condition.from_dict(filter_property)
    except InvalidOperatorError as exc:
        get_logger().anomaly("INVALID_OPERATOR", str(exc), operator=exc.operator)
        return _log_outcome(MatchOutcome.inconclusive(
            ReasonCode.UNKNOWN_OPERATOR,
            str(exc),
            key=filter_property.get("key"),
            operator=str(exc.operator),
        ))
    except InvalidFilterError as exc:
        get_logger().anomaly("INVALID_FILTER", str(exc))
        return _log_outcome(MatchOutcome.inconclusive(ReasonCode.INVALID_FILTER, str(exc)))

    return match_property(condition, properties, now=now)


def match_property_strict(
    condition: Condition,
    properties: Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
) -> bool:
    """
    Exception-style adapter over match_property().

    Raises:
        InconclusiveMatchError: If the outcome is INCONCLUSIVE
    """
    return match_property(condition, properties, now=now).require()
