"""
Property matching engine for local feature-flag evaluation.

Design principles:
- Closed operator catalog; unknown wire names fail at construction
- Three-way outcome: matched, not matched, inconclusive
- Inconclusive is never collapsed into False
- Pure and stateless per call; safe to share across threads
"""

from .errors import (
    PropertyMatchError,
    InconclusiveMatchError,
    InvalidDateError,
    IncomparableValuesError,
    InvalidFilterError,
    InvalidOperatorError,
    InvalidRegexError,
    InternalMatchError,
)
from .types import (
    ReasonCode,
    ValueType,
    Ordering,
    MatchStatus,
    MatchOutcome,
)
from .registry import (
    OperatorKind,
    OperatorSpec,
    OpCategory,
    OPERATOR_REGISTRY,
    SUPPORTED_OPERATORS,
    parse_operator,
    get_operator_spec,
    is_operator_supported,
    validate_operator,
)
from .condition import Condition
from .values import FilterPropertyValue
from .eval import (
    match_property,
    match_property_dict,
    match_property_strict,
    dispatch_operator,
)

__all__ = [
    # Errors
    "PropertyMatchError",
    "InconclusiveMatchError",
    "InvalidDateError",
    "IncomparableValuesError",
    "InvalidFilterError",
    "InvalidOperatorError",
    "InvalidRegexError",
    "InternalMatchError",
    # Types
    "ReasonCode",
    "ValueType",
    "Ordering",
    "MatchStatus",
    "MatchOutcome",
    # Registry
    "OperatorKind",
    "OperatorSpec",
    "OpCategory",
    "OPERATOR_REGISTRY",
    "SUPPORTED_OPERATORS",
    "parse_operator",
    "get_operator_spec",
    "is_operator_supported",
    "validate_operator",
    # Conditions and values
    "Condition",
    "FilterPropertyValue",
    # Evaluation
    "match_property",
    "match_property_dict",
    "match_property_strict",
    "dispatch_operator",
]
