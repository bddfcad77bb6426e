"""
propmatch - local evaluation of feature-flag property conditions.
"""

from .rules import (
    Condition,
    FilterPropertyValue,
    InconclusiveMatchError,
    InvalidOperatorError,
    InvalidRegexError,
    MatchOutcome,
    MatchStatus,
    OperatorKind,
    ReasonCode,
    match_property,
    match_property_dict,
    match_property_strict,
    parse_operator,
)

__version__ = "0.1.0"

__all__ = [
    "Condition",
    "FilterPropertyValue",
    "InconclusiveMatchError",
    "InvalidOperatorError",
    "InvalidRegexError",
    "MatchOutcome",
    "MatchStatus",
    "OperatorKind",
    "ReasonCode",
    "match_property",
    "match_property_dict",
    "match_property_strict",
    "parse_operator",
]
