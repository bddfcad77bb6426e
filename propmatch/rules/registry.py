"""
Operator Registry - Single source of truth for operator semantics.

Used by:
- Condition construction (reject unknown wire names)
- Matcher dispatch
- CLI operator listing

Design:
- The catalog is closed: thirteen wire names, no aliases, no runtime registration
- Wire names are case-sensitive and map 1:1 to OperatorKind
- An unknown name is an error, never a permissive default
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet, Optional

from .errors import InvalidOperatorError


class OperatorKind(str, Enum):
    """
    Supported comparison operators, valued by their wire names.
    """

    # Equality
    EXACT = "exact"
    IS_NOT = "is_not"

    # Ordering
    GREATER_THAN = "gt"
    LESS_THAN = "lt"
    GREATER_THAN_OR_EQUALS = "gte"
    LESS_THAN_OR_EQUALS = "lte"

    # Substring (case-insensitive)
    CONTAINS_IGNORE_CASE = "icontains"
    DOES_NOT_CONTAIN_IGNORE_CASE = "not_icontains"

    # Regex
    REGEX = "regex"
    NOT_REGEX = "not_regex"

    # Presence
    IS_SET = "is_set"

    # Dates
    IS_DATE_BEFORE = "is_date_before"
    IS_DATE_AFTER = "is_date_after"


class OpCategory(Enum):
    """Operator comparison families."""
    EQUALITY = auto()   # exact / is_not
    ORDERING = auto()   # gt, lt, gte, lte
    SUBSTRING = auto()  # icontains / not_icontains
    REGEX = auto()      # regex / not_regex
    PRESENCE = auto()   # is_set
    DATE = auto()       # is_date_before / is_date_after


@dataclass(frozen=True)
class OperatorSpec:
    """
    Specification for a single operator.

    Attributes:
        kind: Operator tag
        category: Comparison family
        negates: Operator whose result this one inverts (None if not a negation)
        description: One-line summary for listings
    """
    kind: OperatorKind
    category: OpCategory
    negates: Optional[OperatorKind] = None
    description: str = ""

    @property
    def name(self) -> str:
        """Wire name."""
        return self.kind.value


# =============================================================================
# OPERATOR REGISTRY - Single Source of Truth
# =============================================================================

OPERATOR_REGISTRY = {
    OperatorKind.EXACT: OperatorSpec(
        kind=OperatorKind.EXACT,
        category=OpCategory.EQUALITY,
        description="Value equals literal (any element for list literals)",
    ),
    OperatorKind.IS_NOT: OperatorSpec(
        kind=OperatorKind.IS_NOT,
        category=OpCategory.EQUALITY,
        negates=OperatorKind.EXACT,
        description="Value differs from literal",
    ),
    OperatorKind.GREATER_THAN: OperatorSpec(
        kind=OperatorKind.GREATER_THAN,
        category=OpCategory.ORDERING,
        description="Value > literal",
    ),
    OperatorKind.LESS_THAN: OperatorSpec(
        kind=OperatorKind.LESS_THAN,
        category=OpCategory.ORDERING,
        description="Value < literal",
    ),
    OperatorKind.GREATER_THAN_OR_EQUALS: OperatorSpec(
        kind=OperatorKind.GREATER_THAN_OR_EQUALS,
        category=OpCategory.ORDERING,
        description="Value >= literal",
    ),
    OperatorKind.LESS_THAN_OR_EQUALS: OperatorSpec(
        kind=OperatorKind.LESS_THAN_OR_EQUALS,
        category=OpCategory.ORDERING,
        description="Value <= literal",
    ),
    OperatorKind.CONTAINS_IGNORE_CASE: OperatorSpec(
        kind=OperatorKind.CONTAINS_IGNORE_CASE,
        category=OpCategory.SUBSTRING,
        description="Value contains literal, ignoring case",
    ),
    OperatorKind.DOES_NOT_CONTAIN_IGNORE_CASE: OperatorSpec(
        kind=OperatorKind.DOES_NOT_CONTAIN_IGNORE_CASE,
        category=OpCategory.SUBSTRING,
        negates=OperatorKind.CONTAINS_IGNORE_CASE,
        description="Value does not contain literal, ignoring case",
    ),
    OperatorKind.REGEX: OperatorSpec(
        kind=OperatorKind.REGEX,
        category=OpCategory.REGEX,
        description="Literal pattern found in value",
    ),
    OperatorKind.NOT_REGEX: OperatorSpec(
        kind=OperatorKind.NOT_REGEX,
        category=OpCategory.REGEX,
        negates=OperatorKind.REGEX,
        description="Literal pattern not found in value",
    ),
    OperatorKind.IS_SET: OperatorSpec(
        kind=OperatorKind.IS_SET,
        category=OpCategory.PRESENCE,
        description="Key present in the property bag (value may be null)",
    ),
    OperatorKind.IS_DATE_BEFORE: OperatorSpec(
        kind=OperatorKind.IS_DATE_BEFORE,
        category=OpCategory.DATE,
        description="Value is a date before the literal date",
    ),
    OperatorKind.IS_DATE_AFTER: OperatorSpec(
        kind=OperatorKind.IS_DATE_AFTER,
        category=OpCategory.DATE,
        description="Value is a date after the literal date",
    ),
}

# Wire names accepted by parse_operator()
SUPPORTED_OPERATORS: FrozenSet[str] = frozenset(kind.value for kind in OPERATOR_REGISTRY)

_BY_WIRE_NAME = {kind.value: kind for kind in OperatorKind}


def parse_operator(wire_name: str) -> OperatorKind:
    """
    Parse a wire-format operator name.

    Args:
        wire_name: Operator string from the flag payload (case-sensitive)

    Returns:
        Matching OperatorKind

    Raises:
        InvalidOperatorError: If the name is not in the catalog
    """
    if isinstance(wire_name, OperatorKind):
        return wire_name
    kind = _BY_WIRE_NAME.get(wire_name) if isinstance(wire_name, str) else None
    if kind is None:
        raise InvalidOperatorError(wire_name)
    return kind


def get_operator_spec(kind: OperatorKind) -> OperatorSpec:
    """Get operator specification from registry."""
    return OPERATOR_REGISTRY[kind]


def is_operator_supported(wire_name: str) -> bool:
    """Check if a wire name is in the catalog."""
    if isinstance(wire_name, OperatorKind):
        return True
    return wire_name in SUPPORTED_OPERATORS


def validate_operator(wire_name: str) -> Optional[str]:
    """
    Validate an operator name without raising.

    Returns:
        Error message if invalid, None if valid
    """
    if is_operator_supported(wire_name):
        return None
    return (
        f"Unknown operator '{wire_name}'. "
        f"Supported: {', '.join(sorted(SUPPORTED_OPERATORS))}"
    )
