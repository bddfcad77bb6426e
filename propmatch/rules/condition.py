"""
Condition (filter property) definition.

A Condition is one targeting rule: a property key, an operator and the
expected literal. Built once per evaluation and never mutated.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .errors import InvalidFilterError
from .registry import OperatorKind, parse_operator

# Wire payloads may omit the operator; the flag service treats that as exact
DEFAULT_OPERATOR = OperatorKind.EXACT


@dataclass(frozen=True)
class Condition:
    """
    One property condition.

    Attributes:
        key: Property key looked up in the subject's property bag
        operator: OperatorKind (wire names are parsed on construction)
        value: Expected literal; scalar, date, or a sequence for set-style matching
        type: Filter type from the payload ("person", "group", ...), informational
    """

    key: str
    operator: OperatorKind
    value: Any = None
    type: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.key, str) or not self.key:
            raise InvalidFilterError(f"Condition key must be a non-empty string, got {self.key!r}")

        # Parse wire names; raises InvalidOperatorError for unknown ones
        object.__setattr__(self, "operator", parse_operator(self.operator))

        # Freeze list literals so the condition stays hashable and immutable
        if isinstance(self.value, (list, set, frozenset)):
            object.__setattr__(self, "value", tuple(self.value))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Condition":
        """
        Build a Condition from a flag-definition filter dict.

        Expected keys: "key", "value", optional "operator" and "type".

        Raises:
            InvalidFilterError: If the payload is not a mapping or lacks a key
            InvalidOperatorError: If the operator name is unknown
        """
        if not isinstance(payload, Mapping):
            raise InvalidFilterError(
                f"Filter property must be a mapping, got {type(payload).__name__}"
            )
        if "key" not in payload:
            raise InvalidFilterError("Filter property is missing 'key'")

        operator = payload.get("operator")
        return cls(
            key=payload["key"],
            operator=DEFAULT_OPERATOR if operator is None else operator,
            value=payload.get("value"),
            type=payload.get("type"),
        )

    def to_dict(self) -> dict:
        """Convert back to the wire shape."""
        result = {
            "key": self.key,
            "operator": self.operator.value,
            "value": list(self.value) if isinstance(self.value, tuple) else self.value,
        }
        if self.type is not None:
            result["type"] = self.type
        return result

    def __str__(self) -> str:
        return f"{self.key} {self.operator.value} {self.value!r}"
