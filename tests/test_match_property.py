"""
Tests for match_property and its wire-format and strict adapters.

Validates that:
1. Outcomes are three-state and never collapse inconclusive into False
2. Missing keys, null literals and null values follow their fixed order
3. Negated operators are complements of their positives
4. Malformed flag data surfaces as INCONCLUSIVE with a reason code
"""

import logging
from datetime import date, datetime

import pytest

from propmatch.rules import (
    Condition,
    FilterPropertyValue,
    InconclusiveMatchError,
    InternalMatchError,
    MatchOutcome,
    MatchStatus,
    OperatorKind,
    ReasonCode,
    ValueType,
    dispatch_operator,
    match_property,
    match_property_dict,
    match_property_strict,
)


def _match(key, operator, value, properties, **kwargs):
    return match_property(Condition(key, operator, value), properties, **kwargs)


class TestScenarios:
    """End-to-end scenarios for common targeting rules."""

    def test_gte_matches(self):
        outcome = _match("age", "gte", 18, {"age": 21})
        assert outcome.status == MatchStatus.MATCHED
        assert outcome.reason == ReasonCode.OK

    def test_missing_key_is_inconclusive(self):
        outcome = _match("age", "gte", 18, {})
        assert outcome.status == MatchStatus.INCONCLUSIVE
        assert outcome.reason == ReasonCode.MISSING_PROPERTY
        assert "age" in outcome.message

    def test_exact_null_value_is_not_matched(self):
        outcome = _match("plan", "exact", "pro", {"plan": None})
        assert outcome.status == MatchStatus.NOT_MATCHED
        assert outcome.reason == ReasonCode.NULL_PROPERTY_VALUE

    def test_icontains_ignores_case(self):
        outcome = _match("email", "icontains", "@acme.com", {"email": "bob@ACME.com"})
        assert outcome.is_match

    def test_is_set_with_null_value(self):
        outcome = _match("country", "is_set", None, {"country": None})
        assert outcome.status == MatchStatus.MATCHED

    def test_invalid_regex_is_inconclusive(self):
        outcome = _match("id", "regex", "[", {"id": "abc"})
        assert outcome.status == MatchStatus.INCONCLUSIVE
        assert outcome.reason == ReasonCode.INVALID_REGEX


class TestEvaluationOrder:
    """Test the fixed precedence of null and missing checks."""

    def test_null_literal_beats_missing_key(self):
        outcome = _match("plan", "exact", None, {})
        assert outcome.status == MatchStatus.INCONCLUSIVE
        assert outcome.reason == ReasonCode.NULL_FILTER_VALUE

    def test_is_set_missing_key(self):
        outcome = _match("country", "is_set", None, {"city": "Paris"})
        assert outcome.status == MatchStatus.INCONCLUSIVE
        assert outcome.reason == ReasonCode.MISSING_PROPERTY

    def test_is_set_ignores_literal(self):
        outcome = _match("country", "is_set", "is_set", {"country": "FR"})
        assert outcome.is_match

    def test_is_not_null_value_is_compared(self):
        """is_not is evaluated against a null value rather than short-circuited."""
        outcome = _match("plan", "is_not", "pro", {"plan": None})
        assert outcome.status == MatchStatus.MATCHED
        assert outcome.reason == ReasonCode.OK

    @pytest.mark.parametrize("operator,value", [
        ("gt", 1),
        ("icontains", "x"),
        ("regex", "^x"),
        ("is_date_before", "2024-01-01"),
    ])
    def test_null_value_other_operators(self, operator, value):
        outcome = _match("k", operator, value, {"k": None})
        assert outcome.status == MatchStatus.NOT_MATCHED
        assert outcome.reason == ReasonCode.NULL_PROPERTY_VALUE

    def test_invalid_regex_with_null_value_still_not_matched(self):
        outcome = _match("id", "regex", "[", {"id": None})
        assert outcome.status == MatchStatus.NOT_MATCHED


class TestOperators:
    """Test each operator through match_property."""

    @pytest.mark.parametrize("operator,value,subject,expected", [
        ("exact", "pro", "pro", MatchStatus.MATCHED),
        ("exact", "pro", "Pro", MatchStatus.NOT_MATCHED),
        ("exact", 42, "42", MatchStatus.MATCHED),
        ("exact", ["pro", "team"], "team", MatchStatus.MATCHED),
        ("is_not", "pro", "free", MatchStatus.MATCHED),
        ("is_not", ["pro", "team"], "team", MatchStatus.NOT_MATCHED),
        ("gt", 18, 18, MatchStatus.NOT_MATCHED),
        ("gte", 18, 18, MatchStatus.MATCHED),
        ("lt", "100", 99.5, MatchStatus.MATCHED),
        ("lte", 18, 19, MatchStatus.NOT_MATCHED),
        ("not_icontains", "@acme.com", "bob@ACME.com", MatchStatus.NOT_MATCHED),
        ("not_icontains", "@acme.com", "bob@other.com", MatchStatus.MATCHED),
        ("regex", r"^\d{3}$", 323, MatchStatus.MATCHED),
        ("not_regex", r"^\d{3}$", 3234, MatchStatus.MATCHED),
        ("is_date_before", "2024-01-01", "2023-06-01", MatchStatus.MATCHED),
        ("is_date_after", "2024-01-01", "2023-06-01", MatchStatus.NOT_MATCHED),
    ])
    def test_operator(self, operator, value, subject, expected):
        assert _match("k", operator, value, {"k": subject}).status == expected

    def test_ordering_type_mismatch(self):
        outcome = _match("age", "gt", 18, {"age": "unknown"})
        assert outcome.status == MatchStatus.INCONCLUSIVE
        assert outcome.reason == ReasonCode.TYPE_MISMATCH

    def test_ordering_bool_subject(self):
        outcome = _match("age", "lt", 18, {"age": True})
        assert outcome.reason == ReasonCode.TYPE_MISMATCH

    def test_invalid_date_subject(self):
        outcome = _match("signup", "is_date_after", "2024-01-01", {"signup": "last tuesday"})
        assert outcome.status == MatchStatus.INCONCLUSIVE
        assert outcome.reason == ReasonCode.INVALID_DATE

    def test_relative_date_uses_now(self, now):
        outcome = _match("signup", "is_date_after", "-7d", {"signup": "2024-12-05"}, now=now)
        assert outcome.is_match

    def test_outcome_carries_condition(self):
        outcome = _match("age", "gte", 18, {"age": 21})
        assert outcome.key == "age"
        assert outcome.operator == "gte"


class TestNegationConsistency:
    """Negated operators either invert their positive or are inconclusive with it."""

    PAIRS = [
        ("exact", "is_not"),
        ("icontains", "not_icontains"),
        ("regex", "not_regex"),
    ]

    SUBJECTS = ["pro", "PRO", 42, "42", True, "true", 3.5, "bob@acme.com"]

    @pytest.mark.parametrize("positive,negative", PAIRS)
    @pytest.mark.parametrize("subject", SUBJECTS)
    @pytest.mark.parametrize("literal", ["pro", 42, "true", "[", r"acme\.com"])
    def test_pairs(self, positive, negative, subject, literal):
        props = {"k": subject}
        pos = _match("k", positive, literal, props)
        neg = _match("k", negative, literal, props)

        if pos.is_inconclusive or neg.is_inconclusive:
            assert pos.is_inconclusive and neg.is_inconclusive
        else:
            assert pos.is_match != neg.is_match


class TestMatchPropertyDict:
    """Test evaluation of raw wire payloads."""

    def test_valid_payload(self):
        outcome = match_property_dict({"key": "plan", "value": "pro"}, {"plan": "pro"})
        assert outcome.is_match

    def test_unknown_operator(self, caplog):
        with caplog.at_level(logging.WARNING, logger="propmatch"):
            outcome = match_property_dict(
                {"key": "plan", "operator": "fuzzy", "value": "pro"}, {"plan": "pro"}
            )
        assert outcome.status == MatchStatus.INCONCLUSIVE
        assert outcome.reason == ReasonCode.UNKNOWN_OPERATOR
        assert outcome.key == "plan"
        assert outcome.operator == "fuzzy"
        assert "FLAG-DATA:INVALID_OPERATOR" in caplog.text

    def test_missing_key(self):
        outcome = match_property_dict({"operator": "exact", "value": "pro"}, {"plan": "pro"})
        assert outcome.status == MatchStatus.INCONCLUSIVE
        assert outcome.reason == ReasonCode.INVALID_FILTER

    def test_invalid_regex_logged_as_anomaly(self, caplog):
        with caplog.at_level(logging.WARNING, logger="propmatch"):
            outcome = match_property_dict(
                {"key": "id", "operator": "regex", "value": "(unclosed"}, {"id": "x"}
            )
        assert outcome.reason == ReasonCode.INVALID_REGEX
        assert "FLAG-DATA:INVALID_REGEX" in caplog.text


class TestStrictAdapter:
    """Test exception-style evaluation."""

    def test_returns_bool(self):
        assert match_property_strict(Condition("age", "gte", 18), {"age": 21}) is True
        assert match_property_strict(Condition("age", "gte", 18), {"age": 12}) is False

    def test_inconclusive_raises(self):
        with pytest.raises(InconclusiveMatchError, match="No value provided for key 'age'"):
            match_property_strict(Condition("age", "gte", 18), {})

    def test_require_on_outcome(self):
        outcome = MatchOutcome.inconclusive(ReasonCode.TYPE_MISMATCH, "nope")
        with pytest.raises(InconclusiveMatchError):
            outcome.require()


class TestDispatch:
    """Test dispatch_operator guards."""

    def test_unhandled_operator_raises_internal_error(self):
        with pytest.raises(InternalMatchError):
            dispatch_operator("not-an-operator", FilterPropertyValue("x"), "x")

    def test_missing_literal_raises_internal_error(self):
        with pytest.raises(InternalMatchError):
            dispatch_operator(OperatorKind.EXACT, None, "x")

    def test_internal_error_propagates_from_match_property(self, monkeypatch):
        import propmatch.rules.eval as eval_module

        def broken(*args, **kwargs):
            raise InternalMatchError("catalog drift")

        monkeypatch.setattr(eval_module, "dispatch_operator", broken)
        with pytest.raises(InternalMatchError, match="catalog drift"):
            match_property(Condition("plan", "exact", "pro"), {"plan": "pro"})


class TestOutcomeSerialization:
    """Test MatchOutcome.to_dict."""

    def test_to_dict(self):
        outcome = _match("age", "gte", 18, {})
        assert outcome.to_dict() == {
            "status": "inconclusive",
            "reason": "MISSING_PROPERTY",
            "key": "age",
            "operator": "gte",
            "message": "No value provided for key 'age'",
        }

    def test_constructors(self):
        assert MatchOutcome.matched("plan", "exact").status == MatchStatus.MATCHED
        missed = MatchOutcome.not_matched("plan", "exact", ReasonCode.NULL_PROPERTY_VALUE)
        assert missed.status == MatchStatus.NOT_MATCHED
        assert missed.require() is False


class TestValueType:
    """Test classification of loose property values."""

    @pytest.mark.parametrize("value,expected", [
        (None, ValueType.MISSING),
        (float("nan"), ValueType.MISSING),
        (True, ValueType.BOOL),
        (3, ValueType.INT),
        (3.5, ValueType.FLOAT),
        ("3", ValueType.STRING),
        (date(2024, 1, 1), ValueType.DATE),
        (datetime(2024, 1, 1), ValueType.DATE),
        (["a"], ValueType.LIST),
        ({"a": 1}, ValueType.UNKNOWN),
    ])
    def test_from_value(self, value, expected):
        assert ValueType.from_value(value) == expected


class TestLiteralEdgeCases:
    """Literals that must not crash or silently match everything."""

    def test_relative_date_out_of_range_is_inconclusive(self, now):
        outcome = _match("signup", "is_date_before", "-9999y", {"signup": "2020-01-01"}, now=now)
        assert outcome.status == MatchStatus.INCONCLUSIVE
        assert outcome.reason == ReasonCode.INVALID_DATE

    @pytest.mark.parametrize("literal,subject", [
        ("1_000", "1000"),
        ("01234", "1234"),
    ])
    def test_strings_compare_as_text(self, literal, subject):
        assert _match("code", "exact", literal, {"code": subject}).status == MatchStatus.NOT_MATCHED
        assert _match("code", "is_not", literal, {"code": subject}).status == MatchStatus.MATCHED

    def test_none_in_contains_list(self):
        literal = ["@acme.com", None]
        props = {"email": "bob@other.org"}
        assert _match("email", "icontains", literal, props).status == MatchStatus.NOT_MATCHED
        assert _match("email", "not_icontains", literal, props).status == MatchStatus.MATCHED

    def test_none_in_regex_list(self):
        outcome = _match("id", "regex", [r"^\d+$", None], {"id": "123"})
        assert outcome.status == MatchStatus.MATCHED

    def test_list_of_only_none_is_null_literal(self):
        outcome = _match("plan", "exact", [None], {"plan": "pro"})
        assert outcome.status == MatchStatus.INCONCLUSIVE
        assert outcome.reason == ReasonCode.NULL_FILTER_VALUE
