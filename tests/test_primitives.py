"""Tests for the primitive schemas."""

import math

import pytest

from typeshape import MISSING, IssueCode, ValidationError, s


class TestString:
    def test_accepts_strings(self):
        schema = s.string()
        assert schema.parse("hello") == "hello"
        assert schema.parse("") == ""

    @pytest.mark.parametrize("value", [123, True, None, ["a"], {"a": 1}, MISSING])
    def test_rejects_non_strings(self, value):
        with pytest.raises(ValidationError):
            s.string().parse(value)

    def test_invalid_type_issue_at_root(self):
        outcome = s.string().validate(5)
        assert not outcome.success
        assert len(outcome.issues) == 1
        assert outcome.issues[0].path == ()
        assert outcome.issues[0].code == IssueCode.INVALID_TYPE
        assert "string" in outcome.issues[0].message

    def test_min_length(self):
        schema = s.string().min(3)
        assert schema.parse("abc") == "abc"
        outcome = schema.validate("ab")
        assert outcome.issues[0].code == IssueCode.TOO_SMALL

    def test_max_length(self):
        schema = s.string().max(5)
        assert schema.parse("hello") == "hello"
        outcome = schema.validate("toolong")
        assert outcome.issues[0].code == IssueCode.TOO_BIG

    def test_chain_min_max(self):
        schema = s.string().min(3).max(10)
        assert schema.parse("hello") == "hello"
        with pytest.raises(ValidationError):
            schema.parse("ab")
        with pytest.raises(ValidationError):
            schema.parse("this is too long")

    def test_regex(self):
        schema = s.string().regex(r"^[a-z]+$")
        assert schema.parse("abc") == "abc"
        assert schema.validate("ABC").issues[0].code == IssueCode.INVALID_VALUE

    def test_refinement_returns_new_node(self):
        base = s.string()
        refined = base.min(2)
        assert base.min_length is None
        assert refined.min_length == 2


class TestNumber:
    @pytest.mark.parametrize("value", [123, 0, -45.67, math.inf, -math.inf])
    def test_accepts_numbers(self, value):
        assert s.number().parse(value) == value

    @pytest.mark.parametrize("value", ["123", True, False, None, math.nan])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValidationError):
            s.number().parse(value)

    def test_finite_rejects_infinity(self):
        schema = s.number().finite()
        assert schema.parse(-45.67) == -45.67
        outcome = schema.validate(math.inf)
        assert outcome.issues[0].code == IssueCode.NOT_FINITE

    def test_min_max(self):
        schema = s.number().min(0).max(100)
        assert schema.parse(0) == 0
        assert schema.parse(100) == 100
        assert schema.validate(-1).issues[0].code == IssueCode.TOO_SMALL
        assert schema.validate(101).issues[0].code == IssueCode.TOO_BIG

    def test_integer(self):
        schema = s.number().integer()
        assert schema.parse(3) == 3
        assert schema.parse(3.0) == 3.0
        assert schema.validate(3.5).issues[0].code == IssueCode.INVALID_TYPE


class TestBoolean:
    def test_accepts_booleans(self):
        assert s.boolean().parse(True) is True
        assert s.boolean().parse(False) is False

    @pytest.mark.parametrize("value", ["true", 1, 0, None])
    def test_rejects_non_booleans(self, value):
        with pytest.raises(ValidationError):
            s.boolean().parse(value)


class TestNullAndUndefined:
    def test_null_accepts_none_only(self):
        assert s.null().parse(None) is None
        with pytest.raises(ValidationError):
            s.null().parse(MISSING)
        with pytest.raises(ValidationError):
            s.null().parse(0)

    def test_undefined_accepts_missing_only(self):
        assert s.undefined().parse(MISSING) is MISSING
        with pytest.raises(ValidationError):
            s.undefined().parse(None)
        with pytest.raises(ValidationError):
            s.undefined().parse(0)

    def test_missing_is_falsy_singleton(self):
        assert not MISSING
        assert repr(MISSING) == "MISSING"
        assert type(MISSING)() is MISSING


class TestUnknownAndAny:
    @pytest.mark.parametrize("factory", [s.unknown, s.any])
    @pytest.mark.parametrize(
        "value", [123, "hello", True, None, MISSING, {"foo": "bar"}, [1, 2, 3]]
    )
    def test_accepts_anything(self, factory, value):
        assert factory().parse(value) == value

    def test_safe_parse(self):
        result = s.unknown().safe_parse("anything")
        assert result.success is True
        assert result.data == "anything"
        assert result.error is None


class TestSafeParse:
    def test_success(self):
        result = s.string().safe_parse("test")
        assert result.success
        assert result.data == "test"

    def test_failure_carries_error(self):
        result = s.string().safe_parse(123)
        assert result.success is False
        assert isinstance(result.error, ValidationError)
        assert result.error.issues[0].code == IssueCode.INVALID_TYPE


class TestDescribe:
    def test_describe_returns_new_node(self):
        base = s.string()
        described = base.describe("A name")
        assert base.description is None
        assert described.description == "A name"
        assert described is not base

    def test_described_node_still_validates(self):
        assert s.number().describe("Age").parse(5) == 5
