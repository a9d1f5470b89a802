"""Tests for object, array and record validation."""

import pytest

from typeshape import IssueCode, SchemaDefinitionError, ValidationError, s


@pytest.fixture
def person():
    return s.object({
        "name": s.string(),
        "age": s.number(),
        "active": s.boolean(),
    })


class TestObject:
    def test_valid_object(self, person):
        data = {"name": "John", "age": 30, "active": True}
        assert person.parse(data) == data

    def test_rejects_non_mapping(self, person):
        outcome = person.validate(["John", 30, True])
        assert outcome.issues[0].code == IssueCode.INVALID_TYPE
        assert outcome.issues[0].path == ()

    def test_field_path_in_errors(self, person):
        with pytest.raises(ValidationError) as exc_info:
            person.parse({"name": "John", "age": "invalid", "active": True})
        assert exc_info.value.issues[0].path == ("age",)

    def test_missing_field(self, person):
        outcome = person.validate({"name": "John", "active": True})
        assert len(outcome.issues) == 1
        assert outcome.issues[0].code == IssueCode.MISSING_FIELD
        assert outcome.issues[0].path == ("age",)

    def test_explicit_none_is_not_missing(self, person):
        outcome = person.validate({"name": "John", "age": None, "active": True})
        assert outcome.issues[0].code == IssueCode.INVALID_TYPE

    def test_optional_tolerates_absent_key(self):
        schema = s.object({"name": s.string(), "nick": s.optional(s.string())})
        assert schema.parse({"name": "Ann"}) == {"name": "Ann"}
        assert schema.parse({"name": "Ann", "nick": "A"}) == {"name": "Ann", "nick": "A"}

    def test_optional_still_validates_present_key(self):
        schema = s.object({"nick": s.optional(s.string())})
        outcome = schema.validate({"nick": 5})
        assert outcome.issues[0].path == ("nick",)

    def test_undefined_property_still_requires_key(self):
        outcome = s.object({"x": s.undefined()}).validate({})
        assert outcome.issues[0].code == IssueCode.MISSING_FIELD
        assert outcome.issues[0].path == ("x",)

    def test_nullable_optional_property_still_requires_key(self):
        outcome = s.object({"x": s.nullable(s.optional(s.string()))}).validate({})
        assert outcome.issues[0].code == IssueCode.MISSING_FIELD

    def test_optional_undefined_allows_only_absence(self):
        schema = s.object({"x": s.optional(s.undefined())})
        assert schema.parse({}) == {}
        assert not schema.validate({"x": None}).success

    def test_issues_follow_schema_order(self, person):
        outcome = person.validate({"active": "yes", "age": "old"})
        assert [i.path for i in outcome.issues] == [("name",), ("age",), ("active",)]
        assert [i.code for i in outcome.issues] == [
            IssueCode.MISSING_FIELD,
            IssueCode.INVALID_TYPE,
            IssueCode.INVALID_TYPE,
        ]

    def test_nested_paths(self):
        schema = s.object({
            "user": s.object({"name": s.string(), "email": s.string()}),
        })
        assert schema.parse({"user": {"name": "Alice", "email": "a@example.com"}}) == {
            "user": {"name": "Alice", "email": "a@example.com"},
        }
        outcome = schema.validate({"user": {"name": "Alice", "email": 1}})
        assert outcome.issues[0].path == ("user", "email")

    def test_output_is_new_dict(self, person):
        data = {"name": "John", "age": 30, "active": True}
        result = person.parse(data)
        assert result == data
        assert result is not data

    def test_non_string_property_name_rejected(self):
        with pytest.raises(SchemaDefinitionError):
            s.object({1: s.string()})

    def test_non_schema_property_rejected(self):
        with pytest.raises(SchemaDefinitionError):
            s.object({"a": str})


class TestUnknownKeys:
    def test_strip_is_default(self, person):
        assert person.unknown_keys == "strip"
        result = person.parse({"name": "J", "age": 1, "active": False, "extra": 1})
        assert result == {"name": "J", "age": 1, "active": False}

    def test_passthrough_keeps_extras(self, person):
        result = person.passthrough().parse(
            {"name": "J", "age": 1, "active": False, "extra": 1}
        )
        assert result["extra"] == 1

    def test_strict_reports_extras_after_fields(self, person):
        outcome = person.strict().validate({"name": 1, "age": 1, "active": False, "x": 0})
        assert [i.code for i in outcome.issues] == [
            IssueCode.INVALID_TYPE,
            IssueCode.UNRECOGNIZED_KEYS,
        ]
        assert outcome.issues[1].path == ()
        assert "'x'" in outcome.issues[1].message

    def test_strip_restores_default(self, person):
        assert person.strict().strip().unknown_keys == "strip"

    def test_policy_argument(self):
        schema = s.object({"a": s.string()}, unknown_keys="strict")
        assert not schema.validate({"a": "x", "b": 1}).success

    def test_bad_policy_rejected(self):
        with pytest.raises(SchemaDefinitionError):
            s.object({}, unknown_keys="loose")


class TestArray:
    def test_valid_array(self):
        assert s.array(s.string()).parse(["a", "b", "c"]) == ["a", "b", "c"]

    def test_tuple_accepted_as_array(self):
        result = s.array(s.number()).parse((1, 2))
        assert result == (1, 2)
        assert isinstance(result, tuple)

    def test_list_input_gives_list(self):
        result = s.array(s.number()).parse([1, 2])
        assert isinstance(result, list)

    def test_nested_tuple_elements_keep_type(self):
        schema = s.array(s.object({"a": s.number()}))
        assert schema.parse(({"a": 1, "b": 2},)) == ({"a": 1},)

    @pytest.mark.parametrize("value", ["not-an-array", {"a": 1}, None, 5])
    def test_rejects_non_arrays(self, value):
        with pytest.raises(ValidationError):
            s.array(s.string()).parse(value)

    def test_single_bad_element_reports_index(self):
        outcome = s.array(s.string()).validate(["a", 123, "c"])
        assert len(outcome.issues) == 1
        assert outcome.issues[0].path == (1,)

    def test_collects_every_bad_element(self):
        outcome = s.array(s.string()).validate([1, "b", 2, 3])
        assert [i.path for i in outcome.issues] == [(0,), (2,), (3,)]

    def test_array_of_objects(self):
        schema = s.array(s.object({"id": s.number(), "name": s.string()}))
        result = schema.parse([{"id": 1, "name": "First"}, {"id": 2, "name": "Second"}])
        assert len(result) == 2
        assert result[0]["id"] == 1
        outcome = schema.validate([{"id": 1, "name": "x"}, {"id": "2"}])
        assert [i.path for i in outcome.issues] == [(1, "id"), (1, "name")]


class TestRecord:
    def test_valid_record(self):
        schema = s.record(s.string(), s.number())
        assert schema.parse({"a": 1, "b": 2}) == {"a": 1, "b": 2}

    def test_rejects_non_mappings(self):
        with pytest.raises(ValidationError):
            s.record(s.string(), s.number()).parse([])

    def test_value_issue_at_key_path(self):
        outcome = s.record(s.string(), s.number()).validate({"a": 1, "b": "x"})
        assert len(outcome.issues) == 1
        assert outcome.issues[0].path == ("b",)

    def test_key_issue_at_key_path(self):
        schema = s.record(s.enum(["x", "y"]), s.number())
        outcome = schema.validate({"x": 1, "z": 2})
        assert outcome.issues[0].path == ("z",)
        assert outcome.issues[0].code == IssueCode.NO_UNION_VARIANT_MATCHED

    def test_single_argument_form(self):
        schema = s.record(s.boolean())
        assert schema.key.kind().value == "String"
        assert schema.parse({"on": True}) == {"on": True}
