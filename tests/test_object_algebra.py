"""Tests for pick / omit / partial / extend on object schemas."""

import pytest

from typeshape import MISSING, SchemaDefinitionError, SchemaKind, s


@pytest.fixture
def user():
    return s.object({
        "id": s.number(),
        "name": s.string(),
        "email": s.string(),
        "age": s.number(),
    }).describe("A user")


class TestPick:
    def test_keeps_only_named_keys(self, user):
        picked = user.pick(["id", "name"])
        assert picked.keys() == ["id", "name"]
        assert picked.parse({"id": 1, "name": "Ann", "email": "x"}) == {"id": 1, "name": "Ann"}

    def test_ignores_problems_outside_picked_keys(self, user):
        picked = user.pick(["name"])
        assert picked.validate({"name": "Ann", "id": "not-a-number", "age": []}).success
        assert picked.validate({"name": "Ann"}).success

    def test_keeps_original_order(self, user):
        assert user.pick(["age", "id"]).keys() == ["id", "age"]

    def test_single_key_string(self, user):
        assert user.pick("email").keys() == ["email"]

    def test_unknown_key_raises(self, user):
        with pytest.raises(SchemaDefinitionError, match="nope"):
            user.pick(["id", "nope"])

    def test_carries_description_and_policy(self, user):
        picked = user.strict().pick(["id"])
        assert picked.description == "A user"
        assert picked.unknown_keys == "strict"


class TestOmit:
    def test_drops_named_keys(self, user):
        assert user.omit(["email", "age"]).keys() == ["id", "name"]

    def test_omit_everything(self, user):
        empty = user.omit(user.keys())
        assert empty.keys() == []
        assert empty.parse({"id": 1}) == {}

    def test_unknown_key_raises(self, user):
        with pytest.raises(SchemaDefinitionError):
            user.omit("missing")

    def test_pick_and_omit_agree(self, user):
        assert user.omit(["email", "age"]) == user.pick(["id", "name"])


class TestPartial:
    def test_every_property_optional(self, user):
        partial = user.partial()
        assert all(partial.shape_of(k).kind() is SchemaKind.OPTIONAL for k in partial.keys())
        assert partial.parse({}) == {}
        assert partial.parse({"name": "Ann"}) == {"name": "Ann"}

    def test_present_values_still_validated(self, user):
        outcome = user.partial().validate({"age": "old"})
        assert outcome.issues[0].path == ("age",)

    def test_idempotent(self, user):
        once = user.partial()
        twice = once.partial()
        assert twice == once
        inner = twice.shape_of("id")
        assert inner.kind() is SchemaKind.OPTIONAL
        assert inner.unwrap().kind() is SchemaKind.NUMBER

    def test_already_optional_left_alone(self):
        nick = s.optional(s.string())
        schema = s.object({"nick": nick}).partial()
        assert schema.shape_of("nick") is nick

    def test_undefined_still_accepted_inside(self, user):
        assert user.partial().shape_of("id").parse(MISSING) is MISSING


class TestExtend:
    def test_appends_new_keys(self, user):
        extended = user.extend({"role": s.enum(["admin", "user"])})
        assert extended.keys() == ["id", "name", "email", "age", "role"]

    def test_incoming_definition_wins(self, user):
        extended = user.extend({"age": s.string()})
        assert extended.shape_of("age").kind() is SchemaKind.STRING
        assert extended.keys() == ["id", "name", "email", "age"]
        assert extended.parse(
            {"id": 1, "name": "n", "email": "e", "age": "forty"}
        )["age"] == "forty"

    def test_empty_extension_is_equal(self, user):
        assert user.extend({}) == user

    def test_rejects_non_schema_values(self, user):
        with pytest.raises(SchemaDefinitionError):
            user.extend({"bad": 1})


class TestPurityAndComposition:
    def test_receiver_is_never_modified(self, user):
        before = user.keys()
        user.pick(["id"])
        user.omit(["id"])
        user.partial()
        user.extend({"x": s.string()})
        assert user.keys() == before
        assert user.shape_of("id").kind() is SchemaKind.NUMBER

    def test_shape_is_read_only(self, user):
        with pytest.raises(TypeError):
            user.shape["id"] = s.string()

    def test_chain_matches_direct_construction(self, user):
        chained = user.pick(["id", "name"]).extend({"active": s.boolean()}).partial()
        direct = s.object({
            "id": s.optional(s.number()),
            "name": s.optional(s.string()),
            "active": s.optional(s.boolean()),
        }).describe("A user")
        assert chained == direct
        assert s.to_json_schema(chained) == s.to_json_schema(direct)

    def test_shape_of_unknown_key(self, user):
        with pytest.raises(SchemaDefinitionError):
            user.shape_of("nope")
