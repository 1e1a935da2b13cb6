"""
Tests for parsecheck combinators.
"""

import pytest

from parsecheck import (
    UNDEFINED,
    Err,
    Ok,
    and_,
    any_,
    array_of,
    boolean,
    discriminated_union,
    exact,
    nullable,
    number,
    optional,
    or_,
    string,
    type_,
)


class TestAnd:
    parser = and_(type_({"foo": string}), type_({"bar": number}))

    def test_valid(self):
        result = self.parser({"foo": "hello", "bar": 42})
        assert result == Ok({"foo": "hello", "bar": 42})

    @pytest.mark.parametrize(
        "value,path",
        [
            ("foo", ""),
            ({"bar": 42}, ".foo"),
            ({"foo": "hello"}, ".bar"),
            ({"foo": "hello", "bar": "world"}, ".bar"),
        ],
    )
    def test_invalid(self, value, path):
        result = self.parser(value)
        assert isinstance(result, Err)
        assert result.error.path == path

    def test_second_sees_first_output(self):
        seen = []

        def spy(value):
            seen.append(value)
            return Ok(value)

        first = type_({"n": number})
        and_(first, spy)({"n": 1, "extra": True})
        assert seen == [{"n": 1, "extra": True}]

    def test_second_not_run_on_failure(self):
        calls = []

        def spy(value):
            calls.append(value)
            return Ok(value)

        assert isinstance(and_(string, spy)(1), Err)
        assert calls == []

    def test_operator(self):
        parser = type_({"a": string}) & type_({"b": boolean})
        assert isinstance(parser({"a": "x", "b": True}), Ok)
        assert parser({"a": "x", "b": 1}).error.path == ".b"


class TestOr:
    def test_first_success_wins(self):
        assert or_(string, number)("x") == Ok("x")
        assert or_(string, number)(42) == Ok(42)

    def test_last_failure_reported(self):
        result = or_(string, number)(True)
        assert isinstance(result, Err)
        assert result.error.message == "expected number, got boolean"

    def test_second_gets_original_input(self):
        parser = or_(type_({"a": string}), type_({"b": number}))
        result = parser({"a": 1, "b": 2})
        assert result == Ok({"a": 1, "b": 2})

    def test_operator_with_builtin_types(self):
        parser = str | number
        assert isinstance(parser("x"), Ok)
        assert isinstance(parser(1.5), Ok)
        assert isinstance(parser(None), Err)


class TestOptionalNullable:
    def test_optional_accepts_undefined(self):
        assert optional(string)(UNDEFINED) == Ok(UNDEFINED)

    def test_optional_rejects_null(self):
        result = optional(string)(None)
        assert isinstance(result, Err)
        assert result.error.message == "expected string, got null"

    def test_optional_delegates(self):
        assert optional(string)("x") == Ok("x")
        assert isinstance(optional(string)(1), Err)

    def test_nullable_accepts_null(self):
        assert nullable(string)(None) == Ok(None)

    def test_nullable_rejects_undefined(self):
        result = nullable(string)(UNDEFINED)
        assert result.error.message == "expected string, got undefined"

    def test_sentinel_never_reaches_body(self):
        calls = []

        def spy(value):
            calls.append(value)
            return Err("never")

        optional(spy)(UNDEFINED)
        nullable(spy)(None)
        assert calls == []


class TestArrayOf:
    def test_valid(self):
        assert array_of(string)(["foo", "bar"]) == Ok(["foo", "bar"])

    @pytest.mark.parametrize("body", [string, number, type_({"a": string}), any_])
    def test_empty_always_passes(self, body):
        assert array_of(body)([]) == Ok([])

    def test_not_an_array(self):
        result = array_of(string)("foo")
        assert isinstance(result, Err)
        assert result.error.message == "expected array, got string"
        assert result.error.path == ""

    def test_stops_at_first_failure(self):
        calls = []

        def counting(value):
            calls.append(value)
            return number(value)

        result = array_of(counting)([1, "two", "three"])
        assert result.error.path == "[1]"
        assert calls == [1, "two"]

    def test_nested_path(self):
        parser = array_of(type_({"tags": array_of(string)}))
        result = parser([{"tags": ["a"]}, {"tags": ["b", 3]}])
        assert result.error.path == "[1].tags[1]"
        assert result.error.message == "expected string, got number"

    def test_returns_new_list(self):
        value = ("a", "b")
        result = array_of(string)(value)
        assert result == Ok(["a", "b"])
        original = ["a"]
        assert array_of(string)(original).value is not original


class TestType:
    parser = type_({"foo": string, "bar": number})

    def test_valid(self):
        assert self.parser({"foo": "hello", "bar": 42}) == Ok({"foo": "hello", "bar": 42})

    def test_not_an_object(self):
        result = self.parser("foo")
        assert result.error.message == "expected object, got string"
        assert result.error.path == ""

    def test_null(self):
        assert self.parser(None).error.message == "expected object, got null"

    def test_missing_field(self):
        result = self.parser({"foo": "hello"})
        assert result.error.path == ".bar"
        assert result.error.message == "expected number, got undefined"

    def test_wrong_field_type(self):
        result = type_({"a": string, "b": number})({"a": "x", "b": "y"})
        assert result.error.path == ".b"
        assert result.error.message == "expected number, got string"

    def test_unnamed_fields_pass_through(self):
        result = type_({"a": string})({"a": "x", "b": 1})
        assert result == Ok({"a": "x", "b": 1})

    def test_declaration_order_wins(self):
        parser = type_({"second": number, "first": number})
        result = parser({"first": "x", "second": "y"})
        assert result.error.path == ".second"

    def test_validated_values_take_precedence(self):
        parser = type_({"items": array_of(string)})
        source = {"items": ("a",), "n": 1}
        assert parser(source) == Ok({"items": ["a"], "n": 1})

    def test_absent_optional_field_not_added(self):
        parser = type_({"name": string, "nickname": optional(string)})
        assert parser({"name": "a"}) == Ok({"name": "a"})

    def test_input_not_mutated(self):
        source = {"items": ("a",)}
        type_({"items": array_of(string)})(source)
        assert source == {"items": ("a",)}

    def test_idempotent(self):
        parser = type_({"a": array_of(type_({"b": nullable(number)}))})
        first = parser({"a": [{"b": None}, {"b": 2, "c": "x"}]})
        assert parser(first.value) == first

    def test_array_has_no_named_fields(self):
        assert type_({})([1]) == Ok({"0": 1})
        result = type_({"foo": string})(["x"])
        assert result.error.path == ".foo"
        assert result.error.message == "expected string, got undefined"

    def test_array_fields_by_index(self):
        parser = type_({"0": string, "label": optional(string)})
        assert parser(["a", 2]) == Ok({"0": "a", "1": 2})
        assert parser([1]).error.path == ".0"

    def test_plain_schema_fields(self):
        parser = type_({"name": str, "tags": [str]})
        assert isinstance(parser({"name": "x", "tags": ["y"]}), Ok)
        assert parser({"name": "x", "tags": [1]}).error.path == ".tags[0]"


class TestDiscriminatedUnion:
    parser = discriminated_union(
        {
            "foo": type_({"foo": number}),
            "bar": type_({"bar": number}),
        }
    )

    @pytest.mark.parametrize(
        "value",
        [{"type": "foo", "foo": 42}, {"type": "bar", "bar": 42}],
    )
    def test_valid(self, value):
        assert self.parser(value) == Ok(value)

    def test_dispatch_follows_tag(self):
        result = self.parser({"type": "bar", "foo": 42})
        assert isinstance(result, Err)
        assert result.error.path == ".bar"

    def test_variant_without_fields(self):
        assert self.parser({"type": "foo"}).error.path == ".foo"

    def test_missing_tag(self):
        result = self.parser({"foo": 42})
        assert result.error.path == ".type"
        assert result.error.message == "expected string, got undefined"

    def test_unknown_tag(self):
        result = self.parser({"type": "baz"})
        assert result.error.path == ".type"
        assert result.error.message == "value baz is not in whitelist"

    def test_non_string_tag(self):
        result = self.parser({"type": 1, "foo": 42})
        assert isinstance(result, Err)
        assert result.error.path == ".type"
        assert result.error.message == "expected string, got number"

    def test_not_a_record(self):
        result = self.parser("foo")
        assert result.error.path == ""
        assert result.error.message == "expected object, got string"

    def test_variant_sees_tag(self):
        parser = discriminated_union({"v1": type_({"type": exact("v1"), "x": number})})
        assert parser({"type": "v1", "x": 1}) == Ok({"type": "v1", "x": 1})

    def test_custom_discriminator(self):
        parser = discriminated_union(
            {"circle": type_({"radius": number})}, discriminator="kind"
        )
        assert isinstance(parser({"kind": "circle", "radius": 1}), Ok)
        assert parser({"type": "circle"}).error.path == ".kind"

    def test_nested_in_array(self):
        parser = array_of(self.parser)
        result = parser([{"type": "foo", "foo": 1}, {"type": "foo", "foo": "x"}])
        assert result.error.path == "[1].foo"

    def test_empty_variants(self):
        with pytest.raises(ValueError):
            discriminated_union({})
