"""Tests for the JSON Schema wrapper."""

from rightsclaims.core.schema import DRAFT, schema_validator, validate_schema

SCHEMA = {
    "$schema": DRAFT,
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "tags": {"type": "array", "items": {"type": "string"}, "minItems": 1},
    },
    "required": ["name"],
}


def test_valid_value_has_no_errors():
    assert validate_schema({"name": "x", "tags": ["a"]}, SCHEMA) == []
    assert validate_schema({"name": "x"}, SCHEMA) == []


def test_errors_carry_json_path():
    errors = validate_schema({"name": 1, "tags": []}, SCHEMA)
    assert len(errors) == 2
    assert any(e.startswith("$.name:") for e in errors)
    assert any(e.startswith("$.tags:") for e in errors)


def test_missing_required_field():
    errors = validate_schema({}, SCHEMA)
    assert errors == ["$: 'name' is a required property"]


def test_validators_are_cached_per_schema():
    assert schema_validator(SCHEMA) is schema_validator(dict(SCHEMA))


def test_integer_excludes_booleans():
    schema = {"type": "integer"}
    assert validate_schema(3, schema) == []
    assert validate_schema(True, schema) == ["$: True is not of type 'integer'"]
