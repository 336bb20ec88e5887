"""JSON Schema validation.

Schemas in this package are plain dicts declared next to the code that owns
them (claims, headers, metadata). Validators are compiled once per distinct
schema and cached.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

from jsonschema import Draft202012Validator

#: ``$schema`` value for every schema declared in this package.
DRAFT = "https://json-schema.org/draft/2020-12/schema"


@lru_cache(maxsize=64)
def _compiled(schema_json: str) -> Draft202012Validator:
    schema = json.loads(schema_json)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def schema_validator(schema: dict[str, Any]) -> Draft202012Validator:
    """Return a cached validator for *schema*."""
    return _compiled(json.dumps(schema, sort_keys=True))


def validate_schema(value: Any, schema: dict[str, Any]) -> list[str]:
    """Validate *value* against *schema*.

    Returns:
        List of validation error messages (empty if valid)
    """
    validator = schema_validator(schema)
    errors = sorted(validator.iter_errors(value), key=lambda e: e.json_path)
    return [f"{error.json_path}: {error.message}" for error in errors]

