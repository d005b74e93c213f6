"""JSON Schema validation of the bundle document printed by --json / --output.

Wraps jsonschema Draft7 validation; the CLI validates before writing so a
consumer never receives a document that breaks the published contract.
"""

from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft7Validator


class SchemaError(ValueError):
    """Raised when data fails to validate against a provided schema."""


BUNDLE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "definitions": {
        "bundle": {
            "type": "object",
            "required": ["name", "edition", "modules", "dependencies"],
            "additionalProperties": False,
            "properties": {
                "name": {"type": "string"},
                "edition": {"type": "string"},
                "modules": {
                    "type": "array",
                    "items": {
                        "type": "array",
                        "items": [{"type": "string"}, {"type": "string"}],
                        "minItems": 2,
                        "maxItems": 2,
                    },
                },
                "dependencies": {
                    "type": "array",
                    "items": {"$ref": "#/definitions/bundle"},
                },
            },
        }
    },
    "type": "array",
    "items": {"$ref": "#/definitions/bundle"},
}


def validate_output(data: List[Dict[str, Any]], schema: Dict[str, Any] = BUNDLE_SCHEMA) -> None:
    """Strictly validate output; raise SchemaError on the first problem."""
    validator = Draft7Validator(schema)
    errs = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        msg = f"Invalid output at '{path}': {first.message}"
        raise SchemaError(msg)
