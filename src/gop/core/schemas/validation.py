"""JSON Schema validation of gop configuration.

Schemas are written in YAML and shipped under ``gop/data/schemas``; they are
checked with the Draft 2020-12 validator.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator

from gop.core.utils.io import read_yaml
from gop.data import get_data_path


class SchemaValidationError(ValueError):
    """Raised when a payload does not match its schema.

    ``errors`` holds every violation as ``"<location>: <message>"``.
    """

    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)


def _schema_filename(schema_name: str) -> str:
    if schema_name.lower().endswith((".yaml", ".yml")):
        return schema_name
    return f"{schema_name}.yaml"


@lru_cache(maxsize=8)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema; ``.yaml`` is appended when no suffix is given.

    Raises:
        FileNotFoundError: If no such schema is bundled.
        ValueError: If the schema file is not a mapping.
    """
    path = get_data_path("schemas", _schema_filename(schema_name))
    if not path.is_file():
        raise FileNotFoundError(f"Schema not found: {path.name}")
    schema = read_yaml(path, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema {path.name} must be a mapping, got {type(schema).__name__}")
    return schema


def _location(error: jsonschema.ValidationError) -> str:
    return ".".join(str(p) for p in error.absolute_path)


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate ``payload`` against a bundled schema.

    Raises:
        SchemaValidationError: Listing every violation, each prefixed with its
            dotted location (``targets.0``).
    """
    errors = validate_payload_safe(payload, schema_name)
    if errors:
        raise SchemaValidationError(errors)


def validate_payload_safe(payload: Any, schema_name: str) -> List[str]:
    """Return every violation as ``"<location>: <message>"`` (empty when valid)."""
    validator = Draft202012Validator(load_schema(schema_name))
    errors = sorted(validator.iter_errors(payload), key=_location)
    return [f"{_location(e)}: {e.message}" if e.absolute_path else e.message for e in errors]


__all__ = [
    "SchemaValidationError",
    "load_schema",
    "validate_payload",
    "validate_payload_safe",
]
