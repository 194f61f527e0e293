"""Tests for bundled schema validation."""
from __future__ import annotations

import pytest


class TestGopSchema:
    def test_valid_payload(self) -> None:
        from gop.core.schemas import validate_payload, validate_payload_safe

        payload = {
            "targets": [{"name": "app", "dir": "main", "assets": ["templates"]}],
            "vendor": {"fetch_command": ["go", "get"]},
        }

        validate_payload(payload, "gop.schema")
        assert validate_payload_safe(payload, "gop.schema") == []

    def test_error_message_names_location(self) -> None:
        from gop.core.schemas import SchemaValidationError, validate_payload

        with pytest.raises(SchemaValidationError, match=r"targets\.0"):
            validate_payload({"targets": [{"name": "app"}]}, "gop.schema")

    def test_safe_variant_lists_errors(self) -> None:
        from gop.core.schemas import validate_payload_safe

        errors = validate_payload_safe({"targets": [{"name": 3, "dir": ""}]}, "gop.schema")

        assert len(errors) == 2
        assert all(e.startswith("targets.0.") for e in errors)

    def test_unknown_schema(self) -> None:
        from gop.core.schemas import load_schema

        with pytest.raises(FileNotFoundError):
            load_schema("does-not-exist")
