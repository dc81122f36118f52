from __future__ import annotations

from typing import Any, Mapping

import yaml

from .models import InvalidSchemaError, SchemaView


def schema_from_openapi(document: Mapping[str, Any]) -> SchemaView:
    return SchemaView.from_openapi(document)


def load_schema_yaml(text: str) -> SchemaView:
    """
    Parse an OpenAPI object schema written as YAML text (already in memory)
    into a SchemaView. YAML mappings keep document order, so property order
    follows the text.
    """
    if not isinstance(text, str):
        raise InvalidSchemaError("schema YAML must be text", received=text)
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidSchemaError(f"schema YAML could not be parsed: {e}", received=text) from e
    return SchemaView.from_openapi(document)
