"""Object schema view consumed by the IDL engine.

Only the parts of an OpenAPI object schema the engine reads are modelled:
the ordered property set (key, declared type, format, title) and the
``x-*`` extension metadata. Views are frozen snapshots; nothing in the
package mutates them.
"""

import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


log = logging.getLogger("hyperui.schema")

EXTENSION_PREFIX = "x-"


class DataType(str, Enum):
    # https://swagger.io/docs/specification/data-models/data-types/
    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    OBJECT = "object"
    ARRAY = "array"


class InvalidSchemaError(ValueError):
    def __init__(self, message: str, *, received: Any = None):
        self.received_type = type(received).__name__
        super().__init__(f"{message} (received {self.received_type})")


class PropertySchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    type: Optional[DataType] = None
    format: Optional[str] = None
    title: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.title or self.key


class SchemaView(BaseModel):
    model_config = ConfigDict(frozen=True)

    properties: Dict[str, PropertySchema] = Field(default_factory=dict)
    extensions: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _keys_match_properties(self) -> "SchemaView":
        for key, prop in self.properties.items():
            if prop.key != key:
                raise ValueError(f"property registered under '{key}' declares key '{prop.key}'")
        return self

    def has_property(self, key: str) -> bool:
        return key in self.properties

    def get_property(self, key: str) -> Optional[PropertySchema]:
        return self.properties.get(key)

    def extension(self, name: str) -> Any:
        """Return the raw extension value, or None when the schema has none."""
        return self.extensions.get(name)

    @classmethod
    def from_openapi(cls, document: Mapping[str, Any]) -> "SchemaView":
        """
        Build a view from an OpenAPI object schema held as a mapping:

          {
            "type": "object",
            "properties": {"name": {"type": "string", "title": "Name"}, ...},
            "x-dependencies": ["IF a THEN b;", ...],
            "x-property-groups": {"Group 1": "Group(a, b);"}
          }

        Property declaration order is the mapping's iteration order.
        """
        if not isinstance(document, Mapping):
            raise InvalidSchemaError("OpenAPI schema must be a mapping", received=document)

        raw_props = document.get("properties") or {}
        if not isinstance(raw_props, Mapping):
            log.warning("ignoring non-mapping 'properties' (%s)", type(raw_props).__name__)
            raw_props = {}

        properties: Dict[str, PropertySchema] = {}
        for key, raw in raw_props.items():
            raw = raw if isinstance(raw, Mapping) else {}
            properties[str(key)] = PropertySchema(
                key=str(key),
                type=_data_type(raw.get("type"), key),
                format=_opt_str(raw.get("format")),
                title=_opt_str(raw.get("title")),
            )

        extensions = {
            str(k): v for k, v in document.items() if isinstance(k, str) and k.startswith(EXTENSION_PREFIX)
        }
        return cls(properties=properties, extensions=extensions)


def _data_type(value: Any, key: Any) -> Optional[DataType]:
    if value is None:
        return None
    try:
        return DataType(value)
    except ValueError:
        log.warning("property '%s' has unsupported type %r; treating as untyped", key, value)
        return None


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None
