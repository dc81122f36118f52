from .loader import load_schema_yaml, schema_from_openapi
from .models import (
    DataType,
    InvalidSchemaError,
    PropertySchema,
    SchemaView,
)

__all__ = [
    "DataType",
    "InvalidSchemaError",
    "PropertySchema",
    "SchemaView",
    "load_schema_yaml",
    "schema_from_openapi",
]
