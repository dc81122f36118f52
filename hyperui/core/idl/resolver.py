from __future__ import annotations

import re
from typing import Iterable, List, Optional, Union

from hyperui.core.schema import DataType, InvalidSchemaError, PropertySchema, SchemaView

from .constants import BOOLEAN_LITERALS, QUOTE_CHARS
from .models import LiteralValue


_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def require_schema(schema: object) -> SchemaView:
    if schema is None:
        raise InvalidSchemaError("schema is required")
    if not isinstance(schema, SchemaView):
        raise InvalidSchemaError("expected a SchemaView", received=schema)
    return schema


def validate_keys(schema: SchemaView, keys: Iterable[str]) -> bool:
    """True iff every key names a property of the schema."""
    return all(schema.has_property(k) for k in keys)


def missing_keys(schema: SchemaView, keys: Iterable[str]) -> List[str]:
    return [k for k in dict.fromkeys(keys) if not schema.has_property(k)]


def coerce_literal(text: Optional[str], prop: PropertySchema) -> LiteralValue:
    """
    Type a raw literal by the declared type of the property it constrains.

    Returns None ("unconstrained") whenever the text does not fit the type;
    never raises.
    """
    if text is None:
        return None

    t = prop.type
    if t == DataType.BOOLEAN:
        return _coerce_bool(text)
    if t == DataType.STRING:
        return _coerce_string(text)
    if t in (DataType.INTEGER, DataType.NUMBER):
        return _coerce_number(text)
    # object / array / untyped: no literal support
    return None


def _coerce_bool(text: str) -> Optional[bool]:
    return BOOLEAN_LITERALS.get(text.strip().lower())


def _coerce_string(text: str) -> Optional[str]:
    v = text.strip()
    # exactly one layer of matching quotes
    if len(v) >= 2 and v[0] == v[-1] and v[0] in QUOTE_CHARS:
        v = v[1:-1]
    if not v.strip():
        return None
    return v


def _coerce_number(text: str) -> Union[int, float, None]:
    v = text.strip()
    if _INT_RE.fullmatch(v):
        return int(v)
    if _FLOAT_RE.fullmatch(v):
        return float(v)
    return None
