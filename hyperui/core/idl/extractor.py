from __future__ import annotations

from typing import Any, List, Mapping, Sequence, Tuple

from hyperui.core.schema import SchemaView

from .constants import DEPENDENCIES_EXTENSION, PROPERTY_GROUPS_EXTENSION


def string_entries(value: Any) -> List[str]:
    """
    Accepts:
      - None                     -> []
      - ["IF a THEN b;", 3, ...] -> string entries only, in order
    A bare string or a mapping is not an array and yields [].
    """
    if value is None or isinstance(value, (str, bytes, Mapping)):
        return []
    if isinstance(value, Sequence):
        return [x for x in value if isinstance(x, str)]
    return []


def named_string_entries(value: Any) -> List[Tuple[str, str]]:
    """
    Accepts:
      - None                                  -> []
      - {"Group 1": "Group(a, b);", "x": 1}   -> string values only, in order
    """
    if not isinstance(value, Mapping):
        return []
    return [(str(k), v) for k, v in value.items() if isinstance(v, str)]


def extract_dependency_specifications(schema: SchemaView) -> List[str]:
    return string_entries(schema.extension(DEPENDENCIES_EXTENSION))


def extract_group_specifications(schema: SchemaView) -> List[Tuple[str, str]]:
    return named_string_entries(schema.extension(PROPERTY_GROUPS_EXTENSION))
