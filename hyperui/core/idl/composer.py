"""
Canonical IDL text for structured inputs.

  compose_requires("isTemporary", "expirationDate", True, "2025-01-01")
    -> "IF isTemporary==true THEN expirationDate=='2025-01-01';"
  compose_only_one("yes", "no")   -> "OnlyOne(yes, no);"
  compose_group("option1", "option2") -> "Group(option1, option2);"

Parsing the result against a schema that declares the keys (with types that
match the values) gives back the same keys and values.
"""

from __future__ import annotations

import math
import re
from typing import Sequence

from .constants import (
    GROUP_KEYWORD,
    KEY_TOKEN_PATTERN,
    LIST_CLOSE,
    LIST_JOINER,
    LIST_OPEN,
    MIN_GROUP_KEYS,
    MIN_ONLY_ONE_KEYS,
    ONLY_ONE_KEYWORD,
    REQUIRES_CONSEQUENT_KEYWORD,
    REQUIRES_KEYWORD,
    STRING_QUOTE,
    TERMINATOR,
    VALUE_OPERATOR,
)
from .models import (
    Dependency,
    IdlArgumentError,
    LiteralValue,
    OnlyOneDependency,
    PropertyGroup,
    RequiresDependency,
)


# Characters the grammar uses as delimiters cannot appear in a key.
_INVALID_KEY_RE = re.compile(r"[\s=;,()]")

# A prerequisite value reading "... THEN <key>==..." ends the value early on parse.
_EMBEDDED_CONSEQUENT_RE = re.compile(
    rf"\s{re.escape(REQUIRES_CONSEQUENT_KEYWORD)}\s+{KEY_TOKEN_PATTERN}{re.escape(VALUE_OPERATOR)}"
)


def _check_key(key: object) -> str:
    if not isinstance(key, str) or not key:
        raise IdlArgumentError(f"property key must be a non-empty string, got {key!r}")
    if _INVALID_KEY_RE.search(key):
        raise IdlArgumentError(f"property key {key!r} contains IDL delimiter characters")
    return key


def _literal(value: LiteralValue) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return f"{VALUE_OPERATOR}{'true' if value else 'false'}"
    if isinstance(value, str):
        if not value.strip():
            raise IdlArgumentError("blank string literal reads back as unconstrained, pass None instead")
        return f"{VALUE_OPERATOR}{STRING_QUOTE}{value}{STRING_QUOTE}"
    if isinstance(value, float) and not math.isfinite(value):
        raise IdlArgumentError(f"literal {value!r} has no IDL form")
    if isinstance(value, (int, float)):
        return f"{VALUE_OPERATOR}{value}"
    raise IdlArgumentError(f"unsupported literal type {type(value).__name__}")


def compose_requires(
    prerequisite_key: str,
    dependant_key: str,
    prerequisite_value: LiteralValue = None,
    dependant_value: LiteralValue = None,
) -> str:
    if prerequisite_key == dependant_key:
        raise IdlArgumentError(f"property {prerequisite_key!r} cannot require itself")
    if isinstance(prerequisite_value, str) and _EMBEDDED_CONSEQUENT_RE.search(prerequisite_value):
        raise IdlArgumentError(
            f"prerequisite value {prerequisite_value!r} contains '{REQUIRES_CONSEQUENT_KEYWORD} <key>{VALUE_OPERATOR}'"
        )
    return (
        f"{REQUIRES_KEYWORD} {_check_key(prerequisite_key)}{_literal(prerequisite_value)}"
        f" {REQUIRES_CONSEQUENT_KEYWORD} {_check_key(dependant_key)}{_literal(dependant_value)}"
        f"{TERMINATOR}"
    )


def _compose_list(keyword: str, keys: Sequence[str], minimum: int) -> str:
    if len(keys) < minimum:
        raise IdlArgumentError(f"{keyword} needs at least {minimum} keys, got {len(keys)}")
    checked = [_check_key(k) for k in keys]
    return f"{keyword}{LIST_OPEN}{LIST_JOINER.join(checked)}{LIST_CLOSE}{TERMINATOR}"


def compose_only_one(*keys: str) -> str:
    return _compose_list(ONLY_ONE_KEYWORD, keys, MIN_ONLY_ONE_KEYS)


def compose_group(*keys: str) -> str:
    return _compose_list(GROUP_KEYWORD, keys, MIN_GROUP_KEYS)


def compose(dependency: Dependency) -> str:
    """Text for an already-parsed dependency object."""
    if isinstance(dependency, RequiresDependency):
        return compose_requires(
            dependency.prerequisite_key,
            dependency.dependant_key,
            dependency.prerequisite_value,
            dependency.dependant_value,
        )
    if isinstance(dependency, OnlyOneDependency):
        return compose_only_one(*dependency.property_keys)
    if isinstance(dependency, PropertyGroup):
        return compose_group(*dependency.property_keys)
    raise IdlArgumentError(f"cannot compose {type(dependency).__name__}")
