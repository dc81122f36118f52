"""
IDL recognizer.

This is the only place that looks at expression text. `classify()` turns a raw
string into one of:

  RequiresSpec   IF <prereq>[==<value>] THEN <dependant>[==<value>];
  ListSpec       OnlyOne(<k1>, <k2>, ...);   Group(<k1>, ...);
  InvalidSpec    anything else, with a FailureCode

Keyword detection is a case-sensitive prefix test. Literal values are kept as
raw text here; typing them needs the schema and happens in the resolver.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union

from .constants import (
    GROUP_KEYWORD,
    KEY_TOKEN_PATTERN,
    LIST_CLOSE,
    LIST_OPEN,
    LIST_SEPARATOR,
    ONLY_ONE_KEYWORD,
    REQUIRES_CONSEQUENT_KEYWORD,
    REQUIRES_KEYWORD,
    TERMINATOR,
    VALUE_OPERATOR,
)
from .models import FailureCode, IdlArgumentError, SpecificationKind


_REQUIRES_RE = re.compile(
    rf"{re.escape(REQUIRES_KEYWORD)}\s+(?P<prerequisite>{KEY_TOKEN_PATTERN})"
    rf"(?:{re.escape(VALUE_OPERATOR)}(?P<prerequisite_value>.*?))?"
    rf"\s+{re.escape(REQUIRES_CONSEQUENT_KEYWORD)}\s+(?P<dependant>{KEY_TOKEN_PATTERN})"
    rf"(?:{re.escape(VALUE_OPERATOR)}(?P<dependant_value>.*?))?"
    rf"\s*{re.escape(TERMINATOR)}",
    re.DOTALL,
)


@dataclass(frozen=True)
class RequiresSpec:
    text: str
    prerequisite_key: str
    dependant_key: str
    prerequisite_literal: Optional[str] = None
    dependant_literal: Optional[str] = None

    kind: ClassVar[SpecificationKind] = SpecificationKind.REQUIRES


@dataclass(frozen=True)
class ListSpec:
    text: str
    kind: SpecificationKind
    keys: Tuple[str, ...]


@dataclass(frozen=True)
class InvalidSpec:
    text: str
    code: FailureCode
    message: str
    # kind whose keyword matched before the text was rejected
    attempted: SpecificationKind = SpecificationKind.INVALID

    kind: ClassVar[SpecificationKind] = SpecificationKind.INVALID


Specification = Union[RequiresSpec, ListSpec, InvalidSpec]

# No keyword is a prefix of another, so test order does not matter.
_LIST_KEYWORDS = (
    (ONLY_ONE_KEYWORD, SpecificationKind.ONLY_ONE),
    (GROUP_KEYWORD, SpecificationKind.GROUP),
)


def classify(text: str) -> Specification:
    if not isinstance(text, str):
        raise IdlArgumentError(f"IDL specification must be a string, got {type(text).__name__}")

    s = text.strip()

    if s.startswith(REQUIRES_KEYWORD):
        return _classify_requires(text, s)

    for keyword, kind in _LIST_KEYWORDS:
        if s.startswith(keyword):
            return _classify_list(text, s, keyword, kind)

    return InvalidSpec(
        text=text,
        code=FailureCode.UNKNOWN_KEYWORD,
        message="expected IF, OnlyOne or Group",
    )


def _classify_requires(text: str, s: str) -> Specification:
    m = _REQUIRES_RE.fullmatch(s)
    if not m:
        return InvalidSpec(
            text=text,
            code=FailureCode.MALFORMED,
            message="expected 'IF <key>[==<value>] THEN <key>[==<value>];'",
            attempted=SpecificationKind.REQUIRES,
        )
    return RequiresSpec(
        text=text,
        prerequisite_key=m.group("prerequisite"),
        dependant_key=m.group("dependant"),
        prerequisite_literal=m.group("prerequisite_value"),
        dependant_literal=m.group("dependant_value"),
    )


def _classify_list(text: str, s: str, keyword: str, kind: SpecificationKind) -> Specification:
    rest = s[len(keyword):]

    if not rest.endswith(TERMINATOR):
        return InvalidSpec(
            text=text,
            code=FailureCode.MALFORMED,
            message=f"missing trailing '{TERMINATOR}'",
            attempted=kind,
        )
    rest = rest[: -len(TERMINATOR)].strip()

    if not (rest.startswith(LIST_OPEN) and rest.endswith(LIST_CLOSE)):
        return InvalidSpec(
            text=text,
            code=FailureCode.MALFORMED,
            message=f"expected '{keyword}{LIST_OPEN}<key>, ...{LIST_CLOSE}{TERMINATOR}'",
            attempted=kind,
        )
    inner = rest[len(LIST_OPEN): -len(LIST_CLOSE)]

    keys = tuple(k.strip() for k in inner.split(LIST_SEPARATOR))
    if any(not k for k in keys):
        return InvalidSpec(text=text, code=FailureCode.MALFORMED, message="empty key in list", attempted=kind)

    return ListSpec(text=text, kind=kind, keys=keys)
