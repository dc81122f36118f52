"""
IDL value objects.

All objects are frozen dataclasses compared structurally. Keys are held as
tuples so a dependency can never be mutated after it was emitted.

Failures are data: every parse returns a ParseOutcome carrying either the
dependency or a ParseFailure with a stable code. Callers that only want the
successes run the outcomes through `successes()`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterable, List, Optional, Tuple, TypeVar, Union


# Typed literal held by a Requires side. None means "unconstrained".
LiteralValue = Union[bool, int, float, str, None]


class SpecificationKind(str, Enum):
    REQUIRES = "requires"
    ONLY_ONE = "only_one"
    GROUP = "group"
    INVALID = "invalid"


class FailureCode(str, Enum):
    MALFORMED = "malformed"
    UNKNOWN_KEYWORD = "unknown_keyword"
    MISSING_PROPERTY = "missing_property"
    TOO_FEW_KEYS = "too_few_keys"
    SELF_REFERENCE = "self_reference"
    KEY_ALREADY_GROUPED = "key_already_grouped"
    WRONG_KIND = "wrong_kind"


class IdlArgumentError(ValueError):
    """A caller passed something that is not an IDL input (programming error, not bad data)."""


@dataclass(frozen=True)
class RequiresDependency:
    prerequisite_key: str
    dependant_key: str
    prerequisite_value: LiteralValue = None
    dependant_value: LiteralValue = None

    @property
    def keys(self) -> Tuple[str, str]:
        return (self.prerequisite_key, self.dependant_key)


@dataclass(frozen=True)
class OnlyOneDependency:
    property_keys: Tuple[str, ...]


@dataclass(frozen=True)
class PropertyGroup:
    name: str
    property_keys: Tuple[str, ...]


Dependency = Union[RequiresDependency, OnlyOneDependency, PropertyGroup]
T = TypeVar("T")


@dataclass(frozen=True)
class ParseFailure:
    code: FailureCode
    message: str
    keys: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ParseOutcome(Generic[T]):
    specification: str
    kind: SpecificationKind
    value: Optional[T] = None
    failure: Optional[ParseFailure] = None

    @property
    def ok(self) -> bool:
        return self.value is not None

    @classmethod
    def success(cls, specification: str, kind: SpecificationKind, value: T) -> "ParseOutcome[T]":
        return cls(specification=specification, kind=kind, value=value)

    @classmethod
    def fail(
        cls,
        specification: str,
        kind: SpecificationKind,
        code: FailureCode,
        message: str,
        keys: Iterable[str] = (),
    ) -> "ParseOutcome[T]":
        return cls(
            specification=specification,
            kind=kind,
            failure=ParseFailure(code=code, message=message, keys=tuple(keys)),
        )


def successes(outcomes: Iterable[ParseOutcome[T]]) -> List[T]:
    """Keep the parsed values, in order, dropping every failure."""
    out: List[T] = []
    for o in outcomes:
        if o.value is not None:
            out.append(o.value)
    return out
