"""
Per-specification parsing and the public x-dependencies operations.

Each parse_* function is pure: one text in, one ParseOutcome out, never an
exception for bad data. The extract_* operations run every specification of a
schema through the matching parser and keep only the successes.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from hyperui.core.config import load_config
from hyperui.core.schema import DataType, SchemaView

from .constants import MIN_GROUP_KEYS, MIN_ONLY_ONE_KEYS, PROPERTY_GROUPS_EXTENSION
from .extractor import extract_dependency_specifications
from .grammar import InvalidSpec, ListSpec, RequiresSpec, Specification, classify
from .models import (
    FailureCode,
    IdlArgumentError,
    OnlyOneDependency,
    ParseOutcome,
    PropertyGroup,
    RequiresDependency,
    SpecificationKind,
    successes,
)
from .resolver import coerce_literal, missing_keys, require_schema


log = logging.getLogger("hyperui.idl")

KeyGroup = Union[OnlyOneDependency, PropertyGroup]

# A named group may also be written as an OnlyOne list; it keeps OnlyOne's minimum.
_GROUP_MINIMUMS = {
    SpecificationKind.GROUP: MIN_GROUP_KEYS,
    SpecificationKind.ONLY_ONE: MIN_ONLY_ONE_KEYS,
}


# ----------------------------
# Per-specification parsers
# ----------------------------
def parse_requires(text: str, schema: SchemaView) -> ParseOutcome[RequiresDependency]:
    schema = require_schema(schema)
    return _requires_outcome(classify(text), schema)


def parse_only_one(text: str, schema: SchemaView) -> ParseOutcome[OnlyOneDependency]:
    schema = require_schema(schema)
    return _only_one_outcome(classify(text), schema)


def parse_group(name: str, text: str, schema: SchemaView) -> ParseOutcome[PropertyGroup]:
    schema = require_schema(schema)
    if not isinstance(name, str):
        raise IdlArgumentError(f"group name must be a string, got {type(name).__name__}")
    spec = classify(text)
    if isinstance(spec, InvalidSpec):
        return _invalid_outcome(spec)
    if spec.kind not in _GROUP_MINIMUMS:
        return _wrong_kind(spec, SpecificationKind.GROUP)

    keys_or_failure = _resolve_list(spec, schema, _GROUP_MINIMUMS[spec.kind])
    if isinstance(keys_or_failure, ParseOutcome):
        return keys_or_failure
    return ParseOutcome.success(spec.text, spec.kind, PropertyGroup(name=name, property_keys=keys_or_failure))


def _requires_outcome(spec: Specification, schema: SchemaView) -> ParseOutcome[RequiresDependency]:
    if isinstance(spec, InvalidSpec):
        return _invalid_outcome(spec)
    if not isinstance(spec, RequiresSpec):
        return _wrong_kind(spec, SpecificationKind.REQUIRES)

    keys = (spec.prerequisite_key, spec.dependant_key)
    missing = missing_keys(schema, keys)
    if missing:
        return ParseOutcome.fail(
            spec.text,
            spec.kind,
            FailureCode.MISSING_PROPERTY,
            f"unknown properties: {', '.join(missing)}",
            keys=missing,
        )

    if spec.prerequisite_key == spec.dependant_key:
        return ParseOutcome.fail(
            spec.text,
            spec.kind,
            FailureCode.SELF_REFERENCE,
            f"'{spec.prerequisite_key}' cannot require itself",
            keys=keys[:1],
        )

    # each side is typed by its own property
    prerequisite = schema.properties[spec.prerequisite_key]
    dependant = schema.properties[spec.dependant_key]
    dep = RequiresDependency(
        prerequisite_key=spec.prerequisite_key,
        dependant_key=spec.dependant_key,
        prerequisite_value=coerce_literal(spec.prerequisite_literal, prerequisite),
        dependant_value=coerce_literal(spec.dependant_literal, dependant),
    )
    return ParseOutcome.success(spec.text, spec.kind, dep)


def _only_one_outcome(spec: Specification, schema: SchemaView) -> ParseOutcome[OnlyOneDependency]:
    if isinstance(spec, InvalidSpec):
        return _invalid_outcome(spec)
    if spec.kind != SpecificationKind.ONLY_ONE:
        return _wrong_kind(spec, SpecificationKind.ONLY_ONE)

    keys_or_failure = _resolve_list(spec, schema, MIN_ONLY_ONE_KEYS)
    if isinstance(keys_or_failure, ParseOutcome):
        return keys_or_failure
    return ParseOutcome.success(spec.text, spec.kind, OnlyOneDependency(property_keys=keys_or_failure))


def _resolve_list(
    spec: ListSpec, schema: SchemaView, minimum: int
) -> Union[Tuple[str, ...], ParseOutcome]:
    # repeated keys are kept verbatim and count toward the minimum
    if len(spec.keys) < minimum:
        return ParseOutcome.fail(
            spec.text,
            spec.kind,
            FailureCode.TOO_FEW_KEYS,
            f"{spec.kind.value} needs at least {minimum} keys, got {len(spec.keys)}",
            keys=spec.keys,
        )
    missing = missing_keys(schema, spec.keys)
    if missing:
        return ParseOutcome.fail(
            spec.text,
            spec.kind,
            FailureCode.MISSING_PROPERTY,
            f"unknown properties: {', '.join(missing)}",
            keys=missing,
        )
    return spec.keys


def _invalid_outcome(spec: InvalidSpec) -> ParseOutcome:
    return ParseOutcome.fail(spec.text, spec.attempted, spec.code, spec.message)


def _wrong_kind(spec: Specification, expected: SpecificationKind) -> ParseOutcome:
    return ParseOutcome.fail(
        spec.text,
        spec.kind,
        FailureCode.WRONG_KIND,
        f"expected a {expected.value} expression, got {spec.kind.value}",
    )


# ----------------------------
# Accumulation
# ----------------------------
def log_dropped(outcomes: Iterable[ParseOutcome], logger: logging.Logger = log) -> None:
    if not load_config().log_dropped_specifications:
        return
    for o in outcomes:
        if o.failure is not None:
            logger.debug(
                "dropped %s specification %r: %s (%s)",
                o.kind.value,
                o.specification,
                o.failure.code.value,
                o.failure.message,
            )


def inspect_dependencies(
    schema: SchemaView, kind: Optional[SpecificationKind] = None
) -> List[ParseOutcome]:
    """
    Parse every x-dependencies entry and return all outcomes, failures
    included, in declaration order.

    With `kind`, only entries whose keyword names that kind are parsed.
    Unrecognised entries are reported only when no kind is given.
    """
    schema = require_schema(schema)
    outcomes: List[ParseOutcome] = []
    for text in extract_dependency_specifications(schema):
        spec = classify(text)
        found = spec.attempted if isinstance(spec, InvalidSpec) else spec.kind
        if kind is not None and found != kind:
            continue

        if found == SpecificationKind.REQUIRES:
            outcomes.append(_requires_outcome(spec, schema))
        elif found == SpecificationKind.ONLY_ONE:
            outcomes.append(_only_one_outcome(spec, schema))
        elif isinstance(spec, InvalidSpec):
            outcomes.append(_invalid_outcome(spec))
        else:
            outcomes.append(
                ParseOutcome.fail(
                    spec.text,
                    spec.kind,
                    FailureCode.WRONG_KIND,
                    f"{spec.kind.value} expressions belong under {PROPERTY_GROUPS_EXTENSION}",
                )
            )
    return outcomes


def extract_requires(schema: SchemaView) -> List[RequiresDependency]:
    outcomes = inspect_dependencies(schema, SpecificationKind.REQUIRES)
    log_dropped(outcomes)
    return successes(outcomes)


def extract_only_one(schema: SchemaView) -> List[OnlyOneDependency]:
    outcomes = inspect_dependencies(schema, SpecificationKind.ONLY_ONE)
    log_dropped(outcomes)
    return successes(outcomes)


# ----------------------------
# Type-filtered query
# ----------------------------
def _as_data_type(data_type: Union[DataType, str]) -> DataType:
    try:
        return DataType(data_type)
    except ValueError as e:
        raise IdlArgumentError(f"unknown data type {data_type!r}") from e


def filter_by_type(
    schema: SchemaView,
    groups: Sequence[KeyGroup],
    data_type: Union[DataType, str],
) -> List[KeyGroup]:
    """
    Keep the groups whose every member property has exactly `data_type`.
    A group with any member of another type, untyped, or unknown to the
    schema is left out whole.
    """
    schema = require_schema(schema)
    wanted = _as_data_type(data_type)

    out: List[KeyGroup] = []
    for g in groups:
        props = [schema.get_property(k) for k in g.property_keys]
        if all(p is not None and p.type == wanted for p in props):
            out.append(g)
    return out


def extract_only_one_by_type(schema: SchemaView, data_type: Union[DataType, str]) -> List[OnlyOneDependency]:
    return filter_by_type(schema, extract_only_one(schema), data_type)
