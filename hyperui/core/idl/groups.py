"""
Property group partitioning (x-property-groups).

Two passes:

  1. registration  - group specifications are parsed in declaration order; the
                     first one to claim a key owns it. A later specification
                     touching any claimed key is rejected whole, so none of its
                     keys are registered.
  2. assembly      - schema properties are walked in declaration order; the
                     first key of a registered group emits that group (in the
                     group's own key order) and marks all its keys assigned.
                     Keys outside every group become one-key groups named by
                     their title (or key) when singletons are requested, and
                     are skipped otherwise.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from hyperui.core.config import load_config
from hyperui.core.schema import SchemaView

from .dependencies import log_dropped, parse_group
from .extractor import extract_group_specifications
from .models import FailureCode, ParseOutcome, PropertyGroup, successes
from .resolver import require_schema


log = logging.getLogger("hyperui.idl.groups")


def register_groups(
    schema: SchemaView, specifications: Iterable[Tuple[str, str]]
) -> List[ParseOutcome[PropertyGroup]]:
    schema = require_schema(schema)
    claimed: Dict[str, str] = {}
    outcomes: List[ParseOutcome[PropertyGroup]] = []

    for name, text in specifications:
        outcome = parse_group(name, text, schema)
        group = outcome.value
        if group is not None:
            taken = [k for k in dict.fromkeys(group.property_keys) if k in claimed]
            if taken:
                owners = ", ".join(f"{k} -> {claimed[k]!r}" for k in taken)
                outcome = ParseOutcome.fail(
                    outcome.specification,
                    outcome.kind,
                    FailureCode.KEY_ALREADY_GROUPED,
                    f"group {name!r} reuses grouped properties: {owners}",
                    keys=taken,
                )
            else:
                for k in group.property_keys:
                    claimed[k] = name
        outcomes.append(outcome)

    return outcomes


def inspect_groups(schema: SchemaView) -> List[ParseOutcome[PropertyGroup]]:
    """Registration outcomes for every x-property-groups entry, failures included."""
    schema = require_schema(schema)
    return register_groups(schema, extract_group_specifications(schema))


def assemble_groups(
    schema: SchemaView,
    groups: Sequence[PropertyGroup],
    include_independent_singletons: bool,
) -> List[PropertyGroup]:
    schema = require_schema(schema)

    membership: Dict[str, PropertyGroup] = {}
    for g in groups:
        for k in g.property_keys:
            membership.setdefault(k, g)

    assigned: Set[str] = set()
    out: List[PropertyGroup] = []

    for key, prop in schema.properties.items():
        if key in assigned:
            continue

        group = membership.get(key)
        if group is not None:
            out.append(group)
            assigned.update(group.property_keys)
            continue

        if include_independent_singletons:
            out.append(PropertyGroup(name=prop.display_name, property_keys=(key,)))
        assigned.add(key)

    return out


def extract_groups(
    schema: SchemaView, include_independent_singletons: Optional[bool] = None
) -> List[PropertyGroup]:
    """
    The ordered partition of the schema's properties. Defaults to the
    HYPERUI_IDL_INCLUDE_SINGLETONS setting when `include_independent_singletons`
    is not given.
    """
    if include_independent_singletons is None:
        include_independent_singletons = load_config().include_independent_singletons

    outcomes = inspect_groups(schema)
    log_dropped(outcomes, log)
    return assemble_groups(schema, successes(outcomes), bool(include_independent_singletons))
