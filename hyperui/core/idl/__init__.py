"""
Inter-parameter dependency language (IDL) for OpenAPI object schemas.

Public operations:
  extract_requires / extract_only_one / extract_groups   schema -> dependency objects
  filter_by_type                                         keep groups of one data type
  compose_requires / compose_only_one / compose_group    structured input -> IDL text
  parse_* / inspect_*                                    per-specification outcomes, failures included
"""

from .composer import compose, compose_group, compose_only_one, compose_requires
from .constants import DEPENDENCIES_EXTENSION, PROPERTY_GROUPS_EXTENSION
from .dependencies import (
    extract_only_one,
    extract_only_one_by_type,
    extract_requires,
    filter_by_type,
    inspect_dependencies,
    parse_group,
    parse_only_one,
    parse_requires,
)
from .extractor import extract_dependency_specifications, extract_group_specifications
from .grammar import InvalidSpec, ListSpec, RequiresSpec, classify
from .groups import assemble_groups, extract_groups, inspect_groups, register_groups
from .models import (
    FailureCode,
    IdlArgumentError,
    OnlyOneDependency,
    ParseFailure,
    ParseOutcome,
    PropertyGroup,
    RequiresDependency,
    SpecificationKind,
    successes,
)
from .resolver import coerce_literal, validate_keys

__all__ = [
    "DEPENDENCIES_EXTENSION",
    "PROPERTY_GROUPS_EXTENSION",
    "FailureCode",
    "IdlArgumentError",
    "InvalidSpec",
    "ListSpec",
    "OnlyOneDependency",
    "ParseFailure",
    "ParseOutcome",
    "PropertyGroup",
    "RequiresDependency",
    "RequiresSpec",
    "SpecificationKind",
    "assemble_groups",
    "classify",
    "coerce_literal",
    "compose",
    "compose_group",
    "compose_only_one",
    "compose_requires",
    "extract_dependency_specifications",
    "extract_group_specifications",
    "extract_groups",
    "extract_only_one",
    "extract_only_one_by_type",
    "extract_requires",
    "filter_by_type",
    "inspect_dependencies",
    "inspect_groups",
    "parse_group",
    "parse_only_one",
    "parse_requires",
    "register_groups",
    "successes",
    "validate_keys",
]
