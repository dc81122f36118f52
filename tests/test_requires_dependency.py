import logging

import pytest

from hyperui.core.idl import (
    FailureCode,
    RequiresDependency,
    compose_requires,
    extract_requires,
    inspect_dependencies,
    parse_requires,
)
from hyperui.core.schema import InvalidSchemaError


@pytest.mark.parametrize(
    "is_temporary,expiration_date",
    [
        (None, None),
        (True, None),
        (True, "2025-01-01"),
        (None, "2025-01-01"),
        (False, "2030-12-31"),
    ],
)
def test_requires_sets_property_values(make_schema, access_properties, is_temporary, expiration_date):
    schema = make_schema(
        access_properties,
        dependencies=[compose_requires("isTemporary", "expirationDate", is_temporary, expiration_date)],
    )

    deps = extract_requires(schema)

    assert len(deps) == 1
    assert deps[0].prerequisite_key == "isTemporary"
    assert deps[0].dependant_key == "expirationDate"
    assert deps[0].prerequisite_value == is_temporary
    assert deps[0].dependant_value == expiration_date


def test_missing_reference_yields_nothing(make_schema, access_properties):
    schema = make_schema(access_properties, dependencies=["IF isTemporary THEN revokedAt;"])

    assert extract_requires(schema) == []

    outcome = parse_requires("IF isTemporary THEN revokedAt;", schema)
    assert not outcome.ok
    assert outcome.failure.code == FailureCode.MISSING_PROPERTY
    assert outcome.failure.keys == ("revokedAt",)


def test_prerequisite_is_coerced_by_its_own_type(make_schema):
    schema = make_schema(
        {
            "retries": {"type": "integer"},
            "reason": {"type": "string"},
        },
        dependencies=["IF retries==3 THEN reason=='too many';"],
    )

    (dep,) = extract_requires(schema)

    assert dep.prerequisite_value == 3
    assert dep.dependant_value == "too many"


def test_uncoercible_literal_degrades_only_that_value(make_schema):
    schema = make_schema(
        {"retries": {"type": "integer"}, "enabled": {"type": "boolean"}},
        dependencies=["IF retries==abc THEN enabled==true;"],
    )

    assert extract_requires(schema) == [
        RequiresDependency(
            prerequisite_key="retries",
            dependant_key="enabled",
            prerequisite_value=None,
            dependant_value=True,
        )
    ]


def test_self_reference_is_rejected(make_schema, access_properties):
    schema = make_schema(access_properties)

    outcome = parse_requires("IF isTemporary THEN isTemporary;", schema)

    assert outcome.value is None
    assert outcome.failure.code == FailureCode.SELF_REFERENCE


def test_only_requires_entries_are_returned_in_order(make_schema, access_properties):
    props = dict(access_properties, note={"type": "string"})
    schema = make_schema(
        props,
        dependencies=[
            "IF note THEN expirationDate;",
            "OnlyOne(isTemporary, note);",
            "IF broken",
            42,
            "IF isTemporary THEN note;",
        ],
    )

    deps = extract_requires(schema)

    assert [(d.prerequisite_key, d.dependant_key) for d in deps] == [
        ("note", "expirationDate"),
        ("isTemporary", "note"),
    ]


def test_inspect_reports_every_entry(make_schema, access_properties):
    schema = make_schema(
        access_properties,
        dependencies=["IF isTemporary THEN expirationDate;", "IF nope THEN expirationDate;", "garbage"],
    )

    outcomes = inspect_dependencies(schema)

    assert [o.ok for o in outcomes] == [True, False, False]
    assert outcomes[1].failure.code == FailureCode.MISSING_PROPERTY
    assert outcomes[2].failure.code == FailureCode.UNKNOWN_KEYWORD


def test_dropped_specifications_are_logged(make_schema, access_properties, caplog):
    schema = make_schema(access_properties, dependencies=["IF ghost THEN expirationDate;"])
    caplog.set_level(logging.DEBUG, logger="hyperui.idl")

    extract_requires(schema)

    assert any("missing_property" in r.getMessage() for r in caplog.records)


def test_drop_logging_can_be_disabled(make_schema, access_properties, caplog, monkeypatch):
    monkeypatch.setenv("HYPERUI_IDL_LOG_DROPS", "0")
    schema = make_schema(access_properties, dependencies=["IF ghost THEN expirationDate;"])
    caplog.set_level(logging.DEBUG, logger="hyperui.idl")

    extract_requires(schema)

    assert not [r for r in caplog.records if r.name == "hyperui.idl"]


def test_dependencies_are_immutable(make_schema, access_properties):
    schema = make_schema(access_properties, dependencies=["IF isTemporary THEN expirationDate;"])
    (dep,) = extract_requires(schema)

    with pytest.raises(AttributeError):
        dep.dependant_key = "other"


def test_null_schema_fails_loudly():
    with pytest.raises(InvalidSchemaError):
        extract_requires(None)
