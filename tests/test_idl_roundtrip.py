import pytest

from hyperui.core.idl import (
    IdlArgumentError,
    OnlyOneDependency,
    PropertyGroup,
    RequiresDependency,
    compose,
    compose_group,
    compose_only_one,
    compose_requires,
    parse_group,
    parse_only_one,
    parse_requires,
)


@pytest.fixture()
def typed_schema(make_schema):
    return make_schema(
        {
            "flag": {"type": "boolean"},
            "label": {"type": "string"},
            "count": {"type": "integer"},
            "ratio": {"type": "number"},
            "meta": {"type": "object"},
        }
    )


def test_compose_requires_text():
    assert compose_requires("isTemporary", "expirationDate") == "IF isTemporary THEN expirationDate;"
    assert (
        compose_requires("isTemporary", "expirationDate", True, "2025-01-01")
        == "IF isTemporary==true THEN expirationDate=='2025-01-01';"
    )
    assert compose_requires("count", "ratio", 3, 0.5) == "IF count==3 THEN ratio==0.5;"


def test_compose_list_text():
    assert compose_only_one("yes", "no") == "OnlyOne(yes, no);"
    assert compose_group("option1") == "Group(option1);"


@pytest.mark.parametrize(
    "dep",
    [
        RequiresDependency("flag", "label"),
        RequiresDependency("flag", "label", False, "it's a 'quote'"),
        RequiresDependency("count", "ratio", -7, 2.0),
        RequiresDependency("label", "count", "x THEN y", 12),
        RequiresDependency("label", "meta", "a;b==c", None),
        RequiresDependency("label", "count", "x' THEN flag", 12),
        RequiresDependency("label", "flag", "THEN flag==", True),
    ],
)
def test_requires_round_trip(typed_schema, dep):
    outcome = parse_requires(compose(dep), typed_schema)

    assert outcome.value == dep
    assert type(outcome.value.prerequisite_value) is type(dep.prerequisite_value)
    assert type(outcome.value.dependant_value) is type(dep.dependant_value)


def test_only_one_round_trip_keeps_order(typed_schema):
    dep = OnlyOneDependency(property_keys=("ratio", "flag", "count"))

    assert parse_only_one(compose(dep), typed_schema).value == dep


def test_group_round_trip(typed_schema):
    group = PropertyGroup(name="Numbers", property_keys=("count", "ratio"))

    assert parse_group("Numbers", compose(group), typed_schema).value == group


@pytest.mark.parametrize("key", ["", "has space", "a,b", "x==y", "semi;colon", None])
def test_keys_with_delimiters_cannot_be_composed(key):
    with pytest.raises(IdlArgumentError):
        compose_requires(key, "other")


def test_list_minimums_are_enforced():
    with pytest.raises(IdlArgumentError):
        compose_only_one("alone")
    with pytest.raises(IdlArgumentError):
        compose_group()


@pytest.mark.parametrize(
    "value",
    [
        "x' THEN flag=='y",
        "x THEN flag==y",
        "a\nTHEN  count==1",
    ],
)
def test_prerequisite_value_that_would_end_early_is_rejected(value):
    with pytest.raises(IdlArgumentError):
        compose(RequiresDependency("label", "count", value, 12))


def test_same_value_is_allowed_on_the_dependant_side(typed_schema):
    dep = RequiresDependency("count", "label", 12, "x' THEN flag=='y")

    assert parse_requires(compose(dep), typed_schema).value == dep


@pytest.mark.parametrize("dep", [RequiresDependency("flag", "flag"), RequiresDependency("flag", "flag", True, False)])
def test_self_reference_cannot_be_composed(dep):
    with pytest.raises(IdlArgumentError):
        compose(dep)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), [1, 2], {"a": 1}, "", "   "])
def test_values_without_text_form_are_rejected(value):
    with pytest.raises(IdlArgumentError):
        compose_requires("a", "b", value)
