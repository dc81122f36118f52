from typing import Any, Dict, Optional

import pytest

from hyperui.core.idl import DEPENDENCIES_EXTENSION, PROPERTY_GROUPS_EXTENSION
from hyperui.core.schema import SchemaView


@pytest.fixture(autouse=True)
def _clean_idl_env(monkeypatch):
    # Make config deterministic regardless of the developer's shell
    monkeypatch.delenv("HYPERUI_IDL_INCLUDE_SINGLETONS", raising=False)
    monkeypatch.delenv("HYPERUI_IDL_LOG_DROPS", raising=False)


def build_schema(
    properties: Dict[str, Dict[str, Any]],
    dependencies: Optional[list] = None,
    groups: Optional[dict] = None,
) -> SchemaView:
    doc: Dict[str, Any] = {"type": "object", "properties": properties}
    if dependencies is not None:
        doc[DEPENDENCIES_EXTENSION] = dependencies
    if groups is not None:
        doc[PROPERTY_GROUPS_EXTENSION] = groups
    return SchemaView.from_openapi(doc)


@pytest.fixture()
def make_schema():
    return build_schema


@pytest.fixture()
def access_properties():
    return {
        "isTemporary": {"type": "boolean", "title": "Temporary access"},
        "expirationDate": {"type": "string", "format": "date", "title": "Access expiration date"},
    }


@pytest.fixture()
def choice_properties():
    return {
        "yes": {"type": "boolean"},
        "no": {"type": "boolean"},
        "approve": {"type": "boolean"},
        "reject": {"type": "boolean"},
        "state": {"type": "string"},
        "zip": {"type": "string"},
        "province": {"type": "string"},
    }
