import pytest

from hyperui.core.config import IdlConfig, load_config


def test_defaults():
    assert load_config() == IdlConfig(include_independent_singletons=False, log_dropped_specifications=True)


@pytest.mark.parametrize("raw,expected", [("1", True), ("TRUE", True), (" on ", True), ("0", False), ("no", False)])
def test_singletons_env(monkeypatch, raw, expected):
    monkeypatch.setenv("HYPERUI_IDL_INCLUDE_SINGLETONS", raw)

    assert load_config().include_independent_singletons is expected


def test_unrecognised_value_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("HYPERUI_IDL_LOG_DROPS", "sometimes")

    assert load_config().log_dropped_specifications is True
