from __future__ import annotations

import os
from dataclasses import dataclass


_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class IdlConfig:
    # Default for extract_groups(include_independent_singletons=None)
    include_independent_singletons: bool = False

    # Emit a DEBUG record for every specification that is dropped
    log_dropped_specifications: bool = True


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    return default


def load_config() -> IdlConfig:
    """Read the IDL settings from the environment on every call."""
    return IdlConfig(
        include_independent_singletons=_env_bool("HYPERUI_IDL_INCLUDE_SINGLETONS", False),
        log_dropped_specifications=_env_bool("HYPERUI_IDL_LOG_DROPS", True),
    )
