"""
Runtime configuration for pools.

Configuration is a frozen dataclass. It can be built directly, from
`PAIRSWAP_*` environment variables, or from a YAML mapping.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from ..errors import ValidationError


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _bool_env(name: str, *, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return bool(default)
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _env_int(name: str, default: int, *, lo: int, hi: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        return int(default)
    return max(lo, min(hi, v))


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


@dataclass(frozen=True)
class PoolConfig:
    # Guard policy:
    # - True: swap, add_liquidity and remove_liquidity take the exclusive guard
    #   as well as mint and burn, so no entry point can run while another is
    #   mid-flight through a ledger call.
    # - False: only mint and burn are guarded (reference behavior).
    guard_all_mutations: bool = True

    # A deposit whose quoted counterpart rounds to zero is rejected with
    # LiquidityError instead of being committed.
    reject_zero_quote: bool = True

    # Logging (see `configure_logging`).
    log_level: str = "INFO"
    json_logs: bool = False

    # Published audit records kept per pool (0 = keep all).
    event_retention: int = 0

    def __post_init__(self) -> None:
        level = str(self.log_level).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValidationError(f"log_level must be one of {_LOG_LEVELS}: {self.log_level!r}")
        object.__setattr__(self, "log_level", level)
        if isinstance(self.event_retention, bool) or not isinstance(self.event_retention, int) or self.event_retention < 0:
            raise ValidationError(f"event_retention must be a non-negative int: {self.event_retention!r}")

    @classmethod
    def from_env(cls) -> "PoolConfig":
        default = cls()
        return cls(
            guard_all_mutations=_bool_env("PAIRSWAP_GUARD_ALL_MUTATIONS", default=default.guard_all_mutations),
            reject_zero_quote=_bool_env("PAIRSWAP_REJECT_ZERO_QUOTE", default=default.reject_zero_quote),
            log_level=_env_str("PAIRSWAP_LOG_LEVEL", default.log_level),
            json_logs=_bool_env("PAIRSWAP_JSON_LOGS", default=default.json_logs),
            event_retention=_env_int("PAIRSWAP_EVENT_RETENTION", default.event_retention, lo=0, hi=10**9),
        )

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "PoolConfig":
        if not isinstance(obj, Mapping):
            raise ValidationError("pool config must be a mapping")
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(obj) - set(known))
        if unknown:
            raise ValidationError(f"unknown pool config keys: {unknown}")
        kwargs = {}
        for key, value in obj.items():
            if known[key].type in ("bool", bool) and not isinstance(value, bool):
                raise ValidationError(f"{key} must be a bool")
            kwargs[key] = value
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PoolConfig":
        obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        if obj is None:
            return cls()
        return cls.from_mapping(obj)
