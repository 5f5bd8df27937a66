# [TESTER] v1

from __future__ import annotations

import pytest
import structlog

from pairswap import PoolConfig, configure_logging
from pairswap.errors import ValidationError


def test_defaults_guard_everything() -> None:
    cfg = PoolConfig()
    assert cfg.guard_all_mutations is True
    assert cfg.reject_zero_quote is True
    assert cfg.log_level == "INFO"
    assert cfg.json_logs is False


def test_log_level_is_normalized_and_validated() -> None:
    assert PoolConfig(log_level=" debug ").log_level == "DEBUG"
    with pytest.raises(ValidationError, match="log_level"):
        PoolConfig(log_level="chatty")


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAIRSWAP_GUARD_ALL_MUTATIONS", "off")
    monkeypatch.setenv("PAIRSWAP_REJECT_ZERO_QUOTE", "0")
    monkeypatch.setenv("PAIRSWAP_LOG_LEVEL", "warning")
    monkeypatch.setenv("PAIRSWAP_JSON_LOGS", "yes")

    cfg = PoolConfig.from_env()

    assert cfg == PoolConfig(
        guard_all_mutations=False,
        reject_zero_quote=False,
        log_level="WARNING",
        json_logs=True,
    )


def test_from_env_ignores_unparseable_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAIRSWAP_GUARD_ALL_MUTATIONS", "maybe")
    monkeypatch.setenv("PAIRSWAP_LOG_LEVEL", "   ")
    monkeypatch.delenv("PAIRSWAP_JSON_LOGS", raising=False)

    assert PoolConfig.from_env() == PoolConfig()


def test_from_yaml(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text("guard_all_mutations: false\nlog_level: error\n", encoding="utf-8")

    cfg = PoolConfig.from_yaml(path)

    assert cfg.guard_all_mutations is False
    assert cfg.reject_zero_quote is True
    assert cfg.log_level == "ERROR"


def test_empty_yaml_is_default(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert PoolConfig.from_yaml(path) == PoolConfig()


@pytest.mark.parametrize(
    "payload,match",
    [
        ({"guard_everything": True}, "unknown"),
        ({"json_logs": "true"}, "must be a bool"),
        ({"reject_zero_quote": 1}, "must be a bool"),
        (["guard_all_mutations"], "mapping"),
    ],
)
def test_from_mapping_rejects_bad_input(payload: object, match: str) -> None:
    with pytest.raises(ValidationError, match=match):
        PoolConfig.from_mapping(payload)  # type: ignore[arg-type]


def test_config_is_frozen() -> None:
    cfg = PoolConfig()
    with pytest.raises(AttributeError):
        cfg.guard_all_mutations = False  # type: ignore[misc]


@pytest.mark.parametrize("json_output", [False, True])
def test_configure_logging_installs_filtering_logger(json_output: bool, capsys) -> None:
    configure_logging("warning", json_output=json_output)
    try:
        log = structlog.get_logger()
        log.info("pool_hidden", value=1)
        log.warning("pool_visible", value=2)
        out = capsys.readouterr().out
        assert "pool_hidden" not in out
        assert "pool_visible" in out
    finally:
        structlog.reset_defaults()


def test_event_retention_from_env_is_clamped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAIRSWAP_EVENT_RETENTION", "-5")
    assert PoolConfig.from_env().event_retention == 0
    monkeypatch.setenv("PAIRSWAP_EVENT_RETENTION", "250")
    assert PoolConfig.from_env().event_retention == 250
    monkeypatch.setenv("PAIRSWAP_EVENT_RETENTION", "lots")
    assert PoolConfig.from_env().event_retention == 0
    with pytest.raises(ValidationError, match="event_retention"):
        PoolConfig(event_retention=-1)
