from __future__ import annotations

import pytest

import creatorlink.core.startup as startup_module


class _Cfg:
    def __init__(self, backend: str, env: str = "development") -> None:
        self.DRAFT_STORE_BACKEND = backend
        self.ENV = env

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def test_startup_initializes_database_store(monkeypatch):
    calls = []
    monkeypatch.setattr(startup_module, "get_config", lambda: _Cfg("database"))
    monkeypatch.setattr(startup_module, "verify_database_connection", lambda: True)
    monkeypatch.setattr(startup_module, "init_db", lambda: calls.append("init"))

    startup_module.validate_startup_config()
    assert calls == ["init"]


def test_startup_raises_when_database_unreachable(monkeypatch):
    monkeypatch.setattr(startup_module, "get_config", lambda: _Cfg("database"))
    monkeypatch.setattr(startup_module, "verify_database_connection", lambda: False)

    with pytest.raises(RuntimeError, match="Database connectivity check failed"):
        startup_module.validate_startup_config()


def test_startup_memory_store_skips_database(monkeypatch):
    monkeypatch.setattr(startup_module, "get_config", lambda: _Cfg("memory", env="production"))
    monkeypatch.setattr(startup_module, "verify_database_connection", lambda: pytest.fail("should not connect"))

    startup_module.validate_startup_config()
