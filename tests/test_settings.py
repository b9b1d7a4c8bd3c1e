"""
Environment configuration and command line parsing
"""

import importlib

import pytest

from todo_service.cli import build_parser
from todo_service.config import settings


@pytest.fixture
def reload_settings(monkeypatch):
    def _reload(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(settings)

    yield _reload
    monkeypatch.undo()
    importlib.reload(settings)


def test_defaults(reload_settings, monkeypatch):
    for name in ("PORT", "HOST", "TODO_ID_STRATEGY", "ALLOWED_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    module = reload_settings()
    assert module.PORT == 3000
    assert module.HOST == "0.0.0.0"
    assert module.TODO_ID_STRATEGY == "length"
    assert module.ALLOWED_ORIGINS == ["*"]


def test_environment_overrides(reload_settings):
    module = reload_settings(PORT="8081", TODO_ID_STRATEGY="Counter", ALLOWED_ORIGINS="http://a.test, http://b.test")
    assert module.PORT == 8081
    assert module.TODO_ID_STRATEGY == "counter"
    assert module.ALLOWED_ORIGINS == ["http://a.test", "http://b.test"]


def test_unknown_id_strategy_rejected(reload_settings):
    with pytest.raises(ValueError):
        reload_settings(TODO_ID_STRATEGY="random")


def test_cli_arguments():
    args = build_parser().parse_args(["--server", "stdlib", "--port", "4000"])
    assert args.server == "stdlib"
    assert args.port == 4000
    assert build_parser().parse_args([]).server == "fastapi"
