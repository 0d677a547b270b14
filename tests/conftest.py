"""Shared fixtures for zls_gen tests."""

import logging
from pathlib import Path

import pytest

from zls_gen.config import reset_config

FIXTURES_DIR = Path(__file__).parent / "fixtures"

CONFIG_ENV_VARS = [
    "ZLS_GEN_LANGREF_URL",
    "ZLS_GEN_DOC_ROOT",
    "ZLS_GEN_REQUEST_TIMEOUT",
    "ZLS_GEN_MAX_RETRIES",
    "ZLS_GEN_RETRY_DELAY",
    "ZLS_GEN_LOG_LEVEL",
    "ZLS_GEN_LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Run every test against default configuration."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def langref_path():
    return FIXTURES_DIR / "langref_sample.html.in"


@pytest.fixture
def langref_sample(langref_path):
    return langref_path.read_text(encoding="utf-8")


@pytest.fixture
def minimal_langref():
    """One builtin section holding exactly one entry."""
    return (
        "<p>intro</p>\n"
        "{#header_open|Builtin Functions|2col#}\n"
        "<p>Builtins are prefixed with <code>@</code>.</p>\n"
        "{#header_open|@foo#}\n"
        "<pre>{#syntax#}@foo(a: u8) void{#endsyntax#}</pre>\n"
        "<p>Does foo.</p>\n"
        "{#header_close#}\n"
        "{#header_close#}\n"
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers installed by setup_logging()."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
