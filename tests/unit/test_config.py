"""Unit tests for configuration lookups."""

from __future__ import annotations

import pytest

from tdbind import config
from tdbind.config import (
    GeneratorConfig,
    InvalidRequestTimeoutError,
    TdJsonLibraryNotFoundError,
    TextRepresentation,
)


def test_generator_config_defaults():
    """Restricted API off, standard text."""
    cfg = GeneratorConfig()
    assert cfg.include_restricted_api is False
    assert cfg.text_representation is TextRepresentation.STANDARD
    assert cfg.use_shared_text is False
    assert GeneratorConfig(text_representation=TextRepresentation.SHARED).use_shared_text


def test_tdjson_path_from_env(monkeypatch):
    """The environment variable wins over discovery."""
    monkeypatch.setenv("TDBIND_TDJSON_PATH", "/opt/td/libtdjson.so")
    assert config.get_tdjson_path() == "/opt/td/libtdjson.so"


def test_tdjson_path_falls_back_to_find_library(monkeypatch):
    """Without the variable the platform loader is asked."""
    monkeypatch.delenv("TDBIND_TDJSON_PATH", raising=False)
    monkeypatch.setattr(config.ctypes.util, "find_library", lambda name: f"lib{name}.so")
    assert config.get_tdjson_path() == "libtdjson.so"


def test_tdjson_path_missing(monkeypatch):
    """Neither source: a clear error naming the variable."""
    monkeypatch.delenv("TDBIND_TDJSON_PATH", raising=False)
    monkeypatch.setattr(config.ctypes.util, "find_library", lambda name: None)
    with pytest.raises(TdJsonLibraryNotFoundError, match="TDBIND_TDJSON_PATH"):
        config.get_tdjson_path()


@pytest.mark.parametrize(("raw", "expected"), [(None, None), ("", None), ("  ", None), ("2.5", 2.5)])
def test_request_timeout(monkeypatch, raw, expected):
    """Unset or blank means no timeout."""
    if raw is None:
        monkeypatch.delenv("TDBIND_REQUEST_TIMEOUT", raising=False)
    else:
        monkeypatch.setenv("TDBIND_REQUEST_TIMEOUT", raw)
    assert config.get_request_timeout() == expected


@pytest.mark.parametrize("raw", ["0", "-1", "soon"])
def test_invalid_request_timeout(monkeypatch, raw):
    """Non-positive or non-numeric values are rejected."""
    monkeypatch.setenv("TDBIND_REQUEST_TIMEOUT", raw)
    with pytest.raises(InvalidRequestTimeoutError) as exc_info:
        config.get_request_timeout()
    assert exc_info.value.value == raw
    assert isinstance(exc_info.value, ValueError)
