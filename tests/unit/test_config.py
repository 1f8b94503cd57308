"""Unit tests for configuration helpers."""

import pytest

from janusspec import config
from janusspec.errors import InvalidTimeoutError


def test_default_when_unset(monkeypatch) -> None:
    monkeypatch.delenv(config.ASYNC_TIMEOUT_ENV, raising=False)
    assert config.get_async_timeout_ms() == config.DEFAULT_ASYNC_TIMEOUT_MS == 5000


def test_default_when_empty(monkeypatch) -> None:
    monkeypatch.setenv(config.ASYNC_TIMEOUT_ENV, "")
    assert config.get_async_timeout_ms() == 5000


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv(config.ASYNC_TIMEOUT_ENV, " 250 ")
    assert config.get_async_timeout_ms() == 250


def test_invalid_environment_raises(monkeypatch) -> None:
    monkeypatch.setenv(config.ASYNC_TIMEOUT_ENV, "soon")
    with pytest.raises(InvalidTimeoutError, match="'soon'"):
        config.get_async_timeout_ms()


@pytest.mark.parametrize("value", [0, -5, "abc", None, True, 1.5])
def test_validate_rejects(value) -> None:
    with pytest.raises(InvalidTimeoutError):
        config.validate_timeout_ms(value)


@pytest.mark.parametrize(("value", "expected"), [(10, 10), ("10", 10), (2.0, 2)])
def test_validate_accepts(value, expected) -> None:
    assert config.validate_timeout_ms(value) == expected
