"""Tests for settings and logging setup."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from shimmertrace.bootstrap import configure_logging
from shimmertrace.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.shimmer_period_ms == 1200
    assert s.silhouette_color == "#a9a9a9"
    assert s.shimmer_alpha == 0x40
    assert s.cross_fade_duration_ms == 750


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("SHIMMERTRACE_SHIMMER_PERIOD_MS", "900")
    monkeypatch.setenv("SHIMMERTRACE_CROSS_FADE_ENABLED", "false")
    s = Settings(_env_file=None)
    assert s.shimmer_period_ms == 900
    assert s.cross_fade_enabled is False


@pytest.mark.parametrize(
    "field,value",
    [("shimmer_alpha", 300), ("shimmer_width", 0.0), ("shimmer_period_ms", 0)],
)
def test_validation(field, value):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: value})


def test_configure_logging():
    level = configure_logging(Settings(_env_file=None, log_level="debug"))
    assert level == logging.DEBUG
    assert logging.getLogger("shimmertrace").level == logging.DEBUG


def test_unknown_level_falls_back_to_info():
    assert configure_logging(Settings(_env_file=None, log_level="chatty")) == logging.INFO
