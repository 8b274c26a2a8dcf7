"""Pytest configuration and fixtures."""

import pytest

from schedmath import config
from schedmath.config import ArithmeticConfig


@pytest.fixture(autouse=True)
def unchecked_mode(monkeypatch: pytest.MonkeyPatch) -> ArithmeticConfig:
    """Run every test with default (wrapping) arithmetic regardless of environment."""
    cfg = ArithmeticConfig()
    monkeypatch.setattr(config, "CONFIG", cfg)
    return cfg


@pytest.fixture
def checked_mode(monkeypatch: pytest.MonkeyPatch) -> ArithmeticConfig:
    """Enable checked mode, where int32 overflow raises."""
    cfg = ArithmeticConfig(checked=True)
    monkeypatch.setattr(config, "CONFIG", cfg)
    return cfg
