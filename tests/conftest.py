"""Shared fixtures."""

import pytest

from recital.config import set_config


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Start every test from the default config with no env overrides."""
    monkeypatch.delenv("RECITAL_FESTIVAL_STRATEGY", raising=False)
    monkeypatch.delenv("RECITAL_MODULATION_STRATEGY", raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def gala_events():
    return [(60, 15), (120, 25), (40, 8), (75, 15), (65, 20)]
