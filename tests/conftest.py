"""Shared fixtures for the pasteclean test suite."""

import pytest

from pasteclean import config


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch):
    """Keep config files on the developer's machine out of the tests."""
    monkeypatch.setattr(config, "CONFIG_LOCATIONS", [])
