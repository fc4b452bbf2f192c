"""Pytest configuration and shared fixtures for rundeck-client-core tests."""

import pytest

from rundeck_client_core.testing import FakeTerminal


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear Rundeck-related environment variables before each test.

    This prevents the developer's own Rundeck configuration from leaking into
    credential resolution tests.
    """
    import os

    test_prefixes = ("RUNDECK_", "RD_", "RDECK_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)

    yield


@pytest.fixture
def no_terminal():
    """A terminal that is not attached, so no prompting can happen."""
    return FakeTerminal(available=False)


@pytest.fixture
def rdeck_base(tmp_path):
    """Factory writing ``etc/framework.properties`` under a temporary RDECK_BASE."""

    def _write(content: str):
        etc = tmp_path / "etc"
        etc.mkdir(exist_ok=True)
        (etc / "framework.properties").write_text(content)
        return tmp_path

    return _write
