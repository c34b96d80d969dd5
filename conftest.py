"""Pytest configuration and fixtures for devsetup tests.

CRITICAL: Protects the operator's configuration and machine from tests.
"""

import os
import shutil
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def protect_production_config():
    """Protect ~/.devsetup/config.toml from being modified by tests.

    Backs up the real config.toml before any tests run and restores it
    after all tests complete.
    """
    config_path = Path.home() / ".devsetup" / "config.toml"
    backup_path = Path.home() / ".devsetup" / ".config.toml.pytest-backup"

    config_existed = config_path.exists()
    if config_existed:
        shutil.copy2(config_path, backup_path)

    yield

    if config_existed and backup_path.exists():
        shutil.copy2(backup_path, config_path)
        backup_path.unlink()
    elif backup_path.exists():
        backup_path.unlink()


@pytest.fixture(autouse=True)
def prevent_real_commands(monkeypatch):
    """Fail loudly if a test reaches subprocess.run without mocking it.

    Provisioning commands use sudo and modify the system; tests must use
    RecordingCommandRunner or patch subprocess explicitly.
    """
    os.environ["DEVSETUP_TEST_MODE"] = "true"

    def refuse(*args, **kwargs):
        raise AssertionError(f"Unmocked subprocess.run call in tests: {args!r}")

    monkeypatch.setattr("devsetup.modules.command_runner.subprocess.run", refuse)

    yield

    os.environ.pop("DEVSETUP_TEST_MODE", None)
