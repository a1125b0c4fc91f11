"""Pytest configuration and shared fixtures for the fswikifmt test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=300, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=100)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "fswiki"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "golden: Golden file tests comparing against expected output")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the .fswiki fixture documents."""
    return FIXTURES_DIR


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch) -> Path:
    """Run a test in an empty working directory with no config files around.

    The home directory is redirected too, so a user's own configuration
    file cannot leak into CLI tests.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    for name in list(os.environ):
        if name.startswith("FSWIKIFMT_"):
            monkeypatch.delenv(name)
    return tmp_path


@pytest.fixture
def restore_root_logger():
    """Put the root logger's handlers and level back after a test.

    The CLI replaces the root handlers when it configures logging.
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
