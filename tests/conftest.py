"""Pytest configuration and shared fixtures for the down2html test suite.

This module provides shared fixtures, test configuration, and markers that
are used across the entire test suite.
"""

import logging
import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from down2html.logging_utils import GRAMMAR_LOGGER, PACKAGE_LOGGER

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests generated with hypothesis")


@pytest.fixture(autouse=True)
def isolated_logging():
    """Undo handler, level and propagation changes made by configure_logging."""
    loggers = [logging.getLogger(name) for name in (PACKAGE_LOGGER, GRAMMAR_LOGGER)]
    saved = [(log, log.handlers[:], log.level, log.propagate) for log in loggers]
    yield
    for log, handlers, level, propagate in saved:
        for handler in log.handlers:
            if handler not in handlers:
                handler.close()
        log.handlers[:] = handlers
        log.setLevel(level)
        log.propagate = propagate


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Keep configuration discovery away from the developer's real files."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.delenv("DOWN2HTML_CONFIG", raising=False)


@pytest.fixture
def sample_markdown() -> str:
    """Provide a CRLF markdown document touching every block construct.

    Returns
    -------
    str
        Sample document with one term of each kind.

    """
    return "\r\n\r\n".join(
        [
            "# Sample Document",
            "This is **strong** and *emphasis* with `code`.",
            "- one\r\n- two",
            "> quoted",
            "```\r\nraw <b>\r\n```",
            "<div><span/></div>",
        ]
    )
