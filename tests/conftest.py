"""Root pytest configuration for all tests."""

import logging

import pytest

# Suppress noisy ERROR logs from atlassian-python-api for expected lookup
# failures (e.g. a title search that finds nothing).
logging.getLogger("atlassian").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def clean_confluence_env(monkeypatch):
    """Keep real credentials in the environment out of the tests."""
    for name in ("CONFLUENCE_URL", "CONFLUENCE_USER", "CONFLUENCE_API_TOKEN"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers installed by _configure_logging between tests."""
    yield
    app_logger = logging.getLogger("src")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
