"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Engine defaults for tests, independent of a local .env
os.environ.setdefault("REFERRAL_TREE_MAX_DEPTH", "5")
os.environ.setdefault("REFERRAL_TREE_STRICT_LEVELS", "false")
os.environ.setdefault("REFERRAL_TREE_LOG_LEVEL", "INFO")

# Добавить корень проекта в PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from loguru import logger


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="DEBUG",
    )
    yield messages
    try:
        logger.remove(handler_id)
    except ValueError:
        # Handler already removed by setup_logging()
        pass
