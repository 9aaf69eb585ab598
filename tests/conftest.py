"""Shared fixtures for dicegame tests."""

import logging

import pytest

from dicegame.config import N_JOBS_ENV_VAR


@pytest.fixture(autouse=True)
def clean_n_jobs_env(monkeypatch):
    """Keep a developer's DICEGAME_N_JOBS from leaking into tests."""
    monkeypatch.delenv(N_JOBS_ENV_VAR, raising=False)


@pytest.fixture(autouse=True)
def restore_round_logger():
    """The CLI sets the per-round logger's level; undo it after each test."""
    round_logger = logging.getLogger("dicegame.game")
    level = round_logger.level
    yield
    round_logger.setLevel(level)
