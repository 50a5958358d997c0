"""Pytest configuration and fixtures for vaultterm tests."""

import json
import logging
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from vaultterm.collaborators import run_now
from vaultterm.interpreter import Interpreter
from vaultterm.models import Account, Vault
from vaultterm.session import Session
from vaultterm.store import MemoryStore


@pytest.fixture(autouse=True)
def _restore_logging():
    """setup_logging() may disable logging globally; undo it after each test."""
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _ts(day: int) -> datetime:
    return datetime(2026, 3, day, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_vaults():
    return [
        Vault(
            id="v-personal",
            name="Personal",
            description="My personal accounts",
            created_at=_ts(1),
            modified_at=_ts(1),
        ),
        Vault(
            id="v-work",
            name="Work",
            description="",
            created_at=_ts(2),
            modified_at=_ts(2),
        ),
    ]


@pytest.fixture
def sample_accounts():
    return [
        Account(
            id="a-gmail",
            vault_id="v-personal",
            name="Gmail",
            username="me@gmail.com",
            password="hunter2",
            url="https://mail.google.com",
            created_at=_ts(3),
            modified_at=_ts(3),
        ),
        Account(
            id="a-bank",
            vault_id="v-personal",
            name="Bank",
            username="me",
            password="s3cret",
            notes="PIN in safe",
            created_at=_ts(4),
            modified_at=_ts(4),
        ),
        Account(
            id="a-jira",
            vault_id="v-work",
            name="Jira",
            username="me@corp.example",
            password="jira-pass",
            url="https://jira.corp.example",
            created_at=_ts(5),
            modified_at=_ts(5),
        ),
    ]


@pytest.fixture
def store(sample_vaults, sample_accounts):
    """Memory store seeded with two vaults and three accounts."""
    return MemoryStore(sample_vaults, sample_accounts)


@pytest.fixture
def empty_store():
    return MemoryStore()


class Recorder:
    """Collaborator double that records every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args[0] if len(args) == 1 else args)


@pytest.fixture
def navigator():
    return Recorder()


@pytest.fixture
def exit_handler():
    return Recorder()


@pytest.fixture
def clipboard():
    return Recorder()


@pytest.fixture
def session(store, navigator, exit_handler, clipboard):
    """Session with every collaborator and an immediate scheduler."""
    return Session(
        store=store,
        navigator=navigator,
        exit_handler=exit_handler,
        clipboard=clipboard,
        scheduler=run_now,
        action_delay=0.0,
    )


@pytest.fixture
def interpreter(store, navigator, exit_handler, clipboard):
    """Full interpreter wired to recording doubles."""
    return Interpreter(
        store=store,
        navigator=navigator,
        exit_handler=exit_handler,
        clipboard=clipboard,
        scheduler=run_now,
        action_delay=0.0,
    )


@pytest.fixture
def sample_profile(temp_dir):
    """Create sample profile JSON for testing."""
    profile = {
        "username": "alice",
        "data_path": "./vault.json",
        "logs_dir": "./logs",
        "action_delay": 0.25,
    }

    profile_path = temp_dir / "profile.json"
    with open(profile_path, "w", encoding="utf-8") as f:
        json.dump(profile, f, indent=2)

    return profile_path
