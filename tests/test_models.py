"""Tests for models module."""

from datetime import datetime, timezone

import pytest

from vaultterm.models import (
    Account,
    Profile,
    ResultEntry,
    ResultKind,
    Vault,
    VaultListPayload,
)


class TestVault:
    def test_from_dict_parses_timestamps(self):
        vault = Vault.from_dict(
            {
                "id": "v1",
                "name": "Personal",
                "created_at": "2026-03-01T12:00:00+00:00",
                "modified_at": "2026-03-02T12:00:00",
            }
        )

        assert vault.description == ""
        assert vault.created_at == datetime(2026, 3, 1, 12, tzinfo=timezone.utc)
        assert vault.modified_at.tzinfo == timezone.utc

    def test_from_dict_missing_fields(self):
        with pytest.raises(ValueError, match="Vault missing required fields: created_at, modified_at"):
            Vault.from_dict({"id": "v1", "name": "X"})

    def test_from_dict_rejects_non_string_timestamp(self):
        with pytest.raises(ValueError, match="created_at"):
            Vault.from_dict({"id": "v", "name": "X", "created_at": 5, "modified_at": "2026-01-01"})


class TestAccount:
    def test_to_dict_round_trip(self, sample_accounts):
        account = sample_accounts[1]

        assert Account.from_dict(account.to_dict()) == account

    def test_optional_fields_default_empty(self):
        account = Account.from_dict(
            {
                "id": "a",
                "vault_id": "v",
                "name": "N",
                "username": "u",
                "password": "p",
                "url": None,
                "created_at": "2026-01-01T00:00:00+00:00",
                "modified_at": "2026-01-01T00:00:00+00:00",
            }
        )

        assert account.url == ""
        assert account.notes == ""


class TestResultEntry:
    def test_constructors(self):
        payload = VaultListPayload(("v1",))

        assert ResultEntry.success("ok", payload) == ResultEntry(ResultKind.SUCCESS, "ok", payload)
        assert ResultEntry.error("bad").kind == ResultKind.ERROR
        assert ResultEntry.info("fyi").payload is None
        assert ResultEntry.prompt("sure?").kind == ResultKind.PROMPT


class TestProfile:
    def test_from_dict_defaults(self):
        prof = Profile.from_dict({"username": "alice", "data_path": "/tmp/v.json"})

        assert prof.logs_dir is None
        assert prof.action_delay == 0.5
        assert prof.to_dict()["username"] == "alice"
