"""In-memory and JSON-file implementations of the vault store."""

import json
import logging
import uuid
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from vaultterm.errors import StorageError, ValidationError
from vaultterm.logging_utils import log_event
from vaultterm.models import (
    ACCOUNT_UPDATE_FIELDS,
    VAULT_UPDATE_FIELDS,
    Account,
    AccountDraft,
    Vault,
    VaultDraft,
    utc_now,
)


def _new_id() -> str:
    return str(uuid.uuid4())


def _check_update_fields(updates: Mapping[str, Any], allowed: frozenset[str]) -> None:
    invalid_fields = set(updates.keys()) - allowed
    if invalid_fields:
        raise ValidationError(f"Invalid fields: {', '.join(sorted(invalid_fields))}")


class MemoryStore:
    """Vaults and accounts held in process memory."""

    def __init__(
        self,
        vaults: Sequence[Vault] | None = None,
        accounts: Sequence[Account] | None = None,
    ) -> None:
        self._vaults: list[Vault] = list(vaults or [])
        self._accounts: list[Account] = list(accounts or [])

    def list_vaults(self) -> list[Vault]:
        return list(self._vaults)

    def list_accounts(self) -> list[Account]:
        return list(self._accounts)

    def create_vault(self, draft: VaultDraft) -> Vault:
        now = utc_now()
        vault = Vault(
            id=_new_id(),
            name=draft.name,
            description=draft.description,
            created_at=now,
            modified_at=now,
        )
        self._vaults.append(vault)
        self._changed()
        return vault

    def update_vault(self, vault_id: str, updates: Mapping[str, Any]) -> bool:
        _check_update_fields(updates, VAULT_UPDATE_FIELDS)
        for vault in self._vaults:
            if vault.id == vault_id:
                for key, value in updates.items():
                    setattr(vault, key, str(value))
                vault.modified_at = utc_now()
                self._changed()
                return True
        return False

    def delete_vault(self, vault_id: str) -> bool:
        """Delete a vault and every account inside it."""
        remaining = [vault for vault in self._vaults if vault.id != vault_id]
        if len(remaining) == len(self._vaults):
            return False

        self._vaults = remaining
        self._accounts = [a for a in self._accounts if a.vault_id != vault_id]
        self._changed()
        return True

    def create_account(self, draft: AccountDraft) -> Account:
        if not any(vault.id == draft.vault_id for vault in self._vaults):
            raise ValidationError(f"Unknown vault id: {draft.vault_id}")

        now = utc_now()
        account = Account(
            id=_new_id(),
            vault_id=draft.vault_id,
            name=draft.name,
            username=draft.username,
            password=draft.password,
            url=draft.url,
            notes=draft.notes,
            created_at=now,
            modified_at=now,
        )
        self._accounts.append(account)
        self._changed()
        return account

    def update_account(self, account_id: str, updates: Mapping[str, Any]) -> bool:
        _check_update_fields(updates, ACCOUNT_UPDATE_FIELDS)
        for account in self._accounts:
            if account.id == account_id:
                for key, value in updates.items():
                    setattr(account, key, str(value))
                account.modified_at = utc_now()
                self._changed()
                return True
        return False

    def delete_account(self, account_id: str) -> bool:
        remaining = [a for a in self._accounts if a.id != account_id]
        if len(remaining) == len(self._accounts):
            return False

        self._accounts = remaining
        self._changed()
        return True

    def to_dict(self) -> dict[str, Any]:
        """Serialize both collections to a persistence payload."""
        return {
            "vaults": [vault.to_dict() for vault in self._vaults],
            "accounts": [account.to_dict() for account in self._accounts],
        }

    def _changed(self) -> None:
        """Hook run after every successful mutation."""


def validate_store_structure(data: Any) -> None:
    """Validate persisted store payload structure."""
    if not isinstance(data, dict):
        raise ValidationError("Invalid data file structure: expected a JSON object")

    for key in ("vaults", "accounts"):
        if key not in data:
            raise ValidationError(f"Invalid data file structure: missing '{key}' key")
        if not isinstance(data[key], list):
            raise ValidationError(f"Invalid data file structure: '{key}' must be an array")

    for key in ("vaults", "accounts"):
        for i, item in enumerate(data[key]):
            if not isinstance(item, dict):
                raise ValidationError(f"{key[:-1].capitalize()} {i} is not a valid object")


class JsonFileStore(MemoryStore):
    """Memory store that rewrites a JSON file after every mutation.

    A mutation whose save fails is rolled back, so memory never holds
    changes the data file does not.
    """

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        vaults, accounts = self._load()
        super().__init__(vaults, accounts)
        self._saved = self.to_dict()

    def _load(self) -> tuple[list[Vault], list[Account]]:
        if not self.path.exists():
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageError(f"Failed to create data directory: {self.path.parent}: {e}") from e
            return [], []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)

            validate_store_structure(data)
            vaults = [Vault.from_dict(item) for item in data["vaults"]]
            accounts = [Account.from_dict(item) for item in data["accounts"]]
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in data file: {e}") from e
        except ValueError as e:
            raise StorageError(str(e)) from e
        except OSError as e:
            raise StorageError(f"Failed to read data file: {self.path}: {e}") from e

        log_event("store_loaded", data_file=str(self.path), vaults=len(vaults), accounts=len(accounts))
        return vaults, accounts

    def _changed(self) -> None:
        try:
            self.save()
        except StorageError:
            self._rollback()
            raise

    def _rollback(self) -> None:
        """Restore both collections to what the data file last received."""
        self._vaults = [Vault.from_dict(item) for item in self._saved["vaults"]]
        self._accounts = [Account.from_dict(item) for item in self._saved["accounts"]]
        log_event("store_rollback", level=logging.WARNING, data_file=str(self.path))

    def save(self) -> None:
        """Write both collections to the data file."""
        payload = self.to_dict()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"Failed to save data file: {self.path}: {e}") from e
        self._saved = payload
