"""Capability interfaces the interpreter calls but does not implement."""

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol

from vaultterm.models import Account, AccountDraft, Page, Vault, VaultDraft


class VaultStore(Protocol):
    """Data store for vaults and accounts.

    `list_*` return the current full collections in store order. Deleting a
    vault also deletes its accounts.
    """

    def list_vaults(self) -> Sequence[Vault]: ...

    def list_accounts(self) -> Sequence[Account]: ...

    def create_vault(self, draft: VaultDraft) -> Vault: ...

    def update_vault(self, vault_id: str, updates: Mapping[str, Any]) -> bool: ...

    def delete_vault(self, vault_id: str) -> bool: ...

    def create_account(self, draft: AccountDraft) -> Account: ...

    def update_account(self, account_id: str, updates: Mapping[str, Any]) -> bool: ...

    def delete_account(self, account_id: str) -> bool: ...


class Navigator(Protocol):
    def __call__(self, page: Page) -> None: ...


class ExitHandler(Protocol):
    def __call__(self) -> None: ...


class Clipboard(Protocol):
    def __call__(self, text: str) -> None: ...


class Scheduler(Protocol):
    """Run a callback after `delay` seconds."""

    def __call__(self, delay: float, callback: Callable[[], None]) -> None: ...


def run_now(delay: float, callback: Callable[[], None]) -> None:
    """Scheduler that ignores the delay and runs the callback inline."""
    callback()
