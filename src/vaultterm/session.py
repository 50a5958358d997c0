"""Collaborator container shared by command handlers."""

from collections.abc import Callable
from dataclasses import dataclass, field

from vaultterm.collaborators import (
    Clipboard,
    ExitHandler,
    Navigator,
    Scheduler,
    VaultStore,
    run_now,
)
from vaultterm.constants import ACTION_DELAY_SECONDS
from vaultterm.errors import NotFoundError, UnavailableError
from vaultterm.gate import ConfirmationGate
from vaultterm.models import Account, Vault


@dataclass
class Session:
    """Capabilities available to one interpreter instance.

    Only the store is mandatory; the other collaborators may be None when the
    host cannot provide them.
    """

    store: VaultStore
    navigator: Navigator | None = None
    exit_handler: ExitHandler | None = None
    clipboard: Clipboard | None = None
    scheduler: Scheduler = run_now
    action_delay: float = ACTION_DELAY_SECONDS
    gate: ConfirmationGate | None = None
    deferred: list[Callable[[], None]] = field(default_factory=list)

    def defer(self, callback: Callable[[], None]) -> None:
        """Queue a side effect to run after the current result is logged."""
        self.deferred.append(callback)

    def flush_deferred(self) -> None:
        """Hand queued side effects to the scheduler with the action delay."""
        pending, self.deferred = self.deferred, []
        for callback in pending:
            self.scheduler(self.action_delay, callback)

    def find_vault(self, name: str) -> Vault:
        """Return the first vault whose name matches case-insensitively."""
        wanted = name.lower()
        for vault in self.store.list_vaults():
            if vault.name.lower() == wanted:
                return vault
        raise NotFoundError(f'Vault "{name}" not found.')

    def find_account(self, name: str) -> Account:
        """Return the first account whose name matches case-insensitively."""
        wanted = name.lower()
        for account in self.store.list_accounts():
            if account.name.lower() == wanted:
                return account
        raise NotFoundError(f'Account "{name}" not found.')

    def accounts_in_vault(self, vault_id: str) -> list[Account]:
        return [a for a in self.store.list_accounts() if a.vault_id == vault_id]

    def require_navigator(self) -> Navigator:
        if self.navigator is None:
            raise UnavailableError("Navigation not available in this context.")
        return self.navigator

    def require_exit_handler(self) -> ExitHandler:
        if self.exit_handler is None:
            raise UnavailableError("Cannot exit from this context.")
        return self.exit_handler

    def require_clipboard(self) -> Clipboard:
        if self.clipboard is None:
            raise UnavailableError("Clipboard not available in this context.")
        return self.clipboard
