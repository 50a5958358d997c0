"""Text formatters for interpreter output."""

from datetime import datetime

from tzlocal import get_localzone

from vaultterm.collaborators import VaultStore
from vaultterm.constants import MASKED_SECRET
from vaultterm.models import (
    Account,
    AccountDetailPayload,
    AccountListPayload,
    ResultEntry,
    ResultKind,
    SearchResultsPayload,
    StatsPayload,
    StructuredPayload,
    Vault,
    VaultDetailPayload,
    VaultListPayload,
)

KIND_PREFIXES = {
    ResultKind.SUCCESS: "✓",
    ResultKind.ERROR: "✗",
    ResultKind.INFO: "i",
    ResultKind.PROMPT: "?",
}
DELETED = "(deleted)"
_INDENT = "  "


def _local_date(value: datetime) -> str:
    return value.astimezone(get_localzone()).strftime("%Y-%m-%d")


def _local_datetime(value: datetime) -> str:
    return value.astimezone(get_localzone()).strftime("%Y-%m-%d %H:%M:%S")


class _Snapshot:
    """Id lookups over the store contents at render time."""

    def __init__(self, store: VaultStore) -> None:
        self.vaults = {vault.id: vault for vault in store.list_vaults()}
        self.accounts = {account.id: account for account in store.list_accounts()}

    def vault(self, vault_id: str) -> Vault | None:
        return self.vaults.get(vault_id)

    def account(self, account_id: str) -> Account | None:
        return self.accounts.get(account_id)

    def vault_name(self, vault_id: str) -> str:
        vault = self.vault(vault_id)
        return vault.name if vault is not None else "Unknown"


def format_vault_list(payload: VaultListPayload, snapshot: _Snapshot) -> str:
    num_width = len(str(len(payload.vault_ids)))
    lines: list[str] = []
    for index, vault_id in enumerate(payload.vault_ids, start=1):
        padded_num = str(index).rjust(num_width)
        vault = snapshot.vault(vault_id)
        if vault is None:
            lines.append(f"[{padded_num}] {DELETED}")
            continue

        lines.append(f"[{padded_num}] {vault.name}")
        if vault.description:
            lines.append(f"{_INDENT}{vault.description}")
        lines.append(f"{_INDENT}Created: {_local_date(vault.created_at)}")
    return "\n".join(lines)


def format_account_list(payload: AccountListPayload, snapshot: _Snapshot) -> str:
    num_width = len(str(len(payload.account_ids)))
    lines: list[str] = []
    for index, account_id in enumerate(payload.account_ids, start=1):
        padded_num = str(index).rjust(num_width)
        account = snapshot.account(account_id)
        if account is None:
            lines.append(f"[{padded_num}] {DELETED}")
            continue

        lines.append(f"[{padded_num}] {account.name}")
        lines.append(f"{_INDENT}Username: {account.username}")
        lines.append(f"{_INDENT}Vault: {snapshot.vault_name(account.vault_id)}")
        if account.url:
            lines.append(f"{_INDENT}URL: {account.url}")
    return "\n".join(lines)


def format_vault_detail(payload: VaultDetailPayload, snapshot: _Snapshot) -> str:
    vault = snapshot.vault(payload.vault_id)
    if vault is None:
        return DELETED

    lines = [
        f"Description: {vault.description or 'N/A'}",
        f"Accounts: {len(payload.account_ids)}",
        f"Created: {_local_datetime(vault.created_at)}",
        f"Modified: {_local_datetime(vault.modified_at)}",
    ]
    if payload.account_ids:
        lines.append("")
        lines.append("Accounts in this vault:")
        for account_id in payload.account_ids:
            account = snapshot.account(account_id)
            lines.append(f"{_INDENT}• {account.name if account is not None else DELETED}")
    return "\n".join(lines)


def format_account_detail(payload: AccountDetailPayload, snapshot: _Snapshot) -> str:
    """Render one account; the password stays masked unless revealed."""
    account = snapshot.account(payload.account_id)
    if account is None:
        return DELETED

    lines = [
        f"Username: {account.username}",
        f"Password: {account.password if payload.reveal else MASKED_SECRET}",
        f"URL: {account.url or 'N/A'}",
        f"Vault: {snapshot.vault_name(payload.vault_id)}",
    ]
    if account.notes:
        lines.append(f"Notes: {account.notes}")
    lines.append(f"Modified: {_local_datetime(account.modified_at)}")
    return "\n".join(lines)


def format_search_results(payload: SearchResultsPayload, snapshot: _Snapshot) -> str:
    lines: list[str] = []
    if payload.vault_ids:
        lines.append(f"Vaults ({len(payload.vault_ids)}):")
        for vault_id in payload.vault_ids:
            vault = snapshot.vault(vault_id)
            lines.append(f"{_INDENT}{vault.name if vault is not None else DELETED}")

    if payload.account_ids:
        if lines:
            lines.append("")
        lines.append(f"Accounts ({len(payload.account_ids)}):")
        for account_id in payload.account_ids:
            account = snapshot.account(account_id)
            if account is None:
                lines.append(f"{_INDENT}{DELETED}")
            else:
                lines.append(f"{_INDENT}{account.name} @{account.username}")
    return "\n".join(lines)


def format_stats(payload: StatsPayload, snapshot: _Snapshot) -> str:
    lines = [
        f"Total Vaults: {payload.total_vaults}",
        f"Total Accounts: {payload.total_accounts}",
    ]
    if payload.recent_account_ids:
        lines.append("")
        lines.append("Recent Activity:")
        for account_id in payload.recent_account_ids:
            account = snapshot.account(account_id)
            if account is None:
                lines.append(f"{_INDENT}• {DELETED}")
            else:
                lines.append(f"{_INDENT}• {account.name} - {_local_date(account.modified_at)}")
    return "\n".join(lines)


_PAYLOAD_FORMATTERS = {
    VaultListPayload: format_vault_list,
    AccountListPayload: format_account_list,
    VaultDetailPayload: format_vault_detail,
    AccountDetailPayload: format_account_detail,
    SearchResultsPayload: format_search_results,
    StatsPayload: format_stats,
}


def format_payload(payload: StructuredPayload, store: VaultStore) -> str:
    """Render a structured payload against the store's current contents."""
    formatter = _PAYLOAD_FORMATTERS[type(payload)]
    return formatter(payload, _Snapshot(store))


def format_entry(entry: ResultEntry, store: VaultStore) -> str:
    """Render one log entry: kind prefix, message, then any payload body."""
    prefix = KIND_PREFIXES[entry.kind]
    message_lines = entry.message.split("\n")
    lines = [f"{prefix} {message_lines[0]}"]
    lines.extend(f"{_INDENT}{line}" if line else "" for line in message_lines[1:])

    if entry.payload is not None:
        body = format_payload(entry.payload, store)
        if body:
            lines.extend(f"{_INDENT}{line}" if line else "" for line in body.split("\n"))
    return "\n".join(lines)
