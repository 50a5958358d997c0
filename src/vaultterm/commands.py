"""Business command logic for vaultterm.

Each function takes already-extracted arguments, talks to the session's
collaborators and returns the `ResultEntry` to log. Failures are raised as
`AppError` subclasses and turned into Error entries by the caller.
"""

from vaultterm.constants import RECENT_ACTIVITY_LIMIT
from vaultterm.errors import StorageError, UsageError
from vaultterm.models import (
    AccountDetailPayload,
    AccountDraft,
    AccountListPayload,
    Page,
    PendingKind,
    PendingOperation,
    ResultEntry,
    SearchResultsPayload,
    StatsPayload,
    VaultDetailPayload,
    VaultDraft,
    VaultListPayload,
)
from vaultterm.session import Session

_VALID_PAGES = ", ".join(page.value for page in Page)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def open_page(session: Session, page_name: str) -> ResultEntry:
    """Navigate to a page after the confirmation message is shown."""
    navigator = session.require_navigator()
    try:
        page = Page(page_name)
    except ValueError:
        raise UsageError(f'Unknown page "{page_name}". Available pages: {_VALID_PAGES}') from None

    session.defer(lambda: navigator(page))
    return ResultEntry.success(f"Opening {page.value} page...")


def request_exit(session: Session) -> ResultEntry:
    """Close the host after the goodbye message is shown."""
    exit_handler = session.require_exit_handler()
    session.defer(exit_handler)
    return ResultEntry.info("Exiting CLI...")


def list_vaults(session: Session) -> ResultEntry:
    vaults = session.store.list_vaults()
    if not vaults:
        return ResultEntry.info('No vaults found. Use "vault create" to create one.')
    return ResultEntry.success(
        f"Found {_plural(len(vaults), 'vault')}:",
        VaultListPayload(tuple(vault.id for vault in vaults)),
    )


def create_vault(session: Session, name: str, description: str = "") -> ResultEntry:
    session.store.create_vault(VaultDraft(name=name, description=description))
    return ResultEntry.success(f'Vault "{name}" created successfully.')


def update_vault(
    session: Session,
    name: str,
    new_name: str | None = None,
    description: str | None = None,
) -> ResultEntry:
    """Apply only the fields that were given."""
    vault = session.find_vault(name)

    updates: dict[str, str] = {}
    if new_name:
        updates["name"] = new_name
    if description:
        updates["description"] = description

    if updates and not session.store.update_vault(vault.id, updates):
        raise StorageError(f'Vault "{name}" could not be updated.')
    return ResultEntry.success(f'Vault "{name}" updated successfully.')


def show_vault(session: Session, name: str) -> ResultEntry:
    vault = session.find_vault(name)
    accounts = session.accounts_in_vault(vault.id)
    return ResultEntry.success(
        f"Vault: {vault.name}",
        VaultDetailPayload(vault.id, tuple(account.id for account in accounts)),
    )


def plan_vault_delete(session: Session, name: str) -> PendingOperation:
    """Resolve a vault and count the accounts its deletion removes."""
    vault = session.find_vault(name)
    return PendingOperation(
        kind=PendingKind.DELETE_VAULT,
        target_id=vault.id,
        target_name=vault.name,
        cascade_count=len(session.accounts_in_vault(vault.id)),
    )


def list_accounts(session: Session, vault_name: str | None = None) -> ResultEntry:
    if vault_name:
        vault = session.find_vault(vault_name)
        accounts = session.accounts_in_vault(vault.id)
    else:
        accounts = list(session.store.list_accounts())

    if not accounts:
        return ResultEntry.info('No accounts found. Use "account create" to create one.')
    return ResultEntry.success(
        f"Found {_plural(len(accounts), 'account')}:",
        AccountListPayload(tuple(account.id for account in accounts)),
    )


def create_account(
    session: Session,
    vault_name: str,
    name: str,
    username: str,
    password: str,
    url: str = "",
    notes: str = "",
) -> ResultEntry:
    vault = session.find_vault(vault_name)
    session.store.create_account(
        AccountDraft(
            vault_id=vault.id,
            name=name,
            username=username,
            password=password,
            url=url,
            notes=notes,
        )
    )
    return ResultEntry.success(f'Account "{name}" created successfully in vault "{vault.name}".')


def update_account(
    session: Session,
    name: str,
    new_name: str | None = None,
    username: str | None = None,
    password: str | None = None,
    url: str | None = None,
    notes: str | None = None,
) -> ResultEntry:
    """Apply only the fields that were given."""
    account = session.find_account(name)

    candidates = {
        "name": new_name,
        "username": username,
        "password": password,
        "url": url,
        "notes": notes,
    }
    updates = {key: value for key, value in candidates.items() if value}

    if updates and not session.store.update_account(account.id, updates):
        raise StorageError(f'Account "{name}" could not be updated.')
    return ResultEntry.success(f'Account "{name}" updated successfully.')


def show_account(session: Session, name: str, reveal: bool = False) -> ResultEntry:
    account = session.find_account(name)
    return ResultEntry.success(
        f"Account: {account.name}",
        AccountDetailPayload(account.id, account.vault_id, reveal=reveal),
    )


def copy_password(session: Session, name: str, echo_secret: bool = True) -> ResultEntry:
    """Write an account's secret to the clipboard.

    With `echo_secret` the plaintext is also part of the logged message.
    """
    clipboard = session.require_clipboard()
    account = session.find_account(name)
    clipboard(account.password)

    if echo_secret:
        return ResultEntry.success(
            f'Password for "{account.name}": {account.password}\n\n(Copied to clipboard)'
        )
    return ResultEntry.success(f'Password for "{account.name}" copied to clipboard.')


def plan_account_delete(session: Session, name: str) -> PendingOperation:
    account = session.find_account(name)
    return PendingOperation(
        kind=PendingKind.DELETE_ACCOUNT,
        target_id=account.id,
        target_name=account.name,
    )


def confirmation_prompt(operation: PendingOperation) -> str:
    """Describe the impact of a pending deletion and how to answer."""
    if operation.kind == PendingKind.DELETE_VAULT:
        return (
            f'WARNING: Delete vault "{operation.target_name}"? '
            f"This will also delete {operation.cascade_count} account(s). "
            'Type "yes" to confirm or "cancel" to abort.'
        )
    return (
        f'Delete account "{operation.target_name}"? '
        'Type "yes" to confirm or "cancel" to abort.'
    )


def execute_pending(session: Session, operation: PendingOperation) -> ResultEntry:
    """Carry out a confirmed deletion against the store."""
    if operation.kind == PendingKind.DELETE_VAULT:
        if not session.store.delete_vault(operation.target_id):
            raise StorageError(f'Vault "{operation.target_name}" could not be deleted.')
        return ResultEntry.success(f'Vault "{operation.target_name}" deleted successfully.')

    if not session.store.delete_account(operation.target_id):
        raise StorageError(f'Account "{operation.target_name}" could not be deleted.')
    return ResultEntry.success(f'Account "{operation.target_name}" deleted successfully.')


def search(session: Session, query: str) -> ResultEntry:
    """Case-insensitive substring search over vaults and accounts."""
    if not query.strip():
        raise UsageError("Usage: search <query>")

    needle = query.lower()
    vault_ids = tuple(
        vault.id
        for vault in session.store.list_vaults()
        if needle in vault.name.lower() or needle in vault.description.lower()
    )
    account_ids = tuple(
        account.id
        for account in session.store.list_accounts()
        if needle in account.name.lower()
        or needle in account.username.lower()
        or needle in account.url.lower()
    )

    if not vault_ids and not account_ids:
        return ResultEntry.info(f'No results found for "{query}".')
    return ResultEntry.success(
        f'Search results for "{query}":',
        SearchResultsPayload(vault_ids=vault_ids, account_ids=account_ids),
    )


def stats(session: Session) -> ResultEntry:
    """Totals plus the most recently modified accounts."""
    vaults = session.store.list_vaults()
    accounts = session.store.list_accounts()
    recent = sorted(accounts, key=lambda account: account.modified_at, reverse=True)

    return ResultEntry.success(
        "System Statistics",
        StatsPayload(
            total_vaults=len(vaults),
            total_accounts=len(accounts),
            recent_account_ids=tuple(a.id for a in recent[:RECENT_ACTIVITY_LIMIT]),
        ),
    )
