"""Inline quick-command bar: a reduced interpreter with transient feedback.

Shares the parser and handlers with the full interpreter but has no result
log, no history, no suggestions and no confirmation gate. Deletions ask the
host's synchronous `confirm` callback and run immediately when it agrees.
"""

import logging
import time
from collections.abc import Callable

from vaultterm import commands, dispatcher
from vaultterm.collaborators import Clipboard, Navigator, VaultStore, run_now
from vaultterm.constants import QUICK_FEEDBACK_SECONDS
from vaultterm.dispatcher import CommandHandler, Verb
from vaultterm.errors import AppError, UnknownCommandError
from vaultterm.logging_utils import log_event, redact_flags
from vaultterm.models import Page, PendingKind, PendingOperation, ResultEntry
from vaultterm.parser import ParsedLine, parse_line
from vaultterm.session import Session

QUICK_HELP = "Available commands: exit, open [page], vault [action], account [action]"

Confirm = Callable[[str], bool]


def _confirm_question(operation: PendingOperation) -> str:
    kind = "vault" if operation.kind == PendingKind.DELETE_VAULT else "account"
    return f'Delete {kind} "{operation.target_name}"? This action cannot be undone.'


class QuickCommandBar:
    """Single-line command entry with a self-expiring feedback slot."""

    def __init__(
        self,
        store: VaultStore,
        navigator: Navigator,
        confirm: Confirm,
        clipboard: Clipboard | None = None,
        feedback_seconds: float = QUICK_FEEDBACK_SECONDS,
    ) -> None:
        self.session = Session(
            store=store,
            navigator=navigator,
            clipboard=clipboard,
            scheduler=run_now,
            action_delay=0.0,
        )
        self.confirm = confirm
        self.feedback_seconds = feedback_seconds
        self._feedback: ResultEntry | None = None
        self._shown_at = 0.0

        self.vault_actions = {
            "create": dispatcher.VAULT_ACTIONS["create"],
            "delete": CommandHandler(self._exec_vault_delete, usage=dispatcher.VAULT_DELETE_USAGE),
        }
        self.account_actions = {
            "create": dispatcher.ACCOUNT_ACTIONS["create"],
            "delete": CommandHandler(self._exec_account_delete, usage=dispatcher.ACCOUNT_DELETE_USAGE),
            "password": CommandHandler(self._exec_account_password, usage=dispatcher.ACCOUNT_PASSWORD_USAGE),
        }
        self.registry: dict[Verb, Callable[[ParsedLine], ResultEntry | None]] = {
            Verb.HELP: lambda parsed: ResultEntry.info(QUICK_HELP),
            Verb.EXIT: self._exec_exit,
            Verb.OPEN: lambda parsed: commands.open_page(self.session, parsed.sub_verb),
            Verb.VAULT: self._exec_vault,
            Verb.ACCOUNT: self._exec_account,
        }

    @property
    def feedback(self) -> ResultEntry | None:
        """Current feedback, or None once it has been visible long enough."""
        if self._feedback is not None and time.monotonic() - self._shown_at >= self.feedback_seconds:
            self._feedback = None
        return self._feedback

    def submit(self, line: str) -> ResultEntry | None:
        """Run one line and return the feedback it produced."""
        parsed = parse_line(line)
        if parsed is None:
            return None

        verb = dispatcher.resolve_verb(parsed.verb)
        try:
            executor = self.registry.get(verb) if verb is not None else None
            if executor is None:
                raise UnknownCommandError(
                    f'Unknown command: "{parsed.verb}". Type "help" for available commands.'
                )
            entry = executor(parsed)
            log_event(
                "command_exec",
                variant="quick",
                verb=parsed.verb,
                sub_verb=parsed.sub_verb,
                flags=redact_flags(parsed.flags),
                result_kind=entry.kind.value if entry is not None else None,
            )
            self.session.flush_deferred()
        except AppError as e:
            self.session.deferred.clear()
            log_event(
                "command_error",
                level=logging.WARNING,
                variant="quick",
                verb=parsed.verb,
                sub_verb=parsed.sub_verb,
                flags=redact_flags(parsed.flags),
                error_type=type(e).__name__,
                error=str(e),
            )
            entry = ResultEntry.error(str(e))
        except Exception as e:
            self.session.deferred.clear()
            log_event(
                "command_error",
                level=logging.ERROR,
                variant="quick",
                verb=parsed.verb,
                error_type=type(e).__name__,
                error=str(e),
            )
            entry = ResultEntry.error(f"Unexpected error: {e}")

        if entry is not None:
            self._show(entry)
        return entry

    def _show(self, entry: ResultEntry) -> None:
        self._feedback = entry
        self._shown_at = time.monotonic()

    def _exec_exit(self, parsed: ParsedLine) -> ResultEntry:
        navigator = self.session.require_navigator()
        self.session.defer(lambda: navigator(Page.OVERVIEW))
        return ResultEntry.info("Returning to overview...")

    def _exec_vault(self, parsed: ParsedLine) -> ResultEntry | None:
        handler = dispatcher.select_action("vault", self.vault_actions, parsed.sub_verb)
        return handler.executor(parsed, self.session)

    def _exec_account(self, parsed: ParsedLine) -> ResultEntry | None:
        handler = dispatcher.select_action("account", self.account_actions, parsed.sub_verb)
        return handler.executor(parsed, self.session)

    def _exec_vault_delete(self, parsed: ParsedLine, session: Session) -> ResultEntry | None:
        (name,) = dispatcher.require_flags(parsed, dispatcher.VAULT_DELETE_USAGE, "name")
        return self._delete_now(commands.plan_vault_delete(session, name))

    def _exec_account_delete(self, parsed: ParsedLine, session: Session) -> ResultEntry | None:
        (name,) = dispatcher.require_flags(parsed, dispatcher.ACCOUNT_DELETE_USAGE, "name")
        return self._delete_now(commands.plan_account_delete(session, name))

    def _exec_account_password(self, parsed: ParsedLine, session: Session) -> ResultEntry:
        (name,) = dispatcher.require_flags(parsed, dispatcher.ACCOUNT_PASSWORD_USAGE, "name")
        return commands.copy_password(session, name, echo_secret=False)

    def _delete_now(self, operation: PendingOperation) -> ResultEntry | None:
        if not self.confirm(_confirm_question(operation)):
            return None
        return commands.execute_pending(self.session, operation)
