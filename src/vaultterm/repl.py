"""Terminal host: prompt_toolkit loop around the interpreter and quick bar."""

import os
import time
import traceback
from collections.abc import Callable

import pyperclip
from prompt_toolkit import PromptSession
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear as clear_screen
from prompt_toolkit.shortcuts import confirm as confirm_prompt

from vaultterm.collaborators import VaultStore
from vaultterm.constants import ACTION_DELAY_SECONDS, HOST_NAME, WELCOME_MESSAGE
from vaultterm.errors import UnavailableError
from vaultterm.formatters import format_entry
from vaultterm.interpreter import Interpreter
from vaultterm.logging_utils import log_event
from vaultterm.models import Page
from vaultterm.quick import QUICK_HELP, QuickCommandBar


def _report_unexpected_error(error: Exception) -> None:
    """Print an unexpected exception with optional debug traceback."""
    print(f"ERROR: {error}")
    if os.getenv("VAULTTERM_DEBUG"):
        print("Debug traceback:")
        traceback.print_exc()


def copy_to_clipboard(text: str) -> None:
    """Clipboard collaborator backed by the system clipboard."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise UnavailableError(f"Clipboard not available in this context: {e}") from e


def render_page_summary(page: Page, store: VaultStore) -> str:
    """One-screen stand-in for the page the host navigated to."""
    vaults = store.list_vaults()
    accounts = store.list_accounts()

    if page == Page.VAULTS:
        names = ", ".join(vault.name for vault in vaults) or "none"
        return f"[vaults] {len(vaults)} vault(s): {names}"
    if page == Page.ACCOUNTS:
        names = ", ".join(account.name for account in accounts) or "none"
        return f"[accounts] {len(accounts)} account(s): {names}"
    if page == Page.PROFILE:
        return "[profile] Edit the profile JSON file to change settings."
    return f"[overview] {len(vaults)} vault(s), {len(accounts)} account(s)"


class DelayedCallbacks:
    """Scheduler that holds side effects until the host has printed output.

    The prompt loop is single-threaded, so callbacks run between prompts.
    """

    def __init__(self) -> None:
        self._queue: list[tuple[float, Callable[[], None]]] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> None:
        self._queue.append((delay, callback))

    def run(self) -> None:
        pending, self._queue = self._queue, []
        for delay, callback in pending:
            time.sleep(delay)
            callback()


class TerminalHost:
    """Full interpreter session on the terminal."""

    def __init__(
        self,
        store: VaultStore,
        username: str,
        action_delay: float = ACTION_DELAY_SECONDS,
    ) -> None:
        self.store = store
        self.username = username
        self.running = True
        self.callbacks = DelayedCallbacks()
        self.interpreter = Interpreter(
            store=store,
            navigator=self.navigate,
            exit_handler=self.stop,
            clipboard=copy_to_clipboard,
            scheduler=self.callbacks,
            action_delay=action_delay,
        )

    def navigate(self, page: Page) -> None:
        print(render_page_summary(page, self.store))

    def stop(self) -> None:
        self.running = False

    def build_key_bindings(self) -> KeyBindings:
        """Up/Down walk the command history, Tab takes the first suggestion."""
        key_bindings = KeyBindings()

        def _replace(buffer: Buffer, text: str) -> None:
            buffer.document = Document(text, len(text))

        @key_bindings.add("up", eager=True)
        def _handle_up(event) -> None:
            _replace(event.current_buffer, self.interpreter.recall_previous())

        @key_bindings.add("down", eager=True)
        def _handle_down(event) -> None:
            _replace(event.current_buffer, self.interpreter.recall_next())

        @key_bindings.add("tab", eager=True)
        def _handle_tab(event) -> None:
            _replace(event.current_buffer, self.interpreter.complete())

        return key_bindings

    def bottom_toolbar(self) -> str:
        suggestions = self.interpreter.suggestions
        if not suggestions:
            return ""
        return " Suggestions: " + "  |  ".join(suggestions)

    def create_prompt_session(self) -> PromptSession:
        session: PromptSession = PromptSession(
            key_bindings=self.build_key_bindings(),
            bottom_toolbar=self.bottom_toolbar,
        )
        session.default_buffer.on_text_changed += lambda buffer: self.interpreter.set_buffer(
            buffer.text
        )
        return session

    def print_entries(self, entries) -> None:
        for entry in entries:
            print(format_entry(entry, self.store))
            print()

    def run(self) -> None:
        """Run the prompt loop until `exit` or Ctrl-D."""
        prompt_session = self.create_prompt_session()
        print(WELCOME_MESSAGE)
        print()

        while self.running:
            try:
                line = prompt_session.prompt(f"{self.username}@{HOST_NAME} $ ")
                entries = self.interpreter.submit(line)
                if line.strip() and not len(self.interpreter.log):
                    clear_screen()
                self.print_entries(entries)
                self.callbacks.run()

            except EOFError:
                print()
                break

            except KeyboardInterrupt:
                print()
                continue

            except Exception as e:
                _report_unexpected_error(e)


class QuickHost:
    """Quick-command bar on the terminal; `exit` returns to the overview."""

    def __init__(self, store: VaultStore) -> None:
        self.store = store
        self.running = True
        self.bar = QuickCommandBar(
            store=store,
            navigator=self.navigate,
            confirm=self.confirm,
            clipboard=copy_to_clipboard,
        )

    def navigate(self, page: Page) -> None:
        print(render_page_summary(page, self.store))
        if page == Page.OVERVIEW:
            self.running = False

    @staticmethod
    def confirm(question: str) -> bool:
        return confirm_prompt(question)

    def bottom_toolbar(self) -> str:
        entry = self.bar.feedback
        if entry is None:
            return ""
        return " " + format_entry(entry, self.store).replace("\n", " ")

    def run(self) -> None:
        prompt_session: PromptSession = PromptSession(
            bottom_toolbar=self.bottom_toolbar,
            refresh_interval=0.5,
        )
        print(QUICK_HELP)

        while self.running:
            try:
                line = prompt_session.prompt(": ")
                self.bar.submit(line)

            except EOFError:
                print()
                break

            except KeyboardInterrupt:
                print()
                continue

            except Exception as e:
                _report_unexpected_error(e)


def run(store: VaultStore, username: str, action_delay: float = ACTION_DELAY_SECONDS) -> None:
    """Run the full interpreter until the user exits."""
    started = time.perf_counter()
    TerminalHost(store, username, action_delay).run()
    log_event("app_stop", reason="exit", uptime_ms=round((time.perf_counter() - started) * 1000))


def run_quick(store: VaultStore) -> None:
    """Run the quick-command bar until the user returns to the overview."""
    started = time.perf_counter()
    QuickHost(store).run()
    log_event("app_stop", reason="overview", uptime_ms=round((time.perf_counter() - started) * 1000))
