"""The full command interpreter: gate, router, log, history and suggestions."""

import logging
import time

from vaultterm import commands, dispatcher
from vaultterm.collaborators import (
    Clipboard,
    ExitHandler,
    Navigator,
    Scheduler,
    VaultStore,
    run_now,
)
from vaultterm.constants import ACTION_DELAY_SECONDS
from vaultterm.errors import AppError
from vaultterm.gate import ConfirmationGate, GateDecision
from vaultterm.history import HistoryNavigator
from vaultterm.logging_utils import log_event, redact_flags
from vaultterm.models import ResultEntry
from vaultterm.parser import ParsedLine, parse_line
from vaultterm.result_log import ResultLog
from vaultterm.session import Session
from vaultterm.suggestions import suggest

CONFIRMATION_REMINDER = 'Please type "yes" or "confirm" to proceed, or "cancel" to abort.'


class Interpreter:
    """Processes one submitted line at a time and narrates into `log`."""

    def __init__(
        self,
        store: VaultStore,
        navigator: Navigator | None = None,
        exit_handler: ExitHandler | None = None,
        clipboard: Clipboard | None = None,
        scheduler: Scheduler = run_now,
        action_delay: float = ACTION_DELAY_SECONDS,
    ) -> None:
        self.gate = ConfirmationGate()
        self.session = Session(
            store=store,
            navigator=navigator,
            exit_handler=exit_handler,
            clipboard=clipboard,
            scheduler=scheduler,
            action_delay=action_delay,
            gate=self.gate,
        )
        self.log = ResultLog()
        self.history = HistoryNavigator()
        self._buffer = ""
        self._suggestions: list[str] = []

    # -- input buffer ------------------------------------------------------

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def suggestions(self) -> list[str]:
        return list(self._suggestions)

    def set_buffer(self, text: str) -> None:
        """Replace the live input and recompute suggestions."""
        self._buffer = text
        self._suggestions = suggest(text)

    def recall_previous(self) -> str:
        text = self.history.previous()
        if text is not None:
            self.set_buffer(text)
        return self._buffer

    def recall_next(self) -> str:
        text = self.history.next()
        if text is not None:
            self.set_buffer(text)
        return self._buffer

    def complete(self) -> str:
        """Replace the buffer with the first suggestion, if any."""
        if self._suggestions:
            self._buffer = self._suggestions[0]
        self._suggestions = []
        return self._buffer

    # -- submission --------------------------------------------------------

    def submit_buffer(self) -> tuple[ResultEntry, ...]:
        return self.submit(self._buffer)

    def submit(self, line: str) -> tuple[ResultEntry, ...]:
        """Process one raw line; returns the entries it appended."""
        trimmed = line.strip()
        if not trimmed:
            return ()

        start = len(self.log)
        self.log.append(ResultEntry.info(f"> {trimmed}"))
        self._buffer = ""
        self._suggestions = []

        if self.gate.awaiting:
            self._answer_gate(trimmed)
        else:
            parsed = parse_line(trimmed)
            if parsed is not None:
                self.history.record(trimmed)
                self._dispatch(parsed)

        return self.log.since(start) if len(self.log) > start else ()

    def _answer_gate(self, line: str) -> None:
        decision, operation = self.gate.resolve(line)
        log_event(
            "confirmation",
            decision=decision.value,
            operation=operation.kind.value,
            target_id=operation.target_id,
        )

        if decision == GateDecision.REJECT:
            self.log.append(ResultEntry.error(CONFIRMATION_REMINDER))
            return

        self.history.record(line)
        if decision == GateDecision.CANCEL:
            self.log.append(ResultEntry.info("Operation cancelled."))
            return

        try:
            self.log.append(commands.execute_pending(self.session, operation))
        except AppError as e:
            self.log.append(ResultEntry.error(str(e)))
        except Exception as e:
            log_event(
                "command_error",
                level=logging.ERROR,
                verb=operation.kind.value,
                error_type=type(e).__name__,
                error=str(e),
            )
            self.log.append(ResultEntry.error(f"Unexpected error: {e}"))

    def _dispatch(self, parsed: ParsedLine) -> None:
        started = time.perf_counter()
        try:
            handler, entry = dispatcher.execute_command(parsed, self.session)
        except Exception as e:
            self.session.deferred.clear()
            self._report_failure(parsed, e)
            return

        if handler.clears_log:
            self.log.clear()
        elif entry is not None:
            self.log.append(entry)

        log_event(
            "command_exec",
            verb=parsed.verb,
            sub_verb=parsed.sub_verb,
            flags=redact_flags(parsed.flags),
            result_kind=entry.kind.value if entry is not None else None,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        try:
            self.session.flush_deferred()
        except Exception as e:
            self._report_failure(parsed, e)

    def _report_failure(self, parsed: ParsedLine, error: Exception) -> None:
        """Log a failed command and append it as an Error entry."""
        if isinstance(error, AppError):
            self._log_error(parsed, error)
            self.log.append(ResultEntry.error(str(error)))
        else:
            self._log_error(parsed, error, level=logging.ERROR)
            self.log.append(ResultEntry.error(f"Unexpected error: {error}"))

    @staticmethod
    def _log_error(parsed: ParsedLine, error: Exception, level: int = logging.WARNING) -> None:
        log_event(
            "command_error",
            level=level,
            verb=parsed.verb,
            sub_verb=parsed.sub_verb,
            flags=redact_flags(parsed.flags),
            error_type=type(error).__name__,
            error=str(error),
        )
