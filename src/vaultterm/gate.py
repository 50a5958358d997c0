"""Single-slot confirmation gate for destructive operations."""

from enum import Enum

from vaultterm.errors import ConfirmationError
from vaultterm.models import PendingOperation

CONFIRM_TOKENS = frozenset(("yes", "confirm"))
CANCEL_TOKENS = frozenset(("cancel", "no"))


class GateDecision(str, Enum):
    """Outcome of feeding one line to an armed gate."""

    CONFIRM = "confirm"
    CANCEL = "cancel"
    REJECT = "reject"


class ConfirmationGate:
    """Holds at most one pending operation.

    Idle while `pending` is None; awaiting confirmation otherwise.
    """

    def __init__(self) -> None:
        self._pending: PendingOperation | None = None

    @property
    def pending(self) -> PendingOperation | None:
        return self._pending

    @property
    def awaiting(self) -> bool:
        return self._pending is not None

    def arm(self, operation: PendingOperation) -> None:
        """Store an operation until the next confirm/cancel line."""
        if self._pending is not None:
            raise ConfirmationError(
                f'Operation on "{self._pending.target_name}" is already awaiting confirmation.'
            )
        self._pending = operation

    def resolve(self, line: str) -> tuple[GateDecision, PendingOperation]:
        """Classify a line against the pending operation.

        CONFIRM and CANCEL clear the slot; REJECT keeps it.
        """
        if self._pending is None:
            raise ConfirmationError("No operation is awaiting confirmation.")

        operation = self._pending
        token = line.strip().lower()

        if token in CONFIRM_TOKENS:
            self._pending = None
            return GateDecision.CONFIRM, operation
        if token in CANCEL_TOKENS:
            self._pending = None
            return GateDecision.CANCEL, operation
        return GateDecision.REJECT, operation
