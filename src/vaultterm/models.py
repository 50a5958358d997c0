"""Typed domain models and result payload DTOs for vaultterm."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping


class ResultKind(str, Enum):
    """Kinds of entries the interpreter appends to its result log."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    PROMPT = "prompt"


class PendingKind(str, Enum):
    """Destructive operations that wait for confirmation."""

    DELETE_VAULT = "delete_vault"
    DELETE_ACCOUNT = "delete_account"


class Page(str, Enum):
    """Pages the host application can navigate to."""

    VAULTS = "vaults"
    ACCOUNTS = "accounts"
    PROFILE = "profile"
    OVERVIEW = "overview"


def _parse_timestamp(value: Any, field_name: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be an ISO-8601 string")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Vault:
    """A named container of accounts."""

    id: str
    name: str
    description: str = ""
    created_at: datetime = field(default_factory=utc_now)
    modified_at: datetime = field(default_factory=utc_now)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Vault":
        """Create vault from a dict-like payload."""
        missing = {"id", "name", "created_at", "modified_at"} - set(payload.keys())
        if missing:
            raise ValueError(f"Vault missing required fields: {', '.join(sorted(missing))}")

        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            description=str(payload.get("description") or ""),
            created_at=_parse_timestamp(payload["created_at"], "created_at"),
            modified_at=_parse_timestamp(payload["modified_at"], "modified_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize vault to dict payload."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "created_at": self.created_at.isoformat(),
            "modified_at": self.modified_at.isoformat(),
        }


@dataclass
class Account:
    """Credentials stored inside a vault."""

    id: str
    vault_id: str
    name: str
    username: str
    password: str
    url: str = ""
    notes: str = ""
    created_at: datetime = field(default_factory=utc_now)
    modified_at: datetime = field(default_factory=utc_now)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Account":
        """Create account from a dict-like payload."""
        required_fields = {
            "id", "vault_id", "name", "username", "password", "created_at", "modified_at",
        }
        missing = required_fields - set(payload.keys())
        if missing:
            raise ValueError(f"Account missing required fields: {', '.join(sorted(missing))}")

        return cls(
            id=str(payload["id"]),
            vault_id=str(payload["vault_id"]),
            name=str(payload["name"]),
            username=str(payload["username"]),
            password=str(payload["password"]),
            url=str(payload.get("url") or ""),
            notes=str(payload.get("notes") or ""),
            created_at=_parse_timestamp(payload["created_at"], "created_at"),
            modified_at=_parse_timestamp(payload["modified_at"], "modified_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize account to dict payload."""
        return {
            "id": self.id,
            "vault_id": self.vault_id,
            "name": self.name,
            "username": self.username,
            "password": self.password,
            "url": self.url,
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
            "modified_at": self.modified_at.isoformat(),
        }


VAULT_UPDATE_FIELDS = frozenset(("name", "description"))
ACCOUNT_UPDATE_FIELDS = frozenset(("name", "username", "password", "url", "notes"))


@dataclass(frozen=True)
class VaultDraft:
    """Fields supplied when creating a vault."""

    name: str
    description: str = ""


@dataclass(frozen=True)
class AccountDraft:
    """Fields supplied when creating an account."""

    vault_id: str
    name: str
    username: str
    password: str
    url: str = ""
    notes: str = ""


@dataclass(frozen=True)
class VaultListPayload:
    vault_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class AccountListPayload:
    account_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class VaultDetailPayload:
    vault_id: str
    account_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class AccountDetailPayload:
    """Account detail; `reveal` lets the renderer show the plaintext secret."""

    account_id: str
    vault_id: str
    reveal: bool = False


@dataclass(frozen=True)
class SearchResultsPayload:
    vault_ids: tuple[str, ...] = ()
    account_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class StatsPayload:
    total_vaults: int
    total_accounts: int
    recent_account_ids: tuple[str, ...] = ()


StructuredPayload = (
    VaultListPayload
    | AccountListPayload
    | VaultDetailPayload
    | AccountDetailPayload
    | SearchResultsPayload
    | StatsPayload
)


@dataclass(frozen=True)
class ResultEntry:
    """One immutable, renderable line of interpreter output."""

    kind: ResultKind
    message: str
    payload: StructuredPayload | None = None

    @classmethod
    def success(cls, message: str, payload: StructuredPayload | None = None) -> "ResultEntry":
        return cls(ResultKind.SUCCESS, message, payload)

    @classmethod
    def error(cls, message: str) -> "ResultEntry":
        return cls(ResultKind.ERROR, message)

    @classmethod
    def info(cls, message: str) -> "ResultEntry":
        return cls(ResultKind.INFO, message)

    @classmethod
    def prompt(cls, message: str) -> "ResultEntry":
        return cls(ResultKind.PROMPT, message)


@dataclass(frozen=True)
class PendingOperation:
    """A destructive action stored until the user confirms or cancels it."""

    kind: PendingKind
    target_id: str
    target_name: str
    cascade_count: int = 0


@dataclass
class Profile:
    """In-memory profile model."""

    username: str
    data_path: str
    logs_dir: str | None = None
    action_delay: float = 0.5

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Profile":
        """Create profile model from dict payload."""
        logs_dir = payload.get("logs_dir")
        return cls(
            username=str(payload["username"]),
            data_path=str(payload["data_path"]),
            logs_dir=None if logs_dir is None else str(logs_dir),
            action_delay=float(payload.get("action_delay", 0.5)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize profile model to dict payload."""
        return {
            "username": self.username,
            "data_path": self.data_path,
            "logs_dir": self.logs_dir,
            "action_delay": self.action_delay,
        }
