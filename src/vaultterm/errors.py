"""Custom exception hierarchy for vaultterm."""


class AppError(Exception):
    """Base exception for app-specific failures."""


class UsageError(ValueError, AppError):
    """Required flags missing or malformed command input."""


class ValidationError(ValueError, AppError):
    """Domain validation errors."""


class NotFoundError(LookupError, AppError):
    """Named vault or account does not exist."""


class UnavailableError(AppError):
    """Action needs a collaborator that is not available in this context."""


class UnknownCommandError(UsageError):
    """Verb or sub-verb not in the dispatch table."""


class ConfirmationError(AppError):
    """Input received while a destructive operation awaits confirmation."""


class ConfigError(ValueError, AppError):
    """Profile/configuration validation errors."""


class StorageError(AppError):
    """Storage load/save failures."""
