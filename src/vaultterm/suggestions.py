"""Prefix completion over the fixed command vocabulary."""

SUGGESTION_LIMIT = 5

COMMAND_VOCABULARY = (
    "help",
    "clear",
    "exit",
    "open vaults",
    "open accounts",
    "open profile",
    "open overview",
    "vault list",
    "vault create",
    "vault update",
    "vault delete",
    "vault show",
    "account list",
    "account create",
    "account update",
    "account delete",
    "account show",
    "account password",
    "search",
    "stats",
)


def suggest(
    buffer: str,
    vocabulary: tuple[str, ...] = COMMAND_VOCABULARY,
    limit: int = SUGGESTION_LIMIT,
) -> list[str]:
    """Return up to `limit` vocabulary entries starting with `buffer`.

    Matching is case-insensitive and keeps declaration order.
    """
    if not buffer.strip():
        return []

    prefix = buffer.lower()
    matches = [entry for entry in vocabulary if entry.lower().startswith(prefix)]
    return matches[:limit]

