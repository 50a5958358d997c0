"""Command dispatching for the vaultterm interpreter."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from vaultterm import commands
from vaultterm.errors import UnavailableError, UnknownCommandError, UsageError
from vaultterm.models import PendingOperation, ResultEntry
from vaultterm.parser import ParsedLine
from vaultterm.session import Session

Executor = Callable[[ParsedLine, Session], ResultEntry | None]


class Verb(str, Enum):
    """Every top-level command the router knows."""

    HELP = "help"
    CLEAR = "clear"
    EXIT = "exit"
    OPEN = "open"
    VAULT = "vault"
    ACCOUNT = "account"
    SEARCH = "search"
    STATS = "stats"


VERB_ALIASES = {
    "quit": "exit",
    "--help": "help",
    "-h": "help",
}
ACTION_ALIASES = {
    "ls": "list",
    "rm": "delete",
}


@dataclass
class CommandHandler:
    """Defines how to execute a command or sub-command."""

    executor: Executor
    clears_log: bool = False
    usage: str = ""
    summary: str = ""


def resolve_verb(token: str) -> Verb | None:
    """Expand aliases and map a lower-cased token onto the verb set."""
    try:
        return Verb(VERB_ALIASES.get(token, token))
    except ValueError:
        return None


def resolve_action(token: str) -> str:
    return ACTION_ALIASES.get(token, token)


def require_flags(parsed: ParsedLine, usage: str, *names: str) -> list[str]:
    """Return the values of required flags or raise a usage error."""
    values: list[str] = []
    for name in names:
        value = parsed.flag(name)
        if value is None:
            raise UsageError(f"Usage: {usage}")
        values.append(value)
    return values


# -- vault actions ---------------------------------------------------------

VAULT_CREATE_USAGE = 'vault create --name "Vault Name" [--description "Description"]'
VAULT_UPDATE_USAGE = (
    'vault update --name "Vault Name" [--newname "New Name"] [--description "New Description"]'
)
VAULT_DELETE_USAGE = 'vault delete --name "Vault Name"'
VAULT_SHOW_USAGE = 'vault show --name "Vault Name"'


def _exec_vault_list(parsed: ParsedLine, session: Session) -> ResultEntry:
    return commands.list_vaults(session)


def _exec_vault_create(parsed: ParsedLine, session: Session) -> ResultEntry:
    (name,) = require_flags(parsed, VAULT_CREATE_USAGE, "name")
    return commands.create_vault(session, name, parsed.flag("description") or "")


def _exec_vault_update(parsed: ParsedLine, session: Session) -> ResultEntry:
    (name,) = require_flags(parsed, VAULT_UPDATE_USAGE, "name")
    return commands.update_vault(
        session,
        name,
        new_name=parsed.flag("newname"),
        description=parsed.flag("description"),
    )


def _exec_vault_delete(parsed: ParsedLine, session: Session) -> ResultEntry:
    (name,) = require_flags(parsed, VAULT_DELETE_USAGE, "name")
    return _arm_gate(session, commands.plan_vault_delete(session, name))


def _exec_vault_show(parsed: ParsedLine, session: Session) -> ResultEntry:
    (name,) = require_flags(parsed, VAULT_SHOW_USAGE, "name")
    return commands.show_vault(session, name)


# -- account actions -------------------------------------------------------

ACCOUNT_LIST_USAGE = 'account list [--vault "Vault Name"]'
ACCOUNT_CREATE_USAGE = (
    'account create --vault "Vault Name" --name "Account Name" --username "user" '
    '--password "pass" [--url "https://..."] [--notes "notes"]'
)
ACCOUNT_UPDATE_USAGE = (
    'account update --name "Account Name" [--newname "New Name"] [--username "user"] '
    '[--password "pass"] [--url "url"] [--notes "notes"]'
)
ACCOUNT_DELETE_USAGE = 'account delete --name "Account Name"'
ACCOUNT_SHOW_USAGE = 'account show --name "Account Name" [--reveal]'
ACCOUNT_PASSWORD_USAGE = 'account password --name "Account Name"'


def _exec_account_list(parsed: ParsedLine, session: Session) -> ResultEntry:
    return commands.list_accounts(session, parsed.flag("vault"))


def _exec_account_create(parsed: ParsedLine, session: Session) -> ResultEntry:
    vault, name, username, password = require_flags(
        parsed, ACCOUNT_CREATE_USAGE, "vault", "name", "username", "password"
    )
    return commands.create_account(
        session,
        vault,
        name,
        username,
        password,
        url=parsed.flag("url") or "",
        notes=parsed.flag("notes") or "",
    )


def _exec_account_update(parsed: ParsedLine, session: Session) -> ResultEntry:
    (name,) = require_flags(parsed, ACCOUNT_UPDATE_USAGE, "name")
    return commands.update_account(
        session,
        name,
        new_name=parsed.flag("newname"),
        username=parsed.flag("username"),
        password=parsed.flag("password"),
        url=parsed.flag("url"),
        notes=parsed.flag("notes"),
    )


def _exec_account_delete(parsed: ParsedLine, session: Session) -> ResultEntry:
    (name,) = require_flags(parsed, ACCOUNT_DELETE_USAGE, "name")
    return _arm_gate(session, commands.plan_account_delete(session, name))


def _exec_account_show(parsed: ParsedLine, session: Session) -> ResultEntry:
    (name,) = require_flags(parsed, ACCOUNT_SHOW_USAGE, "name")
    return commands.show_account(session, name, reveal=parsed.has_switch("reveal"))


def _exec_account_password(parsed: ParsedLine, session: Session) -> ResultEntry:
    (name,) = require_flags(parsed, ACCOUNT_PASSWORD_USAGE, "name")
    return commands.copy_password(session, name)


def _arm_gate(session: Session, operation: PendingOperation) -> ResultEntry:
    """Park a deletion behind the confirmation gate."""
    if session.gate is None:
        raise UnavailableError("Confirmation is not available in this context.")
    session.gate.arm(operation)
    return ResultEntry.prompt(commands.confirmation_prompt(operation))


VAULT_ACTIONS = {
    "list": CommandHandler(_exec_vault_list, usage="vault list", summary="List all vaults"),
    "create": CommandHandler(_exec_vault_create, usage=VAULT_CREATE_USAGE, summary="Create new vault"),
    "update": CommandHandler(_exec_vault_update, usage=VAULT_UPDATE_USAGE, summary="Update vault"),
    "delete": CommandHandler(_exec_vault_delete, usage=VAULT_DELETE_USAGE, summary="Delete vault"),
    "show": CommandHandler(_exec_vault_show, usage=VAULT_SHOW_USAGE, summary="Show vault details"),
}

ACCOUNT_ACTIONS = {
    "list": CommandHandler(_exec_account_list, usage=ACCOUNT_LIST_USAGE, summary="List accounts"),
    "create": CommandHandler(_exec_account_create, usage=ACCOUNT_CREATE_USAGE, summary="Create new account"),
    "update": CommandHandler(_exec_account_update, usage=ACCOUNT_UPDATE_USAGE, summary="Update account"),
    "delete": CommandHandler(_exec_account_delete, usage=ACCOUNT_DELETE_USAGE, summary="Delete account"),
    "show": CommandHandler(_exec_account_show, usage=ACCOUNT_SHOW_USAGE, summary="Show account details"),
    "password": CommandHandler(
        _exec_account_password, usage=ACCOUNT_PASSWORD_USAGE, summary="Copy password to clipboard"
    ),
}

_HELP_EXAMPLES = {
    "vault": (
        'vault create --name "Personal" --description "My personal accounts"',
        'vault update --name "Personal" --newname "Private"',
        'vault delete --name "Old Vault"',
    ),
    "account": (
        'account create --vault "Personal" --name "Gmail" --username "user@gmail.com" --password "pass123"',
        'account update --name "Gmail" --password "newpass456"',
        'account password --name "Gmail"',
    ),
    "search": (
        "search gmail",
        "search personal",
    ),
}


def select_action(
    domain: str,
    actions: dict[str, CommandHandler],
    token: str,
) -> CommandHandler:
    """Look up a sub-verb in a domain's action table."""
    handler = actions.get(resolve_action(token))
    if handler is None:
        raise UnknownCommandError(f"Unknown {domain} command. Use: {', '.join(actions)}")
    return handler


def _exec_vault(parsed: ParsedLine, session: Session) -> ResultEntry | None:
    return select_action("vault", VAULT_ACTIONS, parsed.sub_verb).executor(parsed, session)


def _exec_account(parsed: ParsedLine, session: Session) -> ResultEntry | None:
    return select_action("account", ACCOUNT_ACTIONS, parsed.sub_verb).executor(parsed, session)


def _exec_help(parsed: ParsedLine, session: Session) -> ResultEntry:
    if not parsed.sub_verb:
        return ResultEntry.info(render_help_text())
    return ResultEntry.info(render_topic_help(parsed.sub_verb))


def _exec_clear(parsed: ParsedLine, session: Session) -> None:
    return None


def _exec_exit(parsed: ParsedLine, session: Session) -> ResultEntry:
    return commands.request_exit(session)


def _exec_open(parsed: ParsedLine, session: Session) -> ResultEntry:
    return commands.open_page(session, parsed.sub_verb)


def _exec_search(parsed: ParsedLine, session: Session) -> ResultEntry:
    return commands.search(session, parsed.remainder)


def _exec_stats(parsed: ParsedLine, session: Session) -> ResultEntry:
    return commands.stats(session)


COMMAND_REGISTRY: dict[Verb, CommandHandler] = {
    Verb.HELP: CommandHandler(
        _exec_help, usage="help [topic]", summary="Show help (topics: vault, account, search)"
    ),
    Verb.CLEAR: CommandHandler(_exec_clear, clears_log=True, usage="clear", summary="Clear terminal output"),
    Verb.STATS: CommandHandler(_exec_stats, usage="stats", summary="Show system statistics"),
    Verb.EXIT: CommandHandler(_exec_exit, usage="exit", summary="Exit CLI and return to overview"),
    Verb.OPEN: CommandHandler(_exec_open, usage="open <page>", summary="Open vaults, accounts, profile or overview"),
    Verb.VAULT: CommandHandler(_exec_vault, usage="vault <action>", summary="Vault management"),
    Verb.ACCOUNT: CommandHandler(_exec_account, usage="account <action>", summary="Account management"),
    Verb.SEARCH: CommandHandler(_exec_search, usage="search <query>", summary="Search vaults and accounts"),
}

_HELP_TOPIC_TABLES = {
    "vault": VAULT_ACTIONS,
    "account": ACCOUNT_ACTIONS,
    "search": {"search": COMMAND_REGISTRY[Verb.SEARCH]},
}


def render_help_text() -> str:
    """Render the overview help from registry metadata."""
    general = [COMMAND_REGISTRY[verb] for verb in (Verb.HELP, Verb.CLEAR, Verb.STATS, Verb.EXIT)]
    sections: list[tuple[str, list[tuple[str, str]]]] = [
        ("GENERAL", [(h.usage, h.summary) for h in general]),
        ("NAVIGATION", [
            ("open overview", "Return to overview page"),
            ("open vaults", "Open vaults management page"),
            ("open accounts", "Open accounts management page"),
            ("open profile", "Open profile settings page"),
        ]),
        ("VAULT MANAGEMENT", [(f"vault {name}", h.summary) for name, h in VAULT_ACTIONS.items()]),
        ("ACCOUNT MANAGEMENT", [(f"account {name}", h.summary) for name, h in ACCOUNT_ACTIONS.items()]),
        ("OTHER", [(COMMAND_REGISTRY[Verb.SEARCH].usage, COMMAND_REGISTRY[Verb.SEARCH].summary)]),
    ]
    width = max(len(usage) for _, rows in sections for usage, _ in rows)

    lines = ["VAULTTERM CLI - Available Commands:", ""]
    for title, rows in sections:
        lines.append(f"{title}:")
        for usage, summary in rows:
            lines.append(f"  {usage.ljust(width)} - {summary}")
        lines.append("")

    lines.append('Type "help <topic>" for detailed information (e.g., "help vault")')
    lines.append("Use Tab for auto-completion, Up/Down for history")
    return "\n".join(lines)


def render_topic_help(topic: str) -> str:
    """Detailed usage for one help topic."""
    table = _HELP_TOPIC_TABLES.get(topic)
    if table is None:
        raise UsageError(f'No help available for "{topic}". Try: {", ".join(_HELP_TOPIC_TABLES)}')

    lines = [f"{topic.upper()} COMMANDS:"]
    for handler in table.values():
        lines.append(f"  {handler.usage}")
    lines.append("")
    lines.append("EXAMPLES:")
    for example in _HELP_EXAMPLES[topic]:
        lines.append(f"  {example}")
    return "\n".join(lines)


def execute_command(parsed: ParsedLine, session: Session) -> tuple[CommandHandler, ResultEntry | None]:
    """Route one parsed line to its handler and run it."""
    verb = resolve_verb(parsed.verb)
    if verb is None:
        raise UnknownCommandError(
            f'Unknown command: "{parsed.verb}". Type "help" for available commands.'
        )

    handler = COMMAND_REGISTRY[verb]
    return handler, handler.executor(parsed, session)
