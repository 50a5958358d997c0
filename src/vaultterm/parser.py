"""Command-line tokenizer shared by the full interpreter and the quick bar."""

import re
from dataclasses import dataclass, field

# --name "quoted value" | --name bare-value | --name (no value)
_FLAG_RE = re.compile(
    r'(?<!\S)--(?P<name>\w+)(?:\s+(?:"(?P<quoted>[^"]*)"|(?P<bare>(?!--)[^\s"]\S*)))?'
)


@dataclass(frozen=True)
class ParsedLine:
    """A tokenized command line.

    `verb` and `sub_verb` are lower-cased for dispatch. `remainder` is the
    text after the verb, verbatim. `flags` maps flag names to values (last
    occurrence wins); `switches` holds flags given without a value.
    """

    raw: str
    verb: str
    sub_verb: str = ""
    remainder: str = ""
    flags: dict[str, str] = field(default_factory=dict)
    switches: frozenset[str] = frozenset()

    def flag(self, name: str) -> str | None:
        """Return a non-empty flag value, or None when absent or empty."""
        value = self.flags.get(name)
        return value if value else None

    def has_switch(self, name: str) -> bool:
        """Return True if the flag was given, with or without a value."""
        return name in self.switches or name in self.flags


def parse_flags(line: str) -> tuple[dict[str, str], frozenset[str]]:
    """Scan a line for `--name value` pairs.

    Returns (flags, switches). A flag that repeats keeps its last value; a
    flag with no following value lands in switches instead of flags.
    """
    flags: dict[str, str] = {}
    switches: set[str] = set()

    for match in _FLAG_RE.finditer(line):
        name = match.group("name")
        quoted = match.group("quoted")
        bare = match.group("bare")

        if quoted is not None:
            flags[name] = quoted
            switches.discard(name)
        elif bare is not None:
            flags[name] = bare
            switches.discard(name)
        else:
            switches.add(name)

    return flags, frozenset(switches)


def parse_line(line: str) -> ParsedLine | None:
    """Parse a raw command line; blank input yields None."""
    trimmed = line.strip()
    if not trimmed:
        return None

    parts = trimmed.split(maxsplit=2)
    verb = parts[0].lower()
    sub_verb = parts[1].lower() if len(parts) > 1 else ""

    remainder = trimmed[len(parts[0]):].strip()
    flags, switches = parse_flags(trimmed)

    return ParsedLine(
        raw=trimmed,
        verb=verb,
        sub_verb=sub_verb,
        remainder=remainder,
        flags=flags,
        switches=switches,
    )
