"""Profile management: loading, creation, and path mapping."""

import getpass
import json
from pathlib import Path
from typing import Any

from vaultterm.constants import DEFAULT_DATA_FILENAME, DEFAULT_LOGS_DIRNAME
from vaultterm.errors import ConfigError
from vaultterm.models import Profile

PACKAGE_ROOT = Path(__file__).resolve().parent


def _non_empty_string(profile: dict[str, Any], field_name: str) -> str:
    value = profile.get(field_name)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{field_name} must be a non-empty string")
    return value


def map_path(path: str, profile_dir: str | None = None) -> str:
    """Resolve a profile path string to an absolute path string.

    ~ or ~/...  -> user home directory
    @ or @/...  -> vaultterm package directory
    Absolute    -> used as-is
    Relative    -> resolved against profile_dir; error when it is None
    """
    if "\0" in path:
        raise ConfigError("Path cannot contain NUL bytes")

    if path == "@" or path.startswith("@/"):
        return str((PACKAGE_ROOT / path[2:]).resolve())

    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return str(candidate.resolve())

    if profile_dir is not None:
        return str((Path(profile_dir) / candidate).resolve())

    raise ConfigError(
        "Relative profile paths are not supported. "
        "Use an absolute path or start with '~/' or '@/'."
    )


def validate_profile(profile: dict[str, Any]) -> None:
    """Validate profile structure.

    Raises:
        ConfigError: If profile is invalid
    """
    if not isinstance(profile, dict):
        raise ConfigError("Profile must be a JSON object")

    required_fields = ["username", "data_path"]
    missing = [f for f in required_fields if f not in profile]
    if missing:
        raise ConfigError(f"Profile missing required fields: {', '.join(missing)}")

    _non_empty_string(profile, "username")
    _non_empty_string(profile, "data_path")

    if profile.get("logs_dir") is not None:
        _non_empty_string(profile, "logs_dir")

    if "action_delay" in profile:
        delay = profile["action_delay"]
        # bool is an int subclass
        if isinstance(delay, bool) or not isinstance(delay, (int, float)):
            raise ConfigError("action_delay must be a number")
        if delay < 0:
            raise ConfigError("action_delay cannot be negative")


def _map_profile_paths(raw: dict[str, Any], profile_dir: str) -> None:
    raw["data_path"] = map_path(raw["data_path"], profile_dir)
    if raw.get("logs_dir") is not None:
        raw["logs_dir"] = map_path(raw["logs_dir"], profile_dir)


def load_profile(path: str) -> Profile:
    """Load and validate profile from JSON file.

    Returns:
        Profile model with absolute paths

    Raises:
        FileNotFoundError: If profile doesn't exist
        ConfigError: If profile path/profile data is invalid
    """
    profile_path = Path(map_path(path))

    if not profile_path.exists():
        raise FileNotFoundError(
            f"Profile not found: {profile_path}\n"
            "Use 'init' command to create a profile"
        )

    try:
        with open(profile_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in profile: {e}") from e

    validate_profile(raw)
    _map_profile_paths(raw, str(profile_path.parent))
    return Profile.from_dict(raw)


def create_profile(path: str, username: str | None = None) -> Profile:
    """Create new profile with defaults.

    Defaults:
        - username: current OS user
        - data_path: same directory as profile, "vault.json"
        - logs_dir: same directory as profile, "logs"
        - action_delay: 0.5 seconds
    """
    profile_path = Path(map_path(path))
    if profile_path.exists():
        raise ConfigError(f"Profile already exists: {profile_path}")

    profile_path.parent.mkdir(parents=True, exist_ok=True)

    raw: dict[str, Any] = {
        "username": username or getpass.getuser(),
        "data_path": f"./{DEFAULT_DATA_FILENAME}",
        "logs_dir": f"./{DEFAULT_LOGS_DIRNAME}",
        "action_delay": 0.5,
    }

    with open(profile_path, "w", encoding="utf-8") as f:
        json.dump(raw, f, indent=2, ensure_ascii=False)

    _map_profile_paths(raw, str(profile_path.parent))
    return Profile.from_dict(raw)
