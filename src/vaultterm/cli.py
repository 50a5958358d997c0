"""Command-line entry point for vaultterm."""

import argparse
import sys

from vaultterm import profile, repl
from vaultterm.constants import DEFAULT_PROFILE_PATH
from vaultterm.errors import AppError
from vaultterm.logging_utils import build_run_log_path, log_event, setup_logging
from vaultterm.store import JsonFileStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vaultterm",
        description="vaultterm - terminal command interpreter for a password vault",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create a new profile
  vaultterm init -p ~/vaults/profile.json

  # Start the interpreter with a profile
  vaultterm -p ~/vaults/profile.json

  # Start the quick-command bar
  vaultterm -p ~/vaults/profile.json --quick
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")
    parser_init = subparsers.add_parser("init", help="Create a new profile")
    parser_init.add_argument(
        "--profile", "-p",
        default=DEFAULT_PROFILE_PATH,
        help=f"Path where to save the profile (default: {DEFAULT_PROFILE_PATH})",
    )
    parser_init.add_argument("--username", "-u", help="Name shown in the prompt")

    parser.add_argument(
        "--profile", "-p",
        default=DEFAULT_PROFILE_PATH,
        help=f"Path to profile JSON file (default: {DEFAULT_PROFILE_PATH})",
    )
    parser.add_argument(
        "--quick",
        action="store_true",
        help="Run the reduced quick-command bar instead of the full interpreter",
    )
    parser.add_argument(
        "--no-log",
        action="store_true",
        help="Do not write a run log even if the profile sets logs_dir",
    )
    return parser


def _run_init(args: argparse.Namespace) -> int:
    try:
        prof = profile.create_profile(args.profile, username=args.username)
        JsonFileStore(prof.data_path).save()
    except (AppError, OSError) as e:
        print(f"Error creating profile: {e}")
        return 1

    print(f"Profile created: {args.profile}")
    print(f"Username: {prof.username}")
    print(f"Data file: {prof.data_path}")
    print(f"Logs directory: {prof.logs_dir}")
    print()
    print(f"Start the app with: vaultterm --profile {args.profile}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the vaultterm CLI."""
    args = build_parser().parse_args(argv)

    if args.command == "init":
        return _run_init(args)

    try:
        prof = profile.load_profile(args.profile)
    except FileNotFoundError as e:
        print(e)
        return 1
    except AppError as e:
        print(f"Error loading profile: {e}")
        return 1

    log_file = None
    if prof.logs_dir and not args.no_log:
        log_file = build_run_log_path(prof.logs_dir)
    setup_logging(log_file)

    try:
        store = JsonFileStore(prof.data_path)
    except AppError as e:
        print(f"Error loading data: {e}")
        return 1

    log_event(
        "app_start",
        variant="quick" if args.quick else "full",
        profile_file=args.profile,
        data_file=prof.data_path,
        log_file=log_file,
    )

    if args.quick:
        repl.run_quick(store)
    else:
        repl.run(store, prof.username, prof.action_delay)
    return 0


if __name__ == "__main__":
    sys.exit(main())
