"""Command-line front door for dirnav.

Parses global options, resolves settings, and dispatches one history
command. Navigation commands print the destination directory on stdout for
the shell wrapper to ``cd`` into; diagnostics go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import coerce_max_entries, resolve_settings
from .navigation import NavigationOutcome, validate_directory
from .session import HistorySession
from .shell_init import SUPPORTED_SHELLS, highlight_script, render_init_script

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

LOG_FORMAT = "dirnav: %(levelname)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if coerce_max_entries(parsed) is None:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirnav",
        description="Browser-style back/forward history for your shell's working directory.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--history-file", default=None, help="History document path (default: per-user data dir).")
    parser.add_argument("--max-entries", type=_positive_int, default=None, help="Maximum number of remembered directories.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("list-history", aliases=["ls"], help="List visited directories, marking the current one")
    subparsers.add_parser("next", aliases=["n"], help="Move forward to the next directory")
    subparsers.add_parser("previous", aliases=["p"], help="Move back to the previous directory")

    p_goto = subparsers.add_parser("goto", help="Jump to an index; negative numbers jump back relative to the current entry")
    p_goto.add_argument("target", help="Absolute index, or a negative relative offset")

    p_record = subparsers.add_parser("record", help="Record the working directory after a command (prompt hook)")
    p_record.add_argument("path", help="Working directory to record")

    p_init = subparsers.add_parser("init", help="Print shell integration code")
    p_init.add_argument("shell", choices=SUPPORTED_SHELLS, help="Target shell")
    p_init.add_argument("--prog", default="dirnav", help="Command name used by the generated functions.")
    p_init.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    p_init.add_argument("--style", default="monokai", help="Pygments style name.")

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def _report(outcome: NavigationOutcome) -> int:
    """Print a navigation outcome and map it to an exit code."""
    if outcome.moved:
        print(outcome.location)
        return EXIT_OK
    print(f"dirnav: {outcome.message}", file=sys.stderr)
    if outcome.is_usage_error:
        return EXIT_USAGE
    return EXIT_FAILURE


def cmd_list_history(session: HistorySession, args: argparse.Namespace) -> int:
    rows = session.navigation.format_list()
    if not rows:
        print("dirnav: directory history is empty", file=sys.stderr)
        return EXIT_OK
    for row in rows:
        print(row)
    return EXIT_OK


def cmd_next(session: HistorySession, args: argparse.Namespace) -> int:
    return _report(session.navigation.next())


def cmd_previous(session: HistorySession, args: argparse.Namespace) -> int:
    return _report(session.navigation.previous())


def cmd_goto(session: HistorySession, args: argparse.Namespace) -> int:
    return _report(session.navigation.goto(args.target))


def cmd_record(session: HistorySession, args: argparse.Namespace) -> int:
    session.command_completed(args.path)
    return EXIT_OK


def cmd_init(args: argparse.Namespace) -> int:
    script = render_init_script(args.shell, prog=args.prog)
    if not args.no_color and sys.stdout.isatty():
        script = highlight_script(script, args.shell, style=args.style)
    sys.stdout.write(script)
    return EXIT_OK


COMMANDS = {
    "list-history": cmd_list_history,
    "ls": cmd_list_history,
    "next": cmd_next,
    "n": cmd_next,
    "previous": cmd_previous,
    "p": cmd_previous,
    "goto": cmd_goto,
    "record": cmd_record,
}


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run one command, and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return EXIT_USAGE
    if args.command == "init":
        return cmd_init(args)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return EXIT_USAGE

    settings = resolve_settings(args.history_file, args.max_entries)
    session = HistorySession(settings, relocate=validate_directory)
    return handler(session, args)
