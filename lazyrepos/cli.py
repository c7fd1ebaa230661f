"""Command-line front door for lazyrepos.

Parses CLI options over config-file defaults, sets up logging, and runs either
the interactive dashboard or a one-shot ``--print`` render. Fatal loading
errors are reported here and mapped to exit codes.
"""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

from .config import load_user_defaults
from .ansi import sanitize_terminal_text
from .errors import LazyReposError, UsageError
from .logs import setup_logging
from .runtime import DashboardOptions, load_hierarchy, render_snapshot, run_dashboard, stdio_is_interactive
from .ui_theme import available_theme_names, resolve_theme

ERROR_STYLE = "\x1b[31;1m"
RESET = "\x1b[0m"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns), max(1, term.lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyrepos",
        description="Browse the repositories, branches and commits under a directory.",
    )
    parser.add_argument("-d", "--directory", required=True, help="Search repos of the given directory.")
    parser.add_argument(
        "--cc",
        "--commit-limit",
        dest="commit_limit",
        type=_positive_int,
        default=None,
        help="Maximum commits loaded per branch (default: all).",
    )
    parser.add_argument(
        "--branch-limit",
        type=_positive_int,
        default=None,
        help="Maximum remote branches loaded per repository with --remote (default: 20).",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        default=None,
        help="Find repositories recursively inside non-repository directories.",
    )
    parser.add_argument("--remote", action="store_true", help="List the default remote's branches.")
    parser.add_argument(
        "--skip-broken",
        action="store_true",
        help="Skip repositories that fail to load instead of exiting.",
    )
    parser.add_argument("--theme", default=None, help=f"UI theme name ({', '.join(available_theme_names())}).")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--print", dest="print_only", action="store_true", help="Print the initial view and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --print output (default: terminal width).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Append logs to this file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details.")
    return parser


def report_fatal(exc: BaseException | str) -> None:
    """Print a fatal error the way the dashboard reports all loading failures."""
    sys.stderr.write(f"{ERROR_STYLE}error: {sanitize_terminal_text(str(exc))}{RESET}\n")
    sys.stderr.flush()


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the dashboard.

    Exits ``0`` on quit, ``1`` on a fatal discovery/build error, ``2`` on a
    usage error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        setup_logging(verbose=args.verbose, log_file=args.log_file)
    except OSError as exc:
        report_fatal(f"cannot open log file {args.log_file}: {exc.strerror or exc}")
        raise SystemExit(2) from exc

    defaults = load_user_defaults()
    options = DashboardOptions(
        directory=Path(args.directory).expanduser(),
        recursive=args.recursive if args.recursive is not None else defaults.recursive,
        commit_limit=args.commit_limit if args.commit_limit is not None else defaults.commit_limit,
        branch_limit=args.branch_limit if args.branch_limit is not None else defaults.branch_limit,
        remote=args.remote,
        skip_broken=args.skip_broken,
    )
    theme_name = args.theme if args.theme is not None else defaults.theme
    interactive = not args.print_only and stdio_is_interactive()
    no_color = args.no_color or (not interactive and not sys.stdout.isatty())
    theme = resolve_theme(theme_name, no_color=no_color)

    try:
        if args.max_cols is not None and not args.print_only:
            raise UsageError("--max-cols only applies together with --print")
        if interactive:
            run_dashboard(options, theme)
            return
        repositories = load_hierarchy(options)
    except LazyReposError as exc:
        report_fatal(exc)
        raise SystemExit(exc.exit_code) from exc
    except KeyboardInterrupt:
        return

    width, height = _terminal_size()
    if args.max_cols is not None:
        width = args.max_cols
    sys.stdout.write(render_snapshot(repositories, width, height, theme))


if __name__ == "__main__":
    main()
