"""Entry point for ghopen."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from textual.logging import TextualHandler

from .app import GhOpenApp
from .models import ResolveError
from .services.git import repo_relative_path
from .services.github import github_url_for, open_url
from .services.settings import SETTINGS_PATH, load_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghopen",
        description="Open a working copy, or one of its files, on GitHub.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Working copy root containing .git (defaults to current working directory).",
    )
    parser.add_argument(
        "--file",
        default=None,
        help="File to open, relative to the root or absolute.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--open",
        action="store_true",
        help="Open the URL in the browser without starting the UI.",
    )
    mode.add_argument(
        "--print",
        action="store_true",
        help="Print the URL instead of opening it.",
    )
    parser.add_argument(
        "--default-branch",
        default=None,
        help="Branch to use when .git/HEAD cannot be read (overrides settings).",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=SETTINGS_PATH,
        help="Settings file to use.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log diagnostic information.",
    )
    return parser


def configure_logging(verbose: bool, interactive: bool) -> None:
    handler = TextualHandler() if interactive else logging.StreamHandler(sys.stderr)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        handlers=[handler],
    )


def _resolve_file(root: Path, file_arg: str | None) -> str | None:
    if file_arg is None:
        return None
    return repo_relative_path(root, file_arg)


def run_once(args: argparse.Namespace) -> int:
    """Resolve the URL and open or print it. Returns a process exit code."""
    settings = load_settings(args.settings)
    if args.default_branch:
        settings.default_branch = args.default_branch

    try:
        url = github_url_for(
            args.root,
            _resolve_file(args.root, args.file),
            open_file=args.file is not None,
            default_branch=settings.default_branch,
        )
    except ResolveError as e:
        print(str(e), file=sys.stderr)
        return 1
    except Exception:
        logging.getLogger(__name__).debug("Failed to resolve URL", exc_info=True)
        print("Failed to open GitHub repository.", file=sys.stderr)
        return 1

    if args.print:
        print(url)
        return 0
    if not open_url(url, settings.browser):
        print(f"Could not open a browser for {url}", file=sys.stderr)
        return 1
    return 0


def main(argv: List[str] | None = None) -> int:
    """Run the ghopen application."""
    args = build_parser().parse_args(argv)
    interactive = not (args.open or args.print)
    configure_logging(args.verbose, interactive)

    if not interactive:
        return run_once(args)

    settings = load_settings(args.settings)
    if args.default_branch:
        settings.default_branch = args.default_branch
    app = GhOpenApp(args.root, settings=settings, settings_path=args.settings)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
