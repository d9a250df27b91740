from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console

from resourcedir.cli.commands import (
    add_cmd,
    init_cmd,
    layout_cmd,
    resources_cmd,
    show_cmd,
    watch_cmd,
    web_cmd,
)
from resourcedir.cli.context import CLIContext
from resourcedir.core.config import load_paths
from resourcedir.core.errors import ResourceDirError
from resourcedir.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resdir",
        description="Personal video resource directory",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Project root to use for .resourcedir data (default: current working directory)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)

    subparsers = parser.add_subparsers(dest="command", required=True)
    init_cmd.register(subparsers)
    add_cmd.register(subparsers)
    resources_cmd.register(subparsers)
    show_cmd.register(subparsers)
    watch_cmd.register(subparsers)
    layout_cmd.register(subparsers)
    web_cmd.register(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    paths = load_paths(args.project_root)
    ctx = CLIContext(paths=paths, console=console)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2

    try:
        return handler(args, ctx)
    except ResourceDirError as exc:
        logger.error(str(exc))
        return 1
