from __future__ import annotations

import argparse

from resourcedir.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("layout", help="Local layout preferences")
    layout_subparsers = parser.add_subparsers(dest="layout_command", required=True)

    show_parser = layout_subparsers.add_parser("sidebar", help="Show the stored sidebar width")
    show_parser.set_defaults(handler=run_show)

    set_parser = layout_subparsers.add_parser("set-sidebar", help="Store a new sidebar width")
    set_parser.add_argument("--width", type=float, required=True)
    set_parser.add_argument("--viewport", type=float, required=True, help="Viewport width in pixels")
    set_parser.add_argument("--collapsed", action="store_true")
    set_parser.set_defaults(handler=run_set)


def run_show(args: argparse.Namespace, ctx: CLIContext) -> int:
    session = ctx.open_session()
    ctx.console.print(f"Sidebar width: {session.layout.sidebar_width()}px")
    return 0


def run_set(args: argparse.Namespace, ctx: CLIContext) -> int:
    session = ctx.open_session()
    width = session.layout.set_sidebar_width(args.width, args.viewport, collapsed=args.collapsed)
    ctx.console.print(f"[green]Sidebar width set[/green] {width}px")
    return 0
