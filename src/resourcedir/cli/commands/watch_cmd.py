from __future__ import annotations

import argparse

from rich.table import Table

from resourcedir.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("watch", help="Manage local watched markers")
    watch_subparsers = parser.add_subparsers(dest="watch_command", required=True)

    toggle_parser = watch_subparsers.add_parser("toggle", help="Mark or unmark a resource as watched")
    toggle_parser.add_argument("resource_id")
    toggle_parser.set_defaults(handler=run_toggle)

    list_parser = watch_subparsers.add_parser("list", help="List watched resource ids")
    list_parser.set_defaults(handler=run_list)


def run_toggle(args: argparse.Namespace, ctx: CLIContext) -> int:
    session = ctx.open_session()
    watched = session.watch_state.toggle(args.resource_id)
    if watched:
        ctx.console.print(f"[green]Watched[/green] {args.resource_id}")
    else:
        ctx.console.print(f"[yellow]Unwatched[/yellow] {args.resource_id}")
    return 0


def run_list(args: argparse.Namespace, ctx: CLIContext) -> int:
    session = ctx.open_session()
    ids = session.watch_state.ordered()

    table = Table(title=f"Watched ({len(ids)})")
    table.add_column("Resource ID")
    for resource_id in ids:
        table.add_row(resource_id)
    ctx.console.print(table)
    return 0
