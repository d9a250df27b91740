from __future__ import annotations

import argparse

from rich.table import Table

from resourcedir.cli.context import CLIContext
from resourcedir.domain.models.presentation import ViewMode
from resourcedir.domain.models.resource import EnrichedResource


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser(
        "list",
        aliases=["resources"],
        help="List resources enriched with video metadata",
    )
    parser.add_argument("--search", default="", help="Case-insensitive filter on title, description and author")
    parser.add_argument("--watched-only", action="store_true", help="Show only watched resources")
    parser.add_argument("--view", choices=[m.value for m in ViewMode], default=ViewMode.LIST.value)
    parser.add_argument("--offline", action="store_true", help="Skip metadata lookups")
    parser.set_defaults(handler=run)


def _watched_marker(watched: bool) -> str:
    return "[green]✓[/green]" if watched else ""


def _list_table(resources: list[EnrichedResource], watched: frozenset[str]) -> Table:
    table = Table(title=f"Resources ({len(resources)})")
    table.add_column("Watched", justify="center")
    table.add_column("Title", overflow="fold")
    table.add_column("Description", overflow="fold")
    table.add_column("Type")
    for r in resources:
        table.add_row(_watched_marker(r.id in watched), r.display_title, r.description, r.kind_label)
    return table


def _detail_table(resources: list[EnrichedResource], watched: frozenset[str]) -> Table:
    table = Table(title=f"Resources ({len(resources)})")
    table.add_column("ID", overflow="fold")
    table.add_column("Watched", justify="center")
    table.add_column("Title", overflow="fold")
    table.add_column("Type")
    table.add_column("Author")
    table.add_column("Published")
    table.add_column("Link", overflow="fold")
    for r in resources:
        table.add_row(
            r.id,
            _watched_marker(r.id in watched),
            r.display_title,
            r.kind_label,
            r.author_name or "",
            r.published_at or "",
            r.link,
        )
    return table


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    session = ctx.open_session()

    with ctx.console.status("Resolving video metadata..."):
        refresh = session.refresh(offline=args.offline)
    if not refresh.success:
        ctx.console.print(f"[red]Error[/red] {refresh.message}")
        return 1

    presentation = session.presentation
    presentation.set_view_mode(args.view)
    presentation.set_search_query(args.search)
    presentation.set_watched_only(args.watched_only)
    visible = presentation.filtered_view()

    if not visible:
        ctx.console.print("[yellow]No resources found. Try adjusting your search.[/yellow]")
        return 0

    watched = session.watch_state.all()
    if presentation.state.view_mode is ViewMode.TABLE:
        ctx.console.print(_detail_table(visible, watched))
    else:
        ctx.console.print(_list_table(visible, watched))

    if refresh.degraded and not args.offline:
        ctx.console.print(
            f"[yellow]{refresh.degraded} resource(s) shown without video metadata[/yellow]"
        )
    return 0
