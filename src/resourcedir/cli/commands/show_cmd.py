from __future__ import annotations

import argparse

from rich.panel import Panel

from resourcedir.cli.context import CLIContext
from resourcedir.domain.models.resource import EnrichedResource


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("show", help="Select a resource and show its details")
    parser.add_argument("resource_id")
    parser.add_argument("--offline", action="store_true", help="Skip metadata lookups")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    offers: list[EnrichedResource] = []
    session = ctx.open_session(on_external_viewing=offers.append)

    with ctx.console.status("Resolving video metadata..."):
        refresh = session.refresh(offline=args.offline)
    if not refresh.success:
        ctx.console.print(f"[red]Error[/red] {refresh.message}")
        return 1

    session.presentation.select_resource(args.resource_id)
    resource = session.presentation.selected()
    if resource is None:
        return 1

    watched = session.watch_state.is_watched(resource.id)
    lines = [
        f"Type: {resource.kind_label}",
        f"Description: {resource.description}",
        f"Author: {resource.author_name or '-'}",
        f"Published: {resource.published_at or '-'}",
        f"Watched: {'yes' if watched else 'no'}",
        f"Link: {resource.link}",
        f"Embed: {resource.embed_url}",
    ]
    if resource.thumbnail is not None:
        lines.append(f"Thumbnail: {resource.thumbnail.url}")
    ctx.console.print(Panel.fit("\n".join(lines), title=resource.display_title))

    for offer in offers:
        ctx.console.print(
            Panel.fit(
                f"This is a playlist ({offer.collection_id}).\nOpen it externally: {offer.link}",
                title="Open Playlist",
            )
        )
    return 0
