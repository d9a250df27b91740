from __future__ import annotations

import argparse

from resourcedir.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("add", help="Add a video or playlist to the directory")
    parser.add_argument("--title", required=True)
    parser.add_argument("--description", required=True)
    parser.add_argument("--link", required=True, help="Video or playlist URL")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    session = ctx.open_session()
    result = session.submit(args.title, args.description, args.link)

    if not result.success:
        ctx.console.print(f"[red]Error[/red] {result.message}")
        return 1

    ctx.console.print(f"[green]Success![/green] {result.message}")
    if result.resource is not None:
        ctx.console.print(f"ID: {result.resource.id}")
    return 0
