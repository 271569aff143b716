"""CLI module for inspecting temporary folders left behind by aborted runs."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from tempfolder.config import TempFolderConfig, load_config
from tempfolder.errors import TempFolderConfigError
from tempfolder.fs import delete_tree, find_orphans, tree_size


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for tempfolder CLI."""
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.command is None:
        parser.print_help()
        raise SystemExit(0)

    console = Console()
    try:
        config = load_config()
    except TempFolderConfigError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise SystemExit(2) from e

    root = _get_root(args, config)
    prefix = args.prefix or config.prefix

    if args.command == "orphans":
        raise SystemExit(_list_orphans(console, root, prefix))
    if args.command == "purge":
        raise SystemExit(_purge_orphans(console, root, prefix, confirmed=args.yes))

    parser.print_help()
    raise SystemExit(1)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tempfolder", description="Manage scoped temporary folders"
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser(
        "orphans", help="List temporary folders left behind by interrupted runs"
    )

    purge_parser = subparsers.add_parser("purge", help="Delete leftover temporary folders")
    purge_parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm deletion without prompting",
    )

    for p in subparsers.choices.values():
        p.add_argument("--root", type=str, help="Directory to scan (default: configured root)")
        p.add_argument("--prefix", type=str, help="Folder name prefix (default: configured prefix)")

    return parser


def _get_root(args: argparse.Namespace, config: TempFolderConfig) -> Path | None:
    """Resolve the scanned directory from args or config."""
    if args.root:
        return Path(args.root)
    return config.root


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _list_orphans(console: Console, root: Path | None, prefix: str) -> int:
    """Show leftover folders and their sizes."""
    orphans = find_orphans(prefix, root)
    if not orphans:
        console.print("[green]No leftover temporary folders.[/green]")
        return 0

    console.print(f"Found {len(orphans)} leftover folder(s):")
    for path in orphans:
        console.print(f"  - {path} ({_format_size(tree_size(path))})")
    return 0


def _purge_orphans(console: Console, root: Path | None, prefix: str, *, confirmed: bool) -> int:
    """Delete leftover folders."""
    orphans = find_orphans(prefix, root)
    if not orphans:
        console.print("[green]No leftover temporary folders.[/green]")
        return 0

    if not confirmed:
        console.print(f"[yellow]{len(orphans)} folder(s) would be deleted:[/yellow]")
        for path in orphans:
            console.print(f"  - {path}")
        console.print()
        console.print("To proceed, run:")
        console.print("    tempfolder purge --yes")
        return 1

    failures = 0
    for path in orphans:
        try:
            delete_tree(path)
        except OSError as e:
            failures += 1
            console.print(f"[red]Could not delete {path}: {e}[/red]")
        else:
            console.print(f"Deleted {path}")

    if failures:
        console.print(f"[red]{failures} folder(s) could not be deleted.[/red]")
        return 1

    console.print(f"[green]Deleted {len(orphans)} folder(s).[/green]")
    return 0
