"""
Archive command for empty-inside.

Lists what a built release or job archive contains.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

from pathlib import Path

import typer

from empty_inside.archive import read_members
from empty_inside.errors import ArchiveError

app = typer.Typer(help="Inspect built archives")

# Members whose content is worth printing with --show.
MANIFEST_NAMES = ("./release.MF", "./job.MF")


@app.command("list")
def list_command(
    archive_path: Path = typer.Argument(..., help="Path of a .tgz archive"),
    show: bool = typer.Option(False, "--show", "-s", help="Print manifest contents"),
):
    """List the members of an archive in the order they were written.

    Examples:
        empty-inside archive list out/release-1.tgz
        empty-inside archive list --show out/release-1.tgz
    """
    try:
        members = read_members(archive_path.expanduser().read_bytes())
    except (ArchiveError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for info, content in members:
        kind = "d" if info.isdir() else "-"
        typer.echo(f"{kind} {info.mode:04o} {info.uname}/{info.gname} {info.size:>8} {info.name}")
        if show and info.name in MANIFEST_NAMES:
            typer.echo(content.decode("utf-8", errors="replace"))
