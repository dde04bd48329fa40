# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Main CLI entry point for empty-inside.

Dumb trigger: parses args, loads config once, groups the deployment and
hands each release to the archive builder. Archives are built in memory and
only written to disk once the build succeeded.
"""

import io
import logging
from pathlib import Path
from typing import Optional

import typer

from empty_inside import __version__
from empty_inside.config import BuildConfig, build_config, load_config
from empty_inside.deployment import (
    create_deployment,
    create_release_graph,
    format_release,
    read_deployment_manifest,
    read_handcraft,
)
from empty_inside.errors import BuildError
from empty_inside.release import generate_release_archive
from empty_inside.schemas import Release, ReleaseManifest


app = typer.Typer(
    name="empty-inside",
    help="Build stub release archives for every release a deployment uses",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_release(release: Release, config: BuildConfig) -> ReleaseManifest:
    """Build one release archive and write it to ``<output_dir>/<name>.tgz``.

    Nothing is written if the build fails.
    """
    buffer = io.BytesIO()
    manifest = generate_release_archive(
        buffer,
        release.name,
        release.jobs,
        version=config.release_version,
        commit_hash=config.commit_hash,
        uncommitted_changes=config.uncommitted_changes,
        mtime=config.mtime,
    )

    output_path = config.output_dir / f"{release.name}.tgz"
    output_path.write_bytes(buffer.getvalue())
    logger.info(f"Wrote {output_path}")
    return manifest


@app.command()
def build(
    manifest_path: Path = typer.Argument(..., help="Path of the deployment manifest"),
    output_dir: Optional[Path] = typer.Argument(None, help="Directory that will contain all the releases"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose mode"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config file"),
    release_version: Optional[str] = typer.Option(None, "--release-version", help="Version recorded in release.MF"),
    commit_hash: Optional[str] = typer.Option(None, "--commit-hash", help="Commit hash recorded in release.MF"),
    mtime: Optional[int] = typer.Option(None, "--mtime", help="Entry timestamp in epoch seconds, for reproducible output"),
):
    """Build one release archive per release referenced by a deployment."""
    _configure_logging(verbose)

    try:
        config = build_config(
            load_config(config_path),
            output_dir=output_dir,
            release_version=release_version,
            commit_hash=commit_hash,
            mtime=mtime,
            verbose=verbose or None,
        )
        if config.output_dir is None:
            typer.echo("Error: no output directory given (argument or output_dir in config)", err=True)
            raise typer.Exit(1)

        deployment = create_deployment(read_deployment_manifest(manifest_path))
        if not deployment.releases:
            typer.echo("No releases referenced by the deployment")
            return

        config.output_dir.mkdir(parents=True, exist_ok=True)
        for release in deployment.releases:
            manifest = build_release(release, config)
            typer.echo(f"{release.name}: {config.output_dir / (release.name + '.tgz')}")
            for job in manifest.jobs:
                typer.echo(f"  {job.name} {job.fingerprint}")

    except BuildError as e:
        typer.echo(f"Build error: {e}", err=True)
        raise typer.Exit(1)
    except OSError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def releases(
    manifest_path: Path = typer.Argument(..., help="Path of the deployment manifest"),
):
    """Show which jobs each release referenced by a deployment must package."""
    try:
        deployment = create_deployment(read_deployment_manifest(manifest_path))
    except (BuildError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for release in deployment.releases:
        typer.echo(format_release(release))


@app.command()
def graph(
    handcraft_path: Path = typer.Argument(..., help="Path of the handcraft file"),
):
    """Show the release graph of a product handcraft file."""
    try:
        deployment = create_release_graph(read_handcraft(handcraft_path))
    except (BuildError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for release in deployment.releases:
        typer.echo(format_release(release))


@app.command()
def version():
    """Show version information."""
    typer.echo(f"empty-inside version {__version__}")


# Static commands (config, archive)
from empty_inside.commands import archive, config

app.add_typer(config.app, name="config")
app.add_typer(archive.app, name="archive")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
