# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Config command for empty-inside.

Provides basic configuration validation.
"""

import typer

from empty_inside.config import build_config, load_config
from empty_inside.errors import ConfigError

app = typer.Typer(help="Manage and validate configuration")


@app.command()
def validate(
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """
    Validate configuration file.

    Checks that the config file exists, is valid YAML and that its values
    can be turned into build options.
    """
    typer.echo("Validating configuration...")
    typer.echo()

    try:
        config = build_config(load_config(config_path))
        typer.echo("Configuration structure is valid")
        typer.echo()
        typer.echo(f"Output dir: {config.output_dir or '(from command line)'}")
        typer.echo(f"Release version: {config.release_version}")
        typer.echo(f"Commit hash: {config.commit_hash}")
        typer.echo(f"Uncommitted changes: {config.uncommitted_changes}")
        typer.echo(f"Entry mtime: {config.mtime if config.mtime is not None else '(wall clock)'}")
        typer.echo()
        typer.echo("Configuration validation complete!")
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except ConfigError as e:
        typer.echo(f"Validation failed: {e}", err=True)
        raise typer.Exit(1)
