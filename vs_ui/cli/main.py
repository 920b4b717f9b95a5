"""
Command-line interface for volunteer-skills.

Browse the skill catalog, pick skills for profiles and projects, and match
volunteers to projects.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from vs_ui.cli.commands.catalog import create_catalog_app
from vs_ui.cli.commands.profile import create_profile_app
from vs_ui.cli.commands.project import create_project_app
from vs_ui.wiring.dependencies import UIContext, configure_logging

ctx_store = UIContext()

app = typer.Typer(help="Pick skills and interests and match volunteers to projects.", no_args_is_help=True)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Force headless output (useful in CI).",
    ),
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        help="Directory holding the record store (overrides VS_DATA_DIR).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Log at DEBUG level."),
) -> None:
    """Global entry point handling interactive vs headless modes."""
    configure_logging(debug=debug)
    ctx_store.configure(headless=headless, data_dir=data_dir)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.add_typer(create_catalog_app(ctx_store), name="catalog")
app.add_typer(create_profile_app(ctx_store), name="profile")
app.add_typer(create_project_app(ctx_store), name="project")


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
