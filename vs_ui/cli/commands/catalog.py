from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from vs_core.loader import load_items
from vs_ui.cli.errors import report_errors
from vs_ui.presenters.catalog import build_catalog_table
from vs_ui.tui.system.models import TableModel
from vs_ui.wiring.dependencies import UIContext


def create_catalog_app(ctx: UIContext) -> typer.Typer:
    """Build the catalog Typer app (browse and administer skillsets)."""
    app = typer.Typer(help="Browse and administer the skill catalog.", no_args_is_help=True)

    @app.command("show")
    def catalog_show(
        depth: Optional[int] = typer.Option(
            None, "--depth", "-d", min=1, max=3, help="Only show nodes down to this depth."
        ),
    ) -> None:
        """Show the catalog tree."""
        ui = ctx.ui
        with report_errors(ui):
            catalog = ctx.app_client.catalog
            if not catalog.is_seeded():
                ui.present.info("Skillsets table is empty; showing the bundled catalog.")
            ui.tables.show(build_catalog_table(catalog.index(), max_depth=depth))

    @app.command("add")
    def catalog_add(
        item_id: str = typer.Argument(..., metavar="ID", help="Lowercase id (letters, digits, underscores)."),
        label: str = typer.Argument(..., help="Display label."),
        parent: Optional[str] = typer.Option(None, "--parent", "-p", help="Parent skillset id."),
    ) -> None:
        """Add a skillset (domain when no parent is given)."""
        ui = ctx.ui
        with report_errors(ui):
            row = ctx.app_client.catalog.add_skillset(item_id, label, parent)
        where = f"under {row.parent_id}" if row.parent_id else "as a domain"
        ui.present.success(f"Added '{row.label}' ({row.id}) {where}")

    @app.command("edit")
    def catalog_edit(
        item_id: str = typer.Argument(..., metavar="ID"),
        new_id: Optional[str] = typer.Option(None, "--id", help="Rename the id; children follow."),
        label: Optional[str] = typer.Option(None, "--label", "-l", help="New display label."),
        parent: Optional[str] = typer.Option(None, "--parent", "-p", help="Move under this parent."),
        root: bool = typer.Option(False, "--root", help="Move to the top level."),
    ) -> None:
        """Edit a skillset's id, label or parent."""
        ui = ctx.ui
        if parent and root:
            ui.present.error("Choose either --parent or --root, not both.")
            raise typer.Exit(1)
        changes: dict[str, object] = {"new_id": new_id, "label": label}
        if root:
            changes["parent_id"] = None
        elif parent:
            changes["parent_id"] = parent
        with report_errors(ui):
            row = ctx.app_client.catalog.update_skillset(item_id, **changes)
        ui.present.success(f"Updated {item_id} -> {row.id} ('{row.label}')")

    @app.command("remove")
    def catalog_remove(
        item_id: str = typer.Argument(..., metavar="ID"),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
    ) -> None:
        """Delete a skillset and all its children."""
        ui = ctx.ui
        if not yes and not ui.form.confirm(
            f"Are you sure you want to delete '{item_id}' and all its children?", default=False
        ):
            ui.present.warning("Nothing deleted.")
            raise typer.Exit(1)
        with report_errors(ui):
            removed = ctx.app_client.catalog.delete_skillset(item_id)
        ui.present.success(f"Deleted {len(removed)} skillsets: {', '.join(removed)}")

    @app.command("seed")
    def catalog_seed(
        overwrite: bool = typer.Option(False, "--overwrite", help="Replace existing skillsets."),
    ) -> None:
        """Load the bundled expertise catalog into the store."""
        ui = ctx.ui
        with report_errors(ui), ui.progress.status("Seeding skill catalog..."):
            count = ctx.app_client.catalog.seed_defaults(overwrite=overwrite)
        if count:
            ui.present.success(f"Seeded {count} skillsets")
        else:
            ui.present.warning("Skillsets already present; use --overwrite to replace them.")

    @app.command("import")
    def catalog_import(
        path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON or YAML catalog file."),
    ) -> None:
        """Replace the stored catalog with a file (nested tree or row list)."""
        ui = ctx.ui
        with report_errors(ui), ui.progress.status(f"Importing {path.name}..."):
            items = load_items(path)
            count = ctx.app_client.catalog.import_items(items)
        ui.present.success(f"Imported {count} skillsets from {path}")

    @app.command("path")
    def catalog_path(item_id: str = typer.Argument(..., metavar="ID")) -> None:
        """Print the breadcrumb of a skill."""
        ui = ctx.ui
        with report_errors(ui):
            index = ctx.app_client.catalog.index()
        if item_id not in index:
            ui.present.error(f"Unknown skill id '{item_id}'")
            raise typer.Exit(1)
        typer.echo(index.display_path(item_id))

    @app.command("parents")
    def catalog_parents(
        exclude: Optional[str] = typer.Option(
            None, "--exclude", help="Leave out this id and its subtree (when moving it)."
        ),
    ) -> None:
        """List skillsets that can take a child."""
        ui = ctx.ui
        with report_errors(ui):
            options = ctx.app_client.catalog.parent_options(exclude=exclude)
        ui.tables.show(
            TableModel(
                title="Parent options",
                columns=["ID", "Path"],
                rows=[[item_id, path] for item_id, path in options],
            )
        )

    return app
