from __future__ import annotations

from typing import List, Optional

import typer

from vs_core.matching import effective_required_skills
from vs_ui.cli.commands.profile import require_interactive
from vs_ui.cli.errors import report_errors
from vs_ui.flows.selection import select_project_skills
from vs_ui.presenters.catalog import build_matches_table, build_selection_table
from vs_ui.wiring.dependencies import UIContext


def create_project_app(ctx: UIContext) -> typer.Typer:
    """Build the project Typer app (required skills and recommendations)."""
    app = typer.Typer(help="Manage projects, their required skills and volunteer matches.", no_args_is_help=True)

    @app.command("create")
    def project_create(
        project_id: str = typer.Argument(..., metavar="ID"),
        title: str = typer.Argument(...),
        organization: Optional[str] = typer.Argument(None, metavar="ORG", help="Owning agency profile id."),
    ) -> None:
        """Create or replace a project."""
        ui = ctx.ui
        with report_errors(ui):
            project = ctx.app_client.profiles.create_project(project_id, title, organization)
        ui.present.success(f"Saved project {project.id}")

    @app.command("show")
    def project_show(project_id: str = typer.Argument(..., metavar="ID")) -> None:
        """Show a project and its required skills."""
        ui = ctx.ui
        with report_errors(ui):
            client = ctx.app_client
            project = client.profiles.get_project(project_id)
            engine = client.selection_engine(project.required_skills)
        ui.present.panel(
            f"{project.title or '-'}\norganization: {project.organization_id or '-'}",
            title=project.id,
        )
        ui.tables.show(build_selection_table("Required skills", engine.badges(), engine.stale_ids))

    @app.command("skills")
    def project_skills(
        project_id: str = typer.Argument(..., metavar="ID"),
        select: bool = typer.Option(False, "--select", "-s", help="Open the skill picker."),
        add: Optional[List[str]] = typer.Option(None, "--add", "-a", help="Require a skill (and its subtree)."),
        remove: Optional[List[str]] = typer.Option(None, "--remove", "-x", help="Drop a skill (and its subtree)."),
    ) -> None:
        """Edit and save a project's required skills."""
        if not (select or add or remove):
            ctx.ui.present.error("Nothing to do: pass --select, --add or --remove.")
            raise typer.Exit(1)
        if select:
            require_interactive(ctx)
        with report_errors(ctx.ui):
            saved = select_project_skills(
                ctx.ui,
                ctx.app_client,
                project_id,
                interactive=select,
                add=add or [],
                remove=remove or [],
            )
        if saved is None:
            raise typer.Exit(1)

    @app.command("recommend")
    def project_recommend(project_id: str = typer.Argument(..., metavar="ID")) -> None:
        """Rank volunteers by the skills they share with the project."""
        ui = ctx.ui
        with report_errors(ui):
            client = ctx.app_client
            project = client.profiles.get_project(project_id)
            matches = client.matching.recommend(project_id)
            index = client.catalog.index()
        if not project.required_skills:
            ui.present.info(f"No required skills saved; matching on {effective_required_skills(None)}")
        if not matches:
            ui.present.warning("No volunteers share a required skill.")
            return
        ui.present.rule(f"{len(matches)} volunteers match")
        ui.tables.show(build_matches_table(project.title or project.id, matches, index))

    return app
