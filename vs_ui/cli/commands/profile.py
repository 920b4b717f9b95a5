from __future__ import annotations

import sys
from typing import List, Optional, get_args

import typer

from vs_core.models import Role
from vs_ui.cli.errors import report_errors
from vs_ui.flows.selection import select_profile_skills
from vs_ui.presenters.catalog import build_selection_table
from vs_ui.tui.system.models import TableModel
from vs_ui.wiring.dependencies import UIContext


def require_interactive(ctx: UIContext) -> None:
    """Exit unless the picker can run (a TTY, or the headless UI)."""
    if ctx.headless:
        return
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        ctx.ui.present.error("Interactive selection requires a TTY (or use --headless with --add/--remove).")
        raise typer.Exit(1)


def create_profile_app(ctx: UIContext) -> typer.Typer:
    """Build the profile Typer app (volunteer skills)."""
    app = typer.Typer(help="Manage user profiles and their skills.", no_args_is_help=True)

    @app.command("create")
    def profile_create(
        profile_id: str = typer.Argument(..., metavar="ID"),
        full_name: Optional[str] = typer.Argument(None, metavar="[NAME]", help="Asked for when omitted."),
        role: str = typer.Option("volunteer", "--role", "-r", help="volunteer, agency or super_admin."),
    ) -> None:
        """Create or replace a profile."""
        ui = ctx.ui
        if role not in get_args(Role):
            ui.present.error(f"Unknown role '{role}'")
            raise typer.Exit(1)
        if full_name is None:
            full_name = ui.form.ask("Full name", default=profile_id)
        with report_errors(ui):
            profile = ctx.app_client.profiles.create_profile(profile_id, full_name, role)
        ui.present.success(f"Saved profile {profile.id} ({profile.role})")

    @app.command("list")
    def profile_list(
        role: Optional[str] = typer.Option(None, "--role", "-r", help="Only this role."),
    ) -> None:
        """List profiles."""
        ui = ctx.ui
        with report_errors(ui):
            profiles = ctx.app_client.profiles.list_profiles(role)
        ui.tables.show(
            TableModel(
                title="Profiles",
                columns=["ID", "Name", "Role", "Skills"],
                rows=[[p.id, p.full_name, p.role, str(len(p.skills))] for p in profiles],
            )
        )

    @app.command("show")
    def profile_show(profile_id: str = typer.Argument(..., metavar="ID")) -> None:
        """Show a profile and its selected skills."""
        ui = ctx.ui
        with report_errors(ui):
            client = ctx.app_client
            profile = client.profiles.get_profile(profile_id)
            engine = client.selection_engine(profile.skills)
        ui.present.panel(
            f"{profile.full_name or '-'}\nrole: {profile.role}\nskills saved: {len(profile.skills)}",
            title=profile.id,
        )
        ui.tables.show(build_selection_table("Skills & interests", engine.badges(), engine.stale_ids))

    @app.command("skills")
    def profile_skills(
        profile_id: str = typer.Argument(..., metavar="ID"),
        select: bool = typer.Option(False, "--select", "-s", help="Open the skill picker."),
        add: Optional[List[str]] = typer.Option(None, "--add", "-a", help="Select a skill (and its subtree)."),
        remove: Optional[List[str]] = typer.Option(None, "--remove", "-x", help="Deselect a skill (and its subtree)."),
    ) -> None:
        """Edit and save a profile's skills."""
        if not (select or add or remove):
            ctx.ui.present.error("Nothing to do: pass --select, --add or --remove.")
            raise typer.Exit(1)
        if select:
            require_interactive(ctx)
        with report_errors(ctx.ui):
            saved = select_profile_skills(
                ctx.ui,
                ctx.app_client,
                profile_id,
                interactive=select,
                add=add or [],
                remove=remove or [],
            )
        if saved is None:
            raise typer.Exit(1)

    return app
