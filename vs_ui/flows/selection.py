"""Workflows for choosing skills on profiles and projects."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from vs_app.client import ApplicationClient
from vs_common.errors import SelectionValidationError
from vs_core.engine import SelectionEngine
from vs_core.models import ProfileRecord, ProjectRecord
from vs_ui.flows.errors import UIFlowError
from vs_ui.presenters.catalog import build_selection_table
from vs_ui.tui.system.protocols import UI

logger = logging.getLogger(__name__)


def edit_selection(
    engine: SelectionEngine,
    add: Sequence[str] = (),
    remove: Sequence[str] = (),
) -> list[str]:
    """
    Apply non-interactive edits with the picker's cascade rules.

    ``add`` selects an id (and its subtree) unless already selected;
    ``remove`` deselects it (and its subtree). Returns the ids that are
    not in the catalog.
    """
    unknown: list[str] = []
    for item_id in add:
        if item_id not in engine.index:
            unknown.append(item_id)
        elif not engine.is_selected(item_id):
            engine.toggle_selection(item_id)
    for item_id in remove:
        if item_id in engine.index:
            if engine.is_selected(item_id):
                engine.toggle_selection(item_id)
        elif engine.is_selected(item_id):
            engine.remove_selection(item_id)
        else:
            unknown.append(item_id)
    return unknown


def _choose(
    ui: UI,
    engine: SelectionEngine,
    *,
    title: str,
    interactive: bool,
    add: Sequence[str],
    remove: Sequence[str],
) -> Optional[list[str]]:
    unknown = edit_selection(engine, add, remove)
    for item_id in unknown:
        ui.present.warning(f"Unknown skill id '{item_id}' ignored")

    if interactive:
        picked = ui.tree_picker.pick(engine, title=title)
        if picked is None:
            ui.present.warning("Selection cancelled.")
            return None

    try:
        return engine.validate()
    except SelectionValidationError as exc:
        ui.present.error(str(exc))
        raise UIFlowError(str(exc)) from exc


def _show_result(ui: UI, engine: SelectionEngine, title: str) -> None:
    ui.tables.show(build_selection_table(title, engine.badges(), engine.stale_ids))


def select_profile_skills(
    ui: UI,
    client: ApplicationClient,
    profile_id: str,
    *,
    interactive: bool = True,
    add: Sequence[str] = (),
    remove: Sequence[str] = (),
) -> Optional[ProfileRecord]:
    """Edit a profile's ``skills`` and persist them; None when cancelled."""
    profile = client.profiles.get_profile(profile_id)
    engine = client.selection_engine(profile.skills)
    _warn_stale(ui, engine.stale_ids)

    picked = _choose(
        ui,
        engine,
        title=f"Skills & interests: {profile.full_name or profile.id}",
        interactive=interactive,
        add=add,
        remove=remove,
    )
    if picked is None:
        return None
    saved = client.profiles.save_skills(profile_id, picked)
    _show_result(ui, client.selection_engine(saved.skills), f"Skills for {saved.full_name or saved.id}")
    ui.present.success(f"Saved {len(saved.skills)} skills for {saved.id}")
    return saved


def select_project_skills(
    ui: UI,
    client: ApplicationClient,
    project_id: str,
    *,
    interactive: bool = True,
    add: Sequence[str] = (),
    remove: Sequence[str] = (),
) -> Optional[ProjectRecord]:
    """Edit a project's ``required_skills`` and persist them; None when cancelled."""
    project = client.profiles.get_project(project_id)
    engine = client.selection_engine(project.required_skills)
    _warn_stale(ui, engine.stale_ids)

    picked = _choose(
        ui,
        engine,
        title=f"Required skills: {project.title or project.id}",
        interactive=interactive,
        add=add,
        remove=remove,
    )
    if picked is None:
        return None
    saved = client.profiles.save_required_skills(project_id, picked)
    _show_result(
        ui,
        client.selection_engine(saved.required_skills),
        f"Required skills for {saved.title or saved.id}",
    )
    ui.present.success(f"Saved {len(saved.required_skills)} required skills for {saved.id}")
    return saved


def _warn_stale(ui: UI, stale_ids: Iterable[str]) -> None:
    stale = list(stale_ids)
    if stale:
        ui.present.warning(f"{len(stale)} saved skills are no longer in the catalog: {', '.join(stale)}")
