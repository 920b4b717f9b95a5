"""Presenters for the skill catalog and saved selections."""

from __future__ import annotations

from typing import Optional, Sequence

from vs_core.engine import Badge
from vs_core.models import VolunteerMatch
from vs_core.tree import TreeIndex
from vs_ui.tui.system.models import TableModel


def build_catalog_table(index: TreeIndex, max_depth: Optional[int] = None) -> TableModel:
    """One row per catalog node, indented by depth."""
    rows: list[list[str]] = []
    for item_id in index.ids:
        depth = index.depth(item_id) or 1
        if max_depth is not None and depth > max_depth:
            continue
        item = index.get(item_id)
        if item is None:
            continue
        indent = "  " * (depth - 1)
        rows.append([f"{indent}{item.label}", item_id, str(len(item.child_nodes()))])
    return TableModel(title="Skill Catalog", columns=["Label", "ID", "Children"], rows=rows)


def build_selection_table(
    title: str,
    badges: Sequence[Badge],
    stale_ids: Sequence[str] = (),
) -> TableModel:
    """Leaf selections with their breadcrumb, followed by ids missing from the catalog."""
    rows = [[badge.label, badge.id, badge.path] for badge in badges]
    rows.extend(["?", stale_id, "(not in catalog)"] for stale_id in stale_ids)
    return TableModel(title=title, columns=["Skill", "ID", "Path"], rows=rows)


def build_matches_table(project_title: str, matches: Sequence[VolunteerMatch], index: TreeIndex) -> TableModel:
    rows = [
        [
            match.profile.full_name or match.profile.id,
            match.profile.id,
            str(match.match_count),
            ", ".join(index.get(s).label if s in index else s for s in match.matched_skills),
        ]
        for match in matches
    ]
    return TableModel(
        title=f"Recommended volunteers: {project_title}",
        columns=["Volunteer", "ID", "Matches", "Matched skills"],
        rows=rows,
    )
