"""Skill catalog administration backed by the ``skillsets`` table."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from pydantic import ValidationError

from vs_app.services.store import RecordStore
from vs_app.settings import AppSettings
from vs_common.errors import CatalogError, RecordNotFoundError
from vs_core.engine import ChangeCallback, SelectionEngine
from vs_core.loader import build_tree, default_catalog, default_rows, flatten_tree
from vs_core.models import Item, SkillsetRow
from vs_core.tree import MAX_DEPTH, TreeIndex

logger = logging.getLogger(__name__)

TABLE = "skillsets"

_UNSET = object()


def _row_error(exc: ValidationError) -> CatalogError:
    messages = [err["msg"].removeprefix("Value error, ") for err in exc.errors()]
    return CatalogError(messages[0] if messages else "Invalid skillset", context={"errors": messages}, cause=exc)


def _subtree_ids(rows: Iterable[SkillsetRow], root_id: str) -> list[str]:
    """``root_id`` followed by every row reachable through ``parent_id`` links."""
    by_parent: dict[Optional[str], list[str]] = {}
    for row in rows:
        by_parent.setdefault(row.parent_id, []).append(row.id)
    collected: list[str] = []
    pending = [root_id]
    while pending:
        current = pending.pop(0)
        if current in collected:
            continue
        collected.append(current)
        pending.extend(by_parent.get(current, []))
    return collected


class CatalogService:
    """Load the catalog tree and apply admin edits to its rows."""

    def __init__(self, store: RecordStore, settings: AppSettings | None = None) -> None:
        self.store = store
        self.settings = settings or AppSettings()

    # --- reads -----------------------------------------------------------

    def rows(self) -> list[SkillsetRow]:
        rows: list[SkillsetRow] = []
        for raw in self.store.select(TABLE):
            try:
                rows.append(SkillsetRow.model_validate(raw))
            except ValidationError as exc:
                raise CatalogError(
                    f"Stored skillset '{raw.get('id')}' is invalid",
                    context={"row": raw},
                    cause=exc,
                ) from exc
        return rows

    def editable_rows(self) -> list[SkillsetRow]:
        """Stored rows, or the bundled rows that reads fall back to while the table is empty."""
        rows = self.rows()
        if rows:
            return rows
        logger.info("Skillsets table is empty; editing a copy of the bundled catalog")
        return default_rows()

    def is_seeded(self) -> bool:
        return bool(self.store.select(TABLE))

    def load_items(self) -> list[Item]:
        """The stored tree, or the bundled catalog while the table is empty."""
        rows = self.rows()
        if not rows:
            logger.debug("Skillsets table is empty; using the bundled catalog")
            return default_catalog()
        return build_tree(rows)

    def index(self) -> TreeIndex:
        return TreeIndex(self.load_items())

    def create_engine(
        self,
        initial_values: Iterable[str] | None = None,
        *,
        on_change: ChangeCallback | None = None,
    ) -> SelectionEngine:
        return SelectionEngine(
            self.load_items(),
            initial_values,
            on_change=on_change,
            propagation=self.settings.propagation,
        )

    def parent_options(self, exclude: Optional[str] = None) -> list[tuple[str, str]]:
        """
        Rows that may receive a child, as ``(id, display path)``.

        Leaves-to-be at the maximum depth are left out, as are ``exclude``
        and its subtree (a node cannot move under itself).
        """
        index = self.index()
        excluded = set(index.descendant_ids(exclude)) | {exclude} if exclude else set()
        return [
            (item_id, index.display_path(item_id))
            for item_id in index.ids
            if item_id not in excluded and (index.depth(item_id) or MAX_DEPTH) < MAX_DEPTH
        ]

    # --- writes ----------------------------------------------------------

    def seed_defaults(self, overwrite: bool = False) -> int:
        """Copy the bundled catalog into the store; return the rows written."""
        if self.is_seeded() and not overwrite:
            logger.info("Skillsets table already populated; skipping seed")
            return 0
        rows = default_rows()
        count = self.store.replace_table(TABLE, [row.model_dump() for row in rows])
        logger.info("Seeded %d skillsets", count)
        return count

    def import_items(self, items: list[Item]) -> int:
        """Replace the stored catalog with an already validated tree."""
        TreeIndex(items)
        rows = flatten_tree(items)
        return self.store.replace_table(TABLE, [row.model_dump() for row in rows])

    def add_skillset(self, item_id: str, label: str, parent_id: Optional[str] = None) -> SkillsetRow:
        if not (item_id or "").strip() or not (label or "").strip():
            raise CatalogError("ID and Label are required.")
        try:
            row = SkillsetRow(id=item_id.strip(), label=label, parent_id=parent_id)
        except ValidationError as exc:
            raise _row_error(exc) from exc

        rows = self.editable_rows()
        if any(existing.id == row.id for existing in rows):
            raise CatalogError(f"Skillset '{row.id}' already exists", context={"id": row.id})
        if row.parent_id and not any(existing.id == row.parent_id for existing in rows):
            raise CatalogError(
                f"Unknown parent '{row.parent_id}'",
                context={"id": row.id, "parent_id": row.parent_id},
            )

        candidate = [*rows, row]
        build_tree(candidate)
        self.store.replace_table(TABLE, [existing.model_dump() for existing in candidate])
        logger.info("Added skillset %s under %s", row.id, row.parent_id or "<root>")
        return row

    def update_skillset(
        self,
        item_id: str,
        *,
        new_id: Optional[str] = None,
        label: Optional[str] = None,
        parent_id: object = _UNSET,
    ) -> SkillsetRow:
        """
        Edit one row. Renaming the id re-parents its direct children.

        Pass ``parent_id=None`` to move the row to the root.
        """
        rows = self.editable_rows()
        current = next((row for row in rows if row.id == item_id), None)
        if current is None:
            raise RecordNotFoundError(f"Skillset '{item_id}' not found", context={"id": item_id})

        target_parent = current.parent_id if parent_id is _UNSET else parent_id
        try:
            updated = SkillsetRow(
                id=(new_id or current.id).strip(),
                label=current.label if label is None else label,
                parent_id=target_parent,
            )
        except ValidationError as exc:
            raise _row_error(exc) from exc

        if updated.id != item_id and any(row.id == updated.id for row in rows):
            raise CatalogError(f"Skillset '{updated.id}' already exists", context={"id": updated.id})
        if updated.parent_id is not None:
            if updated.parent_id in _subtree_ids(rows, item_id):
                raise CatalogError(
                    f"Cannot move '{item_id}' under itself or one of its descendants",
                    context={"id": item_id, "parent_id": updated.parent_id},
                )
            if not any(row.id == updated.parent_id for row in rows):
                raise CatalogError(
                    f"Unknown parent '{updated.parent_id}'",
                    context={"id": item_id, "parent_id": updated.parent_id},
                )

        candidate: list[SkillsetRow] = []
        for row in rows:
            if row.id == item_id:
                candidate.append(updated)
            elif row.parent_id == item_id:
                candidate.append(row.model_copy(update={"parent_id": updated.id}))
            else:
                candidate.append(row)

        build_tree(candidate)
        self.store.replace_table(TABLE, [row.model_dump() for row in candidate])
        logger.info("Updated skillset %s -> %s", item_id, updated.id)
        return updated

    def delete_skillset(self, item_id: str) -> list[str]:
        """Delete a row and all of its descendants; return the removed ids."""
        rows = self.editable_rows()
        if not any(row.id == item_id for row in rows):
            raise RecordNotFoundError(f"Skillset '{item_id}' not found", context={"id": item_id})
        removed = _subtree_ids(rows, item_id)
        doomed = set(removed)
        self.store.replace_table(TABLE, [row.model_dump() for row in rows if row.id not in doomed])
        logger.info("Deleted skillset %s and %d descendants", item_id, len(removed) - 1)
        return removed
