"""Hierarchical selection engine for the skills and interests picker."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Literal, Optional, Sequence, get_args

from vs_common.errors import ConfigurationError, SelectionValidationError
from vs_core.models import Item
from vs_core.tree import TreeIndex, walk

logger = logging.getLogger(__name__)

PropagationMode = Literal["parent", "ancestors"]
PROPAGATION_MODES: tuple[str, ...] = get_args(PropagationMode)

EMPTY_SELECTION_MESSAGE = "You have to select at least one item."

ChangeCallback = Callable[[list[str]], None]


@dataclass(frozen=True)
class Badge:
    """A removable chip for one selected leaf."""

    id: str
    label: str
    path: str


@dataclass(frozen=True)
class VisibleRow:
    """One rendered row of the tree, honoring the expansion map."""

    item: Item
    depth: int
    selected: bool
    expanded: bool

    @property
    def has_children(self) -> bool:
        return not self.item.is_leaf


class SelectionEngine:
    """
    Maintain a selected-id set and an expansion map over an immutable tree.

    Selecting a node selects its whole subtree and expands it; deselecting
    clears the subtree and collapses it. After each toggle the parent is
    auto-promoted when all of its direct children are selected and
    auto-demoted otherwise. With ``propagation="ancestors"`` that rule keeps
    climbing to the root; with ``"parent"`` it stops at the direct parent.

    Unknown ids are ignored by every operation. Selected ids that are not in
    the tree (stale ids from a persisted selection) are kept and reported
    upward but never surface as badges.
    """

    def __init__(
        self,
        items: Sequence[Item],
        initial_values: Iterable[str] | None = None,
        *,
        on_change: Optional[ChangeCallback] = None,
        propagation: PropagationMode = "ancestors",
        index: TreeIndex | None = None,
    ) -> None:
        if propagation not in PROPAGATION_MODES:
            raise ConfigurationError(
                f"Unknown propagation mode '{propagation}'",
                context={"allowed": PROPAGATION_MODES},
            )
        self.index = index or TreeIndex(items)
        self.propagation: PropagationMode = propagation
        self._on_change = on_change
        self._selected: dict[str, None] = {}
        self._expanded: dict[str, bool] = {}
        self._seed(list(initial_values or []))

    # --- state -----------------------------------------------------------

    @property
    def items(self) -> list[Item]:
        return self.index.roots

    @property
    def selected_ids(self) -> list[str]:
        """Selected ids in insertion order."""
        return list(self._selected)

    @property
    def expanded_ids(self) -> set[str]:
        return {item_id for item_id, flag in self._expanded.items() if flag}

    @property
    def stale_ids(self) -> list[str]:
        return [item_id for item_id in self._selected if item_id not in self.index]

    def is_selected(self, item_id: str) -> bool:
        return item_id in self._selected

    def is_expanded(self, item_id: str) -> bool:
        return self._expanded.get(item_id, False)

    # --- operations ------------------------------------------------------

    def toggle_expansion(self, item_id: str) -> None:
        item = self.index.get(item_id)
        if item is None or item.is_leaf:
            return
        self._expanded[item_id] = not self._expanded.get(item_id, False)

    def toggle_selection(self, item_id: str) -> None:
        item = self.index.get(item_id)
        if item is None:
            logger.debug("Ignoring selection toggle for unknown item %s", item_id)
            return

        descendants = self.index.descendants(item_id)
        if item_id in self._selected:
            self._discard([item_id, *(d.id for d in descendants)])
            self._set_branch_expansion(item, descendants, False)
            logger.debug("Deselected %s and %d descendants", item_id, len(descendants))
        else:
            self._add([item_id, *(d.id for d in descendants)])
            self._set_branch_expansion(item, descendants, True)
            logger.debug("Selected %s and %d descendants", item_id, len(descendants))

        self._reevaluate_ancestors(item_id)
        self._emit()

    def remove_selection(self, item_id: str) -> None:
        """Drop exactly one id (badge removal); no cascade, no parent update."""
        if item_id not in self._selected:
            return
        del self._selected[item_id]
        self._emit()

    def resolve_display_path(self, item_id: str) -> str:
        return self.index.display_path(item_id)

    def reset(self, initial_values: Iterable[str] | None = None) -> None:
        """Re-seed both states, as when the owning form resets."""
        self._seed(list(initial_values or []))
        self._emit()

    def validate(self) -> list[str]:
        """Return the selection, or raise when it is empty."""
        if not self._selected:
            raise SelectionValidationError(EMPTY_SELECTION_MESSAGE, context={"field": "items"})
        return self.selected_ids

    # --- views -----------------------------------------------------------

    def badges(self) -> list[Badge]:
        badges: list[Badge] = []
        for item_id in self._selected:
            item = self.index.get(item_id)
            if item is None or not item.is_leaf:
                continue
            badges.append(Badge(id=item_id, label=item.label, path=self.resolve_display_path(item_id)))
        return badges

    def visible_rows(self) -> list[VisibleRow]:
        def _open_children(item: Item) -> list[Item]:
            return item.child_nodes() if self.is_expanded(item.id) else []

        return [
            VisibleRow(
                item=node,
                depth=depth,
                selected=node.id in self._selected,
                expanded=self.is_expanded(node.id),
            )
            for node, _, depth in walk(self.index.roots, _open_children)
        ]

    # --- internals -------------------------------------------------------

    def _seed(self, initial_values: list[str]) -> None:
        self._selected = dict.fromkeys(initial_values)
        self._expanded = {}
        for item_id in self._selected:
            item = self.index.get(item_id)
            if item is None:
                continue
            for ancestor in self.index.ancestors(item_id):
                self._expanded[ancestor.id] = True
            self._set_branch_expansion(item, self.index.descendants(item_id), True)

        stale = self.stale_ids
        if stale:
            logger.warning("Selection contains %d ids missing from the catalog: %s", len(stale), stale)

    def _add(self, ids: Iterable[str]) -> None:
        for item_id in ids:
            self._selected.setdefault(item_id, None)

    def _discard(self, ids: Iterable[str]) -> None:
        for item_id in ids:
            self._selected.pop(item_id, None)

    def _set_branch_expansion(self, item: Item, descendants: list[Item], expanded: bool) -> None:
        for node in (item, *descendants):
            if not node.is_leaf:
                self._expanded[node.id] = expanded

    def _reevaluate_ancestors(self, item_id: str) -> None:
        ancestors = self.index.ancestors(item_id)
        if self.propagation == "parent":
            ancestors = ancestors[:1]
        for parent in ancestors:
            all_selected = all(child.id in self._selected for child in parent.child_nodes())
            if all_selected and parent.id not in self._selected:
                self._selected[parent.id] = None
                logger.debug("Auto-promoted %s", parent.id)
            elif not all_selected and parent.id in self._selected:
                del self._selected[parent.id]
                logger.debug("Auto-demoted %s", parent.id)

    def _emit(self) -> None:
        if self._on_change is not None:
            self._on_change(self.selected_ids)
