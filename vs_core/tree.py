"""
Generic tree traversal for the skill hierarchy.

Every lookup the engine, loader and pickers need (parent, depth,
descendants, label path) is derived from one depth-first walk
parameterised by a ``get_children`` callable, so there is no
depth-specific branching on ``children`` vs ``subChildren``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Sequence, TypeVar

from vs_common.errors import CatalogError
from vs_core.models import Item

N = TypeVar("N")

MAX_DEPTH = 3
PATH_SEPARATOR = " > "


def walk(
    roots: Sequence[N],
    get_children: Callable[[N], Sequence[N]],
) -> Iterator[tuple[N, Optional[N], int]]:
    """Yield ``(node, parent, depth)`` depth-first, pre-order, depth starting at 1."""
    stack: list[tuple[N, Optional[N], int]] = [(node, None, 1) for node in reversed(roots)]
    while stack:
        node, parent, depth = stack.pop()
        yield node, parent, depth
        for child in reversed(get_children(node)):
            stack.append((child, node, depth + 1))


def item_children(item: Item) -> list[Item]:
    return item.child_nodes()


@dataclass(frozen=True)
class TreeEntry:
    item: Item
    parent_id: Optional[str]
    depth: int


class TreeIndex:
    """
    Lookup tables over an immutable item tree.

    Raises CatalogError when an id occurs twice or the tree is deeper
    than ``max_depth``.
    """

    def __init__(self, items: Sequence[Item], *, max_depth: int = MAX_DEPTH) -> None:
        self.roots: list[Item] = list(items)
        self._entries: Dict[str, TreeEntry] = {}
        self._order: List[str] = []

        for node, parent, depth in walk(self.roots, item_children):
            if node.id in self._entries:
                raise CatalogError(
                    f"Duplicate item id '{node.id}' in catalog",
                    context={"id": node.id, "depth": depth},
                )
            if depth > max_depth:
                raise CatalogError(
                    f"Item '{node.id}' exceeds the maximum depth of {max_depth}",
                    context={"id": node.id, "depth": depth, "max_depth": max_depth},
                )
            self._entries[node.id] = TreeEntry(
                item=node,
                parent_id=parent.id if parent is not None else None,
                depth=depth,
            )
            self._order.append(node.id)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def ids(self) -> list[str]:
        """All ids in depth-first order."""
        return list(self._order)

    def get(self, item_id: str) -> Optional[Item]:
        entry = self._entries.get(item_id)
        return entry.item if entry else None

    def depth(self, item_id: str) -> Optional[int]:
        entry = self._entries.get(item_id)
        return entry.depth if entry else None

    def parent(self, item_id: str) -> Optional[Item]:
        entry = self._entries.get(item_id)
        if entry is None or entry.parent_id is None:
            return None
        return self._entries[entry.parent_id].item

    def ancestors(self, item_id: str) -> list[Item]:
        """Ancestors from the direct parent up to the root."""
        chain: list[Item] = []
        parent = self.parent(item_id)
        while parent is not None:
            chain.append(parent)
            parent = self.parent(parent.id)
        return chain

    def descendants(self, item_id: str) -> list[Item]:
        item = self.get(item_id)
        if item is None:
            return []
        return [node for node, _, _ in walk(item.child_nodes(), item_children)]

    def descendant_ids(self, item_id: str) -> list[str]:
        return [node.id for node in self.descendants(item_id)]

    def leaves(self) -> list[Item]:
        return [self._entries[i].item for i in self._order if self._entries[i].item.is_leaf]

    def label_path(self, item_id: str) -> list[str]:
        item = self.get(item_id)
        if item is None:
            return []
        labels = [item.label]
        labels.extend(ancestor.label for ancestor in self.ancestors(item_id))
        return list(reversed(labels))

    def display_path(self, item_id: str) -> str:
        """Breadcrumb of labels joined by ' > ', or the raw id when unknown."""
        labels = self.label_path(item_id)
        if not labels:
            return item_id
        return PATH_SEPARATOR.join(labels)
