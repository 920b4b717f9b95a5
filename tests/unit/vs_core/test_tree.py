from __future__ import annotations

import pytest

from vs_common.errors import CatalogError
from vs_core.models import Item
from vs_core.tree import TreeIndex, item_children, walk

pytestmark = pytest.mark.unit_core


def test_walk_is_preorder_with_depth(dev_tree: list[Item]) -> None:
    visited = [(node.id, parent.id if parent else None, depth) for node, parent, depth in walk(dev_tree, item_children)]

    assert visited[:4] == [
        ("dev", None, 1),
        ("frontend", "dev", 2),
        ("react", "frontend", 3),
        ("vue", "frontend", 3),
    ]
    assert visited[-1] == ("ui", "design", 2)


def test_walk_accepts_any_child_accessor() -> None:
    tree = {"a": ["b", "c"], "b": ["d"], "c": [], "d": []}

    order = [node for node, _, _ in walk(["a"], lambda n: tree[n])]

    assert order == ["a", "b", "d", "c"]


def test_index_lookups(dev_tree: list[Item]) -> None:
    index = TreeIndex(dev_tree)

    assert len(index) == 9
    assert index.depth("vue") == 3
    assert index.parent("vue").id == "frontend"
    assert [a.id for a in index.ancestors("vue")] == ["frontend", "dev"]
    assert index.descendant_ids("dev") == ["frontend", "react", "vue", "backend", "node"]
    assert [leaf.id for leaf in index.leaves()] == ["react", "vue", "node", "ux", "ui"]
    assert index.label_path("node") == ["Development", "Backend", "Node"]
    assert "missing" not in index
    assert index.descendants("missing") == []


def test_duplicate_ids_rejected() -> None:
    items = [
        Item(id="a", label="A", children=[Item(id="x", label="X")]),
        Item(id="b", label="B", children=[Item(id="x", label="X again")]),
    ]

    with pytest.raises(CatalogError) as excinfo:
        TreeIndex(items)
    assert excinfo.value.context["id"] == "x"


def test_depth_limit_enforced() -> None:
    deep = Item(
        id="l1",
        label="L1",
        children=[Item(id="l2", label="L2", sub_children=[Item(id="l3", label="L3", sub_children=[Item(id="l4", label="L4")])])],
    )

    with pytest.raises(CatalogError, match="maximum depth"):
        TreeIndex([deep])


def test_empty_child_lists_are_leaves() -> None:
    item = Item.model_validate({"id": "solo", "label": "Solo", "children": [], "subChildren": []})

    assert item.is_leaf
    assert item.to_dict() == {"id": "solo", "label": "Solo"}
