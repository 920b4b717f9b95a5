"""Load, convert and validate skill catalogs."""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import yaml
from pydantic import TypeAdapter, ValidationError

from vs_common.errors import CatalogError
from vs_core.models import Item, SkillsetRow
from vs_core.tree import MAX_DEPTH, TreeIndex, item_children, walk

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_RESOURCE = "expertise.json"

_ITEM_LIST = TypeAdapter(list[Item])


def _coerce_rows(rows: Iterable[SkillsetRow | Mapping[str, Any]]) -> list[SkillsetRow]:
    coerced: list[SkillsetRow] = []
    for row in rows:
        if isinstance(row, SkillsetRow):
            coerced.append(row)
            continue
        try:
            coerced.append(SkillsetRow.model_validate(row))
        except ValidationError as exc:
            raise CatalogError(
                "Invalid skillset row",
                context={"row": dict(row), "errors": [err["msg"] for err in exc.errors()]},
                cause=exc,
            ) from exc
    return coerced


def build_tree(
    rows: Iterable[SkillsetRow | Mapping[str, Any]],
    *,
    max_depth: int = MAX_DEPTH,
) -> list[Item]:
    """
    Turn adjacency rows into the nested item shape.

    Depth-1 nodes hold ``children`` and depth-2 nodes hold ``subChildren``.
    Sibling order follows row order. Rows whose parent is missing, or that
    sit on a parent cycle, cannot be reached from a root and are skipped.
    """
    ordered = _coerce_rows(rows)
    by_parent: dict[str | None, list[SkillsetRow]] = defaultdict(list)
    seen: set[str] = set()
    for row in ordered:
        if row.id in seen:
            raise CatalogError(f"Duplicate skillset id '{row.id}'", context={"id": row.id})
        seen.add(row.id)
        by_parent[row.parent_id].append(row)

    placed: set[str] = set()

    def _build(row: SkillsetRow, depth: int) -> Item:
        if depth > max_depth:
            raise CatalogError(
                f"Skillset '{row.id}' exceeds the maximum depth of {max_depth}",
                context={"id": row.id, "parent_id": row.parent_id, "max_depth": max_depth},
            )
        placed.add(row.id)
        nested = [_build(child, depth + 1) for child in by_parent.get(row.id, [])]
        if depth == 1:
            return Item(id=row.id, label=row.label, children=nested)
        return Item(id=row.id, label=row.label, sub_children=nested)

    roots = [_build(row, 1) for row in by_parent.get(None, [])]

    skipped = [row.id for row in ordered if row.id not in placed]
    if skipped:
        logger.warning(
            "Skipped %d skillset rows with a missing parent or a parent cycle: %s",
            len(skipped),
            skipped,
        )
    return roots


def flatten_tree(items: Sequence[Item]) -> list[SkillsetRow]:
    """Inverse of :func:`build_tree`, rows in depth-first order."""
    return [
        SkillsetRow(id=node.id, label=node.label, parent_id=parent.id if parent else None)
        for node, parent, _ in walk(items, item_children)
    ]


def _is_row_payload(entries: Sequence[Any]) -> bool:
    return any(isinstance(entry, Mapping) and "parent_id" in entry for entry in entries)


def parse_items(payload: Any, *, source: str = "<memory>") -> list[Item]:
    """Validate a decoded catalog payload (nested tree or row list)."""
    if isinstance(payload, Mapping):
        for key in ("items", "skillsets"):
            if key in payload:
                payload = payload[key]
                break
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise CatalogError(
            "Catalog must be a list of items or skillset rows",
            context={"source": source, "type": type(payload).__name__},
        )

    if _is_row_payload(payload):
        items = build_tree(_coerce_rows(payload))
    else:
        try:
            items = _ITEM_LIST.validate_python(payload)
        except ValidationError as exc:
            raise CatalogError(
                "Invalid catalog item",
                context={"source": source, "errors": [err["msg"] for err in exc.errors()]},
                cause=exc,
            ) from exc

    TreeIndex(items)
    return items


def load_items(path: Path | str) -> list[Item]:
    """Read a JSON or YAML catalog file."""
    catalog_path = Path(path).expanduser()
    try:
        text = catalog_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(
            f"Cannot read catalog file {catalog_path}",
            context={"path": catalog_path},
            cause=exc,
        ) from exc

    suffix = catalog_path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            payload = yaml.safe_load(text) or []
        elif suffix == ".json":
            payload = json.loads(text)
        else:
            raise CatalogError(
                f"Unsupported catalog format '{suffix or catalog_path.name}'",
                context={"path": catalog_path, "supported": [".json", ".yaml", ".yml"]},
            )
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CatalogError(
            f"Malformed catalog file {catalog_path}",
            context={"path": catalog_path},
            cause=exc,
        ) from exc

    items = parse_items(payload, source=str(catalog_path))
    logger.info("Loaded %d catalog domains from %s", len(items), catalog_path)
    return items


def default_catalog() -> list[Item]:
    """The bundled expertise catalog."""
    resource = resources.files("vs_core") / "data" / DEFAULT_CATALOG_RESOURCE
    payload = json.loads(resource.read_text(encoding="utf-8"))
    return parse_items(payload, source=f"vs_core/data/{DEFAULT_CATALOG_RESOURCE}")


def default_rows() -> list[SkillsetRow]:
    return flatten_tree(default_catalog())
