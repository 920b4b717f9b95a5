"""JSON document store for skillsets, profiles and projects."""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Mapping

from vs_common.errors import RecordNotFoundError, StoreError

logger = logging.getLogger(__name__)

TABLES = ("skillsets", "profiles", "projects")

Record = dict[str, Any]


class RecordStore:
    """
    Client handle over a single JSON document holding three tables.

    Every table is a list of records keyed by ``id`` and kept in insertion
    order. The document is re-read for each call and replaced atomically on
    every write, so separate CLI invocations always see a consistent file.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    # --- document --------------------------------------------------------

    def _empty(self) -> dict[str, list[Record]]:
        return {table: [] for table in TABLES}

    def read(self) -> dict[str, list[Record]]:
        if not self.path.exists():
            return self._empty()
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(
                f"Cannot read record store {self.path}",
                context={"path": self.path},
                cause=exc,
            ) from exc
        if not isinstance(data, dict):
            raise StoreError("Record store document must be an object", context={"path": self.path})
        document = self._empty()
        for table in TABLES:
            rows = data.get(table) or []
            if not isinstance(rows, list):
                raise StoreError(
                    f"Table '{table}' must be a list",
                    context={"path": self.path, "table": table},
                )
            document[table] = rows
        return document

    def write(self, document: Mapping[str, list[Record]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".store-", suffix=".json", dir=self.path.parent)
        except OSError as exc:
            raise StoreError(
                f"Cannot create record store in {self.path.parent}",
                context={"path": self.path},
                cause=exc,
            ) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump({table: document.get(table, []) for table in TABLES}, handle, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StoreError(
                f"Cannot write record store {self.path}",
                context={"path": self.path},
                cause=exc,
            ) from exc

    def _table(self, document: dict[str, list[Record]], table: str) -> list[Record]:
        if table not in TABLES:
            raise StoreError(f"Unknown table '{table}'", context={"table": table, "tables": TABLES})
        return document[table]

    # --- queries ---------------------------------------------------------

    def select(self, table: str, **filters: Any) -> list[Record]:
        """Records whose fields equal every keyword filter."""
        rows = self._table(self.read(), table)
        return [
            copy.deepcopy(row)
            for row in rows
            if all(row.get(key) == value for key, value in filters.items())
        ]

    def get(self, table: str, record_id: str) -> Record | None:
        for row in self._table(self.read(), table):
            if row.get("id") == record_id:
                return copy.deepcopy(row)
        return None

    # --- mutations -------------------------------------------------------

    def insert(self, table: str, record: Mapping[str, Any]) -> Record:
        document = self.read()
        rows = self._table(document, table)
        record_id = record.get("id")
        if any(row.get("id") == record_id for row in rows):
            raise StoreError(
                f"Record '{record_id}' already exists in {table}",
                context={"table": table, "id": record_id},
            )
        rows.append(dict(record))
        self.write(document)
        logger.debug("Inserted %s into %s", record_id, table)
        return dict(record)

    def upsert(self, table: str, record: Mapping[str, Any]) -> Record:
        document = self.read()
        rows = self._table(document, table)
        record_id = record.get("id")
        for index, row in enumerate(rows):
            if row.get("id") == record_id:
                rows[index] = dict(record)
                break
        else:
            rows.append(dict(record))
        self.write(document)
        logger.debug("Upserted %s into %s", record_id, table)
        return dict(record)

    def update(self, table: str, record_id: str, changes: Mapping[str, Any]) -> Record:
        document = self.read()
        rows = self._table(document, table)
        for row in rows:
            if row.get("id") == record_id:
                row.update(changes)
                self.write(document)
                logger.debug("Updated %s in %s: %s", record_id, table, sorted(changes))
                return copy.deepcopy(row)
        raise RecordNotFoundError(
            f"No record '{record_id}' in {table}",
            context={"table": table, "id": record_id},
        )

    def update_where(self, table: str, changes: Mapping[str, Any], **filters: Any) -> int:
        """Apply ``changes`` to every record matching ``filters``; return the count."""
        document = self.read()
        rows = self._table(document, table)
        touched = 0
        for row in rows:
            if all(row.get(key) == value for key, value in filters.items()):
                row.update(changes)
                touched += 1
        if touched:
            self.write(document)
        return touched

    def delete(self, table: str, record_ids: Iterable[str]) -> int:
        targets = set(record_ids)
        document = self.read()
        rows = self._table(document, table)
        kept = [row for row in rows if row.get("id") not in targets]
        removed = len(rows) - len(kept)
        if removed:
            document[table] = kept
            self.write(document)
            logger.debug("Deleted %d records from %s", removed, table)
        return removed

    def replace_table(self, table: str, records: Iterable[Mapping[str, Any]]) -> int:
        document = self.read()
        self._table(document, table)
        document[table] = [dict(record) for record in records]
        self.write(document)
        return len(document[table])
