"""A JSON file holding one table as an array of records.

Shared file helpers for the JSON repositories. Every call re-reads the
file, so separate repository instances pointing at the same path see
each other's writes.

The highest ID ever issued is kept in a sidecar file (`<table>.seq`) so
that IDs of deleted records are never handed out again; ledger rows refer
to orders, production runs and losses by ID alone.
"""

from __future__ import annotations

import json
from pathlib import Path


class JsonTable:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._seq_path = file_path.with_suffix(".seq")
        self._ensure_file()

    def load(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def find(self, record_id: int) -> dict | None:
        for raw in self.load():
            if raw["id"] == record_id:
                return raw
        return None

    def upsert(self, record: dict) -> int:
        """Replace the record with the same ID, or append it with a new ID."""
        records = self.load()
        if record.get("id") is None:
            record["id"] = self._next_id(records)
            records.append(record)
            self._mark_issued(record["id"])
        else:
            for i, raw in enumerate(records):
                if raw["id"] == record["id"]:
                    records[i] = record
                    break
            else:
                records.append(record)
                self._mark_issued(record["id"])
        self.persist(records)
        return record["id"]

    def delete_where(self, **criteria) -> None:
        records = [
            raw
            for raw in self.load()
            if not all(raw.get(k) == v for k, v in criteria.items())
        ]
        self.persist(records)

    def _next_id(self, records: list[dict]) -> int:
        highest = max((r["id"] for r in records), default=0)
        return max(highest, self._issued()) + 1

    def _issued(self) -> int:
        if not self._seq_path.exists():
            return 0
        return int(self._seq_path.read_text(encoding="utf-8").strip() or 0)

    def _mark_issued(self, record_id: int) -> None:
        if record_id > self._issued():
            self._seq_path.write_text(f"{record_id}\n", encoding="utf-8")

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
