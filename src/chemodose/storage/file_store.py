"""Filesystem-backed drug store.

All drugs live in a single ``drugs.json`` array. Every mutation rewrites the
file atomically (write to ``.tmp``, then replace) under a process-wide lock,
so readers never see a half-written catalogue.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from pydantic import ValidationError

from chemodose.schemas.drug import Drug, ReorderItem
from chemodose.storage.protocol import (
    DrugExistsError,
    DrugNotFoundError,
    DrugStoreError,
    ImportSummary,
)

logger = logging.getLogger(__name__)

STORE_FILENAME = "drugs.json"


def load_default_drugs() -> List[Drug]:
    """Load the catalogue bundled with the package."""
    text = resources.files("chemodose.data").joinpath("default_drugs.json").read_text(encoding="utf-8")
    return [Drug.model_validate(record) for record in json.loads(text)]


def _sort_key(drug: Drug):
    return (drug.sort_order, drug.name)


class FileDrugStore:
    """JSON-file drug store.

    Args:
        path: Either the store file itself or a directory that will hold
            ``drugs.json``.
    """

    _lock = threading.Lock()

    def __init__(self, path: Path):
        path = Path(path)
        if path.suffix != ".json":
            path = path / STORE_FILENAME
        self.path = path

    # -------------------------------------------------------------------------
    # File I/O
    # -------------------------------------------------------------------------

    def _read(self) -> List[Drug]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except json.JSONDecodeError as exc:
            raise DrugStoreError(f"Drug store {self.path} is corrupt: {exc}") from exc

        if not isinstance(records, list):
            raise DrugStoreError(f"Drug store {self.path} must hold a JSON array")
        try:
            return [Drug.model_validate(r) for r in records]
        except ValidationError as exc:
            raise DrugStoreError(f"Drug store {self.path} holds an invalid drug: {exc}") from exc

    def _write(self, drugs: List[Drug]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".json.tmp")
        payload = [d.model_dump(mode="json") for d in drugs]
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            tmp_path.replace(self.path)
        except IOError as exc:
            if tmp_path.exists():
                tmp_path.unlink()
            raise DrugStoreError(f"Failed to save drugs: {exc}") from exc

    @staticmethod
    def _index(drugs: List[Drug]) -> Dict[str, int]:
        return {d.id: i for i, d in enumerate(drugs)}

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_drugs(self, query: Optional[str] = None) -> List[Drug]:
        drugs = sorted(self._read(), key=_sort_key)
        if query:
            needle = query.lower()
            drugs = [
                d for d in drugs
                if needle in d.name.lower() or needle in d.category.lower()
            ]
        return drugs

    def get_drug(self, drug_id: str) -> Optional[Drug]:
        for drug in self._read():
            if drug.id == drug_id:
                return drug
        return None

    def count(self) -> int:
        return len(self._read())

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_drug(self, drug: Drug) -> Drug:
        with self._lock:
            drugs = self._read()
            if drug.id in self._index(drugs):
                raise DrugExistsError(f"Drug '{drug.id}' already exists")
            drugs.append(drug.model_copy(deep=True))
            self._write(drugs)
        logger.info(f"Created drug '{drug.id}'")
        return drug

    def update_drug(self, drug_id: str, drug: Drug) -> Drug:
        with self._lock:
            drugs = self._read()
            index = self._index(drugs)
            if drug_id not in index:
                raise DrugNotFoundError(f"Drug '{drug_id}' not found")
            if drug.id != drug_id and drug.id in index:
                raise DrugExistsError(f"New ID '{drug.id}' already exists")
            drugs[index[drug_id]] = drug.model_copy(deep=True)
            self._write(drugs)

        if drug.id != drug_id:
            logger.info(f"Renamed drug '{drug_id}' -> '{drug.id}'")
        else:
            logger.info(f"Updated drug '{drug_id}'")
        return drug

    def delete_drug(self, drug_id: str) -> bool:
        with self._lock:
            drugs = self._read()
            remaining = [d for d in drugs if d.id != drug_id]
            if len(remaining) == len(drugs):
                return False
            self._write(remaining)
        logger.info(f"Deleted drug '{drug_id}'")
        return True

    def reorder(self, items: Sequence[ReorderItem]) -> int:
        orders = {item.id: item.sort_order for item in items}
        updated = 0
        with self._lock:
            drugs = self._read()
            for i, drug in enumerate(drugs):
                if drug.id in orders:
                    drugs[i] = drug.model_copy(update={"sort_order": orders[drug.id]})
                    updated += 1
            self._write(drugs)
        logger.info(f"Reordered {updated} drugs")
        return updated

    def duplicate_drug(self, drug_id: str) -> Drug:
        original = self.get_drug(drug_id)
        if original is None:
            raise DrugNotFoundError(f"Drug '{drug_id}' not found")
        copy = original.model_copy(
            update={
                "id": f"{original.id}_copy_{int(time.time() * 1000)}",
                "name": f"{original.name} (Copy)",
            },
            deep=True,
        )
        return self.create_drug(copy)

    def import_drugs(self, drugs: Sequence[Drug]) -> ImportSummary:
        summary = ImportSummary()
        with self._lock:
            current = self._read()
            existing = set(self._index(current))
            for drug in drugs:
                if drug.id in existing:
                    summary.skipped.append(drug.id)
                    continue
                current.append(drug.model_copy(deep=True))
                existing.add(drug.id)
                summary.created.append(drug.id)
            if summary.created:
                self._write(current)

        logger.info(
            f"Imported {len(summary.created)} drugs, skipped {len(summary.skipped)} existing"
        )
        return summary

    def seed_if_empty(self) -> int:
        """Load the bundled catalogue into an empty store.

        Returns:
            Number of drugs seeded (0 if the store already had drugs).
        """
        if self.count() > 0:
            return 0
        defaults = load_default_drugs()
        summary = self.import_drugs(defaults)
        logger.info(f"Seeded {len(summary.created)} default drugs into {self.path}")
        return len(summary.created)
