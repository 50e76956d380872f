"""Storage protocol defining the abstract interface for drug persistence.

The primary implementation is FileDrugStore (one JSON file), but callers
depend only on this protocol so a database-backed store can replace it
without changing the API or CLI.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from chemodose.schemas.drug import Drug, ReorderItem


class DrugStoreError(Exception):
    """Base class for drug store failures."""


class DrugExistsError(DrugStoreError):
    """Raised when creating or renaming onto an id that is already taken."""


class DrugNotFoundError(DrugStoreError):
    """Raised when updating a drug id that does not exist."""


@dataclass
class ImportSummary:
    """Outcome of importing a backup: created ids and skipped (existing) ids."""

    created: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"created": self.created, "skipped": self.skipped}


@runtime_checkable
class DrugStore(Protocol):
    """Abstract drug store interface.

    Drugs are always returned as independent copies; the evaluation core
    treats them as read-only snapshots.
    """

    def list_drugs(self, query: Optional[str] = None) -> List[Drug]:
        """List drugs ordered by sort_order, then name.

        Args:
            query: Optional case-insensitive filter on name or category.
        """
        ...

    def get_drug(self, drug_id: str) -> Optional[Drug]:
        """Get a drug by id, or None if not found."""
        ...

    def create_drug(self, drug: Drug) -> Drug:
        """Create a drug.

        Raises:
            DrugExistsError: If the id is already taken.
        """
        ...

    def update_drug(self, drug_id: str, drug: Drug) -> Drug:
        """Replace a drug, optionally renaming it to ``drug.id``.

        Raises:
            DrugNotFoundError: If ``drug_id`` does not exist.
            DrugExistsError: If renaming onto an existing id.
        """
        ...

    def delete_drug(self, drug_id: str) -> bool:
        """Delete a drug. Returns False if it did not exist."""
        ...

    def reorder(self, items: Sequence[ReorderItem]) -> int:
        """Apply new sort_order values in one write. Returns drugs updated."""
        ...

    def duplicate_drug(self, drug_id: str) -> Drug:
        """Create a copy of a drug under a new id.

        Raises:
            DrugNotFoundError: If ``drug_id`` does not exist.
        """
        ...

    def import_drugs(self, drugs: Sequence[Drug]) -> ImportSummary:
        """Create each drug, skipping ids that already exist."""
        ...
