"""Drug persistence: protocol plus the JSON-file implementation."""

from chemodose.storage.file_store import FileDrugStore, load_default_drugs
from chemodose.storage.protocol import (
    DrugExistsError,
    DrugNotFoundError,
    DrugStore,
    DrugStoreError,
    ImportSummary,
)

__all__ = [
    "DrugExistsError",
    "DrugNotFoundError",
    "DrugStore",
    "DrugStoreError",
    "FileDrugStore",
    "ImportSummary",
    "load_default_drugs",
]
