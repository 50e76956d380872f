"""
Utility module for reading and writing drug backup files.

A backup is a UTF-8 JSON array of drug objects, the same shape the store
keeps. Backups are untrusted input: records are validated with the Drug
schema, and formula text is only ever handed to the closed-grammar parser.
"""

import json
from pathlib import Path
from typing import Any, List, Sequence

from pydantic import ValidationError

from chemodose.schemas.drug import Drug

BACKUP_FILENAME = "chemodose_backup.json"


class BackupLoadError(Exception):
    """Raised when a backup cannot be read or does not contain valid drugs."""
    pass


def export_drugs(drugs: Sequence[Drug]) -> str:
    """
    Serialize drugs to backup JSON.

    Args:
        drugs: Drugs in catalogue order

    Returns:
        Pretty-printed JSON array (indent 2)
    """
    payload = [drug.model_dump(mode="json") for drug in drugs]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def parse_backup(data: Any) -> List[Drug]:
    """
    Validate already-decoded backup data.

    Raises:
        BackupLoadError: If data is not a list or a record is invalid

    Expected structure:
        [
            {"id": str, "name": str, "type": "IV", "fields": [...], "formulas": [...]},
            ...
        ]
    """
    if not isinstance(data, list):
        raise BackupLoadError("Backup must be a JSON array of drugs")

    drugs: List[Drug] = []
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise BackupLoadError(f"Backup entry {index} is not an object")
        try:
            drugs.append(Drug.model_validate(record))
        except ValidationError as e:
            drug_id = record.get("id", "?")
            raise BackupLoadError(f"Invalid drug at entry {index} (id={drug_id!r}): {e}")
    return drugs


def loads_backup(text: str) -> List[Drug]:
    """
    Parse backup JSON text.

    Raises:
        BackupLoadError: If text is not valid JSON or not a valid backup
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise BackupLoadError(f"Invalid JSON in backup: {e}")
    return parse_backup(data)


def load_backup(file_path: str | Path) -> List[Drug]:
    """
    Load and validate a backup file.

    Raises:
        BackupLoadError: If file cannot be loaded or doesn't hold valid drugs
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError:
        raise BackupLoadError(f"Backup file not found: {file_path}")
    except UnicodeDecodeError as e:
        raise BackupLoadError(f"Backup file is not UTF-8 text: {e}")
    return loads_backup(text)


def write_backup(drugs: Sequence[Drug], file_path: str | Path) -> Path:
    """Write drugs to a backup file and return its path."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_drugs(drugs), encoding="utf-8")
    return path
