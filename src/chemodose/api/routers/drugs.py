"""Drugs router - catalogue CRUD, reorder, duplicate and backup endpoints."""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, HTTPException, Query
from fastapi.responses import Response

from chemodose.api.dependencies import get_drug_store
from chemodose.api.models import ImportResponse, MessageResponse, ReorderRequest
from chemodose.runtime.backup import BACKUP_FILENAME, BackupLoadError, export_drugs, parse_backup
from chemodose.schemas.drug import Drug
from chemodose.storage import DrugExistsError, DrugNotFoundError

router = APIRouter(tags=["drugs"])


@router.get("/api/drugs", response_model=List[Drug])
def list_drugs(q: Optional[str] = Query(None, description="Filter on name or category")):
    """List drugs in catalogue order (sort_order, then name)."""
    return get_drug_store().list_drugs(q)


@router.get("/api/drugs/export")
def export_backup():
    """Download every drug as a JSON backup file."""
    data = export_drugs(get_drug_store().list_drugs())
    return Response(
        content=data,
        media_type="application/json; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{BACKUP_FILENAME}"'},
    )


@router.post("/api/drugs/import", response_model=ImportResponse)
def import_backup(payload: Any = Body(..., description="JSON array of drugs")):
    """
    Import drugs from a backup.

    Drugs whose id already exists are skipped, never overwritten.
    """
    try:
        drugs = parse_backup(payload)
    except BackupLoadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return get_drug_store().import_drugs(drugs).to_dict()


@router.post("/api/drugs/reorder", response_model=MessageResponse)
def reorder_drugs(request: ReorderRequest):
    """Apply new sort positions in one write."""
    get_drug_store().reorder(request.orders)
    return {"message": "Reordered successfully"}


@router.get("/api/drugs/{drug_id}", response_model=Drug)
def get_drug(drug_id: str):
    drug = get_drug_store().get_drug(drug_id)
    if drug is None:
        raise HTTPException(status_code=404, detail=f"Drug not found: {drug_id}")
    return drug


@router.post("/api/drugs", response_model=MessageResponse, status_code=201)
def create_drug(drug: Drug):
    try:
        get_drug_store().create_drug(drug)
    except DrugExistsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Drug created"}


@router.put("/api/drugs/{drug_id}", response_model=MessageResponse)
def update_drug(drug_id: str, drug: Drug):
    """
    Replace a drug.

    The body may carry a different ``id`` to rename the drug; renaming onto
    an existing id is rejected.
    """
    try:
        get_drug_store().update_drug(drug_id, drug)
    except DrugNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DrugExistsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Drug updated"}


@router.delete("/api/drugs/{drug_id}", response_model=MessageResponse)
def delete_drug(drug_id: str):
    """Delete a drug. Deleting an unknown id is not an error."""
    get_drug_store().delete_drug(drug_id)
    return {"message": "Drug deleted"}


@router.post("/api/drugs/{drug_id}/duplicate", response_model=Drug, status_code=201)
def duplicate_drug(drug_id: str):
    """Copy a drug under a new id, e.g. as the starting point for a variant."""
    try:
        return get_drug_store().duplicate_drug(drug_id)
    except DrugNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
