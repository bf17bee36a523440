"""Inventory movement endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends

from modules.workshop.forms import InventoryRecordForm
from modules.workshop.models import InventoryRecord
from modules.workshop.store import INVENTORY_RECORDS, WorkshopDataStore, get_data_store
from ._helpers import collection_router

router = APIRouter()


@router.get("/parts/{part_id}/inventory-records", response_model=list[InventoryRecord], tags=["Inventory"])
def list_part_movements(
    part_id: UUID,
    transaction_type: Optional[str] = None,
    store: WorkshopDataStore = Depends(get_data_store),
):
    """Stock movements recorded against one part, newest first."""
    records = [r for r in store.inventory_records.all() if r.part_id == part_id]
    if transaction_type:
        records = [r for r in records if r.transaction_type.value == transaction_type]
    return sorted(records, key=lambda r: r.recorded_at, reverse=True)


router.include_router(collection_router(INVENTORY_RECORDS, InventoryRecordForm, "Inventory"))
