"""Spare part endpoints."""

from fastapi import APIRouter, Depends

from modules.workshop.forms import PartItemForm
from modules.workshop.models import PartItem
from modules.workshop.store import PARTS, WorkshopDataStore, get_data_store
from ._helpers import collection_router

router = APIRouter()


@router.get("/parts/reorder", response_model=list[PartItem], tags=["Parts"])
def list_parts_to_reorder(store: WorkshopDataStore = Depends(get_data_store)):
    """Active parts at or below their reorder threshold."""
    return [p for p in store.parts.all() if p.active and p.needs_reorder]


router.include_router(collection_router(PARTS, PartItemForm, "Parts"))
