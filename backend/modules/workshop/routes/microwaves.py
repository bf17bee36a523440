"""Microwave listing endpoints."""

from fastapi import APIRouter, Depends

from modules.workshop.forms import MicrowaveListingForm
from modules.workshop.models import MicrowaveListing
from modules.workshop.store import MICROWAVES, WorkshopDataStore, get_data_store
from ._helpers import collection_router

router = APIRouter()


@router.get("/microwaves/favorites", response_model=list[MicrowaveListing], tags=["Microwaves"])
def list_favorite_microwaves(store: WorkshopDataStore = Depends(get_data_store)):
    """Listings marked as favorite."""
    return [m for m in store.microwaves.all() if m.favorite]


router.include_router(collection_router(MICROWAVES, MicrowaveListingForm, "Microwaves"))
