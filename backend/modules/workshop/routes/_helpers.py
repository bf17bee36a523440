"""Shared CRUD endpoints for the workshop record collections."""

import logging
from typing import Optional, Type
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from modules.workshop.forms import RecordValidationError
from modules.workshop.store import CollectionSpec, WorkshopDataStore, get_data_store

log = logging.getLogger("wavetech.api")


class ValidationReport(BaseModel):
    valid: bool
    errors: list[str]


def collection_router(spec: CollectionSpec, form_model: Type[BaseModel], tag: str) -> APIRouter:
    """List/get/create/validate/delete endpoints for one collection under /<spec.name>."""
    router = APIRouter(prefix=f"/{spec.name}", tags=[tag])
    record_model = spec.model

    @router.get("", response_model=list[record_model])
    def list_records(q: Optional[str] = None, store: WorkshopDataStore = Depends(get_data_store)):
        return store[spec.name].search(q)

    @router.post("/validate", response_model=ValidationReport)
    def validate_record(form: form_model):
        """Check a form without saving it."""
        try:
            form.to_record()
        except RecordValidationError as e:
            return {"valid": False, "errors": e.errors}
        return {"valid": True, "errors": []}

    @router.get("/{record_id}", response_model=record_model)
    def get_record(record_id: UUID, store: WorkshopDataStore = Depends(get_data_store)):
        record = store[spec.name].get(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail=f"{tag} record not found")
        return record

    @router.post("", response_model=record_model, status_code=status.HTTP_201_CREATED)
    def create_record(form: form_model, store: WorkshopDataStore = Depends(get_data_store)):
        try:
            record = form.to_record()
        except RecordValidationError as e:
            log.info(f"Rejected new {spec.name} record: {e}")
            raise HTTPException(status_code=422, detail=e.errors)
        return store[spec.name].add(record)

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_record(record_id: UUID, store: WorkshopDataStore = Depends(get_data_store)):
        if not store[spec.name].delete(record_id):
            raise HTTPException(status_code=404, detail=f"{tag} record not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
