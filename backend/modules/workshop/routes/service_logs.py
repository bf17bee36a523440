"""Work log, maintenance template and diagnostic log endpoints."""

from fastapi import APIRouter

from modules.workshop.forms import DiagnosticLogForm, MaintenanceTemplateForm, WorkLogEntryForm
from modules.workshop.store import DIAGNOSTIC_LOGS, MAINTENANCE_TEMPLATES, WORK_LOGS
from ._helpers import collection_router

router = APIRouter()
router.include_router(collection_router(WORK_LOGS, WorkLogEntryForm, "Work Logs"))
router.include_router(collection_router(MAINTENANCE_TEMPLATES, MaintenanceTemplateForm, "Maintenance Templates"))
router.include_router(collection_router(DIAGNOSTIC_LOGS, DiagnosticLogForm, "Diagnostic Logs"))
