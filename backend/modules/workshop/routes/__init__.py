"""Workshop routes package: assembles all sub-routers."""

from fastapi import APIRouter
from .microwaves import router as microwaves_router
from .parts import router as parts_router
from .inventory_records import router as inventory_records_router
from .service_logs import router as service_logs_router
from .dashboard import router as dashboard_router

router = APIRouter()
router.include_router(inventory_records_router)
router.include_router(parts_router)
router.include_router(microwaves_router)
router.include_router(service_logs_router)
router.include_router(dashboard_router)
