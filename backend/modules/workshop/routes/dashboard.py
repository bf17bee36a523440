"""Workshop dashboard summary."""

from fastapi import APIRouter, Depends

from modules.workshop.schemas import DashboardSummary
from modules.workshop.store import WorkshopDataStore, get_data_store

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardSummary)
def get_dashboard(store: WorkshopDataStore = Depends(get_data_store)):
    """Record counts per collection plus the stock figures shown on the home screen."""
    parts = store.parts.all()
    return {
        "counts": store.counts(),
        "microwave_stock": sum(m.stock_quantity for m in store.microwaves.all()),
        "parts_needing_reorder": sum(1 for p in parts if p.active and p.needs_reorder),
        "open_diagnostics": sum(1 for d in store.diagnostic_logs.all() if not d.archived),
    }
