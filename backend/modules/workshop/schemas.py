"""Response schemas for workshop endpoints that are not plain records."""

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    counts: dict[str, int]
    microwave_stock: int
    parts_needing_reorder: int
    open_diagnostics: int
