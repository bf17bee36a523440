"""
modules/workshop/models.py: Record types for the workshop domain.

Flat records persisted as JSON arrays in the preference store:
microwave listings, part items, inventory records, work logs,
maintenance templates, diagnostic logs.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from core.base import ApprovalStatus, InspectionStatus, Shift, TransactionType


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkshopRecord(BaseModel):
    """Fields every stored record carries."""
    model_config = ConfigDict(extra="ignore")

    id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class MicrowaveListing(WorkshopRecord):
    """A microwave model held in stock."""
    sku: str
    model_name: str
    serial_number: str
    category: str
    brand: str
    wattage: int
    voltage: int
    capacity_liters: int
    color: str
    dimensions: str
    weight_kg: float
    material: str
    control_type: str
    features: List[str] = []
    energy_rating: str
    warranty_years: int
    manufacture_date: datetime
    purchase_date: datetime
    supplier: str
    cost_price: float
    selling_price: float
    stock_quantity: int
    location_bin: str
    condition: str = "New"
    notes: str = ""
    power_consumption: float = 0.0
    country_of_origin: str
    barcode: str
    maintenance_interval_days: int = 0
    last_serviced_date: Optional[datetime] = None
    next_service_date: Optional[datetime] = None
    favorite: bool = False
    tags: List[str] = []


class PartItem(WorkshopRecord):
    """A spare part and its stock/reorder settings."""
    part_number: str
    name: str
    category: str
    sub_category: str = ""
    manufacturer: str
    model_compatibility: str
    description: str
    material: str = ""
    color: str = ""
    size: str = ""
    weight_grams: int
    unit_cost: float
    selling_price: float
    stock_quantity: int
    reorder_threshold: int
    reorder_quantity: int
    supplier: str
    supplier_contact: str = ""
    location_bin: str
    storage_condition: str = ""
    warranty_months: int
    warranty_expiry: Optional[datetime] = None
    purchase_date: datetime
    last_restocked: datetime
    barcode: str = ""
    notes: str = ""
    serial_tracked: bool = False
    compatible_models: List[str] = []
    part_image_name: str = ""
    quality_grade: str = ""
    rating: int = 3
    active: bool = True

    @property
    def needs_reorder(self) -> bool:
        return self.stock_quantity <= self.reorder_threshold


class InventoryRecord(WorkshopRecord):
    """A stock movement for one part."""
    part_id: UUID
    change: int
    reason: str
    recorded_by: str
    recorded_at: datetime
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    verified_by: str = ""
    verification_date: Optional[datetime] = None
    previous_quantity: int
    new_quantity: int
    location: str
    batch_number: str = ""
    reference_doc: str = ""
    cost_impact: float
    remarks: str = ""
    transaction_type: TransactionType = TransactionType.INBOUND
    department: str
    shift: Shift = Shift.MORNING
    temperature: float
    humidity: float
    barcode: str = ""
    supervisor: str = ""
    inspection_status: InspectionStatus = InspectionStatus.PENDING
    audit_flag: bool = False
    photo_name: str = ""
    category: str = ""
    storage_area: str = ""
    shelf_number: str = ""
    label_color: str = ""
    record_source: str = "Manual"
    device_name: str = ""
    session_id: str = ""
    uploaded: bool = True


class WorkLogEntry(WorkshopRecord):
    """One step of a repair job, with its readings."""
    job_id: UUID
    author: str
    role: str
    note: str
    timestamp: datetime
    step_number: int
    status: str
    temperature_reading: float
    voltage_reading: float
    current_reading: float
    resistance_reading: float
    component_replaced: str
    part_used: str
    time_spent_minutes: int
    tools_used: List[str] = []
    image_name: str = ""
    customer_feedback: str = ""
    satisfaction_level: int
    warranty_claim: bool = False
    claim_status: str = ""
    issue_resolved: bool = False
    supervisor_name: str = ""
    environment_note: str = ""
    humidity_level: float
    safety_check_done: bool = False
    cleaned_after_service: bool = False
    next_visit_suggested: bool = False
    next_visit_date: Optional[datetime] = None
    additional_cost: float
    remarks: str = ""
    signature_name: str = ""


class MaintenanceTemplate(WorkshopRecord):
    """A reusable maintenance procedure."""
    name: str
    category: str
    model_type: str
    version: str
    steps: List[str] = []
    recommended_interval_days: int
    estimated_duration_minutes: int
    difficulty_level: str
    tools_required: List[str] = []
    safety_precautions: List[str] = []
    parts_required: List[str] = []
    created_by: str
    approved_by: str
    approval_date: Optional[datetime] = None
    review_date: Optional[datetime] = None
    rating: int
    usage_count: int
    last_used_date: Optional[datetime] = None
    next_review_date: Optional[datetime] = None
    remarks: str = ""
    tag: str = ""
    active: bool = True
    associated_model: str
    maintenance_type: str
    department: str
    version_notes: str = ""
    language: str
    country: str
    estimated_cost: float
    warranty_required: bool = False
    last_updated_by: str


class DiagnosticLog(WorkshopRecord):
    """A diagnostic finding recorded during a job."""
    title: str
    details: str
    recorded_at: datetime
    severity: str
    technician: str
    job_id: Optional[UUID] = None
    device_name: str
    os_version: str = ""
    app_version: str = ""
    temperature: float
    voltage: float
    current: float
    resistance: float
    frequency: float = 0.0
    notes: str
    category: str
    cause: str
    solution: str
    recommendation: str = ""
    time_spent_minutes: int
    status: str = ""
    location: str = ""
    humidity: float = 0.0
    test_tools: List[str] = []
    image_name: str = ""
    video_name: str = ""
    tag: str = ""
    reviewed_by: str = ""
    review_date: Optional[datetime] = None
    approved: bool = False
    archived: bool = False
