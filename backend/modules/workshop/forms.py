"""
modules/workshop/forms.py: Add-record forms and their save-time checks.

Forms carry what the shell's input fields hold (mostly text). to_record()
checks every field, collects all messages, and either returns the typed
record or raises RecordValidationError with the full list.
"""

from datetime import datetime
from typing import Any, List, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel

from core.base import ApprovalStatus, InspectionStatus, Shift, TransactionType
from modules.workshop.models import (
    DiagnosticLog, InventoryRecord, MaintenanceTemplate, MicrowaveListing,
    PartItem, WorkLogEntry, utcnow,
)

FormValue = Union[int, float, str, None]


class RecordValidationError(ValueError):
    """A form failed its save-time checks. `errors` holds every message."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


def split_list(text: Optional[str]) -> List[str]:
    """Split a comma-separated input into trimmed, non-empty items."""
    if not text:
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


class FormChecker:
    """Accumulates messages while reading form values."""

    def __init__(self):
        self.errors: List[str] = []

    def fail(self, message: str) -> None:
        self.errors.append(message)

    def required(self, value: Optional[str], label: str, message: Optional[str] = None) -> str:
        text = (value or "").strip()
        if not text:
            self.fail(message or f"{label} is required.")
        return text

    def integer(self, value: FormValue, label: str, message: Optional[str] = None) -> Optional[int]:
        parsed = _parse_int(value)
        if parsed is None:
            self.fail(message or f"{label} must be a valid number.")
        return parsed

    def number(self, value: FormValue, label: str, message: Optional[str] = None) -> Optional[float]:
        parsed = _parse_float(value)
        if parsed is None:
            self.fail(message or f"{label} must be a valid number.")
        return parsed

    def check(self, condition: bool, message: str) -> None:
        if not condition:
            self.fail(message)

    def raise_if_failed(self) -> None:
        if self.errors:
            raise RecordValidationError(self.errors)


def _parse_int(value: FormValue) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _parse_float(value: FormValue) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _parse_uuid(value: Optional[str]) -> Optional[UUID]:
    try:
        return UUID((value or "").strip())
    except ValueError:
        return None


# ============== Inventory forms ==============

class MicrowaveListingForm(BaseModel):
    sku: str = ""
    model_name: str = ""
    serial_number: str = ""
    category: str = ""
    brand: str = ""
    wattage: FormValue = 0
    voltage: FormValue = 0
    capacity_liters: FormValue = 0
    color: str = ""
    dimensions: str = ""
    weight_kg: FormValue = 0.0
    material: str = ""
    control_type: str = ""
    features: str = ""
    energy_rating: str = ""
    warranty_years: FormValue = 0
    manufacture_date: Optional[datetime] = None
    purchase_date: Optional[datetime] = None
    supplier: str = ""
    cost_price: FormValue = 0.0
    selling_price: FormValue = 0.0
    stock_quantity: FormValue = 0
    location_bin: str = ""
    condition: str = "New"
    notes: str = ""
    power_consumption: FormValue = 0.0
    country_of_origin: str = ""
    barcode: str = ""
    maintenance_interval_days: FormValue = 0
    last_serviced_date: Optional[datetime] = None
    next_service_date: Optional[datetime] = None
    favorite: bool = False
    tags: str = ""

    def to_record(self) -> MicrowaveListing:
        c = FormChecker()
        text = {
            name: c.required(getattr(self, name), label)
            for name, label in (
                ("sku", "SKU"), ("model_name", "Model Name"), ("serial_number", "Serial Number"),
                ("category", "Category"), ("brand", "Brand"), ("color", "Color"),
                ("dimensions", "Dimensions"), ("material", "Material"),
                ("control_type", "Control Type"), ("energy_rating", "Energy Rating"),
                ("supplier", "Supplier"), ("location_bin", "Location Bin"),
                ("country_of_origin", "Country of Origin"), ("barcode", "Barcode"),
            )
        }
        wattage = c.integer(self.wattage, "Wattage")
        voltage = c.integer(self.voltage, "Voltage")
        capacity = c.integer(self.capacity_liters, "Capacity (L)")
        weight = c.number(self.weight_kg, "Weight (Kg)")
        warranty = c.integer(self.warranty_years, "Warranty (Years)")
        cost_price = c.number(self.cost_price, "Cost Price")
        selling_price = c.number(self.selling_price, "Selling Price")
        stock = c.integer(self.stock_quantity, "Stock Quantity")
        interval = c.integer(self.maintenance_interval_days, "Maintenance Interval")
        power = c.number(self.power_consumption, "Power Consumption")

        if wattage is not None:
            c.check(wattage > 0, "Wattage must be > 0.")
        if voltage is not None:
            c.check(voltage > 0, "Voltage must be > 0.")
        if capacity is not None:
            c.check(capacity > 0, "Capacity must be > 0.")
        if warranty is not None:
            c.check(warranty >= 0, "Warranty must be >= 0.")
        if selling_price is not None:
            c.check(selling_price > 0, "Selling Price must be > 0.0.")
        if cost_price is not None:
            c.check(cost_price > 0, "Cost Price must be > 0.0.")
        if stock is not None:
            c.check(stock >= 0, "Stock Quantity must be >= 0.")
        if interval is not None:
            c.check(interval >= 0, "Maintenance Interval must be >= 0.")
        c.raise_if_failed()

        now = utcnow()
        return MicrowaveListing(
            **text,
            wattage=wattage, voltage=voltage, capacity_liters=capacity,
            weight_kg=weight, features=split_list(self.features),
            warranty_years=warranty,
            manufacture_date=self.manufacture_date or now,
            purchase_date=self.purchase_date or now,
            cost_price=cost_price, selling_price=selling_price,
            stock_quantity=stock, condition=self.condition, notes=self.notes,
            power_consumption=power, maintenance_interval_days=interval,
            last_serviced_date=self.last_serviced_date,
            next_service_date=self.next_service_date,
            favorite=self.favorite, tags=split_list(self.tags),
        )


class PartItemForm(BaseModel):
    part_number: str = ""
    name: str = ""
    category: str = ""
    sub_category: str = ""
    manufacturer: str = ""
    model_compatibility: str = ""
    description: str = ""
    material: str = ""
    color: str = ""
    size: str = ""
    weight_grams: FormValue = ""
    unit_cost: FormValue = ""
    selling_price: FormValue = ""
    stock_quantity: FormValue = ""
    reorder_threshold: FormValue = ""
    reorder_quantity: FormValue = ""
    supplier: str = ""
    supplier_contact: str = ""
    location_bin: str = ""
    storage_condition: str = ""
    warranty_months: FormValue = ""
    purchase_date: Optional[datetime] = None
    last_restocked: Optional[datetime] = None
    barcode: str = ""
    notes: str = ""
    serial_tracked: bool = False
    compatible_models: str = ""
    part_image_name: str = ""
    quality_grade: str = ""
    rating: FormValue = "3"
    active: bool = True

    def to_record(self) -> PartItem:
        c = FormChecker()
        part_number = c.required(self.part_number, "Part Number")
        name = c.required(self.name, "Name")
        category = c.required(self.category, "Category")
        manufacturer = c.required(self.manufacturer, "Manufacturer")
        model_compatibility = c.required(self.model_compatibility, "Model Compatibility")
        description = c.required(self.description, "Description")
        weight = c.integer(self.weight_grams, "Weight (Grams)")
        unit_cost = c.number(self.unit_cost, "Unit Cost")
        selling_price = c.number(self.selling_price, "Selling Price")
        stock = c.integer(self.stock_quantity, "Stock Quantity")
        threshold = c.integer(self.reorder_threshold, "Reorder Threshold")
        reorder_qty = c.integer(self.reorder_quantity, "Reorder Quantity")
        supplier = c.required(self.supplier, "Supplier")
        location_bin = c.required(self.location_bin, "Location Bin")
        warranty = c.integer(self.warranty_months, "Warranty (Months)")
        rating = _parse_int(self.rating)
        c.check(rating is not None and 1 <= rating <= 5, "Rating must be a number between 1 and 5.")
        c.raise_if_failed()

        now = utcnow()
        purchase_date = self.purchase_date or now
        return PartItem(
            part_number=part_number, name=name, category=category,
            sub_category=self.sub_category, manufacturer=manufacturer,
            model_compatibility=model_compatibility, description=description,
            material=self.material, color=self.color, size=self.size,
            weight_grams=weight, unit_cost=unit_cost, selling_price=selling_price,
            stock_quantity=stock, reorder_threshold=threshold,
            reorder_quantity=reorder_qty, supplier=supplier,
            supplier_contact=self.supplier_contact, location_bin=location_bin,
            storage_condition=self.storage_condition, warranty_months=warranty,
            warranty_expiry=_add_months(purchase_date, warranty),
            purchase_date=purchase_date, last_restocked=self.last_restocked or now,
            barcode=self.barcode, notes=self.notes, serial_tracked=self.serial_tracked,
            compatible_models=split_list(self.compatible_models),
            part_image_name=self.part_image_name, quality_grade=self.quality_grade,
            rating=rating, active=self.active,
        )


def _add_months(start: datetime, months: int) -> datetime:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    # Clamp to the last day of the target month (Jan 31 + 1 month -> Feb 28/29)
    for day in (start.day, 30, 29, 28):
        try:
            return start.replace(year=year, month=month, day=day)
        except ValueError:
            continue
    return start.replace(year=year, month=month, day=28)


class InventoryRecordForm(BaseModel):
    part_id: str = ""
    change: FormValue = ""
    reason: str = ""
    recorded_by: str = ""
    recorded_at: Optional[datetime] = None
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    verified_by: str = ""
    verification_date: Optional[datetime] = None
    previous_quantity: FormValue = ""
    new_quantity: FormValue = ""
    location: str = ""
    batch_number: str = ""
    reference_doc: str = ""
    cost_impact: FormValue = ""
    remarks: str = ""
    transaction_type: TransactionType = TransactionType.INBOUND
    department: str = ""
    shift: Shift = Shift.MORNING
    temperature: FormValue = ""
    humidity: FormValue = ""
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

    def to_record(self) -> InventoryRecord:
        c = FormChecker()
        part_id = _parse_uuid(self.part_id)
        c.check(part_id is not None, "Invalid Part ID format (Must be a valid UUID).")
        change = c.integer(self.change, "Quantity Change")
        previous = c.integer(self.previous_quantity, "Previous Quantity")
        new = c.integer(self.new_quantity, "New Quantity")
        cost = c.number(self.cost_impact, "Cost Impact")
        reason = c.required(self.reason, "Reason")
        recorded_by = c.required(self.recorded_by, "Recorded By")
        location = c.required(self.location, "Location")
        department = c.required(self.department, "Department")
        temperature = _parse_float(self.temperature)
        humidity = _parse_float(self.humidity)
        c.check(temperature is not None and humidity is not None,
                "Temperature and Humidity are required.")
        c.raise_if_failed()

        return InventoryRecord(
            part_id=part_id, change=change, reason=reason, recorded_by=recorded_by,
            recorded_at=self.recorded_at or utcnow(),
            approval_status=self.approval_status, verified_by=self.verified_by,
            verification_date=self.verification_date,
            previous_quantity=previous, new_quantity=new, location=location,
            batch_number=self.batch_number, reference_doc=self.reference_doc,
            cost_impact=cost, remarks=self.remarks,
            transaction_type=self.transaction_type, department=department,
            shift=self.shift, temperature=temperature, humidity=humidity,
            barcode=self.barcode, supervisor=self.supervisor,
            inspection_status=self.inspection_status, audit_flag=self.audit_flag,
            photo_name=self.photo_name, category=self.category,
            storage_area=self.storage_area, shelf_number=self.shelf_number,
            label_color=self.label_color, record_source=self.record_source,
            device_name=self.device_name, session_id=str(uuid4()).upper(),
            uploaded=True,
        )


# ============== Service forms ==============

class WorkLogEntryForm(BaseModel):
    job_id: str = ""
    author: str = ""
    role: str = ""
    note: str = ""
    timestamp: Optional[datetime] = None
    step_number: FormValue = ""
    status: str = ""
    temperature_reading: FormValue = ""
    voltage_reading: FormValue = ""
    current_reading: FormValue = ""
    resistance_reading: FormValue = ""
    component_replaced: str = ""
    part_used: str = ""
    time_spent_minutes: FormValue = ""
    tools_used: str = ""
    image_name: str = ""
    customer_feedback: str = ""
    satisfaction_level: FormValue = ""
    warranty_claim: bool = False
    claim_status: str = ""
    issue_resolved: bool = False
    supervisor_name: str = ""
    environment_note: str = ""
    humidity_level: FormValue = ""
    safety_check_done: bool = False
    cleaned_after_service: bool = False
    next_visit_suggested: bool = False
    next_visit_date: Optional[datetime] = None
    additional_cost: FormValue = ""
    remarks: str = ""
    signature_name: str = ""

    def to_record(self) -> WorkLogEntry:
        c = FormChecker()
        author = c.required(self.author, "Author")
        role = c.required(self.role, "Role")
        note = c.required(self.note, "Note")
        status = c.required(self.status, "Status")
        step = c.integer(self.step_number, "Step Number", "Step Number must be an integer.")
        temperature = c.number(self.temperature_reading, "Temperature", "Temperature must be a number.")
        voltage = c.number(self.voltage_reading, "Voltage", "Voltage must be a number.")
        current = c.number(self.current_reading, "Current", "Current must be a number.")
        resistance = c.number(self.resistance_reading, "Resistance", "Resistance must be a number.")
        component = c.required(self.component_replaced, "Component Replaced")
        part_used = c.required(self.part_used, "Part Used")
        minutes = c.integer(self.time_spent_minutes, "Time Spent", "Time Spent must be an integer.")
        satisfaction = c.integer(self.satisfaction_level, "Satisfaction Level",
                                 "Satisfaction Level must be an integer.")
        cost = c.number(self.additional_cost, "Additional Cost", "Additional Cost must be a number.")
        humidity = c.number(self.humidity_level, "Humidity Level", "Humidity Level must be a number.")
        c.raise_if_failed()

        return WorkLogEntry(
            job_id=_parse_uuid(self.job_id) or uuid4(),
            author=author, role=role, note=note,
            timestamp=self.timestamp or utcnow(), step_number=step, status=status,
            temperature_reading=temperature, voltage_reading=voltage,
            current_reading=current, resistance_reading=resistance,
            component_replaced=component, part_used=part_used,
            time_spent_minutes=minutes, tools_used=split_list(self.tools_used),
            image_name=self.image_name, customer_feedback=self.customer_feedback,
            satisfaction_level=satisfaction, warranty_claim=self.warranty_claim,
            claim_status=self.claim_status, issue_resolved=self.issue_resolved,
            supervisor_name=self.supervisor_name, environment_note=self.environment_note,
            humidity_level=humidity, safety_check_done=self.safety_check_done,
            cleaned_after_service=self.cleaned_after_service,
            next_visit_suggested=self.next_visit_suggested,
            next_visit_date=self.next_visit_date if self.next_visit_suggested else None,
            additional_cost=cost, remarks=self.remarks,
            signature_name=self.signature_name,
        )


class MaintenanceTemplateForm(BaseModel):
    name: str = ""
    category: str = ""
    model_type: str = ""
    version: str = ""
    steps: str = ""
    recommended_interval_days: FormValue = ""
    estimated_duration_minutes: FormValue = ""
    difficulty_level: str = ""
    tools_required: str = ""
    safety_precautions: str = ""
    parts_required: str = ""
    created_by: str = ""
    approved_by: str = ""
    approval_date: Optional[datetime] = None
    review_date: Optional[datetime] = None
    rating: FormValue = ""
    usage_count: FormValue = ""
    last_used_date: Optional[datetime] = None
    next_review_date: Optional[datetime] = None
    remarks: str = ""
    tag: str = ""
    active: bool = True
    associated_model: str = ""
    maintenance_type: str = ""
    department: str = ""
    version_notes: str = ""
    language: str = ""
    country: str = ""
    estimated_cost: FormValue = ""
    warranty_required: bool = False
    last_updated_by: str = ""

    def to_record(self) -> MaintenanceTemplate:
        c = FormChecker()
        name = c.required(self.name, "Template Name")
        category = c.required(self.category, "Category")
        model_type = c.required(self.model_type, "Model Type")
        version = c.required(self.version, "Version")
        interval = c.integer(self.recommended_interval_days, "Interval Days",
                             "Valid Interval Days is required.")
        duration = c.integer(self.estimated_duration_minutes, "Duration",
                             "Valid Duration (Minutes) is required.")
        difficulty = c.required(self.difficulty_level, "Difficulty Level")
        created_by = c.required(self.created_by, "Created By")
        approved_by = c.required(self.approved_by, "Approved By")
        associated_model = c.required(self.associated_model, "Associated Model")
        maintenance_type = c.required(self.maintenance_type, "Maintenance Type")
        department = c.required(self.department, "Department")
        language = c.required(self.language, "Language")
        country = c.required(self.country, "Country")
        cost = c.number(self.estimated_cost, "Estimated Cost", "Valid Estimated Cost is required.")
        last_updated_by = c.required(self.last_updated_by, "Last Updated By")
        rating = c.integer(self.rating, "Rating", "Valid Rating (1-5) is required.")
        usage_count = c.integer(self.usage_count, "Usage Count", "Valid Usage Count is required.")
        c.raise_if_failed()

        return MaintenanceTemplate(
            name=name, category=category, model_type=model_type, version=version,
            steps=split_list(self.steps), recommended_interval_days=interval,
            estimated_duration_minutes=duration, difficulty_level=difficulty,
            tools_required=split_list(self.tools_required),
            safety_precautions=split_list(self.safety_precautions),
            parts_required=split_list(self.parts_required),
            created_by=created_by, approved_by=approved_by,
            approval_date=self.approval_date, review_date=self.review_date,
            rating=rating, usage_count=usage_count, last_used_date=self.last_used_date,
            next_review_date=self.next_review_date, remarks=self.remarks, tag=self.tag,
            active=self.active, associated_model=associated_model,
            maintenance_type=maintenance_type, department=department,
            version_notes=self.version_notes, language=language, country=country,
            estimated_cost=cost, warranty_required=self.warranty_required,
            last_updated_by=last_updated_by,
        )


class DiagnosticLogForm(BaseModel):
    title: str = ""
    details: str = ""
    recorded_at: Optional[datetime] = None
    severity: str = ""
    technician: str = ""
    job_id: str = ""
    device_name: str = ""
    os_version: str = ""
    app_version: str = ""
    temperature: FormValue = None
    voltage: FormValue = None
    current: FormValue = None
    resistance: FormValue = None
    frequency: FormValue = None
    notes: str = ""
    category: str = ""
    cause: str = ""
    solution: str = ""
    recommendation: str = ""
    time_spent_minutes: FormValue = None
    status: str = ""
    location: str = ""
    humidity: FormValue = None
    test_tools: str = ""
    image_name: str = ""
    video_name: str = ""
    tag: str = ""
    reviewed_by: str = ""
    approved: bool = False
    archived: bool = False

    def to_record(self) -> DiagnosticLog:
        c = FormChecker()
        title = c.required(self.title, "Title")
        details = c.required(self.details, "Details")
        severity = c.required(self.severity, "Severity")
        technician = c.required(self.technician, "Technician")
        device_name = c.required(self.device_name, "Device Name")
        temperature = c.number(self.temperature, "Temperature", "Temperature is required.")
        voltage = c.number(self.voltage, "Voltage", "Voltage is required.")
        current = c.number(self.current, "Current", "Current is required.")
        resistance = c.number(self.resistance, "Resistance", "Resistance is required.")
        notes = c.required(self.notes, "Notes")
        category = c.required(self.category, "Category")
        cause = c.required(self.cause, "Cause")
        solution = c.required(self.solution, "Solution")
        minutes = c.integer(self.time_spent_minutes, "Time Spent", "Time Spent is required.")
        c.raise_if_failed()

        return DiagnosticLog(
            title=title, details=details, recorded_at=self.recorded_at or utcnow(),
            severity=severity, technician=technician, job_id=_parse_uuid(self.job_id),
            device_name=device_name, os_version=self.os_version,
            app_version=self.app_version, temperature=temperature, voltage=voltage,
            current=current, resistance=resistance,
            frequency=_parse_float(self.frequency) or 0.0,
            notes=notes, category=category, cause=cause, solution=solution,
            recommendation=self.recommendation, time_spent_minutes=minutes,
            status=self.status, location=self.location,
            humidity=_parse_float(self.humidity) or 0.0,
            test_tools=split_list(self.test_tools), image_name=self.image_name,
            video_name=self.video_name, tag=self.tag, reviewed_by=self.reviewed_by,
            review_date=utcnow() if self.approved else None,
            approved=self.approved, archived=self.archived,
        )


def form_errors(form: Any) -> List[str]:
    """Messages the form would raise, or [] if it would save."""
    try:
        form.to_record()
    except RecordValidationError as e:
        return e.errors
    return []
