"""Demo records loaded into an empty workshop (one per collection)."""

from datetime import timedelta
from typing import Dict, List
from uuid import uuid4

from core.base import ApprovalStatus, InspectionStatus, Shift, TransactionType
from modules.workshop.models import (
    DiagnosticLog, InventoryRecord, MaintenanceTemplate, MicrowaveListing,
    PartItem, WorkLogEntry, WorkshopRecord, utcnow,
)


def demo_records() -> Dict[str, List[WorkshopRecord]]:
    now = utcnow()
    day = timedelta(days=1)
    stamps = {"created_at": now, "updated_at": now}

    microwave = MicrowaveListing(
        sku="MW-1001", model_name="HeatMaster Pro", serial_number="SN12345",
        category="Solo", brand="HeatWave", wattage=900, voltage=220, capacity_liters=20,
        color="Silver", dimensions="45x35x25 cm", weight_kg=12.5,
        material="Stainless Steel", control_type="Touch",
        features=["Defrost", "Timer", "Child Lock"], energy_rating="A+",
        warranty_years=2, manufacture_date=now - 200 * day, purchase_date=now - 30 * day,
        supplier="ABC Electronics", cost_price=120.0, selling_price=199.0,
        stock_quantity=10, location_bin="A1", condition="New", notes="Bestseller",
        power_consumption=0.9, country_of_origin="Japan", barcode="MW1001-ABC",
        maintenance_interval_days=180, last_serviced_date=now - 90 * day,
        next_service_date=now + 90 * day, favorite=True,
        tags=["Popular", "Energy Efficient"], **stamps,
    )

    part = PartItem(
        part_number="PT-001", name="Turntable Plate", category="Replacement",
        sub_category="Glass", manufacturer="HeatWave", model_compatibility="HeatMaster Pro",
        description="High quality microwave turntable plate.", material="Tempered Glass",
        color="Transparent", size="27 cm", weight_grams=500, unit_cost=5.0,
        selling_price=9.9, stock_quantity=50, reorder_threshold=10, reorder_quantity=30,
        supplier="ABC Electronics", supplier_contact="support@abc.com", location_bin="P1",
        storage_condition="Room Temp", warranty_months=6, warranty_expiry=now + 180 * day,
        purchase_date=now - 30 * day, last_restocked=now, barcode="PT001-ABC",
        notes="Fits multiple models", serial_tracked=False,
        compatible_models=["HeatMaster Pro"], part_image_name="plate.png",
        quality_grade="A", rating=5, active=True, **stamps,
    )

    inventory = InventoryRecord(
        part_id=part.id, change=5, reason="Restock", recorded_by="Admin", recorded_at=now,
        approval_status=ApprovalStatus.APPROVED, verified_by="Manager",
        verification_date=now, previous_quantity=45, new_quantity=50,
        location="Warehouse A", batch_number="B001", reference_doc="INV123",
        cost_impact=25.0, remarks="Restocked successfully",
        transaction_type=TransactionType.INBOUND, department="Inventory",
        shift=Shift.MORNING, temperature=25.0, humidity=40.0, barcode="INV001",
        supervisor="Mr. Ali", inspection_status=InspectionStatus.PASSED, audit_flag=True,
        photo_name="restock.jpg", category="Parts", storage_area="Main Shelf",
        shelf_number="S1", label_color="Blue", record_source="Manual",
        device_name="iPad", session_id="SID001", uploaded=True, **stamps,
    )

    work_log = WorkLogEntry(
        job_id=uuid4(), author="Technician A", role="Maintenance",
        note="Replaced heating coil.", timestamp=now, step_number=1, status="Completed",
        temperature_reading=80.0, voltage_reading=220.0, current_reading=1.2,
        resistance_reading=5.5, component_replaced="Coil", part_used="PT-001",
        time_spent_minutes=45, tools_used=["Screwdriver", "Multimeter"],
        image_name="repair.jpg", customer_feedback="Good service", satisfaction_level=5,
        warranty_claim=False, claim_status="N/A", issue_resolved=True,
        supervisor_name="Mr. Khan", environment_note="Clean workspace", humidity_level=35.0,
        safety_check_done=True, cleaned_after_service=True, next_visit_suggested=False,
        next_visit_date=None, additional_cost=0.0, remarks="Job completed",
        signature_name="TechA", **stamps,
    )

    template = MaintenanceTemplate(
        name="Basic Microwave Check", category="Routine", model_type="Solo", version="1.0",
        steps=["Inspect exterior", "Check power cord", "Run test cycle"],
        recommended_interval_days=180, estimated_duration_minutes=30,
        difficulty_level="Easy", tools_required=["Multimeter"],
        safety_precautions=["Unplug before inspection"], parts_required=["PT-001"],
        created_by="Admin", approved_by="Supervisor", approval_date=now, review_date=now,
        rating=5, usage_count=3, last_used_date=now, next_review_date=now + 180 * day,
        remarks="Standard maintenance routine", tag="Routine", active=True,
        associated_model="HeatMaster Pro", maintenance_type="Preventive",
        department="Service", version_notes="Initial release", language="English",
        country="Pakistan", estimated_cost=50.0, warranty_required=False,
        last_updated_by="Admin", **stamps,
    )

    diagnostic = DiagnosticLog(
        title="Voltage Drop Detected", details="Voltage dropped below 200V for 5 seconds.",
        recorded_at=now, severity="Medium", technician="Technician A", job_id=None,
        device_name="iPad", os_version="iOS 14.0", app_version="1.0", temperature=28.0,
        voltage=198.0, current=1.0, resistance=4.8, frequency=50.0,
        notes="Power fluctuation issue.", category="Electrical",
        cause="Power supply instability", solution="Recommend voltage stabilizer",
        recommendation="Monitor usage for 1 week", time_spent_minutes=10, status="Logged",
        location="Workshop", humidity=40.0, test_tools=["Multimeter"], image_name="log.jpg",
        video_name="video.mp4", tag="Voltage", reviewed_by="Supervisor", review_date=now,
        approved=True, archived=False, **stamps,
    )

    return {
        "microwaves": [microwave],
        "parts": [part],
        "inventory-records": [inventory],
        "work-logs": [work_log],
        "maintenance-templates": [template],
        "diagnostic-logs": [diagnostic],
    }
