"""
modules/workshop/store.py: Record collections over the preference store.

Each collection is an ordered list of records kept in memory and written
back as one JSON array under its preference key after every change.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Generic, Iterable, List, Optional, Sequence, Type, TypeVar
from uuid import UUID

from pydantic import ValidationError

from core.event_bus import get_event_bus
from core.events import DEMO_DATA_SEEDED, RECORD_ADDED, RECORD_DELETED
from core.interfaces.event_bus import Event, EventBus
from core.preferences import PreferenceStore, get_preference_store
from modules.workshop.models import (
    DiagnosticLog, InventoryRecord, MaintenanceTemplate, MicrowaveListing,
    PartItem, WorkLogEntry, WorkshopRecord,
)

log = logging.getLogger("wavetech.records")

R = TypeVar("R", bound=WorkshopRecord)


@dataclass(frozen=True)
class CollectionSpec:
    name: str
    preference_key: str
    model: Type[WorkshopRecord]
    search_fields: Sequence[str]


MICROWAVES = CollectionSpec(
    "microwaves", "microwave_listings", MicrowaveListing,
    ("sku", "model_name", "brand", "serial_number", "category", "supplier"),
)
PARTS = CollectionSpec(
    "parts", "part_items", PartItem,
    ("part_number", "name", "category", "manufacturer", "supplier"),
)
INVENTORY_RECORDS = CollectionSpec(
    "inventory-records", "inventory_records", InventoryRecord,
    ("reason", "recorded_by", "location", "department", "batch_number"),
)
WORK_LOGS = CollectionSpec(
    "work-logs", "work_logs", WorkLogEntry,
    ("author", "role", "note", "status", "component_replaced"),
)
MAINTENANCE_TEMPLATES = CollectionSpec(
    "maintenance-templates", "maintenance_templates", MaintenanceTemplate,
    ("name", "category", "model_type", "maintenance_type", "department"),
)
DIAGNOSTIC_LOGS = CollectionSpec(
    "diagnostic-logs", "diagnostic_logs", DiagnosticLog,
    ("title", "details", "severity", "technician", "device_name", "category"),
)

ALL_COLLECTIONS = (
    MICROWAVES, PARTS, INVENTORY_RECORDS, WORK_LOGS, MAINTENANCE_TEMPLATES, DIAGNOSTIC_LOGS,
)


class RecordCollection(Generic[R]):
    """In-memory list of one record type, saved whole on every change."""

    def __init__(
        self,
        spec: CollectionSpec,
        preferences: PreferenceStore,
        event_bus: Optional[EventBus] = None,
    ):
        self.spec = spec
        self.preferences = preferences
        self.event_bus = event_bus
        self._lock = threading.Lock()
        self._records: List[R] = self._load()

    @property
    def name(self) -> str:
        return self.spec.name

    def _load(self) -> List[R]:
        raw = self.preferences.get(self.spec.preference_key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            log.warning(f"Ignoring stored '{self.spec.preference_key}': expected a list")
            return []
        try:
            return [self.spec.model.model_validate(item) for item in raw]
        except ValidationError as e:
            log.warning(f"Ignoring undecodable '{self.spec.preference_key}': {e.error_count()} errors")
            return []

    def save(self) -> None:
        self.preferences.set(
            self.spec.preference_key,
            [record.model_dump(mode="json") for record in self._records],
        )

    def __len__(self) -> int:
        return len(self._records)

    def all(self) -> List[R]:
        return list(self._records)

    def get(self, record_id: UUID) -> Optional[R]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def search(self, text: Optional[str]) -> List[R]:
        """Records whose search fields contain `text`, case-insensitively."""
        needle = (text or "").strip().lower()
        if not needle:
            return self.all()
        return [
            record for record in self._records
            if any(needle in str(getattr(record, field, "")).lower() for field in self.spec.search_fields)
        ]

    def add(self, record: R) -> R:
        with self._lock:
            self._records.append(record)
            self.save()
        log.info(f"Added {self.name} record {record.id}")
        self._publish(RECORD_ADDED, {"collection": self.name, "record_id": str(record.id)})
        return record

    def delete_at(self, offsets: Iterable[int]) -> List[R]:
        """Remove records at list positions. Out-of-range offsets are ignored."""
        with self._lock:
            positions = {i for i in offsets if 0 <= i < len(self._records)}
            removed = [r for i, r in enumerate(self._records) if i in positions]
            if not removed:
                return []
            self._records = [r for i, r in enumerate(self._records) if i not in positions]
            self.save()
        self._announce_removed(removed)
        return removed

    def delete(self, record_id: UUID) -> bool:
        with self._lock:
            for index, record in enumerate(self._records):
                if record.id == record_id:
                    del self._records[index]
                    self.save()
                    break
            else:
                return False
        self._announce_removed([record])
        return True

    def replace_all(self, records: Iterable[R]) -> None:
        with self._lock:
            self._records = list(records)
            self.save()

    def _announce_removed(self, removed: List[R]) -> None:
        ids = [str(r.id) for r in removed]
        log.info(f"Deleted {len(ids)} {self.name} record(s)")
        self._publish(RECORD_DELETED, {"collection": self.name, "record_ids": ids})

    def _publish(self, event_type: str, data: dict) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(Event(event_type=event_type, source_module="workshop", data=data))


class WorkshopDataStore:
    """The six workshop collections, loaded together."""

    def __init__(self, preferences: PreferenceStore, event_bus: Optional[EventBus] = None):
        self.preferences = preferences
        self.event_bus = event_bus
        self.collections = {
            spec.name: RecordCollection(spec, preferences, event_bus) for spec in ALL_COLLECTIONS
        }

    def __getitem__(self, name: str) -> RecordCollection:
        return self.collections[name]

    @property
    def microwaves(self) -> RecordCollection[MicrowaveListing]:
        return self.collections[MICROWAVES.name]

    @property
    def parts(self) -> RecordCollection[PartItem]:
        return self.collections[PARTS.name]

    @property
    def inventory_records(self) -> RecordCollection[InventoryRecord]:
        return self.collections[INVENTORY_RECORDS.name]

    @property
    def work_logs(self) -> RecordCollection[WorkLogEntry]:
        return self.collections[WORK_LOGS.name]

    @property
    def maintenance_templates(self) -> RecordCollection[MaintenanceTemplate]:
        return self.collections[MAINTENANCE_TEMPLATES.name]

    @property
    def diagnostic_logs(self) -> RecordCollection[DiagnosticLog]:
        return self.collections[DIAGNOSTIC_LOGS.name]

    def counts(self) -> dict:
        return {name: len(collection) for name, collection in self.collections.items()}

    def seed_if_empty(self) -> bool:
        """Fill every collection with demo records when listings and parts are both empty."""
        if len(self.microwaves) or len(self.parts):
            return False

        from modules.workshop.seed import demo_records
        for name, records in demo_records().items():
            self.collections[name].replace_all(records)
        log.info("Seeded workshop demo data")
        if self.event_bus is not None:
            self.event_bus.publish(Event(
                event_type=DEMO_DATA_SEEDED,
                source_module="workshop",
                data={"collections": sorted(self.collections)},
            ))
        return True


_store: Optional[WorkshopDataStore] = None


def get_data_store() -> WorkshopDataStore:
    """Return the process-wide data store (FastAPI dependency)."""
    global _store
    if _store is None:
        _store = WorkshopDataStore(get_preference_store(), get_event_bus())
    return _store
