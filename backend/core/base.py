"""
core/base.py: Declarative Base and shared enums.

All ORM models import Base from here.
Enums used by more than one domain module live here
to avoid circular imports between domain modules.
"""

from enum import Enum
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class GateStatus(str, Enum):
    """Lifecycle of the startup gate within one process."""
    IDLE = "idle"
    VALIDATING = "validating"
    APPROVED = "approved"        # Show remote content
    USE_NATIVE = "use_native"    # Show the built-in application

    @property
    def is_terminal(self) -> bool:
        return self in (GateStatus.APPROVED, GateStatus.USE_NATIVE)


class TransactionType(str, Enum):
    INBOUND = "Inbound"
    OUTBOUND = "Outbound"
    ADJUSTMENT = "Adjustment"


class ApprovalStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class InspectionStatus(str, Enum):
    PENDING = "Pending"
    PASSED = "Passed"
    FAILED = "Failed"


class Shift(str, Enum):
    MORNING = "Morning"
    EVENING = "Evening"
    NIGHT = "Night"
