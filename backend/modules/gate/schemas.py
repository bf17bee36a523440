"""
modules/gate/schemas.py: Pydantic schemas for the gate API.
"""

from typing import Optional
from pydantic import BaseModel

from core.base import GateStatus


class GateStateResponse(BaseModel):
    status: GateStatus
    token: Optional[str] = None
    url: Optional[str] = None
    show_loader: bool
    terminal: bool
