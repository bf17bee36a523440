"""Gate routes: current startup decision for the UI shell."""

import logging

from fastapi import APIRouter, Depends

from modules.gate.controller import GateController, get_gate_controller
from modules.gate.schemas import GateStateResponse

log = logging.getLogger("wavetech.api")
router = APIRouter(prefix="/gate", tags=["Gate"])


@router.get("", response_model=GateStateResponse)
def get_gate_state(controller: GateController = Depends(get_gate_controller)):
    """Current gate state: show a loader, the remote content, or the native UI."""
    return controller.state.to_dict()


@router.post("/activate", response_model=GateStateResponse)
async def activate_gate(controller: GateController = Depends(get_gate_controller)):
    """Run the gate if it has not finished yet and return the resulting state."""
    state = await controller.activate()
    return state.to_dict()
