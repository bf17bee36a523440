MODULE_ID = "gate"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Startup gate: remote validation deciding between remote content and the native UI"

ROUTES = [
    "gate.routes",
]

TABLES = []

PUBLISHES = [
    "gate.state_changed",
]

SUBSCRIBES = []

IMPLEMENTS = ["gate.controller"]

REQUIRES = []

DAEMONS = ["gate.activation"]


def register(app, registry) -> None:
    """Register the gate routes and advertise the controller."""
    from modules.gate import routes
    from modules.gate.controller import get_gate_controller

    registry.register_provider("gate.controller", get_gate_controller)
    app.include_router(routes.router, prefix="/api")
    app.include_router(routes.router, prefix="/api/v1")


async def on_startup(app) -> None:
    """Kick off gate activation in the background so startup never blocks on it."""
    import asyncio
    from core.config import settings

    if not settings.gate_activate_on_startup:
        return
    provider = app.state.registry.get_provider("gate.controller")
    controller = app.dependency_overrides.get(provider, provider)()
    app.state.background_tasks.append(asyncio.create_task(controller.activate()))
