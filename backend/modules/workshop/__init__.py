MODULE_ID = "workshop"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Microwave workshop records: listings, parts, stock movements, work, maintenance and diagnostic logs"

ROUTES = [
    "workshop.routes",
]

TABLES = []

PUBLISHES = [
    "workshop.record_added",
    "workshop.record_deleted",
    "workshop.demo_data_seeded",
]

SUBSCRIBES = []

IMPLEMENTS = ["workshop.data_store"]

REQUIRES = []

DAEMONS = []


def register(app, registry) -> None:
    """Register the workshop routes and advertise the data store."""
    from modules.workshop import routes
    from modules.workshop.store import get_data_store

    registry.register_provider("workshop.data_store", get_data_store)
    app.include_router(routes.router, prefix="/api")
    app.include_router(routes.router, prefix="/api/v1")


async def on_startup(app) -> None:
    """Load the collections and seed demo records into an empty workshop."""
    from core.config import settings

    provider = app.state.registry.get_provider("workshop.data_store")
    store = app.dependency_overrides.get(provider, provider)()
    if settings.seed_demo_data:
        store.seed_if_empty()
