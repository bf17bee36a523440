# core/app.py: App factory with dynamic module discovery
#
# Creates and configures the FastAPI application. Discovers all modules under
# backend/modules/, resolves load order from REQUIRES/IMPLEMENTS declarations,
# and calls each module's register(app, registry) function.
#
# main.py: from core.app import create_app; app = create_app()

import asyncio
import importlib
import logging
import pathlib
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

log = logging.getLogger("wavetech.api")

# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

_version_file = pathlib.Path(__file__).parent.parent.parent / "VERSION"
if _version_file.exists():
    __version__ = _version_file.read_text().strip()
else:
    __version__ = "1.0.0"


# ---------------------------------------------------------------------------
# Module discovery helpers
# ---------------------------------------------------------------------------

def _discover_modules() -> list[str]:
    """Return a list of module package names found under backend/modules/.

    A valid module directory contains an __init__.py with a MODULE_ID attribute.
    """
    modules_dir = pathlib.Path(__file__).parent.parent / "modules"
    found = []
    for entry in sorted(modules_dir.iterdir()):
        if not entry.is_dir() or not (entry / "__init__.py").exists():
            continue
        pkg_name = f"modules.{entry.name}"
        try:
            mod = importlib.import_module(pkg_name)
        except Exception as exc:
            log.warning(f"Module discovery: skipping {pkg_name!r}: {exc}")
            continue
        if hasattr(mod, "MODULE_ID"):
            found.append(pkg_name)
    return found


def _resolve_load_order(pkg_names: list[str]) -> list[str]:
    """Topologically sort modules so that providers load before their consumers.

    Kahn's algorithm over REQUIRES -> IMPLEMENTS edges. Modules caught in a
    cycle or requiring an unknown interface are appended in discovery order.
    """
    manifests = {pkg: importlib.import_module(pkg) for pkg in pkg_names}

    providers: dict[str, str] = {}
    for pkg, m in manifests.items():
        for iface in getattr(m, "IMPLEMENTS", []):
            providers[iface] = pkg

    edges: dict[str, set[str]] = {pkg: set() for pkg in pkg_names}
    for pkg, m in manifests.items():
        for iface in getattr(m, "REQUIRES", []):
            provider_pkg = providers.get(iface)
            if provider_pkg and provider_pkg != pkg:
                edges[pkg].add(provider_pkg)

    in_degree = {pkg: len(deps) for pkg, deps in edges.items()}
    queue = sorted(pkg for pkg in pkg_names if in_degree[pkg] == 0)
    ordered: list[str] = []

    while queue:
        pkg = queue.pop(0)
        ordered.append(pkg)
        for other_pkg, deps in edges.items():
            if pkg in deps:
                in_degree[other_pkg] -= 1
                if in_degree[other_pkg] == 0:
                    queue.append(other_pkg)
                    queue.sort()

    remaining = [pkg for pkg in pkg_names if pkg not in ordered]
    if remaining:
        log.warning(
            f"Module load order: circular or unresolvable dependencies for "
            f"{remaining}, appending in discovery order."
        )
        ordered.extend(remaining)

    return ordered


# ---------------------------------------------------------------------------
# Middleware setup
# ---------------------------------------------------------------------------

def _setup_middleware(app: FastAPI) -> None:
    """Attach CORS and security-headers middleware to the app."""
    from core.config import settings

    _cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    if "*" in _cors_origins:
        log.warning(
            "CORS origin '*' is incompatible with allow_credentials=True, "
            "falling back to empty origins list. Set explicit origins in CORS_ORIGINS."
        )
        _cors_origins = []

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains"
        return response


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app() -> FastAPI:
    """Create and fully configure the WaveTech FastAPI application.

    1. Discover all modules under backend/modules/ and order them.
    2. Build a ModuleRegistry; call each module's register(app, registry)
       before the first request arrives.
    3. Lifespan: create tables, validate dependencies, run each module's
       on_startup(app) hook, cancel background tasks on shutdown.
    """
    from core.db import engine, init_db
    from core.registry import ModuleRegistry

    registry = ModuleRegistry()
    ordered_pkgs = _resolve_load_order(_discover_modules())
    log.info(f"Module load order: {[p.split('.')[-1] for p in ordered_pkgs]}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db()
        registry.validate_dependencies()

        app.state.background_tasks = []
        for pkg in ordered_pkgs:
            hook = getattr(importlib.import_module(pkg), "on_startup", None)
            if hook is not None:
                await hook(app)
        log.info("Startup complete")

        yield

        for task in app.state.background_tasks:
            task.cancel()
        if app.state.background_tasks:
            await asyncio.gather(*app.state.background_tasks, return_exceptions=True)

    app = FastAPI(
        title="WaveTech",
        description="Microwave workshop inventory and service records with a remote startup gate",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
    )
    app.state.registry = registry

    _setup_middleware(app)

    @app.get("/health", tags=["System"])
    def health_check():
        """Liveness plus database reachability."""
        db_ok = True
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            log.warning(f"Health check database probe failed: {e}")
            db_ok = False
        return {
            "status": "ok" if db_ok else "degraded",
            "version": __version__,
            "database": db_ok,
        }

    for pkg in ordered_pkgs:
        mod = importlib.import_module(pkg)
        registry.record_requires(getattr(mod, "MODULE_ID", pkg), getattr(mod, "REQUIRES", []))
        mod.register(app, registry)
        log.debug(f"Registered module: {pkg}")

    return app
