"""
WaveTech: Microwave workshop API

FastAPI application serving the startup gate decision and the workshop
record collections (listings, parts, stock movements, service logs).
"""

import logging

from core.app import create_app
from core.config import settings

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
