from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from busplanner.adapters.api.controllers.itineraries import router as itineraries_router
from busplanner.domain.exceptions import (
    CatalogConfigError,
    InputError,
    MalformedEntryError,
)

# Catalog/configuration faults whose message is safe and useful to clients.
_EXPOSED_ERRORS = (
    CatalogConfigError,
    FileNotFoundError,
    InputError,
    MalformedEntryError,
)

app = FastAPI(title="BusPlanner")
app.include_router(itineraries_router)


def _reveal_all_errors() -> bool:
    raw = os.getenv("BUSPLANNER_REVEAL_ERRORS") or ""
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return every unhandled error as a JSON 500."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    if isinstance(exc, _EXPOSED_ERRORS) or _reveal_all_errors():
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"
    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
