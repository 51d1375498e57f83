from __future__ import annotations

import logging
import os
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from unitmath import __version__
from unitmath.api.routes_units import router as units_router
from unitmath.errors import UnitMathError
from unitmath.units.render import UnitDisplayFormat

logger = logging.getLogger(__name__)


app = FastAPI(title="unitmath API", version="v1")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(units_router)


@app.exception_handler(UnitMathError)
async def handle_unit_error(request: Request, exc: UnitMathError):
    logger.info("Unit error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"error": type(exc).__name__, "message": str(exc)},
    )


# -----------------------------------------------------------------------------
# Health + Info Endpoints
# -----------------------------------------------------------------------------
@app.get("/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "status": "ok"}


@app.get("/v1/info")
def info() -> Dict[str, Any]:
    return {
        "version": __version__,
        "git_sha": os.getenv("GIT_COMMIT"),
        "display_formats": [fmt.value for fmt in UnitDisplayFormat],
    }
