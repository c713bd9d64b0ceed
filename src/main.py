from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.geo import router as geo_router
from src.adapters.api.controllers.routes import router as routes_router
from src.adapters.api.dependencies import get_config
from src.adapters.config import AppConfig
from src.app.services.error_handler_service import error_info
from src.domain.exceptions import (
    ConfigurationError,
    DecodeError,
    ProviderUnavailable,
    TrackingError,
)
from src.domain.models import ServiceStatus

logger = logging.getLogger("asset_tracker.api")

app = FastAPI(title="Asset Tracking Publisher")
app.include_router(geo_router)
app.include_router(routes_router)


def _reveal_errors() -> bool:
    return (os.getenv("TRACKER_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }


def _error_body(exc: BaseException, detail: str) -> dict[str, object]:
    info = error_info(exc.__cause__ or exc)
    return {
        "detail": detail,
        "title": info.title,
        "message": info.message,
        "can_retry": info.can_retry,
    }


@app.exception_handler(DecodeError)
async def decode_error_handler(request: Request, exc: DecodeError) -> JSONResponse:
    return JSONResponse(status_code=422, content=_error_body(exc, str(exc)))


@app.exception_handler(ProviderUnavailable)
@app.exception_handler(ConfigurationError)
async def provider_error_handler(request: Request, exc: TrackingError) -> JSONResponse:
    logger.warning("Maps provider error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content=_error_body(exc, str(exc)))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception", extra={"path": str(request.url.path)})

    detail = str(exc) or exc.__class__.__name__
    if not _reveal_errors():
        detail = "Internal Server Error"
    return JSONResponse(status_code=500, content=_error_body(exc, detail))


@app.get("/health")
def health(cfg: AppConfig = Depends(get_config)) -> dict[str, str]:
    maps = ServiceStatus.AVAILABLE if cfg.has_maps_key else ServiceStatus.UNAVAILABLE
    return {"status": "ok", "maps": maps.value}
