"""
Vstupný bod FastAPI / FastAPI entry point.
Cestovné náhrady - evidencia pracovných ciest a vyúčtovanie nákladov.
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from travel_costs.api import api_router
from travel_costs.config import settings
from travel_costs.database import async_session, init_db
from travel_costs.utils.seed import seed_allowance_settings

logger = logging.getLogger("travel_costs")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializácia a ukončenie / Startup and shutdown."""
    # Vytvoriť tabuľky pri štarte / Create tables on startup
    await init_db()
    # Predvolené sadzby, ak chýbajú / Default rates if missing
    async with async_session() as session:
        await seed_allowance_settings(session)
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Cestovné náhrady a vyúčtovanie pracovných ciest / Business travel expense settlement",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With", "X-Request-ID"],
)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Pridá jedinečné X-Request-ID ku každej požiadavke / Add unique X-Request-ID to each request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)


# Routy API
app.include_router(api_router)


# Stav API / API health check
@app.get("/api/")
async def api_health():
    """Health check."""
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}


# Štruktúrované JSON logy v produkcii / Structured JSON logging in production
if not settings.DEBUG:
    import json

    class JSONFormatter(logging.Formatter):
        def format(self, record):
            log_entry = {
                "timestamp": self.formatTime(record),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info and record.exc_info[0]:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry, ensure_ascii=False)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(logging.INFO)
