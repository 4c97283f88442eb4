"""FastAPI entrypoint for the dorm association event shop."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from app.api.v1.api import api_router
from app.core.config import settings
from app.db import session as db_session
from app.db.base import Base
from app.db.seed import ensure_demo_event

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup() -> None:
    logger.info("Business timezone: %s", settings.business_timezone)
    Base.metadata.create_all(bind=db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            ensure_demo_event(session)
        except Exception:
            logger.exception("[BOOTSTRAP] Seed failed; continuing startup.")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
