"""API v1 router composition."""

from fastapi import APIRouter

from app.api.v1.endpoints import events

api_router: APIRouter = APIRouter()
api_router.include_router(events.router, prefix="/events", tags=["events"])
