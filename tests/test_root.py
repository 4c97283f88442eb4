"""Application bootstrap tests."""

from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.db import session as db_session
from app.db.base import Base
from app.db.seed import DEMO_EVENT_SLUG, ensure_demo_event
from app.main import app
from app.models import ShopEventRecord
from app.services.event_service import to_shop_event


def _session_factory(db_file: Path) -> tuple[Engine, sessionmaker]:
    engine = create_engine(f"sqlite:///{db_file}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


def test_health_endpoint(tmp_path: Path, monkeypatch) -> None:
    engine, testing_session_local = _session_factory(tmp_path / "test_health.db")
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)

    with TestClient(app) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_startup_seeds_demo_event_in_dev(tmp_path: Path, monkeypatch) -> None:
    engine, testing_session_local = _session_factory(tmp_path / "test_seed_startup.db")
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(settings, "app_env", "dev")

    with TestClient(app):
        pass

    with testing_session_local() as db:
        events = db.query(ShopEventRecord).all()

    assert [event.slug for event in events] == [DEMO_EVENT_SLUG]
    config = to_shop_event(events[0])
    assert config.daily_cutoff_time == settings.default_daily_cutoff_time
    assert config.delivery_lead_days == settings.default_delivery_lead_days


def test_seed_is_idempotent_and_dev_only(tmp_path: Path, monkeypatch) -> None:
    _, testing_session_local = _session_factory(tmp_path / "test_seed_idempotent.db")
    monkeypatch.setattr(settings, "app_env", "dev")

    with testing_session_local() as db:
        assert ensure_demo_event(db) is not None
        assert ensure_demo_event(db) is None
        assert db.query(ShopEventRecord).count() == 1

    monkeypatch.setattr(settings, "app_env", "prod")
    _, empty_session_local = _session_factory(tmp_path / "test_seed_prod.db")
    with empty_session_local() as db:
        assert ensure_demo_event(db) is None
        assert db.query(ShopEventRecord).count() == 0
