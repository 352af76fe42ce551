# tests/conftest.py
"""Shared fixtures: in-memory SQLite store, seeded lookup rows, fake notifier and uploader."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import create_tables
from app.errors import UploadError
from app.models import Admin, AlertType, Georeference, Siren, User
from app.services.alert_service import AlertService
from fakes import RecordingNotifier, StubUploader, make_alert


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded(db):
    db.add_all([
        User(id=7, username="jperez", mail="jperez@example.org", first_name="Juan", last_name="Perez",
             phone="555-0107", role="guard", department="Security"),
        User(id=9, username="mrojas", mail="mrojas@example.org", first_name="Maria", last_name="Rojas",
             phone="555-0109", role="resident", department="Block C"),
        Admin(id=1, username="operator", mail="operator@example.org"),
        AlertType(id=3, description="Robbery"),
        AlertType(id=8, description="Panic button"),
        Georeference(id=1, description="North gate", latitude=10.0, longitude=20.0),
        Siren(id=2, description="Dashboard siren", state=0),
    ])
    db.commit()
    return db


@pytest.fixture
def active_alert(seeded):
    return make_alert(seeded, 7, georeference_id=1)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def uploader():
    return StubUploader()


@pytest.fixture
def failing_uploader():
    return StubUploader(error=UploadError("Media service timed out"))


@pytest.fixture
def service(db, uploader, notifier):
    return AlertService(db, uploader, notifier)
