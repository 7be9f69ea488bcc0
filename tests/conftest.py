import os
import tempfile
from pathlib import Path

# Must be set before anything reads the cached settings
os.environ.setdefault("LOG_DIR", str(Path(tempfile.gettempdir()) / "lifemate-test-logs"))
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("FRONTEND_URL", "https://example.com")

import pytest
from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lifemate.core.config import EmailSettings
from lifemate.db.base import Base
from lifemate.models.user import User
from lifemate.models import job_seeker  # noqa: F401 (register tables)
from lifemate.services.email_service import EmailService


class RecordingTransport:
    """Mail transport that keeps every message instead of sending it."""

    def __init__(self):
        self.sent = []

    def send(self, message):
        self.sent.append(message)
        return f"<test-{len(self.sent)}@lifemate.test>"


class FailingTransport:
    def __init__(self, error=None):
        self.error = error or ConnectionRefusedError("SMTP server unreachable")
        self.attempts = 0

    def send(self, message):
        self.attempts += 1
        raise self.error


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def make_user(db, email, role="jobseeker", profile_image="https://cdn.example.com/a.png"):
    user = User(
        first_name="Asha",
        last_name="Menon",
        email=email,
        role=role,
        profile_image=profile_image,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db):
    return make_user(db, "asha@example.com")


@pytest.fixture
def user_without_image(db):
    return make_user(db, "ravi@example.com", profile_image=None)


@pytest.fixture
def employer(db):
    return make_user(db, "hr@apollo.example.com", role="employer")


@pytest.fixture
def complete_profile_data():
    """Profile data that satisfies every completion check except the image."""
    return {
        "title": "Nurse",
        "bio": "ICU nurse with a focus on cardiac care.",
        "specializations": ["Nursing"],
        "experience": {"total_years": 5},
        "education": [
            {
                "degree": "BSc Nursing",
                "field": "Nursing",
                "institution": "AIIMS Delhi",
                "year_of_completion": 2015,
            }
        ],
        "work_experience": [
            {
                "position": "Staff Nurse",
                "company": "Apollo Hospitals",
                "location": "Chennai",
                "start_date": "2016-01-01",
            }
        ],
        "skills": [{"name": "Critical care"}],
        "job_preferences": {
            "preferred_locations": [{"city": "Chennai", "state": "Tamil Nadu"}]
        },
        "resume": {"url": "https://files.example.com/resume.pdf", "filename": "resume.pdf"},
    }


@pytest.fixture
def email_config():
    return EmailSettings(
        base_url="https://example.com",
        sender_name="LifeMate",
        sender_address="noreply@lifemate.com",
    )


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def email_service(email_config, transport):
    return EmailService(email_config, transport)


@pytest.fixture
def log_messages():
    """Capture loguru output for the duration of a test"""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record), level="INFO")
    yield messages
    logger.remove(handler_id)
