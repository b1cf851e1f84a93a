"""Pytest fixtures — throwaway SQLite database for fast, isolated tests."""
import uuid
from contextlib import contextmanager
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from fastapi.testclient import TestClient

from talent_portal.config import settings
from talent_portal.database import Base, get_db
from talent_portal.main import app
from talent_portal.models.user import Role
from talent_portal.services import account_service

# Import all models so they register with Base.metadata
from talent_portal.models.user import User                        # noqa: F401
from talent_portal.models.cohort import Cohort                    # noqa: F401
from talent_portal.models.leave_request import LeaveRequest       # noqa: F401
from talent_portal.models.it_ticket import ITSupportTicket        # noqa: F401
from talent_portal.models.profile_update import ProfileUpdateRequest  # noqa: F401
from talent_portal.models.announcement import Announcement        # noqa: F401
from talent_portal.models.scorecard import ScoreCard              # noqa: F401
from talent_portal.models.certificate import VerifiedCertificate  # noqa: F401
from talent_portal.models.feedback import FeedbackEntry           # noqa: F401
from talent_portal.models.candidate_metric import CandidateMetric  # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(autouse=True)
def _fast_hashing_and_no_ai(monkeypatch):
    """Cheap bcrypt and no real OpenAI key unless a test stubs the client."""
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def admin(db) -> dict:
    """The bootstrap Admin/HR account, created straight through the account service."""
    user = account_service.create_account(
        db, "admin@portal.test", "admin-pass", {"display_name": "Portal Admin", "role": Role.admin}
    )
    return {"user_id": user.user_id, "display_name": user.display_name, "role": user.role.value}


# ---------------------------------------------------------------------------
# Helpers: provision accounts and cohorts via the API, return the JSON dict
# ---------------------------------------------------------------------------
def as_actor(user: dict) -> dict:
    """Query params identifying the acting user."""
    return {"actor_user_id": user["user_id"]}


def create_test_user(
    client: TestClient,
    admin: dict,
    name: str = "Test Candidate",
    role: str = "Candidate/Employee",
    email: str | None = None,
    password: str = "secret-pass",
    cohort_id: str | None = None,
) -> dict:
    """Helper — POST /api/auth/accounts as the admin and return response JSON."""
    resp = client.post("/api/auth/accounts", params=as_actor(admin), json={
        "email": email or f"{uuid.uuid4().hex[:8]}@portal.test",
        "password": password,
        "display_name": name,
        "role": role,
        "cohort_id": cohort_id,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_cohort(client: TestClient, admin: dict, name: str = "FNB Tech Academy", sponsor: str = "FNB") -> dict:
    """Helper — POST /api/cohorts and return response JSON."""
    resp = client.post("/api/cohorts/", params=as_actor(admin), json={
        "name": name,
        "program": "Systems Development",
        "sponsor": sponsor,
        "start_date": "2026-01-15",
        "size": 30,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def submit_leave(client: TestClient, user: dict, start: str = "2026-03-02", end: str = "2026-03-04") -> dict:
    resp = client.post("/api/requests/leave", params=as_actor(user), json={
        "user_id": user["user_id"],
        "leave_type": "Annual Leave",
        "start_date": start,
        "end_date": end,
        "reason": "Family visit",
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def submit_ticket(client: TestClient, user: dict, priority: str = "High") -> dict:
    resp = client.post("/api/requests/it-tickets", params=as_actor(user), json={
        "user_id": user["user_id"],
        "category": "Hardware",
        "priority": priority,
        "description": "Laptop will not boot",
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def _failing_commit(self):
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


@contextmanager
def commits_failing():
    """Every Session.commit raises inside the block, as if the database went away."""
    with pytest.MonkeyPatch.context() as m:
        m.setattr(Session, "commit", _failing_commit)
        yield


# ---------------------------------------------------------------------------
# Stub OpenAI client: replays canned chat-completion messages in order
# ---------------------------------------------------------------------------
class StubMessage(SimpleNamespace):
    def model_dump(self):
        calls = None
        if self.tool_calls:
            calls = [
                {"id": c.id, "type": "function",
                 "function": {"name": c.function.name, "arguments": c.function.arguments}}
                for c in self.tool_calls
            ]
        return {"role": "assistant", "content": self.content, "tool_calls": calls}


def stub_reply(content: str | None = None, tool_calls: list | None = None):
    message = StubMessage(content=content, tool_calls=tool_calls or None)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message)],
        usage=SimpleNamespace(total_tokens=10),
    )


def stub_tool_call(name: str, arguments: str, call_id: str = "call_1"):
    return SimpleNamespace(id=call_id, function=SimpleNamespace(name=name, arguments=arguments))


class StubOpenAI:
    """Quacks like ``OpenAI`` for ``client.chat.completions.create``."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.requests = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.requests.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply
