import pytest
from unittest.mock import MagicMock
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routers import session as session_router
from api.session_manager import SessionManager
from database.repositories.course_repo import CourseRepositoryDB
from models import Course
from session import InMemoryCourseNotes, InMemoryPlayerProfileStore, InMemoryRoundStore

from conftest import ScriptedAssistant, reply


EMPTY_COURSE = Course(id="empty-course", name="Driving Range")


@pytest.fixture
def assistant():
    return ScriptedAssistant(
        reply("Great drive!", cue="log", club="Driver", outcome="Fairway"),
        None,
        reply("Par it is.", scoreOnHole=4),
    )


@pytest.fixture
def stores(course):
    return InMemoryRoundStore(), InMemoryCourseNotes([course, EMPTY_COURSE])


@pytest.fixture
def client(assistant, stores):
    round_store, notes = stores
    app = FastAPI()
    app.include_router(session_router.router, prefix="/api/session")
    app.state.session_manager = SessionManager(
        courses=notes,
        assistant=assistant,
        round_store=round_store,
        course_notes=notes,
        profile_store=InMemoryPlayerProfileStore(),
    )
    with TestClient(app) as c:
        yield c


def _start(client, course_id):
    return client.post("/api/session", json={"course_id": course_id})


# ================================================================
# Start
# ================================================================

def test_start_session(client, course):
    resp = _start(client, course.id)
    assert resp.status_code == 201
    body = resp.json()
    assert body["course_name"] == "Pebble Creek"
    assert body["state"] == "active"
    assert body["turn_state"] == "idle"
    assert body["current_hole"]["hole_number"] == 1
    assert len(body["round"]["conversation"]) == 1


def test_start_unknown_course(client):
    assert _start(client, "no-such-course").status_code == 404


def test_start_course_without_holes(client):
    assert _start(client, EMPTY_COURSE.id).status_code == 400


def test_start_while_round_active(client, course):
    _start(client, course.id)
    assert _start(client, course.id).status_code == 409


# ================================================================
# Messages
# ================================================================

def test_message_turns(client, course):
    _start(client, course.id)

    resp = client.post("/api/session/messages", json={"text": "Driver down the middle"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["outcome"] == "completed"
    assert body["reply"]["text"] == "Great drive!"
    perf = body["session"]["round"]["hole_by_hole"][0]
    assert perf["shots"][0]["club"] == "Driver"

    resp = client.post("/api/session/messages", json={"text": "Wedge onto the green"})
    assert resp.status_code == 502

    resp = client.post("/api/session/messages", json={"text": "Two putts"})
    assert resp.status_code == 200
    assert resp.json()["session"]["round"]["hole_by_hole"][0]["score"] == 4


def test_blank_message_rejected(client, course):
    _start(client, course.id)
    assert client.post("/api/session/messages", json={"text": "   "}).status_code == 422


def test_message_without_session(client):
    assert client.post("/api/session/messages", json={"text": "Hello"}).status_code == 404


# ================================================================
# Finish / abandon
# ================================================================

def test_finish_session(client, course, stores):
    round_store, _ = stores
    _start(client, course.id)
    client.post("/api/session/messages", json={"text": "Driver down the middle"})

    resp = client.post("/api/session/finish")
    assert resp.status_code == 200
    assert resp.json()["finished_at"] is not None

    history = round_store.get_round_history(course.id)
    assert len(history) == 1
    assert history[0].is_finished

    assert client.get("/api/session").status_code == 404
    assert _start(client, course.id).status_code == 201


def test_abandon_session(client, course):
    _start(client, course.id)
    assert client.delete("/api/session").status_code == 204
    assert client.get("/api/session").status_code == 404
    assert client.delete("/api/session").status_code == 404


def test_start_with_malformed_id_on_database_catalog(assistant, stores):
    round_store, notes = stores
    pool = MagicMock()
    app = FastAPI()
    app.include_router(session_router.router, prefix="/api/session")
    app.state.session_manager = SessionManager(
        courses=CourseRepositoryDB(pool),
        assistant=assistant,
        round_store=round_store,
        course_notes=notes,
        profile_store=InMemoryPlayerProfileStore(),
    )

    with TestClient(app) as c:
        resp = _start(c, "not-a-uuid")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Course not found"
    pool.acquire.assert_not_called()
