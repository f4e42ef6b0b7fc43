import pytest
from fastapi.testclient import TestClient

from preconsult.main import app
from preconsult.api.routes import get_service

from .conftest import VALID_PERSONAL_INFO


@pytest.fixture
def client(service):
    app.dependency_overrides[get_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _start(client):
    response = client.post("/api/consultations")
    assert response.status_code == 200
    return response.json()["session_id"]


def _to_questions(client, session_id):
    client.post(f"/api/consultations/{session_id}/consent", json={"agreed": True})
    client.patch(f"/api/consultations/{session_id}/personal-info", json=VALID_PERSONAL_INFO)
    body = client.post(f"/api/consultations/{session_id}/personal-info/confirm").json()
    assert body["step"] == "medical_questions"
    return body


def test_root(client):
    assert client.get("/").json() == {"message": "PreConsult API is running"}


def test_form(client):
    body = client.get("/api/form").json()
    assert [q["key"] for q in body["personal_questions"]] == ["name", "dob", "gender"]
    assert body["gender_options"] == ["Male", "Female", "Prefer not to say"]


def test_start_returns_consent_view(client):
    session_id = _start(client)
    body = client.get(f"/api/consultations/{session_id}").json()
    assert body["step"] == "consent"
    assert body["current_question"] is None
    assert len(body["responses"]) == 5
    assert body["progress"]["total_questions"] == 5


def test_unknown_session_is_404(client):
    assert client.get("/api/consultations/nope").status_code == 404
    response = client.post("/api/consultations/nope/consent", json={"agreed": True})
    assert response.status_code == 404


def test_decline_and_restart(client):
    session_id = _start(client)
    body = client.post(
        f"/api/consultations/{session_id}/consent", json={"agreed": False}
    ).json()
    assert body["step"] == "denied"

    body = client.post(f"/api/consultations/{session_id}/restart").json()
    assert body["step"] == "consent"
    assert body["patient_context"] == {"name": "", "dob": "", "gender": ""}


def test_invalid_personal_info_reports_error(client):
    session_id = _start(client)
    client.post(f"/api/consultations/{session_id}/consent", json={"agreed": True})
    client.patch(
        f"/api/consultations/{session_id}/personal-info",
        json={"name": "Jo", "gender": "Male", "dob": "2000-01-01"},
    )
    body = client.post(f"/api/consultations/{session_id}/personal-info/confirm").json()
    assert body["step"] == "personal_info"
    assert "DD/MM/YYYY" in body["error_message"]


def test_blank_answer_reports_error(client):
    session_id = _start(client)
    _to_questions(client, session_id)
    body = client.post(f"/api/consultations/{session_id}/next", json={"answer": "  "}).json()
    assert body["step"] == "medical_questions"
    assert body["error_message"] == "Please provide an answer to continue."


def test_draft_then_next_without_body(client):
    session_id = _start(client)
    _to_questions(client, session_id)
    client.put(f"/api/consultations/{session_id}/draft", json={"answer": "fever"})
    body = client.post(f"/api/consultations/{session_id}/next").json()
    assert body["responses"][0]["answer"] == "fever"
    assert body["progress"]["question_number"] == 2


def test_back_from_first_question(client):
    session_id = _start(client)
    _to_questions(client, session_id)
    client.put(f"/api/consultations/{session_id}/draft", json={"answer": "typed"})
    body = client.post(f"/api/consultations/{session_id}/back").json()
    assert body["step"] == "personal_info"
    assert body["responses"][0]["answer"] == "typed"


def test_full_flow_saves_and_summarises(client, store):
    session_id = _start(client)
    body = _to_questions(client, session_id)
    assert body["current_question"]["text"] == body["responses"][0]["question"]

    assert client.get(f"/api/consultations/{session_id}/summary").status_code == 409

    for index in range(5):
        body = client.post(
            f"/api/consultations/{session_id}/next", json={"answer": f"answer {index} "}
        ).json()
    assert body["step"] == "saving"

    body = client.get(f"/api/consultations/{session_id}").json()
    assert body["step"] == "complete"
    assert body["is_saving"] is False
    assert len(store.saved) == 1

    summary = client.get(f"/api/consultations/{session_id}/summary").json()
    assert [item["answer"] for item in summary["items"]] == [f"answer {i}" for i in range(5)]
    assert summary["text"].startswith("Name: Jo")


def test_delete_ends_session(client):
    session_id = _start(client)
    assert client.delete(f"/api/consultations/{session_id}").status_code == 204
    assert client.get(f"/api/consultations/{session_id}").status_code == 404
    assert client.delete(f"/api/consultations/{session_id}").status_code == 404
