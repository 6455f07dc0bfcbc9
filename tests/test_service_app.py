import json

import pytest
from fastapi.testclient import TestClient

from physiviz.service.app import create_app
from physiviz.service.config import Settings
from physiviz.service.parser import ServiceError

REPLY = {
    "domain": "Free Fall",
    "problem_description": "A stone is dropped from a 45 m bridge.",
    "extracted_values": {"h": 45},
    "formulas_used": ["h = 1/2 g t^2"],
    "unknowns": ["time"],
}


class ScriptedClient:
    def __init__(self, reply=None, exc=None):
        self.reply = reply
        self.exc = exc

    def complete(self, problem_text):
        if self.exc is not None:
            raise self.exc
        return self.reply


def _client(reply=None, exc=None, settings=None):
    settings = settings or Settings(api_key="test-key")
    return TestClient(create_app(settings, ScriptedClient(reply, exc)))


def test_health():
    resp = _client().get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "configured": True}


def test_parse_success():
    resp = _client(json.dumps(REPLY)).post("/api/parse", json={"problem": "A stone is dropped ..."})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    result = body["result"]
    assert result["motion_type"] == "free_fall"
    assert result["initial_conditions"]["height"] == 45.0
    assert result["forces"] == ["gravity"]


@pytest.mark.parametrize("payload", [{}, {"problem": ""}, {"problem": "   "}, {"problem": None}])
def test_problem_text_required(payload):
    resp = _client("{}").post("/api/parse", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Problem text required"}


def test_not_configured():
    client = TestClient(create_app(Settings(api_key=None)))
    resp = client.post("/api/parse", json={"problem": "A ball is thrown"})
    assert resp.status_code == 500
    assert resp.json() == {
        "error": "AI service not configured",
        "message": "OPENROUTER_API_KEY not set",
    }


def test_rejected_problem():
    resp = _client('{"error": "Not a physics problem"}').post("/api/parse", json={"problem": "hi"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Not a physics problem"


def test_invalid_model_reply():
    resp = _client("Sorry, I can't do that").post("/api/parse", json={"problem": "A ball"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to process"
    assert "Invalid JSON" in resp.json()["message"]


def test_provider_failure():
    resp = _client(exc=ServiceError("Rate limited")).post("/api/parse", json={"problem": "A ball"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to process", "message": "Rate limited"}


def test_cors_headers():
    resp = _client("{}").get("/api/health", headers={"Origin": "http://localhost:8501"})
    assert resp.headers["access-control-allow-origin"] == "*"
