"""
Shared fixtures: an in-memory MongoDB (mongomock), the FastAPI test client,
MOCK_MODE switches and a scripted stand-in for the OpenRouter client.
"""

from types import SimpleNamespace

import httpx
import mongomock
import openai
import pytest
from fastapi.testclient import TestClient

import database
from main import app

# Modules that read MOCK_MODE at import time
MOCK_MODE_MODULES = (
    "services.llm",
    "services.document_analysis",
    "services.answers",
    "routers.analysis",
    "routers.assistant",
)

STATUS_ERRORS = {
    400: openai.BadRequestError,
    401: openai.AuthenticationError,
    429: openai.RateLimitError,
}


def status_error(status: int) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
    response = httpx.Response(status, request=request)
    error_class = STATUS_ERRORS.get(status, openai.InternalServerError)
    return error_class(f"Error code: {status}", response=response, body={"error": {"message": f"upstream {status}"}})


def completion(text: str):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


def stream(chunks: list):
    return [SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=c))]) for c in chunks]


class FakeCompletions:
    """Plays back scripted outcomes: str -> completion, list -> stream, int -> HTTP error"""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if not self.outcomes:
            raise AssertionError("Unexpected completion request")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, int):
            raise status_error(outcome)
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, list):
            return stream(outcome)
        return completion(outcome)


@pytest.fixture
def db():
    database.init_db(client=mongomock.MongoClient())
    yield database.get_db()
    database.close_db()


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def no_db_client():
    database.close_db()
    return TestClient(app)


def _set_mock_mode(monkeypatch, value: bool):
    for module in MOCK_MODE_MODULES:
        monkeypatch.setattr(f"{module}.MOCK_MODE", value)


@pytest.fixture
def mock_mode(monkeypatch):
    _set_mock_mode(monkeypatch, True)


@pytest.fixture
def live_mode(monkeypatch):
    _set_mock_mode(monkeypatch, False)


@pytest.fixture
def gateway(monkeypatch, live_mode):
    """Install a fake gateway client; returns its completions recorder"""
    def install(*outcomes):
        fake = SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(outcomes)))
        monkeypatch.setattr("services.llm.get_client", lambda: fake)
        return fake.chat.completions
    return install
