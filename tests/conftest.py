import os

# Tracing is configured at import time; keep tests off the MLflow server.
os.environ["MLFLOW_ENABLE_TRACING"] = "false"

import pytest
from unittest.mock import MagicMock, patch
from dotenv import load_dotenv

from credibility_lens.llm.client import ModelRequest


@pytest.fixture(scope="session", autouse=True)
def _load_env():
    # Load .env once per session without overriding the values above
    load_dotenv(override=False)


def _truthy(v: str | None) -> bool:
    return v is not None and v.strip().lower() not in ("", "0", "false", "no")


@pytest.fixture(scope="session")
def allow_integration(_load_env) -> bool:
    return _truthy(os.getenv("RUN_INTEGRATION_TESTS"))


class FakeModel:
    """Stands in for the remote model: returns a canned reply and counts calls."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[ModelRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def generate(self, request: ModelRequest) -> str:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_model():
    return FakeModel()


@pytest.fixture
def fake_fetcher():
    """Article fetcher double; set `.fetch_text.return_value` or `.side_effect` per test."""
    fetcher = MagicMock()
    fetcher.fetch_text.return_value = "Fetched article body about the city council vote."
    return fetcher


@pytest.fixture
def mock_httpx():
    """
    Mocks httpx.Client for retrieval tests.
    """
    with patch("httpx.Client") as mock_client:
        yield mock_client
