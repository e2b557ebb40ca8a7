"""
Global test configuration.
"""

from contextlib import suppress
import os

import pytest

from gemini_study.core.types import RetryPolicy
from gemini_study.pipeline.backoff import BackoffExecutor
from gemini_study.pipeline.invoker import ModelInvoker
from gemini_study.service import StudyService
from tests.helpers import FakeModelAdapter, RecordingSleep


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-in escape hatch: mark a test with @pytest.mark.allow_dotenv
    to permit .env loading for that specific test.
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_gemini_env(request, monkeypatch):
    """Ensure a clean GEMINI_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("GEMINI_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


# --- Pipeline fixtures ---
@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Instant sleep that records requested delays."""
    return RecordingSleep()


@pytest.fixture
def fast_executor(recording_sleep) -> BackoffExecutor:
    """Executor with deterministic jitter and no real waiting."""
    return BackoffExecutor(sleep=recording_sleep, rand=lambda: 1.0)


@pytest.fixture
def make_service(fast_executor):
    """Factory building a StudyService around a scripted adapter."""

    def _make(
        responses=(),
        embeddings=(),
        *,
        generate_policy: RetryPolicy | None = None,
    ) -> tuple[StudyService, FakeModelAdapter]:
        adapter = FakeModelAdapter(responses, embeddings)
        invoker = ModelInvoker(
            adapter,
            generate_policy=generate_policy or RetryPolicy(3, 10),
            embed_policy=RetryPolicy(3, 10),
            executor=fast_executor,
        )
        return StudyService(invoker), adapter

    return _make


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "allow_dotenv: Permit python-dotenv to load .env files",
        "allow_env_pollution: Keep GEMINI_* variables from the outer environment",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)
