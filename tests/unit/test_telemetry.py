import pytest

from gemini_study import telemetry
from gemini_study.core.types import RetryPolicy
from gemini_study.pipeline.backoff import BackoffExecutor
from gemini_study.pipeline.normalizer import ResponseNormalizer
from gemini_study.telemetry import InMemoryReporter, TelemetryContext
from tests.helpers import FlakyOperation, RecordingSleep

pytestmark = pytest.mark.unit


@pytest.fixture
def enabled(monkeypatch):
    monkeypatch.setattr(telemetry, "_TELEMETRY_ENABLED", True)


def test_disabled_context_is_shared_noop():
    reporter = InMemoryReporter()
    ctx = TelemetryContext(reporter)

    with ctx("scope"):
        ctx.count("event")

    assert ctx is TelemetryContext()
    assert reporter.timings == {}
    assert reporter.metrics == {}


def test_enabled_context_records_nested_scopes(enabled):
    reporter = InMemoryReporter()
    ctx = TelemetryContext(reporter)

    with ctx("outer"), ctx("inner"):
        ctx.metric("tokens", 12)

    assert set(reporter.timings) == {"outer", "outer.inner"}
    assert reporter.total("outer.inner.tokens") == 12


@pytest.mark.asyncio
async def test_backoff_counts_retries_and_exhaustion(enabled):
    reporter = InMemoryReporter()
    executor = BackoffExecutor(
        sleep=RecordingSleep(), telemetry=TelemetryContext(reporter)
    )
    op = FlakyOperation([RuntimeError("429")] * 3)

    with pytest.raises(RuntimeError):
        await executor.execute(op, RetryPolicy(2, 1))

    assert reporter.total("backoff.retry") == 1
    assert reporter.total("backoff.exhausted") == 1


def test_normalizer_counts_failures(enabled):
    reporter = InMemoryReporter()
    normalizer = ResponseNormalizer(TelemetryContext(reporter))

    normalizer.normalize("{broken")
    normalizer.normalize('{"ok": true}')

    assert reporter.total("normalizer.failed") == 1


def test_failing_reporter_does_not_break_the_caller(enabled, caplog):
    class Broken:
        def record_timing(self, scope, duration, **metadata):
            raise RuntimeError("boom")

        def record_metric(self, scope, value, **metadata):
            raise RuntimeError("boom")

    ctx = TelemetryContext(Broken())
    with ctx("scope"):
        ctx.count("x")

    assert "Telemetry reporter 'Broken' failed" in caplog.text
