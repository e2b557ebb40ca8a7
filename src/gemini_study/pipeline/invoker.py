"""Model invocation under the retry policy.

The invoker owns the provider handle handed to it by the composition root.
Each logical call runs through the ``BackoffExecutor``; once retries are
exhausted, or on a non-retryable failure, the error is classified and
raised as a ``RemoteModelError``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gemini_study.core.exceptions import (
    MissingKeyError,
    StudyPipelineError,
    UnsupportedInputError,
)
from gemini_study.core.types import Failure, RetryPolicy, Success, TextPart
from gemini_study.pipeline.backoff import BackoffExecutor
from gemini_study.pipeline.error_classifier import ErrorClassifier
from gemini_study.telemetry import TelemetryContext

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Sequence

    from gemini_study.core.types import APIPart, Result
    from gemini_study.pipeline.adapters.base import ModelAdapter
    from gemini_study.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

T_INVOKER_GENERATE = "invoker.generate"
T_INVOKER_EMBED = "invoker.embed"

DEFAULT_GENERATION_MODEL = "gemini-2.5-flash"
DEFAULT_EMBEDDING_MODEL = "gemini-embedding-001"
DEFAULT_GENERATE_POLICY = RetryPolicy.from_retries(4, 500)
DEFAULT_EMBED_POLICY = RetryPolicy.from_retries(5, 400)

MISSING_KEY_MESSAGE = (
    "GEMINI_API_KEY is not set. Set GEMINI_API_KEY in your environment or .env "
    "file and restart the service."
)

type ModelOutcome = Result[str, StudyPipelineError]


class ModelInvoker:
    """Submits prompts and parts to the remote model.

    Args:
        adapter: Provider handle, or None when no credential is configured.
            A missing handle makes every call fail fast with
            ``MissingKeyError`` before any network traffic.
        generation_model: Model used by ``generate``.
        embedding_model: Model used by ``embed``.
        generate_policy: Retry policy for generation calls.
        embed_policy: Retry policy for embedding calls.
        executor: Retry executor; shared executors are safe, they hold no
            per-call state.
        classifier: Maps terminal failures to error kinds.
    """

    def __init__(
        self,
        adapter: ModelAdapter | None,
        *,
        generation_model: str = DEFAULT_GENERATION_MODEL,
        embedding_model: str = DEFAULT_EMBEDDING_MODEL,
        generate_policy: RetryPolicy = DEFAULT_GENERATE_POLICY,
        embed_policy: RetryPolicy = DEFAULT_EMBED_POLICY,
        executor: BackoffExecutor | None = None,
        classifier: ErrorClassifier | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self._adapter = adapter
        self.generation_model = generation_model
        self.embedding_model = embedding_model
        self.generate_policy = generate_policy
        self.embed_policy = embed_policy
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()
        self._executor = executor or BackoffExecutor(telemetry=self._telemetry)
        self._classifier = classifier or ErrorClassifier()

    def _require_adapter(self) -> ModelAdapter:
        if self._adapter is None:
            raise MissingKeyError(MISSING_KEY_MESSAGE)
        return self._adapter

    async def embed(
        self, text: str, *, cancel_event: asyncio.Event | None = None
    ) -> list[float]:
        """Return the embedding vector for ``text``.

        Raises:
            MissingKeyError: No credential configured; no request is made.
            RemoteModelError: The remote call failed terminally.
        """
        adapter = self._require_adapter()

        async def op() -> list[float]:
            return await adapter.embed(model_name=self.embedding_model, text=text)

        with self._telemetry(T_INVOKER_EMBED, model=self.embedding_model):
            try:
                return await self._executor.execute(
                    op, self.embed_policy, cancel_event=cancel_event, label="embed"
                )
            except Exception as e:
                self._classifier.raise_classified(e, operation="Embedding")

    async def generate(
        self,
        prompt_or_parts: str | Sequence[APIPart],
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> str:
        """Return the raw text the model produced.

        Args:
            prompt_or_parts: A bare prompt string or an ordered part sequence.
            cancel_event: Set to abandon pending retries.

        Raises:
            MissingKeyError: No credential configured; no request is made.
            RemoteModelError: The remote call failed terminally.
        """
        adapter = self._require_adapter()
        parts = _as_parts(prompt_or_parts)

        async def op() -> str:
            return await adapter.generate(
                model_name=self.generation_model, api_parts=parts
            )

        with self._telemetry(T_INVOKER_GENERATE, model=self.generation_model):
            try:
                return await self._executor.execute(
                    op,
                    self.generate_policy,
                    cancel_event=cancel_event,
                    label="generate",
                )
            except Exception as e:
                self._classifier.raise_classified(e, operation="Content generation")

    async def invoke(
        self,
        prompt_or_parts: str | Sequence[APIPart],
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ModelOutcome:
        """Like ``generate`` but returns ``Success(text)`` or ``Failure(error)``."""
        try:
            return Success(
                await self.generate(prompt_or_parts, cancel_event=cancel_event)
            )
        except StudyPipelineError as e:
            return Failure(e)


def _as_parts(prompt_or_parts: str | Sequence[APIPart]) -> tuple[APIPart, ...]:
    if isinstance(prompt_or_parts, str):
        return (TextPart(prompt_or_parts),)
    parts = tuple(prompt_or_parts)
    if not parts:
        raise UnsupportedInputError("At least one part is required")
    return parts
