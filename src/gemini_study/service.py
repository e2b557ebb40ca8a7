"""Study-material use cases and the composition root.

``create_study_service`` is the only place that resolves configuration and
builds the provider handle. Everything below it receives its collaborators
explicitly, so tests can substitute a fake adapter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from gemini_study.artifact import validate_artifact
from gemini_study.config import resolve_config
from gemini_study.files.extractors import source_from_upload
from gemini_study.pipeline.assembler import ContentAssembler
from gemini_study.pipeline.invoker import ModelInvoker
from gemini_study.pipeline.normalizer import ResponseNormalizer
from gemini_study.prompts import JSON_ONLY_SUFFIX

if TYPE_CHECKING:
    import asyncio

    from gemini_study.artifact import StudyArtifact
    from gemini_study.config import StudySettings
    from gemini_study.core.types import ContentSource
    from gemini_study.pipeline.adapters.base import ModelAdapter
    from gemini_study.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)


class StudyService:
    """Stateless per-request facade over assembler, invoker and normalizer."""

    def __init__(
        self,
        invoker: ModelInvoker,
        *,
        assembler: ContentAssembler | None = None,
        normalizer: ResponseNormalizer | None = None,
    ) -> None:
        self.invoker = invoker
        self.assembler = assembler or ContentAssembler()
        self.normalizer = normalizer or ResponseNormalizer()

    async def _generate_raw(
        self, source: ContentSource, cancel_event: asyncio.Event | None
    ) -> str:
        # Assembly raises UnsupportedInputError before any model call
        parts = self.assembler.assemble(source)
        return await self.invoker.generate(parts, cancel_event=cancel_event)

    async def generate_study_material(
        self,
        source: ContentSource,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        """Generate summary, quiz and content for ``source``.

        Returns:
            The parsed JSON value, expected (not guaranteed) to have the
            ``{summary, mcqs, content}`` shape.

        Raises:
            StudyPipelineError: Any classified failure, including
                ``MalformedModelOutputError`` with the raw model text.
        """
        raw = await self._generate_raw(source, cancel_event)
        return self.normalizer.parse(raw)

    async def generate_study_artifact(
        self,
        source: ContentSource,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> StudyArtifact:
        """Like ``generate_study_material`` with the artifact shape enforced."""
        raw = await self._generate_raw(source, cancel_event)
        return validate_artifact(self.normalizer.parse(raw), raw_text=raw)

    async def generate_from_upload(
        self,
        data: bytes,
        mime_type: str,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        """Route an uploaded file to a source, then generate study material."""
        source = source_from_upload(data, mime_type)
        return await self.generate_study_material(source, cancel_event=cancel_event)

    async def generate_json(
        self,
        prompt: str,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        """Send a bare prompt demanding JSON and return the parsed value."""
        json_prompt = f"{prompt} \n\n{JSON_ONLY_SUFFIX}"
        raw = await self.invoker.generate(json_prompt, cancel_event=cancel_event)
        return self.normalizer.parse(raw)

    async def embed(
        self, text: str, *, cancel_event: asyncio.Event | None = None
    ) -> list[float]:
        """Return the embedding vector for ``text``."""
        return await self.invoker.embed(text, cancel_event=cancel_event)


def create_study_service(
    settings: StudySettings | None = None,
    *,
    adapter: ModelAdapter | None = None,
    telemetry: TelemetryContextProtocol | None = None,
) -> StudyService:
    """Build a ``StudyService`` from settings.

    When no adapter is given, a ``GoogleGenAIAdapter`` is created if an API
    key is configured. Without a key the service is still built, and every
    model call fails fast with ``MissingKeyError``.
    """
    final_settings = settings if settings is not None else resolve_config()

    if adapter is None and final_settings.has_api_key:
        from gemini_study.pipeline.adapters.gemini import GoogleGenAIAdapter

        adapter = GoogleGenAIAdapter(str(final_settings.api_key))
    elif adapter is None:
        log.warning("GEMINI_API_KEY is not set; model calls will fail until it is")

    log.debug("Creating study service with settings %s", final_settings.redacted())
    invoker = ModelInvoker(
        adapter,
        generation_model=final_settings.model,
        embedding_model=final_settings.embedding_model,
        generate_policy=final_settings.generate_policy(),
        embed_policy=final_settings.embed_policy(),
        telemetry=telemetry,
    )
    return StudyService(invoker, normalizer=ResponseNormalizer(telemetry))
