"""Google GenAI provider adapter.

Wraps a ``google.genai.Client`` behind the neutral adapter protocols.
Errors raised by the SDK propagate unchanged; classification happens in
the invoker once retries are exhausted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from google import genai
from google.genai import types

from gemini_study.core.types import BinaryPart, TextPart

if TYPE_CHECKING:
    from gemini_study.core.types import APIPart

log = logging.getLogger(__name__)


class GoogleGenAIAdapter:
    """Async generation and embedding through the Google GenAI SDK."""

    def __init__(self, api_key: str, *, client: genai.Client | None = None) -> None:
        """Create the SDK client once; it is read-only afterwards.

        Args:
            api_key: Gemini API key.
            client: Optional pre-built client (tests, custom transports).
        """
        self._client = client or genai.Client(api_key=api_key)
        log.debug("GoogleGenAIAdapter initialized")

    async def generate(
        self,
        *,
        model_name: str,
        api_parts: tuple[APIPart, ...],
    ) -> str:
        """Send one generate_content request and return its text."""
        contents = [self._to_sdk_part(p) for p in api_parts]
        response = await self._client.aio.models.generate_content(
            model=model_name,
            contents=contents,
        )
        return response.text or ""

    async def embed(self, *, model_name: str, text: str) -> list[float]:
        """Send one embed_content request and return the first vector."""
        response = await self._client.aio.models.embed_content(
            model=model_name,
            contents=text,
        )
        embeddings = response.embeddings or []
        if not embeddings or embeddings[0].values is None:
            return []
        return list(embeddings[0].values)

    @staticmethod
    def _to_sdk_part(part: APIPart) -> types.Part:
        if isinstance(part, TextPart):
            return types.Part.from_text(text=part.text)
        if isinstance(part, BinaryPart):
            # Raw bytes; the SDK base64-encodes them for the wire
            return types.Part.from_bytes(data=part.data, mime_type=part.mime_type)
        raise TypeError(f"Unsupported part type: {type(part).__name__}")
