"""Provider adapter seam.

The invoker depends only on these protocols, so tests and alternative
providers can substitute their own handle for the Google SDK client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gemini_study.core.types import APIPart


@runtime_checkable
class GenerationAdapter(Protocol):
    """Submits assembled parts to a generative model."""

    async def generate(
        self,
        *,
        model_name: str,
        api_parts: tuple[APIPart, ...],
    ) -> str:
        """Return the raw textual response for one request."""
        ...


@runtime_checkable
class EmbeddingAdapter(Protocol):
    """Turns text into an embedding vector."""

    async def embed(self, *, model_name: str, text: str) -> list[float]:
        """Return the embedding values for ``text``."""
        ...


@runtime_checkable
class ModelAdapter(GenerationAdapter, EmbeddingAdapter, Protocol):
    """A provider handle offering both generation and embeddings."""
