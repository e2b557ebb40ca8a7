"""Provider adapters for the remote model."""

from .base import EmbeddingAdapter, GenerationAdapter, ModelAdapter

__all__ = ["EmbeddingAdapter", "GenerationAdapter", "ModelAdapter"]
