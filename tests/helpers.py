"""Test doubles shared across the suite."""

from collections.abc import Iterable
from typing import Any


class FakeModelAdapter:
    """Scripted stand-in for the remote model.

    Each scripted item is returned in order; exceptions are raised instead
    of returned. Calls are recorded for assertions.
    """

    def __init__(
        self,
        responses: Iterable[str | BaseException] = (),
        embeddings: Iterable[list[float] | BaseException] = (),
    ) -> None:
        self.responses = list(responses)
        self.embeddings = list(embeddings)
        self.generate_calls: list[dict[str, Any]] = []
        self.embed_calls: list[dict[str, Any]] = []

    async def generate(self, *, model_name: str, api_parts: tuple[Any, ...]) -> str:
        self.generate_calls.append({"model_name": model_name, "api_parts": api_parts})
        return self._next(self.responses)

    async def embed(self, *, model_name: str, text: str) -> list[float]:
        self.embed_calls.append({"model_name": model_name, "text": text})
        return self._next(self.embeddings)

    @staticmethod
    def _next(items: list[Any]) -> Any:
        if not items:
            raise AssertionError("FakeModelAdapter ran out of scripted responses")
        item = items.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class RecordingSleep:
    """Async sleep replacement that records requested durations."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FlakyOperation:
    """Zero-arg coroutine factory failing with scripted errors before succeeding."""

    def __init__(self, errors: Iterable[BaseException], result: Any = "ok") -> None:
        self.errors = list(errors)
        self.result = result
        self.attempts = 0

    async def __call__(self) -> Any:
        self.attempts += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result
