"""Core data types that flow through the pipeline.

All values here are immutable and owned by the single request that created
them. Nothing in this module talks to the network or holds shared state.
"""

from __future__ import annotations

import dataclasses
import typing

# --- Minimal guard helpers ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


# --- Result type ---
# Invocation outcomes are modelled as data so callers can branch on them
# without broad try/except blocks.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful outcome."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed outcome, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]

# --- Model input parts ---


@dataclasses.dataclass(frozen=True, slots=True)
class TextPart:
    """A text segment of a multi-part model input."""

    text: str

    def __post_init__(self) -> None:
        """Validate that text is a string."""
        _require(
            condition=isinstance(self.text, str),
            message="must be str",
            field_name="text",
            exc=TypeError,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class BinaryPart:
    """Raw bytes with a declared mime type.

    Bytes stay unencoded here; the provider adapter hands them to the SDK,
    which performs the single base64 encoding required on the wire.
    """

    data: bytes
    mime_type: str

    def __post_init__(self) -> None:
        """Validate payload and mime type."""
        _require(
            condition=isinstance(self.data, bytes),
            message="must be bytes",
            field_name="data",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.mime_type, str) and "/" in self.mime_type,
            message="must be a 'type/subtype' string",
            field_name="mime_type",
        )


type APIPart = TextPart | BinaryPart

# --- Retry configuration ---


@dataclasses.dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Bounded exponential backoff settings.

    ``max_attempts`` counts every attempt, the first one included.
    """

    max_attempts: int
    base_delay_ms: int

    def __post_init__(self) -> None:
        """Validate bounds."""
        _require(
            condition=isinstance(self.max_attempts, int) and self.max_attempts >= 1,
            message="must be an int >= 1",
            field_name="max_attempts",
        )
        _require(
            condition=isinstance(self.base_delay_ms, int) and self.base_delay_ms >= 0,
            message="must be an int >= 0",
            field_name="base_delay_ms",
        )

    @classmethod
    def from_retries(cls, retries: int, base_delay_ms: int) -> RetryPolicy:
        """Build a policy allowing ``retries`` retries after the first attempt."""
        return cls(max_attempts=retries + 1, base_delay_ms=base_delay_ms)


# --- JSON extraction outcome ---


@dataclasses.dataclass(frozen=True, slots=True)
class Parsed:
    """A JSON value recovered from model output."""

    value: typing.Any


@dataclasses.dataclass(frozen=True, slots=True)
class ExtractionFailed:
    """No JSON value could be recovered.

    ``raw_text`` is the untouched model output; ``attempted_substring`` is
    what the parser was given, or None when no candidate was found.
    """

    raw_text: str
    attempted_substring: str | None = None


type ExtractedJson = Parsed | ExtractionFailed

# --- Content sources ---


@dataclasses.dataclass(frozen=True, slots=True)
class TextSource:
    """Inline text typed or pasted by a user."""

    text: str


@dataclasses.dataclass(frozen=True, slots=True)
class DocumentSource:
    """Text extracted from an uploaded document (PDF, DOCX)."""

    text: str
    mime_type: str = "application/pdf"


@dataclasses.dataclass(frozen=True, slots=True)
class BinarySource:
    """A binary payload such as recorded audio."""

    data: bytes
    mime_type: str


type ContentSource = TextSource | DocumentSource | BinarySource
