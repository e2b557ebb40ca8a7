"""Exception taxonomy for the study-material pipeline.

Every per-request failure is a ``StudyPipelineError`` carrying exactly one
``ErrorKind``. Configuration problems found while bootstrapping the service
are reported separately through ``ConfigurationError``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure categories surfaced to callers."""

    RATE_LIMITED = "rate_limited"
    INVALID_OR_EXPIRED_CREDENTIAL = "invalid_or_expired_credential"
    FORBIDDEN = "forbidden"
    UNSUPPORTED_INPUT = "unsupported_input"
    MALFORMED_MODEL_OUTPUT = "malformed_model_output"
    TRANSPORT_ERROR = "transport_error"


class GeminiStudyError(Exception):
    """Base exception for all gemini_study errors."""


class ConfigurationError(GeminiStudyError):
    """Raised when settings cannot be resolved or fail validation."""


class StudyPipelineError(GeminiStudyError):
    """A classified failure of one unit of work.

    Attributes:
        kind: The single category this failure belongs to.
        message: Actionable, user-facing description.
        raw_message: Raw remote diagnostic text, if any. Logged, not shown.
    """

    default_kind: ErrorKind = ErrorKind.TRANSPORT_ERROR

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind | None = None,
        raw_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        self.raw_message = raw_message

    def to_dict(self) -> dict[str, Any]:
        """Render the caller-facing failure surface."""
        return {"kind": self.kind.value, "error": self.message}


class UnsupportedInputError(StudyPipelineError):
    """Raised when a content source cannot be turned into model input."""

    default_kind = ErrorKind.UNSUPPORTED_INPUT


class MissingKeyError(StudyPipelineError):
    """Raised before any network call when no API credential is configured."""

    default_kind = ErrorKind.INVALID_OR_EXPIRED_CREDENTIAL


class RemoteModelError(StudyPipelineError):
    """A terminal failure of the remote model, mapped by the error classifier."""


class MalformedModelOutputError(StudyPipelineError):
    """Raised when no JSON document can be recovered from model output.

    The raw model text is kept so it can be inspected by the caller.
    """

    default_kind = ErrorKind.MALFORMED_MODEL_OUTPUT

    def __init__(
        self,
        message: str,
        *,
        raw_text: str,
        attempted_substring: str | None = None,
    ) -> None:
        super().__init__(message, raw_message=raw_text)
        self.raw_text = raw_text
        self.attempted_substring = attempted_substring

    def to_dict(self) -> dict[str, Any]:  # noqa: D102
        payload = super().to_dict()
        payload["raw"] = self.raw_text
        return payload
