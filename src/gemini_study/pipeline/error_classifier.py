"""Mapping of remote failure signatures to actionable errors.

Provider error formats are matched here and nowhere else. Adapting to a
different provider means changing the signature tables in this module.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import NoReturn

from gemini_study.core.exceptions import ErrorKind, RemoteModelError

log = logging.getLogger(__name__)

RATE_LIMIT_SIGNATURES: tuple[str, ...] = (
    "429",
    "too many requests",
    "quota",
    "rate-limit",
    "rate limit",
    "resource_exhausted",
    "embed_content_free_tier_requests",
)

CREDENTIAL_SIGNATURES: tuple[str, ...] = (
    "api_key_invalid",
    "api key expired",
    "api key not valid",
    "expired",
)

FORBIDDEN_SIGNATURES: tuple[str, ...] = (
    "403",
    "forbidden",
    "permission_denied",
)

CREDENTIAL_MESSAGE = (
    "Google Generative API returned API_KEY_INVALID / expired. Renew your API key "
    "in Google Cloud Console, update GEMINI_API_KEY, and restart the service."
)
FORBIDDEN_MESSAGE = (
    "Google Generative API returned 403 Forbidden. The API key may be invalid or "
    "revoked. Rotate the key and update GEMINI_API_KEY."
)
RATE_LIMIT_MESSAGE = (
    "Google Generative API rate limit reached (429). Consider enabling billing, "
    "requesting higher quota, or reducing request volume."
)


def error_text(error: BaseException) -> str:
    """Return the text signature matching runs against.

    SDK errors carry a numeric ``code`` that is not always part of their
    message, so it is prepended when present.
    """
    message = str(error) or repr(error)
    code = getattr(error, "code", None)
    if isinstance(code, int) and str(code) not in message:
        return f"{code} {message}"
    return message


def _matches(text: str, signatures: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(sig in lowered for sig in signatures)


def is_rate_limited(error: BaseException) -> bool:
    """True when the error carries a rate-limit or quota signature."""
    return _matches(error_text(error), RATE_LIMIT_SIGNATURES)


@dataclasses.dataclass(frozen=True, slots=True)
class ClassifiedError:
    """Outcome of classifying one terminal remote failure."""

    kind: ErrorKind
    message: str
    raw_message: str

    def to_exception(self) -> RemoteModelError:
        """Build the exception callers receive."""
        return RemoteModelError(
            self.message, kind=self.kind, raw_message=self.raw_message
        )


class ErrorClassifier:
    """Classifies terminal remote failures into an ``ErrorKind``.

    Checks run in a fixed precedence order and the first match wins:
    credential, forbidden, rate limit. Anything else is a transport error
    whose original message is preserved verbatim.
    """

    def classify(self, error: BaseException) -> ClassifiedError:
        """Map a raw remote error to a kind and an actionable message."""
        raw = error_text(error)
        if _matches(raw, CREDENTIAL_SIGNATURES):
            return ClassifiedError(
                ErrorKind.INVALID_OR_EXPIRED_CREDENTIAL, CREDENTIAL_MESSAGE, raw
            )
        if _matches(raw, FORBIDDEN_SIGNATURES):
            return ClassifiedError(ErrorKind.FORBIDDEN, FORBIDDEN_MESSAGE, raw)
        if _matches(raw, RATE_LIMIT_SIGNATURES):
            return ClassifiedError(ErrorKind.RATE_LIMITED, RATE_LIMIT_MESSAGE, raw)
        return ClassifiedError(ErrorKind.TRANSPORT_ERROR, raw, raw)

    def raise_classified(self, error: BaseException, *, operation: str) -> NoReturn:
        """Log the raw failure and raise its classified form."""
        classified = self.classify(error)
        log.error(
            "%s failed (%s): %s",
            operation,
            classified.kind.value,
            classified.raw_message,
        )
        raise classified.to_exception() from error
