"""Recovery of a single JSON document from free-form model output.

Models often wrap JSON in markdown fences, surround it with prose, or stop
mid-document. The normalizer strips fences, locates the first balanced
object or array with a string-aware bracket scan, and parses it. On failure
the raw text is kept and logged; it is never discarded.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from gemini_study.core.exceptions import MalformedModelOutputError
from gemini_study.core.types import ExtractionFailed, Parsed
from gemini_study.telemetry import TelemetryContext

if TYPE_CHECKING:
    from gemini_study.core.types import ExtractedJson
    from gemini_study.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

T_NORMALIZER_FAILED = "normalizer.failed"

_FENCE_MARKERS = ("```json", "```")
_CLOSERS = {"{": "}", "[": "]"}


def strip_fences(text: str) -> str:
    """Remove every markdown fence marker and surrounding whitespace."""
    for marker in _FENCE_MARKERS:
        text = text.replace(marker, "")
    return text.strip()


def find_balanced_span(text: str, start: int) -> int | None:
    """Return the end index (exclusive) of the bracket group opened at ``start``.

    Depth is tracked for the opening character's own bracket type only.
    Brackets inside double-quoted strings are ignored, honouring backslash
    escapes. Returns None when the group never closes.
    """
    open_char = text[start]
    close_char = _CLOSERS[open_char]
    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == open_char:
            depth += 1
        elif ch == close_char:
            depth -= 1
            if depth == 0:
                return i + 1
    return None


class ResponseNormalizer:
    """Turns raw model text into a parsed JSON value or a diagnosable failure."""

    def __init__(self, telemetry: TelemetryContextProtocol | None = None) -> None:
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    def normalize(self, raw_text: str) -> ExtractedJson:
        """Extract the first JSON object or array from ``raw_text``.

        Only the first balanced group is parsed; a malformed first group is a
        failure even when later text holds something parseable. When the
        cleaned text contains no bracket at all it is parsed whole, which
        admits bare JSON scalars.
        """
        cleaned = strip_fences(raw_text)
        attempt = _first_candidate(cleaned)

        if attempt is not None:
            try:
                return Parsed(json.loads(attempt))
            except json.JSONDecodeError:
                pass

        failure = ExtractionFailed(raw_text=raw_text, attempted_substring=attempt)
        self._telemetry.count(T_NORMALIZER_FAILED)
        log.error(
            "Failed to parse JSON from model output. Raw output: %r. "
            "Attempted substring: %r",
            raw_text,
            attempt,
        )
        return failure

    def parse(self, raw_text: str) -> Any:
        """Like ``normalize`` but raises on failure.

        Raises:
            MalformedModelOutputError: Carrying the raw text and the attempted
                substring.
        """
        result = self.normalize(raw_text)
        if isinstance(result, Parsed):
            return result.value
        raise MalformedModelOutputError(
            "Model did not return valid JSON. Resubmit the request or inspect "
            "the raw output.",
            raw_text=result.raw_text,
            attempted_substring=result.attempted_substring,
        )


def _first_candidate(text: str) -> str | None:
    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    if not starts:
        # No bracket: the whole cleaned text, if any
        return text or None
    start = min(starts)
    end = find_balanced_span(text, start)
    if end is None:
        return None
    return text[start:end]
