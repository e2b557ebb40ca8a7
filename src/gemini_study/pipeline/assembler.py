"""Content assembly: one logical request into an ordered tuple of parts.

Assembly is pure. It reads nothing from disk and performs no network I/O,
so an unsupported input is rejected before any resource is acquired.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gemini_study.core.exceptions import UnsupportedInputError
from gemini_study.core.types import (
    BinaryPart,
    BinarySource,
    DocumentSource,
    TextPart,
    TextSource,
)
from gemini_study.prompts import (
    AUDIO_INSTRUCTION,
    DOCUMENT_CONTENT_PREFIX,
    STUDY_SYSTEM_INSTRUCTION,
    TEXT_CONTENT_PREFIX,
)

if TYPE_CHECKING:
    from gemini_study.core.types import APIPart, ContentSource

log = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
DOCUMENT_MIME_TYPES = frozenset({PDF_MIME_TYPE, DOCX_MIME_TYPE})


def is_audio_mime(mime_type: str) -> bool:  # noqa: D103
    return mime_type.lower().startswith("audio/")


def is_text_mime(mime_type: str) -> bool:  # noqa: D103
    return mime_type.lower().startswith("text/")


class ContentAssembler:
    """Builds ``[system instruction, content description, optional binary]``.

    Args:
        system_instruction: Text placed first in every request.
    """

    def __init__(self, system_instruction: str = STUDY_SYSTEM_INSTRUCTION) -> None:
        self.system_instruction = system_instruction

    def assemble(
        self,
        source: ContentSource,
        *,
        suffix: str | None = None,
    ) -> tuple[APIPart, ...]:
        """Return the ordered parts for ``source``.

        Args:
            source: Inline text, extracted document text, or a binary payload.
            suffix: Optional trailing instruction appended as a final text part.

        Raises:
            UnsupportedInputError: Empty input, or a mime type outside the
                recognized set (PDF/DOCX text, ``text/*``, ``audio/*``).
        """
        content = self._content_parts(source)
        parts: list[APIPart] = [TextPart(self.system_instruction), *content]
        if suffix:
            parts.append(TextPart(suffix))
        log.debug(
            "Assembled %d parts for %s source", len(parts), type(source).__name__
        )
        return tuple(parts)

    def _content_parts(self, source: ContentSource) -> tuple[APIPart, ...]:
        match source:
            case TextSource(text=text):
                return (TextPart(TEXT_CONTENT_PREFIX + _require_text(text)),)
            case DocumentSource(text=text, mime_type=mime_type):
                if mime_type not in DOCUMENT_MIME_TYPES:
                    raise UnsupportedInputError(
                        f"Unsupported document type: {mime_type}. "
                        "Upload a PDF or DOCX file."
                    )
                return (TextPart(DOCUMENT_CONTENT_PREFIX + _require_text(text)),)
            case BinarySource(data=data, mime_type=mime_type):
                if is_audio_mime(mime_type):
                    if not data:
                        raise UnsupportedInputError("Audio payload is empty")
                    return (TextPart(AUDIO_INSTRUCTION), BinaryPart(data, mime_type))
                if is_text_mime(mime_type):
                    text = data.decode("utf-8", errors="replace")
                    return (TextPart(TEXT_CONTENT_PREFIX + _require_text(text)),)
                raise UnsupportedInputError(
                    f"Unsupported file type: {mime_type}. "
                    "Supported inputs are PDF, DOCX, text and audio."
                )
        raise UnsupportedInputError(
            f"Unsupported content source: {type(source).__name__}"
        )


def _require_text(text: str) -> str:
    if not isinstance(text, str) or not text.strip():
        raise UnsupportedInputError("No input provided")
    return text
