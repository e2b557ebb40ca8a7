"""Turning uploaded files into content sources.

PDF and DOCX uploads are reduced to text locally; text uploads are decoded;
audio stays binary and is sent to the model as-is. Anything else is
rejected with ``UnsupportedInputError`` before the model is involved.
"""

from __future__ import annotations

import io
import logging
import mimetypes
from pathlib import Path
import zipfile

import docx
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from gemini_study.core.exceptions import UnsupportedInputError
from gemini_study.core.types import (
    BinarySource,
    ContentSource,
    DocumentSource,
    TextSource,
)
from gemini_study.pipeline.assembler import (
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    is_audio_mime,
    is_text_mime,
)

log = logging.getLogger(__name__)

# Extensions the platform mimetypes table does not always know
_EXTENSION_MIME_TYPES = {
    ".pdf": PDF_MIME_TYPE,
    ".docx": DOCX_MIME_TYPE,
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".m4a": "audio/mp4",
    ".ogg": "audio/ogg",
    ".webm": "audio/webm",
    ".flac": "audio/flac",
}


def guess_mime_type(path: str | Path) -> str:
    """Best-effort mime type for a local file path."""
    suffix = Path(path).suffix.lower()
    if suffix in _EXTENSION_MIME_TYPES:
        return _EXTENSION_MIME_TYPES[suffix]
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type or "application/octet-stream"


def extract_pdf_text(data: bytes) -> str:
    """Concatenate the text of every page of a PDF."""
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PdfReadError, ValueError, KeyError, IndexError) as e:
        raise UnsupportedInputError(f"Could not read PDF document: {e}") from e
    log.debug("Extracted text from %d PDF page(s)", len(pages))
    return "\n".join(pages)


def extract_docx_text(data: bytes) -> str:
    """Concatenate the paragraph text of a DOCX document."""
    try:
        document = docx.Document(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        raise UnsupportedInputError(f"Could not read DOCX document: {e}") from e
    return "\n".join(p.text for p in document.paragraphs)


def source_from_upload(data: bytes, mime_type: str) -> ContentSource:
    """Route an uploaded payload to the matching content source.

    Raises:
        UnsupportedInputError: Unrecognized mime type or unreadable document.
    """
    mime_type = mime_type.split(";", 1)[0].strip().lower()
    if mime_type == PDF_MIME_TYPE:
        return DocumentSource(extract_pdf_text(data), mime_type=PDF_MIME_TYPE)
    if mime_type == DOCX_MIME_TYPE:
        return DocumentSource(extract_docx_text(data), mime_type=DOCX_MIME_TYPE)
    if is_text_mime(mime_type):
        return TextSource(data.decode("utf-8", errors="replace"))
    if is_audio_mime(mime_type):
        return BinarySource(data, mime_type)
    raise UnsupportedInputError(
        f"Unsupported file type: {mime_type}. "
        "Supported inputs are PDF, DOCX, text and audio."
    )


def source_from_path(path: str | Path, mime_type: str | None = None) -> ContentSource:
    """Read a local file and route it like an upload."""
    file_path = Path(path)
    resolved_mime = mime_type or guess_mime_type(file_path)
    # Reject before reading the file
    if not (
        resolved_mime in (PDF_MIME_TYPE, DOCX_MIME_TYPE)
        or is_text_mime(resolved_mime)
        or is_audio_mime(resolved_mime)
    ):
        raise UnsupportedInputError(
            f"Unsupported file type: {resolved_mime}. "
            "Supported inputs are PDF, DOCX, text and audio."
        )
    return source_from_upload(file_path.read_bytes(), resolved_mime)
