"""Ingestion helpers for uploaded study material."""

from .extractors import (
    extract_docx_text,
    extract_pdf_text,
    guess_mime_type,
    source_from_path,
    source_from_upload,
)

__all__ = [
    "extract_docx_text",
    "extract_pdf_text",
    "guess_mime_type",
    "source_from_path",
    "source_from_upload",
]
