"""Placeholder vector store.

Documents are not indexed and queries return nothing; the interface exists
so callers can be wired against it.
"""

import logging
from typing import Any

log = logging.getLogger(__name__)


class VectorStore:
    """Stub store with the add/query surface of a real vector index."""

    async def add_document(
        self, text: str, metadata: dict[str, Any] | None = None
    ) -> None:
        """Accept a document without indexing it."""
        log.info("Adding document to vector store (%d chars): %s", len(text), metadata)

    async def query(self, query_text: str) -> list[dict[str, Any]]:
        """Return no matches."""
        log.info("Querying vector store: %s", query_text)
        return []
