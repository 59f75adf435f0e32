"""In-memory document cache for testing and process-level caching."""

from typing import Dict, Optional

from deeplxml.caching.document_cache import DocumentCache


class InMemoryDocumentCache(DocumentCache):
    """
    Simple in-memory cache implementation.

    Lives as long as the process. No persistence.
    """

    def __init__(self):
        self._store: Dict[str, str] = {}

    def get(self, digest: str) -> Optional[str]:
        return self._store.get(digest)

    def put(self, digest: str, document: str) -> None:
        self._store[digest] = document

    def delete(self, digest: str) -> None:
        self._store.pop(digest, None)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
