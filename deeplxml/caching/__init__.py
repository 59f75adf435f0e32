"""
Caching Module

Document caches used by the simulation mode, plus a factory building the
configured backend.
"""

from typing import Any, Dict, Optional

from deeplxml.caching.document_cache import DocumentCache, document_digest
from deeplxml.caching.in_memory_document_cache import InMemoryDocumentCache
from deeplxml.caching.sqlite_document_cache import SqliteDocumentCache


def create_document_cache(cache_config: Optional[Dict[str, Any]] = None) -> DocumentCache:
    """
    Build the document cache described by the "cache" config section.

    Args:
        cache_config: Dict with "backend" ("memory" or "sqlite") and "path"

    Raises:
        ValueError: If the backend is unknown
    """
    cache_config = cache_config or {}
    backend = cache_config.get('backend', 'memory')

    if backend == 'memory':
        return InMemoryDocumentCache()
    if backend == 'sqlite':
        return SqliteDocumentCache(cache_config['path'])

    raise ValueError(f"Unknown cache backend: {backend}")


__all__ = [
    'DocumentCache',
    'InMemoryDocumentCache',
    'SqliteDocumentCache',
    'create_document_cache',
    'document_digest',
]
