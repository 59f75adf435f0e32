"""Document cache abstraction - lookup/store of translated documents by digest."""

import hashlib
from abc import ABC, abstractmethod
from typing import Optional

DIGEST_PREFIX = "deepl-"


def document_digest(document: str) -> str:
    """
    Compute the cache key of a batch document.

    The encoder output is deterministic, so identical string sets produce
    identical keys.
    """
    return DIGEST_PREFIX + hashlib.md5(document.encode('utf-8')).hexdigest()


class DocumentCache(ABC):
    """
    Abstract interface for caching translated documents.

    Used in simulation mode to send each unique batch to DeepL only once.
    Implementations handle the storage details; there is no expiry.
    """

    @abstractmethod
    def get(self, digest: str) -> Optional[str]:
        """
        Retrieve the translated document stored for a digest.

        Returns:
            The document if found, else None.
        """
        pass

    @abstractmethod
    def put(self, digest: str, document: str) -> None:
        """Store or overwrite the translated document for a digest."""
        pass

    @abstractmethod
    def delete(self, digest: str) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all cached documents."""
        pass
