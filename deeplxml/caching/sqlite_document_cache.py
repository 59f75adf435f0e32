"""sqlite-backed document cache, persistent across processes."""

from pathlib import Path
from typing import List, Optional

from deeplxml.caching.document_cache import DocumentCache
from deeplxml.core import database as db
from deeplxml.logger import get_logger

logger = get_logger(__name__)


class SqliteDocumentCache(DocumentCache):
    """
    Persistent cache storing translated documents in a sqlite file.

    The database and its table are created on first use.
    """

    def __init__(self, db_file):
        self.db_file = Path(db_file)
        db.initialize_database(self.db_file)

    def get(self, digest: str) -> Optional[str]:
        document = db.get_cached_document(self.db_file, digest)
        if document is not None:
            logger.debug(f"Cache hit for {digest}")
        return document

    def put(self, digest: str, document: str) -> None:
        db.set_cached_document(self.db_file, digest, document)
        logger.debug(f"Cached document {digest}")

    def delete(self, digest: str) -> None:
        db.delete_cached_document(self.db_file, digest)

    def clear(self) -> None:
        db.delete_all_cached_documents(self.db_file)

    def list_digests(self) -> List[str]:
        """List all cached digests, oldest first. Useful for diagnostics."""
        return [row['digest'] for row in db.get_all_cached_documents(self.db_file)]
