"""
Database Operations Module

This module handles the sqlite storage behind the persistent document cache:
- Schema initialization
- Cached document CRUD operations
"""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, List, Dict, Any

from deeplxml.logger import get_logger

logger = get_logger(__name__)


def get_connection(db_file: Path):
    """Get a database connection."""
    return sqlite3.connect(db_file)


def initialize_database(db_file: Path):
    """Create the database file and its tables if they do not exist."""
    db_file.parent.mkdir(parents=True, exist_ok=True)
    with get_connection(db_file) as conn:
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS cached_documents (
                digest TEXT PRIMARY KEY,
                document TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        """)
        conn.commit()
    logger.debug(f"Database initialized: {db_file}")


# ============================================================
# Cached Document CRUD Operations
# ============================================================

def get_cached_document(db_file: Path, digest: str) -> Optional[str]:
    """Get a cached document by digest."""
    with get_connection(db_file) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT document FROM cached_documents WHERE digest = ?", (digest,))
        row = cursor.fetchone()
        return row[0] if row else None


def set_cached_document(db_file: Path, digest: str, document: str):
    """Store or overwrite a cached document."""
    with get_connection(db_file) as conn:
        cursor = conn.cursor()
        cursor.execute("""
            INSERT OR REPLACE INTO cached_documents (digest, document, created_at)
            VALUES (?, ?, ?)
        """, (digest, document, datetime.now().isoformat()))
        conn.commit()


def delete_cached_document(db_file: Path, digest: str) -> bool:
    """Delete a cached document. Returns whether a row was deleted."""
    with get_connection(db_file) as conn:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM cached_documents WHERE digest = ?", (digest,))
        conn.commit()
        return cursor.rowcount > 0


def delete_all_cached_documents(db_file: Path):
    with get_connection(db_file) as conn:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM cached_documents")
        conn.commit()


def get_all_cached_documents(db_file: Path) -> List[Dict[str, Any]]:
    """Get all cached documents, oldest first."""
    with get_connection(db_file) as conn:
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM cached_documents ORDER BY created_at, digest")
        return [dict(row) for row in cursor.fetchall()]
