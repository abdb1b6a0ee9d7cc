"""
Consent stores.

Both stores keep one record per (hashed user id, targeted id). save_consent is an
upsert; delete_consent reports the number of rows removed so callers can detect
that the store and the displayed state have diverged.
"""

import logging
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from consent_admin.logic.exceptions import ConfigurationError
from consent_admin.protocols.consent_store import ConsentStoreProtocol
from consent_admin.schemas.config import StoreBackend, StoreConfig

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_TIMEOUT = 5.0

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS consent (
    consent_date TIMESTAMP NOT NULL,
    usage_date TIMESTAMP NOT NULL,
    hashed_user_id VARCHAR(80) NOT NULL,
    service_id VARCHAR(255) NOT NULL,
    attribute VARCHAR(80) NOT NULL,
    UNIQUE (hashed_user_id, service_id)
)
"""


class InMemoryConsentStore:
    """Process-local store. Not shared between workers."""

    def __init__(self) -> None:
        self._records: Dict[str, Dict[str, str]] = {}
        self._lock = threading.Lock()

    def get_consents(self, hashed_user_id: str) -> List[Tuple[str, str]]:
        with self._lock:
            return list(self._records.get(hashed_user_id, {}).items())

    def save_consent(self, hashed_user_id: str, targeted_id: str, attribute_hash: str) -> bool:
        with self._lock:
            self._records.setdefault(hashed_user_id, {})[targeted_id] = attribute_hash
        return True

    def delete_consent(self, hashed_user_id: str, targeted_id: str) -> int:
        with self._lock:
            user_records = self._records.get(hashed_user_id, {})
            if targeted_id not in user_records:
                return 0
            del user_records[targeted_id]
            return 1


class SQLiteConsentStore:
    """SQLite-backed store using the consent module's table layout."""

    def __init__(self, db_path: str, timeout: float = DEFAULT_SQLITE_TIMEOUT):
        self._db_path = db_path
        self._timeout = timeout
        # A :memory: database only lives as long as its connection
        self._shared_conn: Optional[sqlite3.Connection] = None
        if db_path == ":memory:":
            self._shared_conn = sqlite3.connect(db_path, timeout=timeout, check_same_thread=False)
        self._lock = threading.RLock()
        self._execute(_CREATE_TABLE_SQL, ())

    def _connection(self) -> sqlite3.Connection:
        if self._shared_conn is not None:
            return self._shared_conn
        return sqlite3.connect(self._db_path, timeout=self._timeout)

    def _execute(self, sql: str, params: Tuple) -> sqlite3.Cursor:
        with self._lock:
            conn = self._connection()
            try:
                with conn:
                    return conn.execute(sql, params)
            finally:
                if conn is not self._shared_conn:
                    conn.close()

    def get_consents(self, hashed_user_id: str) -> List[Tuple[str, str]]:
        with self._lock:
            conn = self._connection()
            try:
                rows = conn.execute(
                    "SELECT service_id, attribute FROM consent WHERE hashed_user_id = ? ORDER BY consent_date",
                    (hashed_user_id,),
                ).fetchall()
            finally:
                if conn is not self._shared_conn:
                    conn.close()
        return [(row[0], row[1]) for row in rows]

    def save_consent(self, hashed_user_id: str, targeted_id: str, attribute_hash: str) -> bool:
        now = datetime.now(timezone.utc).isoformat()
        cursor = self._execute(
            "INSERT INTO consent (consent_date, usage_date, hashed_user_id, service_id, attribute) "
            "VALUES (?, ?, ?, ?, ?) "
            "ON CONFLICT (hashed_user_id, service_id) DO UPDATE SET "
            "consent_date = excluded.consent_date, usage_date = excluded.usage_date, attribute = excluded.attribute",
            (now, now, hashed_user_id, targeted_id, attribute_hash),
        )
        return cursor.rowcount == 1

    def delete_consent(self, hashed_user_id: str, targeted_id: str) -> int:
        cursor = self._execute(
            "DELETE FROM consent WHERE hashed_user_id = ? AND service_id = ?",
            (hashed_user_id, targeted_id),
        )
        return cursor.rowcount


def sqlite_path_from_dsn(dsn: str) -> str:
    """'sqlite::memory:' -> ':memory:', 'sqlite:///var/c.db' -> '/var/c.db', 'sqlite:c.db' -> 'c.db'."""
    if not dsn.startswith("sqlite:"):
        raise ConfigurationError(f"Unsupported consent store DSN {dsn!r}; only sqlite is available")
    path = dsn[len("sqlite:") :]
    if path == ":memory:":
        return path
    if path.startswith("//"):
        path = path[2:]
    if not path:
        raise ConfigurationError("sqlite DSN has no database path")
    return path


def parse_store_config(config: StoreConfig) -> ConsentStoreProtocol:
    """Instantiate the configured consent store."""
    if config.backend == StoreBackend.MEMORY:
        logger.info("Using in-memory consent store")
        return InMemoryConsentStore()
    if config.backend == StoreBackend.SQLITE:
        db_path = sqlite_path_from_dsn(config.dsn or "sqlite::memory:")
        timeout = float(config.options.get("timeout", DEFAULT_SQLITE_TIMEOUT))
        logger.info(f"Using SQLite consent store at {db_path}")
        return SQLiteConsentStore(db_path, timeout=timeout)
    raise ConfigurationError(f"Unknown consent store backend {config.backend!r}")
