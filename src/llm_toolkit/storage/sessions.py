"""
Stockage clé-valeur optionnel (SQLite).

Toutes les erreurs SQLite ou disque sont journalisées et contenues: le
stockage n'interrompt jamais une conversation.
"""
import logging
import sqlite3
from contextlib import contextmanager
from typing import Generator, Optional

from ..core.constants import DEFAULT_STORAGE_FILE, DEFAULT_STORAGE_PREFIX

logger = logging.getLogger(__name__)


class SessionStorage:
    """
    Stockage de sessions, désactivé par défaut.

    Désactivé, get() retourne None et set()/remove() ne font rien.
    """

    def __init__(
        self,
        enabled: bool = False,
        prefix: str = DEFAULT_STORAGE_PREFIX,
        path: str = DEFAULT_STORAGE_FILE
    ):
        self.enabled = enabled
        self.prefix = prefix
        self.path = path
        self._initialized = False

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self.path)
        try:
            if not self._initialized:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                """)
                conn.commit()
                self._initialized = True
            yield conn
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        """Valeur stockée sous la clé, ou None (absente, désactivé, erreur)."""
        if not self.enabled:
            return None

        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (self._key(key),)
                ).fetchone()
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"⚠️ [STORAGE] Lecture impossible de '{key}': {e}")
            return None

        return row[0] if row else None

    def set(self, key: str, value: str):
        if not self.enabled:
            return

        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (self._key(key), value)
                )
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"⚠️ [STORAGE] Écriture impossible de '{key}': {e}")

    def remove(self, key: str):
        if not self.enabled:
            return

        try:
            with self._connect() as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (self._key(key),))
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"⚠️ [STORAGE] Suppression impossible de '{key}': {e}")

    def __repr__(self) -> str:
        state = "on" if self.enabled else "off"
        return f"SessionStorage({state}, prefix={self.prefix!r}, path={self.path!r})"
