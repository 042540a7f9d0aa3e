import json
import os
import sqlite3
from typing import Dict, List, Optional

from velotype.app.errors import StoreError

DB_PATH = "data/velotype.db"
HISTORY_LIMIT = 100


def _ensure_schema(conn):
    conn.execute("""
    CREATE TABLE IF NOT EXISTS kv(
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );
    """)
    conn.execute("""
    CREATE TABLE IF NOT EXISTS results(
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        wpm INTEGER,
        raw_wpm INTEGER,
        accuracy INTEGER,
        duration REAL,
        descriptor TEXT,
        record_json TEXT,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)


class SqliteStore:
    """String-keyed store for personal bests plus a capped result history."""

    def __init__(self, path: str = DB_PATH):
        self.path = path

    def _conn(self):
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        conn = sqlite3.connect(self.path)
        try:
            _ensure_schema(conn)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        conn = None
        try:
            conn = self._conn()
            row = conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
            return row[0] if row else default
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        finally:
            if conn is not None:
                conn.close()

    def set(self, key: str, value) -> None:
        conn = None
        try:
            conn = self._conn()
            conn.execute(
                "INSERT INTO kv(key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, str(value)),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        finally:
            if conn is not None:
                conn.close()

    def record_result(self, record: Dict) -> None:
        conn = None
        try:
            conn = self._conn()
            conn.execute(
                "INSERT INTO results(wpm, raw_wpm, accuracy, duration, descriptor, record_json) "
                "VALUES (?,?,?,?,?,?)",
                (
                    record["wpm"],
                    record["rawWpm"],
                    record["accuracyPct"],
                    round(record["elapsedSeconds"], 1),
                    record["testDescriptor"],
                    json.dumps(record),
                ),
            )
            # keep only the newest entries
            conn.execute(
                "DELETE FROM results WHERE id NOT IN "
                "(SELECT id FROM results ORDER BY id DESC LIMIT ?)",
                (HISTORY_LIMIT,),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        finally:
            if conn is not None:
                conn.close()

    def recent_results(self, limit: int = HISTORY_LIMIT) -> List[Dict]:
        conn = None
        try:
            conn = self._conn()
            rows = conn.execute(
                "SELECT record_json FROM results ORDER BY id DESC LIMIT ?", (limit,)
            ).fetchall()
            return [json.loads(r[0]) for r in rows]
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        finally:
            if conn is not None:
                conn.close()


class MemoryStore:
    def __init__(self):
        self.values: Dict[str, str] = {}
        self.results: List[Dict] = []

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(key, default)

    def set(self, key: str, value) -> None:
        self.values[key] = str(value)

    def record_result(self, record: Dict) -> None:
        self.results.insert(0, dict(record))
        del self.results[HISTORY_LIMIT:]

    def recent_results(self, limit: int = HISTORY_LIMIT) -> List[Dict]:
        return self.results[:limit]
