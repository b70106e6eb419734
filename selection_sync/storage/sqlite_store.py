"""
SQLite-backed durable store for settings, assistants and topics.
"""

import json
import sqlite3
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from ..errors import StorageReadFailure, StorageWriteFailure
from ..logging_config import get_logger
from ..models import Assistant, Topic
from .base import DurableStore

logger = get_logger("storage.sqlite")


class SQLiteStore(DurableStore):
    """Stores entities as JSON documents keyed by id.

    Upserts keep the original rowid, so ``list_assistants`` returns assistants
    in the order they were first saved.
    """

    def __init__(self, db_path: Path = Path("selection.db")):
        self.db_path = db_path
        if str(db_path) != ":memory:":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._create_tables()

    def _create_tables(self) -> None:
        """Create tables if they don't exist."""
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT
            );
            CREATE TABLE IF NOT EXISTS assistants (
                id TEXT PRIMARY KEY,
                data TEXT NOT NULL
            );
            CREATE TABLE IF NOT EXISTS topics (
                id TEXT PRIMARY KEY,
                assistant_id TEXT NOT NULL,
                data TEXT NOT NULL
            );
        """)
        self._conn.commit()

    def _read_one(self, operation: str, sql: str, params: tuple) -> Optional[tuple]:
        try:
            return self._conn.execute(sql, params).fetchone()
        except sqlite3.Error as e:
            logger.error("%s failed: %s", operation, e)
            raise StorageReadFailure(operation, str(e)) from e

    def _write(self, operation: str, sql: str, params: tuple) -> None:
        try:
            self._conn.execute(sql, params)
            self._conn.commit()
        except sqlite3.Error as e:
            logger.error("%s failed: %s", operation, e)
            raise StorageWriteFailure(operation, str(e)) from e

    async def get_setting(self, key: str) -> Optional[Any]:
        operation = f"get_setting({key})"
        row = self._read_one(
            operation, "SELECT value FROM settings WHERE key = ?", (key,)
        )
        if row is None or row[0] is None:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as e:
            logger.error("%s failed: %s", operation, e)
            raise StorageReadFailure(operation, f"corrupt setting: {e}") from e

    async def save_setting(self, key: str, value: Any) -> None:
        self._write(
            f"save_setting({key})",
            "INSERT INTO settings (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, json.dumps(value)),
        )

    async def get_assistant(self, assistant_id: str) -> Optional[Assistant]:
        operation = f"get_assistant({assistant_id})"
        row = self._read_one(
            operation, "SELECT data FROM assistants WHERE id = ?", (assistant_id,)
        )
        if row is None:
            return None
        return self._parse(operation, Assistant, row[0])

    async def save_assistant(self, assistant: Assistant) -> None:
        self._write(
            f"save_assistant({assistant.id})",
            "INSERT INTO assistants (id, data) VALUES (?, ?) "
            "ON CONFLICT(id) DO UPDATE SET data = excluded.data",
            (assistant.id, assistant.model_dump_json(exclude={"topics"})),
        )

    async def get_topic(self, topic_id: str) -> Optional[Topic]:
        operation = f"get_topic({topic_id})"
        row = self._read_one(
            operation, "SELECT data FROM topics WHERE id = ?", (topic_id,)
        )
        if row is None:
            return None
        return self._parse(operation, Topic, row[0])

    async def save_topic(self, topic: Topic) -> None:
        self._write(
            f"save_topic({topic.id})",
            "INSERT INTO topics (id, assistant_id, data) VALUES (?, ?, ?) "
            "ON CONFLICT(id) DO UPDATE SET data = excluded.data",
            (topic.id, topic.assistant_id, topic.model_dump_json()),
        )

    async def list_assistants(self) -> List[Assistant]:
        try:
            rows = self._conn.execute(
                "SELECT data FROM assistants ORDER BY rowid"
            ).fetchall()
        except sqlite3.Error as e:
            logger.error("list_assistants failed: %s", e)
            raise StorageReadFailure("list_assistants", str(e)) from e
        return [self._parse("list_assistants", Assistant, row[0]) for row in rows]

    async def close(self) -> None:
        self._conn.close()

    @staticmethod
    def _parse(operation: str, model, raw: str):
        try:
            return model.model_validate_json(raw)
        except ValidationError as e:
            raise StorageReadFailure(operation, f"corrupt record: {e}") from e
