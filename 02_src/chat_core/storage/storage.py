"""SQLite-backed document collection for chat messages."""

import json
import re
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

import aiosqlite

from ..config import resolve_db_path
from ..errors import InvalidIdentifierError, StoreUnavailableError, ValidationError
from ..logging_config import get_logger

logger = get_logger(__name__)

MessageId = str | uuid.UUID

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_message_id() -> str:
    """Generate a fresh message id."""
    return uuid.uuid4().hex


def validate_message_id(value: MessageId) -> str:
    """Normalize an identifier to its string form or raise InvalidIdentifierError."""
    if isinstance(value, uuid.UUID):
        return value.hex
    if isinstance(value, str) and _ID_PATTERN.match(value):
        return value
    raise InvalidIdentifierError(value)


def check_update_fields(fields: dict[str, Any]) -> None:
    """Reject updates that would rewrite the id or unset a field."""
    if "_id" in fields:
        raise ValidationError("_id cannot be updated")
    unset = sorted(name for name, value in fields.items() if value is None)
    if unset:
        raise ValidationError(f"Fields cannot be set to None: {', '.join(unset)}")


class IMessageCollection(Protocol):
    """Persistence operations required by MessageData."""

    async def insert_one(self, document: dict[str, Any]) -> dict[str, Any]:
        """Insert a document; the store assigns `_id` and `created`."""
        ...

    async def find_by_id(self, message_id: MessageId) -> dict[str, Any] | None:
        """Get a document by id."""
        ...

    async def update_by_id(
        self, message_id: MessageId, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Set the given fields and return the updated document.

        Values must not be None; unsetting a field is not supported.
        """
        ...

    async def delete_many(self) -> int:
        """Remove every document. Administrative use only."""
        ...


@contextmanager
def _store_errors() -> Iterator[None]:
    """Surface driver failures as package errors.

    Constraint violations mean the document was malformed; anything else
    from the driver means the store could not serve the request.
    """
    try:
        yield
    except aiosqlite.IntegrityError as e:
        raise ValidationError(str(e)) from e
    except aiosqlite.Error as e:
        logger.error("Message store request failed", exc_info=True)
        raise StoreUnavailableError(str(e)) from e


class SQLiteMessageCollection:
    """Chat message collection stored as JSON documents in SQLite."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Open the connection and create tables."""
        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()

        with _store_errors():
            self._conn = await aiosqlite.connect(self._db_path)
            await self._conn.executescript(schema_sql)
            await self._conn.commit()
        logger.info("Message collection opened", extra={"context": {"db": str(self._db_path)}})

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise StoreUnavailableError("Storage not initialized")
        return self._conn

    async def insert_one(self, document: dict[str, Any]) -> dict[str, Any]:
        """Insert a document; the store assigns `_id` and `created`."""
        conn = self._require_conn()

        stored = dict(document)
        stored["_id"] = new_message_id()
        stored["created"] = datetime.now(timezone.utc).isoformat()

        with _store_errors():
            await conn.execute(
                """
                INSERT INTO chat_messages (id, conversation_id, sender_id, created, document)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    stored["_id"],
                    stored["conversation_id"],
                    stored["sender_id"],
                    stored["created"],
                    json.dumps(stored),
                ),
            )
            await conn.commit()

        return stored

    async def find_by_id(self, message_id: MessageId) -> dict[str, Any] | None:
        """Get a document by id."""
        conn = self._require_conn()
        message_id = validate_message_id(message_id)

        with _store_errors():
            cursor = await conn.execute(
                "SELECT document FROM chat_messages WHERE id = ?",
                (message_id,),
            )
            row = await cursor.fetchone()

        if not row:
            return None
        return json.loads(row[0])

    async def update_by_id(
        self, message_id: MessageId, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Set the given fields and return the updated document.

        The patch is applied in a single statement (JSON merge patch), so
        concurrent updates to one document do not interleave. Lists are
        replaced wholesale. None values are rejected since a merge patch
        would drop the key instead of storing null.
        """
        conn = self._require_conn()
        message_id = validate_message_id(message_id)
        check_update_fields(fields)

        with _store_errors():
            cursor = await conn.execute(
                """
                UPDATE chat_messages
                SET document = json_patch(document, ?)
                WHERE id = ?
                RETURNING document
                """,
                (json.dumps(fields), message_id),
            )
            row = await cursor.fetchone()
            await cursor.close()
            await conn.commit()

        if not row:
            return None
        return json.loads(row[0])

    async def delete_many(self) -> int:
        """Remove every document. Administrative use only."""
        conn = self._require_conn()

        with _store_errors():
            cursor = await conn.execute("DELETE FROM chat_messages")
            await conn.commit()

        return cursor.rowcount
