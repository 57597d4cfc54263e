"""Pytest configuration and fixtures."""

import copy
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class InMemoryMessageCollection:
    """Dict-backed IMessageCollection for tests that do not need SQLite."""

    def __init__(self):
        self.documents: dict[str, dict] = {}
        self.calls: list[str] = []

    async def insert_one(self, document):
        from chat_core.storage import new_message_id

        self.calls.append("insert_one")
        stored = copy.deepcopy(document)
        stored["_id"] = new_message_id()
        stored["created"] = datetime.now(timezone.utc).isoformat()
        self.documents[stored["_id"]] = stored
        return copy.deepcopy(stored)

    async def find_by_id(self, message_id):
        from chat_core.storage import validate_message_id

        self.calls.append("find_by_id")
        document = self.documents.get(validate_message_id(message_id))
        return copy.deepcopy(document) if document else None

    async def update_by_id(self, message_id, fields):
        from chat_core.storage import check_update_fields, validate_message_id

        self.calls.append("update_by_id")
        document = self.documents.get(validate_message_id(message_id))
        check_update_fields(fields)
        if document is None:
            return None
        document.update(copy.deepcopy(fields))
        return copy.deepcopy(document)

    async def delete_many(self):
        self.calls.append("delete_many")
        removed = len(self.documents)
        self.documents.clear()
        return removed


@pytest_asyncio.fixture
async def collection():
    """Create in-memory SQLite collection for testing."""
    from chat_core.storage import SQLiteMessageCollection

    coll = SQLiteMessageCollection(":memory:")
    await coll.init()
    yield coll
    await coll.delete_many()
    await coll.close()


@pytest.fixture
def message_data(collection):
    """Create MessageData bound to the SQLite collection."""
    from chat_core.message_data import MessageData

    return MessageData(collection)


@pytest.fixture
def fake_collection():
    """Create dict-backed collection."""
    return InMemoryMessageCollection()


@pytest.fixture
def fake_message_data(fake_collection):
    """Create MessageData bound to the dict-backed collection."""
    from chat_core.message_data import MessageData

    return MessageData(fake_collection)


@pytest.fixture
def conversation_id():
    from chat_core.storage import new_message_id

    return new_message_id()


@pytest.fixture
def sender_id():
    return "5fe0cce861c8ea54018385af"


@pytest.fixture(autouse=True)
def isolated_logging(monkeypatch, tmp_path):
    """Send logs to a per-test file and restore the root logger afterwards."""
    import logging

    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "app.log"))
    monkeypatch.setenv("LOG_CONSOLE", "false")

    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield tmp_path / "logs" / "app.log"
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)
