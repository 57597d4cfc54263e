"""Message persistence."""

from .storage import (
    IMessageCollection,
    MessageId,
    SQLiteMessageCollection,
    check_update_fields,
    new_message_id,
    validate_message_id,
)

__all__ = [
    "IMessageCollection",
    "MessageId",
    "SQLiteMessageCollection",
    "check_update_fields",
    "new_message_id",
    "validate_message_id",
]
