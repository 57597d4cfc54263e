"""Data access for chat messages."""

import uuid
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from .errors import NotFoundError
from .logging_config import get_logger
from .models import (
    ChatMessage,
    CreateChatMessageInput,
    ReferenceView,
    Tag,
    new_message_document,
    parse_create_input,
    parse_reference_id,
    parse_tags,
    tags_to_document,
)
from .storage import IMessageCollection, MessageId

logger = get_logger(__name__)


class IMessageData(Protocol):
    """Create, read, soft-delete and tag chat messages."""

    async def create(
        self,
        data: CreateChatMessageInput | Mapping[str, Any],
        sender_id: str | uuid.UUID,
    ) -> ChatMessage:
        """Persist a new message sent by sender_id."""
        ...

    async def get_message(self, message_id: MessageId) -> ChatMessage:
        """Get a message by id."""
        ...

    async def delete(self, message_id: MessageId) -> ChatMessage:
        """Mark a message as deleted."""
        ...

    async def update_tags(
        self, message_id: MessageId, tags: Iterable[Tag | Mapping[str, Any]]
    ) -> ChatMessage:
        """Replace the tags of a message."""
        ...


class MessageData:
    """Thin repository over the chat message collection.

    Every method issues a single request to the collection. Errors raised by
    the collection propagate unchanged.
    """

    def __init__(self, collection: IMessageCollection):
        self._collection = collection

    async def create(
        self,
        data: CreateChatMessageInput | Mapping[str, Any],
        sender_id: str | uuid.UUID,
    ) -> ChatMessage:
        """Persist a new message sent by sender_id."""
        message_input = parse_create_input(data)
        sender_id = parse_reference_id(sender_id)
        document = await self._collection.insert_one(
            new_message_document(
                conversation_id=message_input.conversation_id,
                sender_id=sender_id,
                text=message_input.text,
            )
        )
        message = self._populate(document)

        logger.info(
            "Message created",
            extra={
                "context": {
                    "message_id": message.id,
                    "conversation_id": message.conversation_id,
                    "sender_id": message.sender_id,
                }
            },
        )
        return message

    async def get_message(self, message_id: MessageId) -> ChatMessage:
        """Get a message by id."""
        document = await self._collection.find_by_id(message_id)
        if document is None:
            logger.warning("Message not found", extra={"context": {"message_id": str(message_id)}})
            raise NotFoundError(str(message_id))
        return self._populate(document)

    async def delete(self, message_id: MessageId) -> ChatMessage:
        """Mark a message as deleted.

        The document stays readable. Deleting an already deleted message
        succeeds and returns it unchanged.
        """
        document = await self._collection.update_by_id(message_id, {"deleted": True})
        if document is None:
            logger.warning("Message not found", extra={"context": {"message_id": str(message_id)}})
            raise NotFoundError(str(message_id))

        logger.info("Message deleted", extra={"context": {"message_id": document["_id"]}})
        return self._populate(document)

    async def update_tags(
        self, message_id: MessageId, tags: Iterable[Tag | Mapping[str, Any]]
    ) -> ChatMessage:
        """Replace the tags of a message (no merge with existing tags)."""
        new_tags = parse_tags(tags)
        document = await self._collection.update_by_id(
            message_id, {"tags": tags_to_document(new_tags)}
        )
        if document is None:
            logger.warning("Message not found", extra={"context": {"message_id": str(message_id)}})
            raise NotFoundError(str(message_id))

        logger.info(
            "Message tags updated",
            extra={"context": {"message_id": document["_id"], "tags": len(new_tags)}},
        )
        return self._populate(document)

    def _populate(self, document: dict[str, Any]) -> ChatMessage:
        """Build the entity and resolve its reference views."""
        message = ChatMessage.from_document(document)
        message.conversation = ReferenceView(id=message.conversation_id)
        message.sender = ReferenceView(id=message.sender_id)
        return message
