"""Data models for chat messages."""

from .inputs import (
    CreateChatMessageInput,
    Tag,
    TagType,
    parse_create_input,
    parse_reference_id,
    parse_tags,
)
from .messages import (
    ChatMessage,
    Reaction,
    ReferenceView,
    new_message_document,
    tags_to_document,
)

__all__ = [
    # Entity
    "ChatMessage",
    "Reaction",
    "ReferenceView",
    "new_message_document",
    "tags_to_document",
    # Inputs
    "CreateChatMessageInput",
    "Tag",
    "TagType",
    "parse_create_input",
    "parse_reference_id",
    "parse_tags",
]
