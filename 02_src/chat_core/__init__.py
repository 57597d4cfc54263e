"""Chat message persistence."""

from .app import Application, IApplication
from .errors import (
    InvalidIdentifierError,
    MessageStoreError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from .message_data import IMessageData, MessageData
from .models import (
    ChatMessage,
    CreateChatMessageInput,
    Reaction,
    ReferenceView,
    Tag,
    TagType,
)
from .storage import IMessageCollection, SQLiteMessageCollection

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "ChatMessage",
    "CreateChatMessageInput",
    "Reaction",
    "ReferenceView",
    "Tag",
    "TagType",
    # Components
    "IMessageCollection",
    "SQLiteMessageCollection",
    "IMessageData",
    "MessageData",
    # Errors
    "MessageStoreError",
    "NotFoundError",
    "ValidationError",
    "InvalidIdentifierError",
    "StoreUnavailableError",
]
