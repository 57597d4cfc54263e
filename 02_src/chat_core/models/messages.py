"""Chat message entity and its document mapping."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .inputs import Tag


@dataclass
class ReferenceView:
    """Minimal projection of a related entity (just its id)."""

    id: str


@dataclass
class Reaction:
    """A reaction on a message and the users who left it."""

    reaction: str
    user_ids: list[str] = field(default_factory=list)


@dataclass
class ChatMessage:
    """A single message in a conversation."""

    id: str
    conversation_id: str
    sender_id: str
    text: str
    created: datetime
    deleted: bool = False
    resolved: bool = False
    likes: list[str] = field(default_factory=list)
    likes_count: int = 0
    reactions: list[Reaction] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    # Reference views, filled in on read
    conversation: ReferenceView | None = None
    sender: ReferenceView | None = None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "ChatMessage":
        """Build an entity from a stored document."""
        created = document["created"]
        if isinstance(created, str):
            created = datetime.fromisoformat(created)
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)

        return cls(
            id=document["_id"],
            conversation_id=document["conversation_id"],
            sender_id=document["sender_id"],
            text=document["text"],
            created=created,
            deleted=document.get("deleted", False),
            resolved=document.get("resolved", False),
            likes=list(document.get("likes", [])),
            likes_count=document.get("likes_count", 0),
            reactions=[
                Reaction(reaction=r["reaction"], user_ids=list(r.get("user_ids", [])))
                for r in document.get("reactions", [])
            ],
            tags=[Tag.model_validate(t) for t in document.get("tags", [])],
        )


def new_message_document(
    conversation_id: str, sender_id: str, text: str
) -> dict[str, Any]:
    """Document for a freshly created message, with schema defaults applied.

    The store assigns ``_id`` and ``created`` on insert.
    """
    return {
        "conversation_id": conversation_id,
        "sender_id": sender_id,
        "text": text,
        "deleted": False,
        "resolved": False,
        "likes": [],
        "likes_count": 0,
        "reactions": [],
        "tags": [],
    }


def tags_to_document(tags: list[Tag]) -> list[dict[str, Any]]:
    """Serialize tags in the form they are stored."""
    return [tag.model_dump(mode="json") for tag in tags]
