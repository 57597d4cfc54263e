"""Validated inputs accepted by the message store."""

import uuid
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Annotated, Any

import pydantic
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, field_validator

from ..errors import ValidationError


class TagType(str, Enum):
    """Categories a message can be tagged with."""

    SUB_TOPIC = "subTopic"


class Tag(BaseModel):
    """A reference attached to a message, e.g. a sub-topic."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    type: TagType


def _reference_id(value: Any) -> Any:
    """UUID references are stored in their hex form."""
    if isinstance(value, uuid.UUID):
        return value.hex
    return value


ReferenceId = Annotated[str, BeforeValidator(_reference_id), Field(min_length=1)]


class CreateChatMessageInput(BaseModel):
    """Request model for creating a message."""

    conversation_id: ReferenceId
    text: str

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be blank")
        return value


def parse_create_input(
    data: CreateChatMessageInput | Mapping[str, Any],
) -> CreateChatMessageInput:
    """Validate create input, raising ValidationError on bad data."""
    if isinstance(data, CreateChatMessageInput):
        return data
    try:
        return CreateChatMessageInput.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(str(e)) from e


def parse_tags(tags: Iterable[Tag | Mapping[str, Any]]) -> list[Tag]:
    """Validate a tag sequence, preserving order."""
    try:
        return [tag if isinstance(tag, Tag) else Tag.model_validate(tag) for tag in tags]
    except pydantic.ValidationError as e:
        raise ValidationError(str(e)) from e


_reference_id_adapter = TypeAdapter(ReferenceId)


def parse_reference_id(value: str | uuid.UUID) -> str:
    """Validate the id of a referenced entity (sender, conversation)."""
    try:
        return _reference_id_adapter.validate_python(value)
    except pydantic.ValidationError as e:
        raise ValidationError(str(e)) from e
