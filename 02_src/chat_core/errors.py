"""Errors raised by the message store."""


class MessageStoreError(Exception):
    """Base class for message store errors."""


class NotFoundError(MessageStoreError):
    """No message document matches the given identifier."""

    def __init__(self, message_id: str):
        super().__init__(f"Message {message_id} not found")
        self.message_id = message_id


class ValidationError(MessageStoreError, ValueError):
    """Input failed schema validation."""


class InvalidIdentifierError(ValidationError):
    """Identifier is not a well-formed message id."""

    def __init__(self, value: object):
        super().__init__(f"Invalid message id: {value!r}")
        self.value = value


class StoreUnavailableError(MessageStoreError):
    """The underlying store could not be reached or failed mid-request."""
