"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .config import PathLike, Settings, resolve_db_path
from .logging_config import get_logger, setup_logging
from .message_data import IMessageData, MessageData
from .storage import SQLiteMessageCollection

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Open the store and build data access objects."""
        ...

    async def stop(self) -> None:
        """Close the store."""
        ...

    async def reset(self) -> None:
        """Remove all messages between test runs."""
        ...


class Application:
    """Owns the process-wide store connection."""

    def __init__(
        self,
        db_path: PathLike | None = None,
        settings: Settings | None = None,
        configure_logging: bool = True,
    ):
        self._settings = settings or Settings.from_env()
        if db_path is None:
            self._db_path = self._settings.database_url
        else:
            self._db_path = resolve_db_path(db_path)
        self._configure_logging = configure_logging

        # Initialized in start()
        self._collection: SQLiteMessageCollection | None = None
        self._message_data: MessageData | None = None

    async def start(self) -> None:
        """Open the store and build data access objects."""
        if self._configure_logging:
            setup_logging(self._settings)
        logger.info(
            "Starting application",
            extra={"context": {"db": str(self._db_path), "log_level": self._settings.log_level}},
        )

        self._collection = SQLiteMessageCollection(self._db_path)
        await self._collection.init()
        logger.info("Message collection initialized")

        self._message_data = MessageData(self._collection)
        logger.info("MessageData ready")

    async def stop(self) -> None:
        """Close the store."""
        self._message_data = None
        if self._collection:
            await self._collection.close()
            self._collection = None
            logger.info("Message collection closed")

    async def reset(self) -> None:
        """Remove all messages between test runs."""
        if self._collection:
            removed = await self._collection.delete_many()
            logger.info("Message collection cleared", extra={"context": {"removed": removed}})

    async def __aenter__(self) -> "Application":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    @property
    def message_data(self) -> IMessageData:
        """Get the message data access object."""
        if not self._message_data:
            raise RuntimeError("Application not started")
        return self._message_data
