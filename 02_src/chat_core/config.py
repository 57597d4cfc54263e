"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "chat_messages.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    value = str(env_value)
    if value.startswith("sqlite:///"):
        value = value[len("sqlite:///"):]

    candidate = Path(value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def resolve_log_path(value: PathLike) -> Path:
    """Resolve LOG_FILE against the project root."""
    candidate = Path(value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def load_environment(env_file: PathLike | None = None) -> None:
    """Load variables from a .env file without overriding the process env."""
    load_dotenv(env_file or PROJECT_ROOT / ".env", override=False)


@dataclass
class Settings:
    """Runtime settings read from the environment."""

    database_url: PathLike
    log_level: str = "INFO"
    log_file: Path = DEFAULT_LOG_PATH
    log_console: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        load_environment()
        log_file = os.getenv("LOG_FILE")
        return cls(
            database_url=resolve_db_path(os.getenv("DATABASE_URL")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=resolve_log_path(log_file) if log_file else DEFAULT_LOG_PATH,
            log_console=os.getenv("LOG_CONSOLE", "true").lower() not in ("0", "false", "no"),
        )
