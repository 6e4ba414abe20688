"""
Configuration for the Inventory API.

Settings are read from environment variables (optionally loaded from a
``.env`` file) and can be overridden explicitly, e.g. by the command line.
"""
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

STORAGE_BACKENDS = ("memory", "database")


def _database_url_from_parts() -> str:
    user     = os.getenv("DB_USER", "inventory")
    password = os.getenv("DB_PASSWORD", "inventory123")
    host     = os.getenv("DB_HOST", "localhost")
    port     = os.getenv("DB_PORT", "5432")
    name     = os.getenv("DB_NAME", "inventorydb")
    return f"postgresql://{user}:{password}@{host}:{port}/{name}"


class Settings:
    """
    Runtime settings for the service.

    Attributes:
        host (str): Address the HTTP server binds to
        port (int): Port the HTTP server listens on
        photo_dir (str): Directory holding uploaded photos
        storage_backend (str): "memory" or "database"
        database_url (str): SQLAlchemy URL used by the database backend
        database_echo (bool): Echo SQL statements to the log
        log_level (str): Root logging level used by the command line
    """

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        photo_dir: Optional[str] = None,
        storage_backend: Optional[str] = None,
        database_url: Optional[str] = None,
        database_echo: Optional[bool] = None,
        log_level: Optional[str] = None,
    ):
        self.host = host or os.getenv("HOST", "localhost")
        self.port = int(port if port is not None else os.getenv("PORT", "8080"))
        self.photo_dir = photo_dir or os.getenv("PHOTO_DIR", "./cache")
        self.storage_backend = (storage_backend or os.getenv("STORAGE_BACKEND", "memory")).lower()
        self.database_url = database_url or os.getenv("DATABASE_URL") or _database_url_from_parts()
        if database_echo is None:
            database_echo = os.getenv("DATABASE_ECHO", "False").lower() == "true"
        self.database_echo = database_echo
        self.log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()

        if not 1 <= self.port <= 65535:
            raise ValueError("port must be number between 1 and 65535")
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(f"unknown storage backend '{self.storage_backend}'")

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"
