"""Runtime configuration and the session composition root.

Settings come from the environment, with a .env file in the working
directory loaded first:

    EMOTIONAGOTCHI_DATA_DIR     directory for record files (default ./data)
    EMOTIONAGOTCHI_QUOTA_BYTES  optional cap on total stored bytes
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from emotionagotchi.backends import FileBackend
from emotionagotchi.session import Session
from emotionagotchi.storage import Storage

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path("data")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    data_dir: Path = DEFAULT_DATA_DIR
    quota_bytes: int | None = Field(default=None, gt=0)


def load_settings(env_file: Path | None = None) -> Settings:
    """Read settings from the environment (after loading .env)."""
    load_dotenv(env_file or Path.cwd() / ".env")
    data_dir = os.getenv("EMOTIONAGOTCHI_DATA_DIR", str(DEFAULT_DATA_DIR))
    quota = os.getenv("EMOTIONAGOTCHI_QUOTA_BYTES", "")
    return Settings(
        data_dir=Path(data_dir),
        quota_bytes=int(quota) if quota.strip() else None,
    )


def create_session(data_dir: Path | None = None, settings: Settings | None = None) -> Session:
    """Build a file-backed session and initialize it.

    An explicit data_dir wins over the configured one.
    """
    settings = settings or load_settings()
    resolved = data_dir or settings.data_dir
    backend = FileBackend(resolved, quota_bytes=settings.quota_bytes)
    session = Session(Storage(backend))
    session.initialize()
    logger.debug("session created data_dir=%s", resolved)
    return session
