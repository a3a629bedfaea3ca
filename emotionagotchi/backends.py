"""Key-value backends where serialized records live.

The storage gateway talks to a backend matching the protocol:

    get_item(key) -> str | None
    set_item(key, value) -> None
    remove_item(key) -> None

Values are already-serialized JSON strings; backends never interpret them.

Two implementations are provided:

    FileBackend    One file per key under a data directory. Writes go
                   through a temp file and os.replace(), so a reader sees
                   either the old record or the new one, never half of it.
    MemoryBackend  Dict-backed. Useful for headless sessions and tests.

Both accept an optional quota_bytes limit on the total stored size; going
over it raises StorageQuotaError, as does a full disk for FileBackend.
"""

from __future__ import annotations

import errno
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol: every backend must match these signatures
# ---------------------------------------------------------------------------

class KeyValueBackend(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class StorageError(OSError):
    """Raised by backends when a record cannot be read or written."""


class StorageQuotaError(StorageError):
    """Raised when a write would exceed the available space."""


_QUOTA_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}


def _check_quota(quota_bytes: int | None, current: int, key: str, incoming: int) -> None:
    if quota_bytes is not None and current + incoming > quota_bytes:
        raise StorageQuotaError(
            f"Writing {key!r} needs {incoming} bytes, "
            f"{max(quota_bytes - current, 0)} of {quota_bytes} available"
        )


# ---------------------------------------------------------------------------
# FileBackend
# ---------------------------------------------------------------------------

class FileBackend:
    """Stores each key as <data_dir>/<key>.json.

    Args:
        data_dir:    Directory holding the record files. Created if missing.
        quota_bytes: Optional cap on the combined size of all records.
    """

    def __init__(self, data_dir: Path, quota_bytes: int | None = None) -> None:
        self._dir = data_dir
        self._dir.mkdir(parents=True, exist_ok=True)
        self._quota = quota_bytes

    @property
    def data_dir(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def _used_bytes(self, excluding: str) -> int:
        skip = self._path(excluding)
        return sum(p.stat().st_size for p in self._dir.glob("*.json") if p != skip)

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        data = value.encode("utf-8")
        _check_quota(self._quota, self._used_bytes(key), key, len(data))

        fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, self._path(key))
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            if e.errno in _QUOTA_ERRNOS:
                raise StorageQuotaError(f"No space left writing {key!r}") from e
            raise
        logger.debug("file backend wrote key=%s bytes=%d", key, len(data))

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


# ---------------------------------------------------------------------------
# MemoryBackend
# ---------------------------------------------------------------------------

class MemoryBackend:
    """Keeps records in a dict. Nothing survives the process."""

    def __init__(self, quota_bytes: int | None = None) -> None:
        self._items: dict[str, str] = {}
        self._quota = quota_bytes

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        used = sum(len(v.encode("utf-8")) for k, v in self._items.items() if k != key)
        _check_quota(self._quota, used, key, len(value.encode("utf-8")))
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)
