"""
Storage backend abstractions for uploaded marketing-data files.
"""

from __future__ import annotations

import hashlib
import re
import uuid
from datetime import datetime, timezone
from mimetypes import guess_type
from pathlib import Path
from typing import Protocol

from db.repositories.errors import FileStorageError
from db.repositories.types import StoredFileMetadata

_UNSAFE_PATH_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class FileStorageBackend(Protocol):
    """
    Abstract storage backend for uploaded file bytes.
    """

    def save(
        self,
        *,
        user_id: str,
        file_name: str,
        content: bytes,
        content_type: str | None = None,
    ) -> StoredFileMetadata:
        ...

    def read(self, *, storage_path: str) -> bytes:
        ...

    def delete(self, *, storage_path: str) -> None:
        ...


def _sanitize_file_name(file_name: str) -> str:
    safe_name = Path(file_name).name.strip()
    if not safe_name:
        raise FileStorageError("Invalid file name.")
    return safe_name


def _user_directory(user_id: str) -> str:
    directory = _UNSAFE_PATH_CHARS.sub("_", user_id.strip())
    if not directory.strip("._"):
        raise FileStorageError("Invalid user identifier for storage path.")
    return directory


class LocalFileStorage:
    """
    Local filesystem storage backend rooted at one directory.
    """

    def __init__(self, root_dir: str | Path = "data/uploads") -> None:
        self._root_dir = Path(root_dir)

    def save(
        self,
        *,
        user_id: str,
        file_name: str,
        content: bytes,
        content_type: str | None = None,
    ) -> StoredFileMetadata:
        safe_file_name = _sanitize_file_name(file_name)
        stored_at = datetime.now(timezone.utc)

        stored_name = f"{uuid.uuid4().hex}_{safe_file_name}"
        relative_path = (
            Path(_user_directory(user_id))
            / stored_at.strftime("%Y")
            / stored_at.strftime("%m")
            / stored_name
        )
        absolute_path = self._root_dir / relative_path
        absolute_path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = absolute_path.with_suffix(f"{absolute_path.suffix}.tmp")
        try:
            with tmp_path.open("wb") as handle:
                handle.write(content)
            tmp_path.replace(absolute_path)
        except OSError as exc:
            raise FileStorageError("Failed to write uploaded file to storage.") from exc
        finally:
            if tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError:
                    pass

        return StoredFileMetadata(
            file_name=stored_name,
            storage_path=relative_path.as_posix(),
            mime_type=content_type or guess_type(safe_file_name)[0],
            file_size_bytes=len(content),
            checksum=hashlib.sha256(content).hexdigest(),
            stored_at=stored_at,
        )

    def read(self, *, storage_path: str) -> bytes:
        target = self._resolve(storage_path)
        try:
            with target.open("rb") as handle:
                return handle.read()
        except OSError as exc:
            raise FileStorageError(f"Failed to read uploaded file {storage_path!r}.") from exc

    def delete(self, *, storage_path: str) -> None:
        target = self._resolve(storage_path)
        if not target.exists():
            return
        try:
            target.unlink()
        except OSError as exc:
            raise FileStorageError("Failed to delete uploaded file from storage.") from exc

    def _resolve(self, storage_path: str) -> Path:
        root = self._root_dir.resolve()
        target = (root / Path(storage_path)).resolve()
        if root not in target.parents:
            raise FileStorageError(f"Storage path {storage_path!r} escapes the storage root.")
        return target
