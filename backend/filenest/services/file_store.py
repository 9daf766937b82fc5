from __future__ import annotations

import logging
import mimetypes
import os
import random
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO

from filenest.core.exceptions import (
    FileTooLargeError,
    InvalidFilenameError,
    NotEditableError,
    StoredFileNotFoundError,
)

logger = logging.getLogger("filenest")

CHUNK_SIZE = 1024 * 1024
DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass
class StoredFile:
    name: str
    original_name: str
    size: int
    modified: datetime
    type: str


def generate_stored_name(original: str) -> str:
    """Prefix an upload name with `<epoch-ms>-<random>-` so repeated uploads never collide."""
    unique = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{unique}-{original}"


def original_name(stored: str) -> str:
    """Recover the upload name by dropping the first two hyphen-delimited segments.

    Ambiguous when the original itself starts with digits-hyphen-digits; the
    share index keeps the original name as its own field for that reason.
    """
    parts = stored.split("-")
    if len(parts) < 3:
        return stored
    return "-".join(parts[2:])


def guess_type(name: str) -> str:
    # Extension only; the content is never sniffed.
    mime, _ = mimetypes.guess_type(name, strict=False)
    return mime or DEFAULT_MIME_TYPE


def is_text_type(mime: str) -> bool:
    return mime.startswith("text/")


def clean_upload_name(raw: str | None) -> str:
    # Browsers on some platforms send full client paths.
    name = (raw or "").replace("\\", "/").split("/")[-1].strip()
    if not name or name in (".", "..") or name.startswith("."):
        raise InvalidFilenameError("No file uploaded" if not name else f"Invalid filename: {name}")
    return name


class FileStore:
    """Uploaded files kept flat in one directory, keyed by stored filename."""

    def __init__(self, root: str, max_size: int):
        self.root = root
        self.max_size = max_size

    def ensure_root(self) -> None:
        os.makedirs(self.root, exist_ok=True)

    def path_for(self, name: str) -> str:
        if not name or name != os.path.basename(name) or name.startswith(".") or "\\" in name:
            raise StoredFileNotFoundError()
        path = os.path.join(self.root, name)
        if not os.path.isfile(path):
            raise StoredFileNotFoundError()
        return path

    def describe(self, name: str) -> StoredFile:
        stats = os.stat(self.path_for(name))
        return StoredFile(
            name=name,
            original_name=original_name(name),
            size=stats.st_size,
            modified=datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
            type=guess_type(name),
        )

    def list(self) -> list[StoredFile]:
        if not os.path.isdir(self.root):
            return []
        files = []
        with os.scandir(self.root) as it:
            for entry in it:
                if not entry.is_file() or entry.name.startswith("."):
                    continue
                stats = entry.stat()
                files.append(StoredFile(
                    name=entry.name,
                    original_name=original_name(entry.name),
                    size=stats.st_size,
                    modified=datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
                    type=guess_type(entry.name),
                ))
        return sorted(files, key=lambda f: f.name)

    def save(self, stream: BinaryIO, upload_name: str | None) -> StoredFile:
        original = clean_upload_name(upload_name)
        self.ensure_root()
        stored = generate_stored_name(original)
        path = os.path.join(self.root, stored)

        written = 0
        try:
            with open(path, "xb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_size:
                        raise FileTooLargeError(
                            f"File exceeds the maximum size of {self.max_size} bytes"
                        )
                    out.write(chunk)
        except FileTooLargeError:
            os.remove(path)
            logger.warning("Rejected oversize upload %s (> %s bytes)", original, self.max_size)
            raise

        logger.info("Stored upload %s as %s (%s bytes)", original, stored, written)
        return StoredFile(
            name=stored,
            original_name=original,
            size=written,
            modified=datetime.fromtimestamp(os.path.getmtime(path), tz=timezone.utc),
            type=guess_type(stored),
        )

    def read_text(self, name: str) -> str:
        with open(self.path_for(name), "r", encoding="utf-8", errors="replace") as f:
            return f.read()

    def replace_content(self, name: str, content: str) -> None:
        path = self.path_for(name)
        if not is_text_type(guess_type(name)):
            raise NotEditableError()
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.info("Edited %s (%s chars)", name, len(content))

    def remove(self, name: str) -> None:
        os.remove(self.path_for(name))
        logger.info("Deleted %s", name)
