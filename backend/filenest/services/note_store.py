from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime, timezone

from filenest.core.exceptions import InvalidNoteIdError, NoteNotFoundError

logger = logging.getLogger("filenest")

NOTE_EXTENSION = ".txt"
_SLUG_UNSAFE = re.compile(r"[^a-zA-Z0-9]")
_VALID_ID = re.compile(r"[a-z0-9-]+")


@dataclass
class NoteSummary:
    id: str
    title: str
    content: str
    modified: datetime


def slugify(title: str) -> str:
    """`My Note!` -> `my-note-`. Distinct titles may share a slug.

    Characters outside the Basic Multilingual Plane count as two UTF-16 code
    units and become `--`, matching slugs written by earlier clients.
    """
    return _SLUG_UNSAFE.sub(_dashes, title).lower()


def _dashes(match: re.Match) -> str:
    return "--" if ord(match.group()) > 0xFFFF else "-"


def preview(content: str, length: int) -> str:
    if len(content) > length:
        return content[:length] + "..."
    return content


class NoteStore:
    """Plain-text notes, one `<slug>.txt` file each."""

    def __init__(self, root: str, preview_length: int = 100):
        self.root = root
        self.preview_length = preview_length

    def ensure_root(self) -> None:
        os.makedirs(self.root, exist_ok=True)

    def _path(self, note_id: str) -> str:
        if not note_id or not _VALID_ID.fullmatch(note_id):
            raise InvalidNoteIdError(f"Invalid note id: {note_id!r}")
        return os.path.join(self.root, note_id + NOTE_EXTENSION)

    def list(self) -> list[NoteSummary]:
        if not os.path.isdir(self.root):
            return []
        notes = []
        for filename in sorted(os.listdir(self.root)):
            if not filename.endswith(NOTE_EXTENSION):
                continue
            path = os.path.join(self.root, filename)
            if not os.path.isfile(path):
                continue
            note_id = filename[: -len(NOTE_EXTENSION)]
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
            notes.append(NoteSummary(
                id=note_id,
                title=note_id,
                content=preview(content, self.preview_length),
                modified=datetime.fromtimestamp(os.path.getmtime(path), tz=timezone.utc),
            ))
        return notes

    def get(self, note_id: str) -> str:
        path = self._path(note_id)
        if not os.path.isfile(path):
            raise NoteNotFoundError()
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()

    def _write(self, note_id: str, content: str) -> None:
        self.ensure_root()
        with open(self._path(note_id), "w", encoding="utf-8", newline="") as f:
            f.write(content)

    def create(self, title: str, content: str) -> str:
        note_id = slugify(title)
        # Same slug means same file: last write wins.
        self._write(note_id, content)
        logger.info("Saved note %s", note_id)
        return note_id

    def update(self, note_id: str, content: str) -> str:
        self._write(note_id, content)
        logger.info("Updated note %s", note_id)
        return note_id

    def delete(self, note_id: str) -> None:
        path = self._path(note_id)
        if not os.path.isfile(path):
            raise NoteNotFoundError()
        os.remove(path)
        logger.info("Deleted note %s", note_id)
