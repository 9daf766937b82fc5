from __future__ import annotations

import json
import logging
import os
import secrets
import tempfile
import threading
from datetime import datetime, timezone

from filenest.core.exceptions import ShareLinkNotFoundError

logger = logging.getLogger("filenest")

# One writer at a time within this process; other processes are not coordinated.
_index_lock = threading.Lock()


class ShareIndex:
    """Share links persisted as one JSON object keyed by share id.

    Every call re-reads the document from disk; mutations rewrite it whole.
    """

    def __init__(self, path: str):
        self.path = path

    def ensure_exists(self) -> None:
        with _index_lock:
            if not os.path.exists(self.path):
                self._write({})
                logger.info("Initialised share index at %s", self.path)

    def _read(self) -> dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Share index %s is unreadable, treating as empty: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Share index %s is not a JSON object, treating as empty", self.path)
            return {}
        return data

    def _write(self, links: dict) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".share-links-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(links, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def all(self) -> dict:
        return self._read()

    def create(self, filename: str, original_name: str) -> tuple[str, dict]:
        share_id = secrets.token_hex(16)
        record = {
            "filename": filename,
            "originalName": original_name,
            "created": datetime.now(timezone.utc).isoformat(),
            "downloads": 0,
        }
        with _index_lock:
            links = self._read()
            links[share_id] = record
            self._write(links)
        logger.info("Created share link %s for %s", share_id, filename)
        return share_id, record

    def resolve(self, share_id: str) -> dict:
        record = self._read().get(share_id)
        if not isinstance(record, dict) or "filename" not in record:
            raise ShareLinkNotFoundError()
        return record

    def record_download(self, share_id: str) -> dict:
        with _index_lock:
            links = self._read()
            record = links.get(share_id)
            if not isinstance(record, dict) or "filename" not in record:
                raise ShareLinkNotFoundError()
            record["downloads"] = int(record.get("downloads") or 0) + 1
            links[share_id] = record
            self._write(links)
        logger.info("Share link %s downloaded (%s total)", share_id, record["downloads"])
        return record
