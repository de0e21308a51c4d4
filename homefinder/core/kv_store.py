"""
Key-Value Store

Persistent blob storage keyed by name. Each value is a JSON document; the
whole application database lives under a single key.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Interface for blob storage backends."""

    def load(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def save(self, key: str, data: Any) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class JsonFileStore(KeyValueStore):
    """One JSON file per key inside a data directory."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Storage directory unavailable ({self.data_dir}): {e}")

    def _safe_key(self, key: str) -> str:
        return "".join(c if c.isalnum() or c in "._-" else "_" for c in key)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{self._safe_key(key)}.json"

    def load(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            # Corrupt or unreadable blobs count as absent
            logger.warning(f"Storage read error for {key}: {e}")
            return None

    def save(self, key: str, data: Any) -> None:
        """Replace the file for `key`. The previous file survives any failure."""
        try:
            payload = json.dumps(data, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.warning(f"Storage write error for {key}: {e}")
            return

        path = self._path(key)
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, path)
            logger.debug(f"Saved {key} to {path}")
        except OSError as e:
            logger.warning(f"Storage write error for {key}: {e}")
            tmp_path.unlink(missing_ok=True)

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Storage remove error for {key}: {e}")


class MemoryStore(KeyValueStore):
    """In-process store. Values are round-tripped through JSON like the file store."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Storage read error for {key}: {e}")
            return None

    def save(self, key: str, data: Any) -> None:
        try:
            self._data[key] = json.dumps(data, ensure_ascii=False)
        except TypeError as e:
            logger.warning(f"Storage write error for {key}: {e}")

    def save_raw(self, key: str, raw: str) -> None:
        """Store an unparsed string as-is (used to simulate corrupted storage)."""
        self._data[key] = raw

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
