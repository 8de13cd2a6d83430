import json
import os
import re
import tempfile
from typing import Any

from .logger import get_logger

logger = get_logger("storage")

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")

class LocalStore:
    """Device-local key/value store: one JSON blob per key, one file per blob.

    Reads are fresh from disk every time and writes replace the whole blob,
    so the last writer wins.
    """

    def __init__(self, directory: str):
        self.directory = os.path.abspath(directory)
        os.makedirs(self.directory, exist_ok=True)

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, _SAFE_KEY.sub("_", key) + ".json")

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not os.path.exists(path):
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Unreadable blob for {key!r}, using default: {e}")
            return default

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
