"""JSON file backend for the incursions cache.

Writes go to a temporary sibling file which is then moved over the
target with :func:`os.replace`, so readers never observe a partially
written cache.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pyincursions.exceptions import CacheLoadError, CachePersistError

_logger = logging.getLogger(__name__)

_TMP_SUFFIX = ".tmp"


class JsonFileStorage:
    """Read and write a single JSON document on disk."""

    def __init__(self, path: Path | str, *, indent: int = 4) -> None:
        self._path = Path(path)
        self._indent = indent

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict[str, Any] | None:
        """Return the parsed document, or ``None`` if the file does not exist.

        Raises
        ------
        CacheLoadError
            The file exists but cannot be read, is not valid JSON, or does
            not hold a JSON object.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise CacheLoadError(f"Cannot read cache file: {exc}", path=self._path) from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CacheLoadError(f"Cache file is not valid JSON: {exc}", path=self._path) from exc

        if not isinstance(data, dict):
            raise CacheLoadError(
                f"Cache file must hold a JSON object, got {type(data).__name__}",
                path=self._path,
            )
        _logger.debug("Read cache file %s (%d bytes)", self._path, len(text))
        return data

    def write(self, data: dict[str, Any]) -> None:
        """Serialize *data* and atomically replace the file with it.

        Raises
        ------
        CachePersistError
            Serialization or any filesystem step failed. The previous file,
            if any, is left untouched.
        """
        tmp_path = self._path.with_name(self._path.name + _TMP_SUFFIX)
        try:
            text = json.dumps(data, indent=self._indent, ensure_ascii=False)
            if self._path.parent != Path():
                self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as exc:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                _logger.debug("Could not remove temporary file %s", tmp_path, exc_info=True)
            raise CachePersistError(f"Cannot write cache file: {exc}", path=self._path) from exc
        _logger.debug("Wrote cache file %s (%d bytes)", self._path, len(text))
