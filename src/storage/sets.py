"""Directory-backed store of named timer lists."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Mapping, Optional

from timerboard import Timer

from .errors import InvalidSetNameError, PersistenceError, SetNotFoundError
from .files import read_json, write_json_atomic
from .records import timers_from_records, timers_to_records

DEFAULT_SETS_DIR = "sets"
SET_SUFFIX = ".json"

_SET_NAME_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")


class SetStore:
    """Stores each set as `<name>.json` holding an array of timer records."""

    def __init__(self, directory: str | Path, *, logger: Optional[logging.Logger] = None):
        self._directory = Path(directory)
        self._logger = logger or logging.getLogger("storage.sets")

    @property
    def directory(self) -> Path:
        return self._directory

    def write(self, name: str, timers: Iterable[Timer]) -> Path:
        path = self._path_for(name)
        write_json_atomic(path, timers_to_records(timers))
        self._logger.info("Saved set %s to %s", name, path)
        return path

    def list(self) -> list[str]:
        if not self._directory.exists():
            return []
        try:
            entries = sorted(self._directory.iterdir())
        except OSError as error:
            raise PersistenceError(f"Failed to list {self._directory}: {error}") from error
        return [
            entry.name[: -len(SET_SUFFIX)]
            for entry in entries
            if entry.is_file() and entry.name.endswith(SET_SUFFIX)
        ]

    def read(
        self,
        name: str,
        *,
        tag_colors: Optional[Mapping[str, str]] = None,
    ) -> list[Timer]:
        path = self._path_for(name)
        if not path.is_file():
            raise SetNotFoundError(f"No saved set named {name!r}")
        return timers_from_records(read_json(path), tag_colors=tag_colors)

    def delete(self, name: str) -> None:
        path = self._path_for(name)
        if not path.is_file():
            raise SetNotFoundError(f"No saved set named {name!r}")
        try:
            path.unlink()
        except OSError as error:
            raise PersistenceError(f"Failed to delete {path}: {error}") from error
        self._logger.info("Deleted set %s", name)

    def _path_for(self, name: str) -> Path:
        stem = name.strip()
        if stem.endswith(SET_SUFFIX):
            stem = stem[: -len(SET_SUFFIX)]
        if not _SET_NAME_PATTERN.fullmatch(stem) or stem in (".", ".."):
            raise InvalidSetNameError(f"Invalid set name: {name!r}")
        return self._directory / f"{stem}{SET_SUFFIX}"
