"""JSON file helpers shared by the state and sets stores."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import PersistenceError


def write_json_atomic(path: Path, payload: Any) -> None:
    """Write `payload` as pretty JSON via a temp file and rename."""
    temp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_path, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, ensure_ascii=False)
            fh.write("\n")
        temp_path.replace(path)
    except (OSError, TypeError, ValueError) as error:
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
        raise PersistenceError(f"Failed to write {path}: {error}") from error


def read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as error:
        raise PersistenceError(f"Malformed JSON in {path}: {error}") from error
    except OSError as error:
        raise PersistenceError(f"Failed to read {path}: {error}") from error
