"""
File utility functions for PDF Scout.

Provides common file operations: directory preparation and atomic
JSON persistence for the index and cache documents.
"""

import json
import os
from pathlib import Path
from typing import Any, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Create directory tree if it doesn't exist.

    Args:
        path: Directory path to create.

    Returns:
        Path object of the directory.
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write_json(path: Union[str, Path], payload: Any) -> None:
    """
    Write JSON to a sibling temp file, then rename it over the target.

    A crash mid-write leaves at most a stray ``.tmp`` file; the target
    is either the previous document or the complete new one.

    Args:
        path: Destination file.
        payload: JSON-serializable object.
    """
    path = Path(path)
    tmp = path.with_suffix(path.suffix + ".tmp")

    with tmp.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
        handle.write("\n")
        handle.flush()
        os.fsync(handle.fileno())

    tmp.replace(path)


def read_json(path: Union[str, Path]) -> Any:
    """
    Read and parse a JSON document.

    Raises:
        OSError: If the file cannot be read.
        json.JSONDecodeError: If the content is not valid JSON.
    """
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)
