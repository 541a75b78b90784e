"""JSON file helpers shared by the repositories (graceful reads, atomic writes)."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)


def load_json(path: Union[str, Path], default: Any):
    """Read a JSON document, returning `default` if the file is missing or unreadable."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Data file not found: %s. Starting empty.", path)
        return default
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", path, e)
        return default


def atomic_write_json(path: Union[str, Path], data: Any) -> None:
    """Write `data` next to `path` in a temp file, then move it into place."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".planner_", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
