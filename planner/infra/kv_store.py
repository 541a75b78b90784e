"""Lightweight key-value store persisted as one JSON object on disk.

Used for ephemeral, weekly state (the planned meals) that lives outside the
catalog files.
"""
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Union

from planner.infra.json_files import load_json, atomic_write_json


class JsonKeyValueStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = Lock()

    def _read(self) -> Dict[str, Any]:
        data = load_json(self.path, {})
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            atomic_write_json(self.path, data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                atomic_write_json(self.path, data)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._read().keys())


__all__ = ['JsonKeyValueStore']
