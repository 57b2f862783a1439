"""
Saved obstacle layouts.

One JSON file holds every layout as {key: [[x, y], ...]}; keys default to the
save time in milliseconds, so listing them in file order is chronological.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional

from shared.types import Cell


class LayoutStore:
    def __init__(self, path: str | Path = "artifacts/layouts.json"):
        self.path = Path(path)

    def _read(self) -> Dict[str, List[List[int]]]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text() or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: expected a JSON object of layouts")
        return data

    def _write(self, data: Dict[str, List[List[int]]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))

    def save(self, cells: Iterable[Cell], key: Optional[str] = None) -> str:
        data = self._read()
        if key is None:
            stamp = int(time.time() * 1000)
            while str(stamp) in data:
                stamp += 1
            key = str(stamp)
        data[key] = [[int(x), int(y)] for x, y in sorted(set(map(tuple, cells)))]
        self._write(data)
        return key

    def load(self, key: str) -> FrozenSet[Cell]:
        data = self._read()
        if key not in data:
            raise KeyError(f"no layout named {key!r} in {self.path}")
        return frozenset((int(x), int(y)) for x, y in data[key])

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def keys(self) -> List[str]:
        return list(self._read())

    def __len__(self) -> int:
        return len(self._read())
