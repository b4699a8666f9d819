from __future__ import annotations

from pathlib import Path
from typing import BinaryIO


class LocalFileStorage:
    """Object storage on the local disk, addressed by ``/``-separated keys."""

    def __init__(self, root):
        self._root = Path(root).resolve()

    def _path(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if self._root not in path.parents:
            raise ValueError(f"Storage key escapes the upload root: {key}")
        return path

    def save(self, key: str, stream: BinaryIO) -> int:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        written = 0
        with path.open("wb") as fh:
            for chunk in iter(lambda: stream.read(64 * 1024), b""):
                fh.write(chunk)
                written += len(chunk)
        return written

    def open(self, key: str) -> BinaryIO:
        return self._path(key).open("rb")

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def exists(self, key: str) -> bool:
        return self._path(key).exists()
