from pathlib import Path
from typing import Iterable
from ..core.ports import StorageStrategy


class FsStorage(StorageStrategy):
    """Notes as <id><ext> files in a single directory."""

    def __init__(self, root: Path, ext: str = ".md"):
        self.root = Path(root)
        self.ext = ext

    def _path(self, id: str) -> Path:
        if not id or "/" in id or "\\" in id or id.startswith("."):
            raise ValueError(f"Invalid note id: {id!r}")
        return self.root / f"{id}{self.ext}"

    def read_raw(self, id: str) -> str | None:
        p = self._path(id)
        return p.read_text(encoding="utf-8") if p.is_file() else None

    def write_raw(self, id: str, contents: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        self._path(id).write_text(contents, encoding="utf-8")

    def delete_raw(self, id: str) -> None:
        self._path(id).unlink(missing_ok=True)

    def list_all_ids(self) -> Iterable[str]:
        if not self.root.is_dir():
            return []
        return sorted(p.stem for p in self.root.glob(f"*{self.ext}"))
