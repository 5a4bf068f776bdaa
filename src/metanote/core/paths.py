"""Normalized path values stored in note metadata.

Paths in frontmatter are always written with forward slashes, regardless of
the platform the vault is opened on:
- "assets/figures/torus.svg"   -> FilePath
- "assets/figures/"            -> DirectoryPath
"""

import re
from pathlib import PurePath, PurePosixPath

_INVALID = re.compile(r'[\x00-\x1f<>|"?*]')


class FilePath(PurePosixPath):
    """Path to a single file, relative to the vault or absolute."""

    @property
    def directory(self) -> "DirectoryPath":
        return DirectoryPath(str(self.parent))

    @property
    def extension(self) -> str:
        return self.suffix

    @classmethod
    def parse(cls, text: str) -> "FilePath":
        return parse_path(text, cls)


class DirectoryPath(PurePosixPath):
    """Path to a directory, relative to the vault or absolute."""

    def file(self, name: str) -> FilePath:
        return FilePath(str(self / name))

    @classmethod
    def parse(cls, text: str) -> "DirectoryPath":
        return parse_path(text, cls)


def parse_path(text: str | PurePath, cls: type = FilePath):
    """
    Parse text into ``cls`` (FilePath or DirectoryPath).

    Backslashes are treated as separators. Raises ValueError for empty text,
    control characters or any of ``<>|"?*``, and for file paths that name a
    directory (trailing slash, ``.`` or ``..``).
    """
    if isinstance(text, PurePath):
        text = text.as_posix()
    if not isinstance(text, str):
        raise ValueError(f"Cannot parse path from {type(text).__name__}")

    normalized = text.strip().replace("\\", "/")
    if not normalized:
        raise ValueError("Path is empty")
    if _INVALID.search(normalized):
        raise ValueError(f"Path contains invalid characters: {text!r}")

    if issubclass(cls, FilePath):
        if normalized.endswith("/") or normalized.rsplit("/", 1)[-1] in (".", ".."):
            raise ValueError(f"Not a file path: {text!r}")

    return cls(normalized)
