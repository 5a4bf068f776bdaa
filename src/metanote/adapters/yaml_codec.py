import re, io
import yaml
from collections.abc import Mapping
from pathlib import PurePath
from typing import Any
from ..core.ports import FrontmatterCodec, NoteCodec
from ..core.model import Note

_FM = re.compile(r"^\s*---\s*\n(.*?)\n---\s*\n?", re.DOTALL)


def to_plain(value: Any) -> Any:
    """Reduce metadata values to what yaml.safe_dump can write."""
    if isinstance(value, Note):
        return to_plain(value.meta)
    if isinstance(value, Mapping):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, PurePath):
        return value.as_posix()
    return value


class YamlFrontmatter(FrontmatterCodec):
    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        m = _FM.match(text)
        if not m:
            return {}, text
        fm = yaml.safe_load(io.StringIO(m.group(1))) or {}
        if not isinstance(fm, dict):
            raise ValueError(f"Frontmatter must be a mapping, got {type(fm).__name__}")
        body = text[m.end() :]
        return (fm, body)

    def encode(self, meta: dict[str, Any]) -> str:
        if not meta:
            return ""
        buf = io.StringIO()
        yaml.safe_dump(to_plain(meta), buf, sort_keys=False, allow_unicode=True)
        return f"---\n{buf.getvalue()}---\n"


class MarkdownNoteCodec(NoteCodec):
    def __init__(self, fm: YamlFrontmatter):
        self.fm = fm

    def decode_file(self, text: str, id: str):
        return self.fm.decode(text)

    def encode_file(self, note: Note) -> str:
        meta = dict(note.meta)
        # filename remains source of truth; mirror it for readers of the raw file
        if "id" not in meta:
            meta["id"] = note.id
        return self.fm.encode(meta) + note.body.raw
