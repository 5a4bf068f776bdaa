from __future__ import annotations
from dataclasses import dataclass

NoteId = str


@dataclass
class NoteBody:
    raw: str = ""


@dataclass
class Note:
    """
    A note is also the nested document type of the metadata layer: a
    mapping inside frontmatter surfaces as an embedded Note with an empty body.
    """

    id: NoteId
    meta: "MetaBag"
    body: NoteBody
