from collections.abc import Iterable

from .convert import Converters
from .meta import MetaBag
from .model import Note, NoteBody, NoteId
from .ports import NoteCodec, StorageStrategy


class Vault:
    def __init__(
        self,
        storage: StorageStrategy,
        codec: NoteCodec,
        converters: Converters | None = None,
    ):
        self.storage = storage
        self.codec = codec
        self.converters = converters

    def get(self, id: NoteId) -> Note | None:
        raw = self.storage.read_raw(id)
        if raw is None:
            return None
        meta_partial, body_text = self.codec.decode_file(raw, id)
        meta = MetaBag(meta_partial, converters=self.converters)
        return Note(id=id, meta=meta, body=NoteBody(raw=body_text))

    def new_note(self, id: NoteId, meta: dict | None = None, body: str = "") -> Note:
        return Note(id=id, meta=MetaBag(meta, converters=self.converters), body=NoteBody(raw=body))

    def put(self, note: Note) -> None:
        contents = self.codec.encode_file(note)
        self.storage.write_raw(note.id, contents)

    def delete(self, id: NoteId) -> None:
        self.storage.delete_raw(id)

    def list_ids(self) -> Iterable[NoteId]:
        return self.storage.list_all_ids()
