from typing import Protocol, Iterable, Any, TypeVar, runtime_checkable
from .model import NoteId, Note

T = TypeVar("T")


@runtime_checkable
class MetadataStore(Protocol):
    """
    What the typed accessors need from a store. Both primitives are total:
    get_as() returns ``default`` when the key is absent or the value cannot
    be converted to ``target``; neither ever raises.
    """

    def exists(self, key: str) -> bool:
        pass

    def get_as(self, key: str, target: Any, default: T) -> T:
        pass


class StorageStrategy(Protocol):
    """
    Flat store: one directory, files named <id>.md
    """

    def read_raw(self, id: NoteId) -> str | None:
        pass

    def write_raw(self, id: NoteId, contents: str) -> None:
        pass

    def delete_raw(self, id: NoteId) -> None:
        pass

    def list_all_ids(self) -> Iterable[NoteId]:
        pass


class FrontmatterCodec(Protocol):
    """
    Round-trip optional frontmatter without enforcing schema.
    """

    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        pass

    def encode(self, meta: dict[str, Any]) -> str:
        pass


class NoteCodec(Protocol):
    """
    Compose FrontmatterCodec with raw body.
    """

    def decode_file(self, text: str, id: NoteId) -> tuple[dict[str, Any], str]:
        pass

    def encode_file(self, note: Note) -> str:
        pass


class IdGenerator(Protocol):
    def new_id(self) -> NoteId:
        pass
