"""
Typed accessors over a metadata store.

Every accessor asks the store for a value converted to one concrete type and
falls back to the caller's default when the key is missing or the value does
not convert. None of them raise, so they can be used directly at call sites
such as templates:

    >>> bag = MetaBag({"count": 5})
    >>> get_int(bag, "count", -1)
    5
    >>> get_int(bag, "missing", -1)
    -1
    >>> get_list(bag, "count", int)
    [5]

The one exception is get_formatted_string(): it only guards the existence
check, and whatever the formatting function raises reaches the caller.

Callers that need to tell "absent" apart from "present but wrong type" should
use ``store.exists(key)`` directly.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Callable

from .model import Note
from .paths import DirectoryPath, FilePath
from .ports import MetadataStore


class CollectionState(Enum):
    ABSENT = "absent"  # key missing, null, or a lone non-document value
    EMPTY = "empty"  # defined, but nothing in it converts
    POPULATED = "populated"


def get_string(meta: MetadataStore, key: str, default: str | None = None) -> str | None:
    return meta.get_as(key, str, default)


def get_formatted_string(
    meta: MetadataStore,
    key: str,
    format_func: Callable[[str | None], str],
    default: str | None = None,
) -> str | None:
    """
    Format the string value of ``key`` if the key exists, otherwise return
    ``default`` without calling ``format_func``.

    Only existence is checked: a present value that does not convert to a
    string reaches ``format_func`` as None. Exceptions raised by
    ``format_func`` propagate.
    """
    if not meta.exists(key):
        return default
    return format_func(get_string(meta, key))


def get_bool(meta: MetadataStore, key: str, default: bool = False) -> bool:
    return meta.get_as(key, bool, default)


def get_int(meta: MetadataStore, key: str, default: int = 0) -> int:
    return meta.get_as(key, int, default)


def get_datetime(meta: MetadataStore, key: str, default: datetime = datetime.min) -> datetime:
    """Timestamp value; ISO 8601 strings and YAML dates both convert."""
    return meta.get_as(key, datetime, default)


def get_file_path(meta: MetadataStore, key: str, default: FilePath | None = None) -> FilePath | None:
    """File path value; strings that do not parse as a file path give ``default``."""
    return meta.get_as(key, FilePath, default)


def get_directory_path(
    meta: MetadataStore, key: str, default: DirectoryPath | None = None
) -> DirectoryPath | None:
    return meta.get_as(key, DirectoryPath, default)


def get_list(
    meta: MetadataStore,
    key: str,
    item_type: Any = object,
    default: list | None = None,
) -> list | None:
    """
    List of ``item_type`` values.

    A single atomic value that converts is promoted to a one-element list,
    so callers do not need to know whether the author wrote ``tags: math``
    or ``tags: [math, physics]``. A lone value that does not convert gives
    ``default``. Inside a collection, items that do not convert are skipped
    and the original order is kept.
    """
    return meta.get_as(key, list[item_type], default)


def get_document(meta: MetadataStore, key: str, default: Note | None = None) -> Note | None:
    """Nested document; a list of documents is never reduced to one."""
    return meta.get_as(key, Note, default)


def get_document_list(
    meta: MetadataStore, key: str, default: list[Note] | None = None
) -> list[Note] | None:
    """
    List of nested documents.

    Returns ``default`` (None unless given) when the key is missing, and an
    empty list when the key holds a collection but none of its items are
    documents. A single value that is not a document also gives ``default``.
    """
    return meta.get_as(key, list[Note], default)


def document_list_state(meta: MetadataStore, key: str) -> tuple[CollectionState, list[Note] | None]:
    docs = get_document_list(meta, key)
    if docs is None:
        return CollectionState.ABSENT, None
    if not docs:
        return CollectionState.EMPTY, docs
    return CollectionState.POPULATED, docs


def get_dynamic(meta: MetadataStore, key: str, default: Any = None) -> Any:
    """
    Raw value of ``key`` without conversion.

    A stored null never comes back out: it is replaced by ``default``.
    """
    value = meta.get_as(key, object, default)
    return default if value is None else value
