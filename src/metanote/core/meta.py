import logging
from datetime import datetime
from typing import MutableMapping, Iterator, Any, Callable, TypeVar

from . import accessors
from .convert import Converters, default_converters
from .model import Note
from .paths import DirectoryPath, FilePath

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MetaBag(MutableMapping[str, Any]):
    """
    Arbitrary namespaced keys, e.g.,
    - "core/title": "Covariant derivative"
    - "user/type": "math:definition"
    - "custom/difficulty": 3
    The core never *requires* any key besides Note.id existing in filename.

    Values are stored as written; the get_* helpers convert on read and fall
    back to a default instead of raising.
    """

    def __init__(self, initial: dict | None = None, converters: Converters | None = None):
        self._d = dict(initial or {})
        self.converters = converters or default_converters()

    # MutableMapping interface
    def __getitem__(self, k: str) -> Any:
        return self._d[k]

    def __setitem__(self, k: str, v: Any) -> None:
        self._d[k] = v

    def __delitem__(self, k: str) -> None:
        del self._d[k]

    def __iter__(self) -> Iterator[str]:
        return iter(self._d)

    def __len__(self) -> int:
        return len(self._d)

    def __repr__(self) -> str:
        return f"MetaBag({self._d!r})"

    # Store primitives
    def exists(self, key: str) -> bool:
        return isinstance(key, str) and bool(key) and key in self._d

    def get_as(self, key: str, target: Any, default: T) -> T:
        if not self.exists(key):
            return default
        ok, value = self.converters.try_convert(self._d[key], target)
        if not ok:
            logger.debug("Using default for %r: value %r did not convert", key, self._d[key])
            return default
        return value

    # Convenience
    def get_str(self, key: str, default: str | None = None) -> str | None:
        return accessors.get_string(self, key, default)

    def format_str(
        self, key: str, format_func: Callable[[str | None], str], default: str | None = None
    ) -> str | None:
        return accessors.get_formatted_string(self, key, format_func, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return accessors.get_bool(self, key, default)

    def get_int(self, key: str, default: int = 0) -> int:
        return accessors.get_int(self, key, default)

    def get_datetime(self, key: str, default: datetime = datetime.min) -> datetime:
        return accessors.get_datetime(self, key, default)

    def get_file_path(self, key: str, default: FilePath | None = None) -> FilePath | None:
        return accessors.get_file_path(self, key, default)

    def get_directory_path(
        self, key: str, default: DirectoryPath | None = None
    ) -> DirectoryPath | None:
        return accessors.get_directory_path(self, key, default)

    def get_list(self, key: str, item_type: Any = object, default: list | None = None) -> list | None:
        return accessors.get_list(self, key, item_type, default)

    def get_document(self, key: str, default: Note | None = None) -> Note | None:
        return accessors.get_document(self, key, default)

    def get_document_list(self, key: str, default: list[Note] | None = None) -> list[Note] | None:
        return accessors.get_document_list(self, key, default)

    def get_dynamic(self, key: str, default: Any = None) -> Any:
        return accessors.get_dynamic(self, key, default)
