"""
Type coercion for loosely-typed metadata values.

Frontmatter values arrive as whatever YAML produced (str, int, bool, date,
list, dict, ...). A Converters registry turns them into the type a caller
asks for. Converters for a target type are looked up by exact type; a value
that is already an instance of an unregistered target passes through.

    conv = Converters()
    conv.convert("42", int)          # 42
    conv.convert("a.md", list[str])  # ["a.md"]  (singleton promotion)
    conv.try_convert("x", int)       # (False, None)
"""

import logging
import typing
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from pathlib import PurePath
from typing import Any

from .model import Note, NoteBody
from .paths import DirectoryPath, FilePath, parse_path

logger = logging.getLogger(__name__)

DEFAULT_TRUE_VALUES = ("true", "yes", "on", "1")
DEFAULT_FALSE_VALUES = ("false", "no", "off", "0")

_LIST_ORIGINS = (list, Sequence)


class ConversionError(ValueError):
    """Raised when a value cannot be converted to the requested type."""

    def __init__(self, value: Any, target: Any, reason: str | None = None):
        self.value = value
        self.target = target
        name = getattr(target, "__name__", None) or repr(target)
        msg = f"Cannot convert {type(value).__name__} value {value!r} to {name}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class Converters:
    """Registry of converters keyed by target type."""

    def __init__(
        self,
        true_values: Iterable[str] = DEFAULT_TRUE_VALUES,
        false_values: Iterable[str] = DEFAULT_FALSE_VALUES,
        datetime_formats: Iterable[str] = (),
    ):
        self.true_values = frozenset(v.lower() for v in true_values)
        self.false_values = frozenset(v.lower() for v in false_values)
        self.datetime_formats = list(datetime_formats)
        self._converters: dict[type, Callable[[Any], Any]] = {}

        self.register(str, self._to_str)
        self.register(bool, self._to_bool)
        self.register(int, self._to_int)
        self.register(float, self._to_float)
        self.register(datetime, self._to_datetime)
        self.register(date, self._to_date)
        self.register(FilePath, self._to_file_path)
        self.register(DirectoryPath, self._to_directory_path)
        self.register(Note, self._to_note)

    def register(self, target: type, func: Callable[[Any], Any]) -> None:
        """Add or replace the converter for ``target``.

        ``func`` takes the raw value and returns the converted value, raising
        ValueError (or ConversionError) when it cannot.
        """
        self._converters[target] = func
        logger.debug("Registered converter for %s", getattr(target, "__name__", target))

    def convert(self, value: Any, target: Any) -> Any:
        """Convert ``value`` to ``target`` or raise ConversionError."""
        if target is object or target is Any:
            return value

        origin = typing.get_origin(target)
        if target is list or origin in _LIST_ORIGINS:
            args = typing.get_args(target)
            return self._to_list(value, args[0] if args else object)

        if value is None:
            raise ConversionError(value, target, "value is null")

        func = self._converters.get(target)
        if func is not None:
            return func(value)
        if isinstance(target, type) and isinstance(value, target):
            return value
        raise ConversionError(value, target, "no converter registered")

    def try_convert(self, value: Any, target: Any) -> tuple[bool, Any]:
        """Like convert(), but returns (ok, result) and never raises."""
        try:
            return True, self.convert(value, target)
        except (ValueError, TypeError) as e:
            logger.debug("Conversion failed: %s", e)
            return False, None

    # Built-in converters

    def _to_list(self, value: Any, item_type: Any) -> list:
        if value is None:
            raise ConversionError(value, list, "value is null")
        if isinstance(value, (str, bytes, Mapping, Note)) or not isinstance(value, Iterable):
            # a lone item is promoted only if it converts
            ok, converted = self.try_convert(value, item_type)
            if not ok:
                raise ConversionError(value, list, "single item does not convert")
            return [converted]

        result = []
        for item in value:
            ok, converted = self.try_convert(item, item_type)
            if ok:
                result.append(converted)
        return result

    def _to_str(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, PurePath):
            return value.as_posix()
        raise ConversionError(value, str)

    def _to_bool(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            token = value.strip().lower()
            if token in self.true_values:
                return True
            if token in self.false_values:
                return False
            raise ConversionError(value, bool, "unrecognized token")
        if isinstance(value, (int, float, Decimal)):
            return value != 0
        raise ConversionError(value, bool)

    def _to_int(self, value: Any) -> int:
        if isinstance(value, int):
            return int(value)
        if isinstance(value, float):
            if not value.is_integer():
                raise ConversionError(value, int, "not integral")
            return int(value)
        if isinstance(value, Decimal):
            if not value.is_finite() or value != value.to_integral_value():
                raise ConversionError(value, int, "not integral")
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                raise ConversionError(value, int) from None
        raise ConversionError(value, int)

    def _to_float(self, value: Any) -> float:
        if isinstance(value, (int, float, Decimal)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                raise ConversionError(value, float) from None
        raise ConversionError(value, float)

    def _to_datetime(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if not isinstance(value, str):
            raise ConversionError(value, datetime)

        text = value.strip()
        iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
        try:
            return datetime.fromisoformat(iso)
        except ValueError:
            pass
        for fmt in self.datetime_formats:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        raise ConversionError(value, datetime, "unrecognized format")

    def _to_date(self, value: Any) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return self._to_datetime(value).date()

    def _to_file_path(self, value: Any) -> FilePath:
        if isinstance(value, FilePath):
            return value
        try:
            return parse_path(value, FilePath)
        except ValueError as e:
            raise ConversionError(value, FilePath, str(e)) from None

    def _to_directory_path(self, value: Any) -> DirectoryPath:
        if isinstance(value, DirectoryPath):
            return value
        try:
            return parse_path(value, DirectoryPath)
        except ValueError as e:
            raise ConversionError(value, DirectoryPath, str(e)) from None

    def _to_note(self, value: Any) -> Note:
        if isinstance(value, Note):
            return value
        if isinstance(value, Mapping):
            from .meta import MetaBag

            note_id = value.get("id")
            return Note(
                id=note_id if isinstance(note_id, str) else "",
                meta=MetaBag(value, converters=self),
                body=NoteBody(),
            )
        raise ConversionError(value, Note, "not a mapping")


_default: Converters | None = None


def default_converters() -> Converters:
    """Shared registry used by MetaBags that are not given their own."""
    global _default
    if _default is None:
        _default = Converters()
    return _default
