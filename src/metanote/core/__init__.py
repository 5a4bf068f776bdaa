"""Metadata store, conversion and typed accessors for metanote."""

from .accessors import (
    CollectionState,
    document_list_state,
    get_bool,
    get_datetime,
    get_directory_path,
    get_document,
    get_document_list,
    get_dynamic,
    get_file_path,
    get_formatted_string,
    get_int,
    get_list,
    get_string,
)
from .convert import ConversionError, Converters, default_converters
from .meta import MetaBag
from .model import Note, NoteBody
from .paths import DirectoryPath, FilePath

__all__ = [
    "CollectionState",
    "ConversionError",
    "Converters",
    "DirectoryPath",
    "FilePath",
    "MetaBag",
    "Note",
    "NoteBody",
    "default_converters",
    "document_list_state",
    "get_bool",
    "get_datetime",
    "get_directory_path",
    "get_document",
    "get_document_list",
    "get_dynamic",
    "get_file_path",
    "get_formatted_string",
    "get_int",
    "get_list",
    "get_string",
]
