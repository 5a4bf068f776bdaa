"""CLI for metanote - notes with typed frontmatter access."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

import yaml

from . import __version__
from .adapters.yaml_codec import to_plain
from .core import accessors
from .core.convert import ConversionError
from .core.paths import DirectoryPath, FilePath
from .runtime import build_runtime

logger = logging.getLogger(__name__)

# --type name -> (accessor, conversion target for --default)
TYPED_GETTERS: dict[str, tuple[Any, Any]] = {
    "str": (accessors.get_string, str),
    "bool": (accessors.get_bool, bool),
    "int": (accessors.get_int, int),
    "datetime": (accessors.get_datetime, None),
    "file": (accessors.get_file_path, FilePath),
    "dir": (accessors.get_directory_path, DirectoryPath),
    "list": (accessors.get_list, None),
    "document": (accessors.get_document, None),
    "documents": (accessors.get_document_list, None),
    "dynamic": (accessors.get_dynamic, object),
}

ITEM_TYPES: dict[str, Any] = {
    "any": object,
    "str": str,
    "int": int,
    "bool": bool,
    "file": FilePath,
    "dir": DirectoryPath,
}


def configure_logging(level: str, verbose: bool = False) -> None:
    """Configure the root logger once for the CLI process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def _render(value: Any) -> str:
    plain = to_plain(value)
    if isinstance(plain, (dict, list)):
        return json.dumps(plain, default=str)
    return str(plain)


def cmd_id(args: argparse.Namespace, rt: Any) -> int:
    """Print a new random ID."""
    print(rt.idgen.new_id())
    return 0


def cmd_new(args: argparse.Namespace, rt: Any) -> int:
    """Create a new note."""
    nid = rt.idgen.new_id()

    meta: dict[str, Any] = {"id": nid}
    if args.title:
        meta["title"] = args.title
    for kv in args.meta:
        k, _, val = kv.partition("=")
        meta[k.strip()] = _parse_value(val.strip())

    title_line = f"# {args.title}\n\n" if args.title else "# \n\n"
    rt.vault.put(rt.vault.new_note(nid, meta, title_line))

    if not args.quiet:
        print(nid)
    return 0


def cmd_ls(args: argparse.Namespace, rt: Any) -> int:
    """List note ids, optionally only those defining a key."""
    ids = list(rt.vault.list_ids())
    if args.has:
        filtered = []
        for nid in ids:
            note = rt.vault.get(nid)
            if note is not None and note.meta.exists(args.has):
                filtered.append(nid)
        ids = filtered

    if args.json:
        print(json.dumps(ids))
    else:
        for nid in ids:
            print(nid)
    return 0


def cmd_open(args: argparse.Namespace, rt: Any) -> int:
    """Print raw Markdown body to stdout."""
    note = rt.vault.get(args.id)
    if note is None:
        print(f"Note {args.id} not found", file=sys.stderr)
        return 1
    print(note.body.raw)
    return 0


def _typed_value(args: argparse.Namespace, rt: Any, meta: Any, key: str) -> Any:
    getter, default_target = TYPED_GETTERS[args.type]

    default = None
    if args.default is not None:
        if default_target is None:
            raise ValueError(f"--default is not supported for --type {args.type}")
        # An unusable --default is a usage error, not a silent fallback
        default = rt.converters.convert(args.default, default_target)

    if args.type == "list":
        return getter(meta, key, ITEM_TYPES[args.item_type], default)
    if default is None and args.type in ("bool", "int", "datetime"):
        return getter(meta, key)
    return getter(meta, key, default)


def cmd_meta_get(args: argparse.Namespace, rt: Any) -> int:
    """Get metadata values from a note, optionally converted to a type."""
    note = rt.vault.get(args.id)
    if note is None:
        print(f"Note {args.id} not found", file=sys.stderr)
        return 1

    keys = args.keys or list(note.meta)
    result: dict[str, Any] = {}
    for key in keys:
        if args.type:
            try:
                result[key] = _typed_value(args, rt, note.meta, key)
            except ConversionError as e:
                print(f"Invalid --default: {e}", file=sys.stderr)
                return 2
        elif key in note.meta:
            result[key] = note.meta[key]
        elif not args.quiet:
            print(f"Key '{key}' not found", file=sys.stderr)

    if args.json:
        print(json.dumps(to_plain(result), default=str))
    else:
        for key, value in result.items():
            print(f"{key}={_render(value)}")
    return 0


def _parse_value(text: str) -> Any:
    """Read a command-line value the way frontmatter would read it."""
    try:
        return yaml.safe_load(text) if text else ""
    except yaml.YAMLError:
        return text


def cmd_meta_set(args: argparse.Namespace, rt: Any) -> int:
    """Set metadata values in a note."""
    note = rt.vault.get(args.id)
    if note is None:
        print(f"Note {args.id} not found", file=sys.stderr)
        return 1

    for kv in args.pairs:
        if "=" not in kv:
            print(f"Invalid format: {kv}. Expected key=value", file=sys.stderr)
            return 1
        key, _, value_str = kv.partition("=")
        note.meta[key.strip()] = _parse_value(value_str.strip())

    rt.vault.put(note)

    if not args.quiet:
        print(f"Updated metadata for {args.id}")
    return 0


def cmd_meta_unset(args: argparse.Namespace, rt: Any) -> int:
    """Remove metadata keys from a note."""
    note = rt.vault.get(args.id)
    if note is None:
        print(f"Note {args.id} not found", file=sys.stderr)
        return 1

    removed = []
    for key in args.keys:
        if key in note.meta:
            del note.meta[key]
            removed.append(key)

    if removed:
        rt.vault.put(note)
        if not args.quiet:
            print(f"Removed keys: {', '.join(removed)}")
    elif not args.quiet:
        print("No keys removed")
    return 0


def cmd_meta_show(args: argparse.Namespace, rt: Any) -> int:
    """Pretty-print frontmatter for a note."""
    note = rt.vault.get(args.id)
    if note is None:
        print(f"Note {args.id} not found", file=sys.stderr)
        return 1

    if note.meta:
        print(yaml.safe_dump(to_plain(note.meta), sort_keys=False, allow_unicode=True), end="")
    else:
        print("# No metadata")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mnote", description="metanote CLI")
    parser.add_argument(
        "--version",
        action="version",
        version=(
            f"metanote {__version__} "
            f"(python {platform.python_version()}, platform {platform.platform()})"
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/metanote.toml, vault/metanote.toml)",
    )
    parser.add_argument(
        "--vault",
        type=Path,
        default=None,
        help="Path to vault directory (overrides config)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Minimize output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--json", action="store_true", help="Machine-readable output")

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    subparsers.add_parser("id", help="Print a new random ID")

    parser_new = subparsers.add_parser("new", help="Create a new note")
    parser_new.add_argument("--title", help="Note title")
    parser_new.add_argument(
        "--meta", action="append", default=[], help="key=value metadata (repeatable)"
    )

    parser_ls = subparsers.add_parser("ls", help="List notes")
    parser_ls.add_argument("--has", help="Only notes that define this metadata key")

    parser_open = subparsers.add_parser("open", help="Print note body")
    parser_open.add_argument("id", help="Note ID")

    parser_meta = subparsers.add_parser("meta", help="Manage note metadata")
    meta_sub = parser_meta.add_subparsers(dest="meta_cmd", required=True)

    parser_meta_get = meta_sub.add_parser("get", help="Get metadata values")
    parser_meta_get.add_argument("id", help="Note ID")
    parser_meta_get.add_argument("--keys", nargs="+", help="Specific keys to retrieve")
    parser_meta_get.add_argument(
        "--type", choices=sorted(TYPED_GETTERS), help="Convert values to this type"
    )
    parser_meta_get.add_argument(
        "--item-type", choices=sorted(ITEM_TYPES), default="any",
        help="Item type for --type list (default: any)",
    )
    parser_meta_get.add_argument(
        "--default", help="Value to print when a key is missing or does not convert"
    )

    parser_meta_set = meta_sub.add_parser("set", help="Set metadata values")
    parser_meta_set.add_argument("id", help="Note ID")
    parser_meta_set.add_argument("pairs", nargs="+", help="key=value pairs")

    parser_meta_unset = meta_sub.add_parser("unset", help="Remove metadata keys")
    parser_meta_unset.add_argument("id", help="Note ID")
    parser_meta_unset.add_argument("keys", nargs="+", help="Keys to remove")

    parser_meta_show = meta_sub.add_parser("show", help="Pretty-print frontmatter")
    parser_meta_show.add_argument("id", help="Note ID")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        rt = build_runtime(vault_path=args.vault, config_path=args.config)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    configure_logging(rt.config.log.level, args.verbose)

    handlers = {
        "id": cmd_id,
        "new": cmd_new,
        "ls": cmd_ls,
        "open": cmd_open,
    }
    if args.cmd == "meta":
        meta_handlers = {
            "get": cmd_meta_get,
            "set": cmd_meta_set,
            "unset": cmd_meta_unset,
            "show": cmd_meta_show,
        }
        handler = meta_handlers.get(args.meta_cmd)
    else:
        handler = handlers.get(args.cmd)

    if handler is None:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)

    try:
        exit_code = handler(args, rt)
    except Exception as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
