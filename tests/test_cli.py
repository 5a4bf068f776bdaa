"""Tests for the mnote CLI."""

import json
import tempfile
from pathlib import Path

import pytest

from metanote.cli import main


NOTE = """---
id: abc123
title: Torus
weight: "3"
tags: math
draft: maybe
refs:
  - id: n1
  - plain
---

# Torus
"""


def run(capsys, vault_dir: Path, *argv: str) -> tuple[int, str, str]:
    with pytest.raises(SystemExit) as exc:
        main(["--vault", str(vault_dir), *argv])
    out, err = capsys.readouterr()
    return exc.value.code, out, err


@pytest.fixture
def vault_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir) / "vault"
        root.mkdir()
        (root / "abc123.md").write_text(NOTE)
        yield root


def test_meta_get_raw(capsys, vault_dir):
    code, out, _ = run(capsys, vault_dir, "meta", "get", "abc123", "--keys", "title", "weight")

    assert code == 0
    assert out.splitlines() == ["title=Torus", "weight=3"]


def test_meta_get_missing_key_reports(capsys, vault_dir):
    code, out, err = run(capsys, vault_dir, "meta", "get", "abc123", "--keys", "nope")

    assert code == 0
    assert out == ""
    assert "Key 'nope' not found" in err


def test_meta_get_typed(capsys, vault_dir):
    code, out, _ = run(
        capsys, vault_dir, "--json", "meta", "get", "abc123",
        "--keys", "weight", "draft", "--type", "int",
    )

    assert code == 0
    assert json.loads(out) == {"weight": 3, "draft": 0}


def test_meta_get_typed_default(capsys, vault_dir):
    code, out, _ = run(
        capsys, vault_dir, "meta", "get", "abc123",
        "--keys", "draft", "missing", "--type", "bool", "--default", "yes",
    )

    assert code == 0
    assert out.splitlines() == ["draft=True", "missing=True"]


def test_meta_get_typed_list(capsys, vault_dir):
    code, out, _ = run(
        capsys, vault_dir, "--json", "meta", "get", "abc123",
        "--keys", "tags", "--type", "list", "--item-type", "str",
    )

    assert code == 0
    assert json.loads(out) == {"tags": ["math"]}


def test_meta_get_documents(capsys, vault_dir):
    code, out, _ = run(
        capsys, vault_dir, "--json", "meta", "get", "abc123",
        "--keys", "refs", "title", "missing", "--type", "documents",
    )

    assert code == 0
    assert json.loads(out) == {"refs": [{"id": "n1"}], "title": None, "missing": None}


def test_meta_get_invalid_default(capsys, vault_dir):
    code, _, err = run(
        capsys, vault_dir, "meta", "get", "abc123",
        "--keys", "weight", "--type", "int", "--default", "lots",
    )

    assert code == 2
    assert "Invalid --default" in err


def test_meta_get_unknown_note(capsys, vault_dir):
    code, _, err = run(capsys, vault_dir, "meta", "get", "zzz")

    assert code == 1
    assert "Note zzz not found" in err


def test_meta_set_parses_values(capsys, vault_dir):
    code, _, _ = run(
        capsys, vault_dir, "-q", "meta", "set", "abc123",
        "weight=5", "published=2024-02-01", "aliases=[a, b]", "note=hello world",
    )
    assert code == 0

    code, out, _ = run(capsys, vault_dir, "meta", "show", "abc123")
    assert code == 0
    assert "weight: 5" in out
    assert "published: 2024-02-01" in out
    assert "note: hello world" in out
    assert "- a" in out


def test_meta_set_rejects_bad_pair(capsys, vault_dir):
    code, _, err = run(capsys, vault_dir, "meta", "set", "abc123", "weight")

    assert code == 1
    assert "Expected key=value" in err


def test_meta_unset(capsys, vault_dir):
    code, out, _ = run(capsys, vault_dir, "meta", "unset", "abc123", "draft", "nope")

    assert code == 0
    assert "Removed keys: draft" in out
    assert "draft:" not in (vault_dir / "abc123.md").read_text()


def test_new_and_ls(capsys, vault_dir):
    code, out, _ = run(capsys, vault_dir, "new", "--title", "Sphere", "--meta", "weight=2")
    assert code == 0
    nid = out.strip()
    assert len(nid) == 12

    code, out, _ = run(capsys, vault_dir, "--json", "ls")
    assert code == 0
    assert sorted(json.loads(out)) == sorted(["abc123", nid])

    code, out, _ = run(capsys, vault_dir, "ls", "--has", "refs")
    assert out.splitlines() == ["abc123"]


def test_open(capsys, vault_dir):
    code, out, _ = run(capsys, vault_dir, "open", "abc123")

    assert code == 0
    assert "# Torus" in out


def test_malformed_config_reports_error(capsys, vault_dir):
    config_path = vault_dir.parent / "broken.toml"
    config_path.write_text("[id]\nbytes = \n")

    code, _, err = run(capsys, vault_dir, "--config", str(config_path), "id")

    assert code == 1
    assert err.startswith("Error: ")


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    out, _ = capsys.readouterr()

    assert exc.value.code == 0
    assert out.startswith("metanote ")
    assert "python" in out
    assert "platform" in out
