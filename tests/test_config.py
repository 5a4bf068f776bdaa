"""Tests for configuration loading."""

import os
import tempfile
from datetime import datetime
from pathlib import Path

from metanote.config import load_config


def test_load_config_defaults():
    """Test loading config with defaults when no file exists."""
    with tempfile.TemporaryDirectory() as tmpdir:
        orig_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            config = load_config()
        finally:
            os.chdir(orig_cwd)

    assert config.vault.root == Path("./vault")
    assert config.id.bytes == 6
    assert config.convert.true_values == ["true", "yes", "on", "1"]
    assert config.convert.datetime_formats == []
    assert config.log.level == "WARNING"


def test_load_config_from_file():
    """Test loading config from a file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "metanote.toml"
        config_path.write_text("""
[vault]
root = "my-vault"

[id]
bytes = 8

[convert]
true_values = ["ja", "oui"]
false_values = ["nein", "non"]
datetime_formats = ["%d.%m.%Y"]

[log]
level = "debug"
""")

        config = load_config(config_path=config_path)

        assert config.vault.root == Path("my-vault")
        assert config.id.bytes == 8
        assert config.convert.true_values == ["ja", "oui"]
        assert config.convert.false_values == ["nein", "non"]
        assert config.log.level == "DEBUG"

        conv = config.convert.build()
        assert conv.convert("Oui", bool) is True
        assert conv.try_convert("yes", bool) == (False, None)
        assert conv.convert("03.04.2024", datetime) == datetime(2024, 4, 3)


def test_load_config_search_cwd():
    """Test config search in current working directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        orig_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            (Path(tmpdir) / "metanote.toml").write_text("""
[id]
bytes = 10
""")

            config = load_config()
            assert config.id.bytes == 10
        finally:
            os.chdir(orig_cwd)


def test_load_config_search_vault():
    """Test config search in vault directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        vault_path = Path(tmpdir) / "vault"
        vault_path.mkdir()
        (vault_path / "metanote.toml").write_text("""
[id]
bytes = 12
""")

        config = load_config(vault_path=vault_path)
        assert config.id.bytes == 12
        assert config.vault.root == vault_path
