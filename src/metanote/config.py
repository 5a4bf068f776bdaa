"""Configuration loader for metanote.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .core.convert import DEFAULT_FALSE_VALUES, DEFAULT_TRUE_VALUES, Converters

CONFIG_NAME = "metanote.toml"


@dataclass
class VaultConfig:
    """Vault-specific configuration."""
    root: Path


@dataclass
class IdConfig:
    """ID generation configuration."""
    bytes: int = 6


@dataclass
class ConvertConfig:
    """Value conversion settings for metadata reads."""
    true_values: list[str] = field(default_factory=lambda: list(DEFAULT_TRUE_VALUES))
    false_values: list[str] = field(default_factory=lambda: list(DEFAULT_FALSE_VALUES))
    datetime_formats: list[str] = field(default_factory=list)

    def build(self) -> Converters:
        return Converters(
            true_values=self.true_values,
            false_values=self.false_values,
            datetime_formats=self.datetime_formats,
        )


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "WARNING"


@dataclass
class MetanoteConfig:
    """Complete metanote configuration."""
    vault: VaultConfig
    id: IdConfig
    convert: ConvertConfig
    log: LogConfig


def load_config(config_path: Path | None = None, vault_path: Path | None = None) -> MetanoteConfig:
    """
    Load configuration from metanote.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/metanote.toml
    3. vault_path/metanote.toml

    Args:
        config_path: Explicit path to config file
        vault_path: Vault root path for fallback search

    Returns:
        MetanoteConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if vault_path:
        search_paths.append(vault_path / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    vault_data = toml_data.get("vault", {})
    vault_config = VaultConfig(root=Path(vault_data.get("root", vault_path or Path("./vault"))))

    id_data = toml_data.get("id", {})
    id_config = IdConfig(bytes=id_data.get("bytes", 6))

    # Token lists replace the defaults rather than extending them
    convert_data = toml_data.get("convert", {})
    convert_config = ConvertConfig()
    if "true_values" in convert_data:
        convert_config.true_values = [str(v) for v in convert_data["true_values"]]
    if "false_values" in convert_data:
        convert_config.false_values = [str(v) for v in convert_data["false_values"]]
    if "datetime_formats" in convert_data:
        convert_config.datetime_formats = [str(v) for v in convert_data["datetime_formats"]]

    log_data = toml_data.get("log", {})
    log_config = LogConfig(level=str(log_data.get("level", "WARNING")).upper())

    return MetanoteConfig(
        vault=vault_config,
        id=id_config,
        convert=convert_config,
        log=log_config,
    )
