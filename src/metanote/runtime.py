"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_storage import FsStorage
from .adapters.idgen import HexId
from .adapters.yaml_codec import MarkdownNoteCodec, YamlFrontmatter
from .config import MetanoteConfig, load_config
from .core.convert import Converters
from .core.vault import Vault


@dataclass
class Runtime:
    """Container for all wired components."""
    vault: Vault
    converters: Converters
    idgen: HexId
    config: MetanoteConfig


def build_runtime(
    vault_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Build and wire all components for a vault."""
    config = load_config(config_path=config_path, vault_path=vault_path)

    if vault_path is None:
        vault_path = config.vault.root

    converters = config.convert.build()
    storage = FsStorage(vault_path)
    codec = MarkdownNoteCodec(YamlFrontmatter())
    vault = Vault(storage, codec, converters=converters)
    idgen = HexId(nbytes=config.id.bytes)

    return Runtime(
        vault=vault,
        converters=converters,
        idgen=idgen,
        config=config,
    )
