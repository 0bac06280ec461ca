"""YAML settings source reading ``conf/<name>.yaml`` plus a ``conf/<name>.d`` drop-in directory.

Files are merged in order: the main file first, then drop-ins sorted by name,
so ``conf/relay.d/90-local.yaml`` overrides ``conf/relay.yaml``. ``CONFIG_DIR``
moves the base directory away from ``conf``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings import YamlConfigSettingsSource

if TYPE_CHECKING:
    from pydantic_settings import BaseSettings

CONFIG_DIR_ENV = "CONFIG_DIR"
DEFAULT_CONFIG_DIR = "conf"


def discover_yaml_files(name: str, config_dir: str | Path | None = None) -> list[Path]:
    """Existing YAML files for settings group ``name``, lowest precedence first."""
    base = Path(config_dir or os.getenv(CONFIG_DIR_ENV, DEFAULT_CONFIG_DIR))

    files = [path for path in (base / f"{name}.yaml",) if path.is_file()]
    dropins = base / f"{name}.d"
    if dropins.is_dir():
        files.extend(sorted(p for p in dropins.iterdir() if p.suffix in {".yaml", ".yml"}))
    return files


class ConfDYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YamlConfigSettingsSource over the files found by ``discover_yaml_files``."""

    def __init__(self, settings_cls: type[BaseSettings], name: str) -> None:
        self.yaml_files = discover_yaml_files(name)
        super().__init__(
            settings_cls=settings_cls,
            yaml_file=self.yaml_files or None,
            yaml_file_encoding="utf-8",
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(yaml_files={[str(f) for f in self.yaml_files]})"


def create_yaml_source(
    settings_cls: type[BaseSettings], name: str
) -> ConfDYamlConfigSettingsSource:
    return ConfDYamlConfigSettingsSource(settings_cls, name)
