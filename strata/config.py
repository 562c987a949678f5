from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Set

import yaml

from .errors import ConfigError


@dataclass
class WritePair:
    src: Path
    dst: Path


@dataclass
class BuildConfig:
    """
    Build configuration loaded from YAML.

    Relative paths and globs are resolved against the directory holding
    the configuration file.
    """
    write: List[WritePair]
    watch: Set[Path] = field(default_factory=set)
    cache: bool = True
    autoescape: bool = True
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def watch_files(self) -> Set[Path]:
        return {pair.src for pair in self.write} | self.watch


def _flag(cfg: Dict[str, Any], name: str, default: bool) -> bool:
    value = cfg.get(name, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{name}' must be true or false, got {value!r}.")
    return value


def load_config(path) -> BuildConfig:
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level.")

    base_path = path.parent
    entries = cfg.get('write')
    if not entries or not isinstance(entries, list):
        raise ConfigError(f"{path}: 'write' must be a non-empty list of src/dst pairs.")
    write = []
    for entry in entries:
        if not isinstance(entry, dict) or 'src' not in entry or 'dst' not in entry:
            raise ConfigError(f"{path}: every 'write' entry needs 'src' and 'dst', got {entry!r}.")
        write.append(WritePair(src=base_path / entry['src'], dst=base_path / entry['dst']))

    context = cfg.get('context') or {}
    if not isinstance(context, dict):
        raise ConfigError(f"{path}: 'context' must be a mapping.")

    watch = {watch_path for pattern in cfg.get('watch') or [] for watch_path in base_path.glob(pattern)}
    return BuildConfig(
        write=write,
        watch=watch,
        cache=_flag(cfg, 'cache', True),
        autoescape=_flag(cfg, 'autoescape', True),
        context=context,
    )
