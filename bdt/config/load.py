"""
Загрузчик конфигурации bdt-cfg/.

Каждый файл необязателен: отсутствующий файл даёт значения по умолчанию.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import ConfigError
from .model import BdtConfig, GateSettings, ResolverSettings
from .paths import cfg_root, gate_path, properties_path, resolver_path

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def _stringify_properties(raw: Dict[Any, Any], path: Path) -> Dict[str, str]:
    """Системные свойства — строки; скаляры YAML приводятся к тексту."""
    out: Dict[str, str] = {}
    for key, value in raw.items():
        if isinstance(value, (dict, list)):
            raise ConfigError(f"{path}: property '{key}' must be a scalar")
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        out[str(key)] = str(value)
    return out


def load_properties(root: Path) -> Dict[str, str]:
    path = properties_path(root)
    return _stringify_properties(_read_yaml_map(path), path)


def load_gate_settings(root: Path) -> GateSettings:
    path = gate_path(root)
    raw = _read_yaml_map(path)
    # Короткая форма: словарь тегов прямо на верхнем уровне
    if raw and "vocabulary" not in raw and set(raw) - {"enabled"}:
        vocabulary = {k: v for k, v in raw.items() if k != "enabled"}
        raw = {"enabled": raw.get("enabled", True), "vocabulary": vocabulary}
    try:
        return GateSettings.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid gate configuration in {path}: {e}") from e


def load_resolver_settings(root: Path) -> ResolverSettings:
    path = resolver_path(root)
    try:
        return ResolverSettings.model_validate(_read_yaml_map(path))
    except ValidationError as e:
        raise ConfigError(f"Invalid resolver configuration in {path}: {e}") from e


def load_config(root: Optional[Path] = None) -> BdtConfig:
    """
    Загружает конфигурацию проекта.

    Args:
        root: Корень проекта (по умолчанию — текущая директория)

    Returns:
        BdtConfig со значениями по умолчанию для отсутствующих файлов
    """
    root = (root or Path.cwd()).resolve()
    base = cfg_root(root)
    if not base.is_dir():
        logger.debug(f"Config directory {base} not found, using defaults")
        return BdtConfig(root=root)

    config = BdtConfig(
        root=root,
        properties=load_properties(root),
        gate=load_gate_settings(root),
        resolver=load_resolver_settings(root),
    )
    logger.debug(
        f"Loaded config from {base}: {len(config.properties)} properties, "
        f"gate enabled={config.gate.enabled}"
    )
    return config


__all__ = [
    "load_config",
    "load_properties",
    "load_gate_settings",
    "load_resolver_settings",
]
