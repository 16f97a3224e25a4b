"""
Резолвер плейсхолдеров для текстов шагов и строк конфигурации.

Три независимых семейства:
- ${NAME}, ${NAME.toUpper}, ${NAME.toLower} — окружение и системные свойства
- !{NAME}, !{NAME.toUpper}, !{NAME.toLower} — состояние места вызова
- @{path}, @{JSON.path}, @{IP.host}         — внешние ресурсы
"""

from __future__ import annotations

from .base import PlaceholderPlugin, PluginPriority
from .families import EnvironmentPlaceholders, ReflectionPlaceholders, ResourcePlaceholders
from .registry import PlaceholderRegistry, build_default_registry, get_registry
from .resolver import (
    DEFAULT_MAX_PASSES,
    PlaceholderResolver,
    replace_environment_placeholders,
    replace_reflection_placeholders,
    replace_resource_placeholders,
    resolve_placeholders,
)
from .transform import CaseTransform, apply_case, split_case_suffix

__all__ = [
    "PlaceholderPlugin",
    "PluginPriority",
    "EnvironmentPlaceholders",
    "ReflectionPlaceholders",
    "ResourcePlaceholders",
    "PlaceholderRegistry",
    "build_default_registry",
    "get_registry",
    "PlaceholderResolver",
    "DEFAULT_MAX_PASSES",
    "replace_environment_placeholders",
    "replace_reflection_placeholders",
    "replace_resource_placeholders",
    "resolve_placeholders",
    "CaseTransform",
    "apply_case",
    "split_case_suffix",
]
