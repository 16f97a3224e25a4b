"""
Встроенные семейства плейсхолдеров.

- ${NAME}  — системное свойство или переменная окружения; неопределённое
             имя оставляется в тексте (допускаются частичные проходы)
- !{NAME}  — состояние места вызова и локальные переменные единицы
             выполнения; неопределённое имя — ошибка
- @{BODY}  — внешний ресурс: файл, JSON-файл, адрес хоста
"""

from __future__ import annotations

import logging
from typing import Optional

from ..context import ResolutionContext
from ..errors import ResolutionError, UnresolvableReferenceError
from ..resources import ResourceLookup
from .base import PlaceholderPlugin, PluginPriority
from .tokens import (
    ENVIRONMENT_MARKERS,
    REFLECTION_MARKERS,
    RESOURCE_MARKERS,
    MarkerPair,
)

logger = logging.getLogger(__name__)


class EnvironmentPlaceholders(PlaceholderPlugin):
    """Плейсхолдеры ${NAME}: системные свойства, затем окружение процесса."""

    @property
    def name(self) -> str:
        return "environment"

    @property
    def markers(self) -> MarkerPair:
        return ENVIRONMENT_MARKERS

    @property
    def priority(self) -> PluginPriority:
        return PluginPriority.ENVIRONMENT

    def lookup(self, name: str, ctx: ResolutionContext) -> Optional[str]:
        value = ctx.lookup_environment(name)
        if value is None:
            logger.debug(f"Environment placeholder '{name}' is undefined, left as is")
        return value


class ReflectionPlaceholders(PlaceholderPlugin):
    """
    Плейсхолдеры !{NAME}.

    Имя ищется в bindings, атрибутах owner и локальных переменных единицы
    выполнения. К моменту этого прохода все имена должны быть связаны.
    """

    strict = True

    @property
    def name(self) -> str:
        return "reflection"

    @property
    def markers(self) -> MarkerPair:
        return REFLECTION_MARKERS

    @property
    def priority(self) -> PluginPriority:
        return PluginPriority.REFLECTION

    def lookup(self, name: str, ctx: ResolutionContext) -> Optional[str]:
        return ctx.lookup_reflection(name)

    def undefined(self, body: str) -> ResolutionError:
        return UnresolvableReferenceError(body, "name is not bound in the calling context", self.name)


class ResourcePlaceholders(PlaceholderPlugin):
    """Плейсхолдеры @{...}: префикс вида ресурса вместо суффикса регистра."""

    case_transform = False
    strict = True

    @property
    def name(self) -> str:
        return "resource"

    @property
    def markers(self) -> MarkerPair:
        return RESOURCE_MARKERS

    @property
    def priority(self) -> PluginPriority:
        return PluginPriority.RESOURCE

    def lookup(self, name: str, ctx: ResolutionContext) -> Optional[str]:
        return ResourceLookup(ctx.resources_root).lookup(name)


__all__ = ["EnvironmentPlaceholders", "ReflectionPlaceholders", "ResourcePlaceholders"]
