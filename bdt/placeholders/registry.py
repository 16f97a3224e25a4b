"""
Реестр семейств плейсхолдеров.

Хранит зарегистрированные плагины и проверяет, что их открывающие маркеры
не конфликтуют между собой.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .base import PlaceholderPlugin

logger = logging.getLogger(__name__)


class PlaceholderRegistry:
    """
    Централизованный реестр семейств плейсхолдеров.

    Порядок проходов по умолчанию определяется приоритетами плагинов.
    """

    def __init__(self):
        self.plugins: Dict[str, PlaceholderPlugin] = {}
        logger.debug("PlaceholderRegistry initialized")

    def register_plugin(self, plugin: PlaceholderPlugin) -> None:
        """
        Регистрирует семейство.

        Raises:
            ValueError: Если имя или открывающий маркер уже заняты
        """
        if plugin.name in self.plugins:
            raise ValueError(f"Placeholder family '{plugin.name}' already registered")

        for other in self.plugins.values():
            if other.markers.opening == plugin.markers.opening:
                raise ValueError(
                    f"Family '{plugin.name}' reuses opening marker "
                    f"{plugin.markers.opening!r} of family '{other.name}'"
                )

        self.plugins[plugin.name] = plugin
        logger.debug(f"Registered placeholder family: {plugin.name} ({plugin.markers.opening}...{plugin.markers.closing})")

    def get_plugin_by_name(self, name: str) -> Optional[PlaceholderPlugin]:
        return self.plugins.get(name)

    def require(self, name: str) -> PlaceholderPlugin:
        plugin = self.plugins.get(name)
        if plugin is None:
            known = ", ".join(sorted(self.plugins))
            raise ValueError(f"Unknown placeholder family '{name}'. Known: {known}")
        return plugin

    def default_order(self) -> List[str]:
        """Имена семейств в порядке проходов по умолчанию."""
        ordered = sorted(self.plugins.values(), key=lambda p: p.priority, reverse=True)
        return [p.name for p in ordered]


def build_default_registry() -> PlaceholderRegistry:
    """Реестр со встроенными семействами ${...}, !{...}, @{...}."""
    from .families import EnvironmentPlaceholders, ReflectionPlaceholders, ResourcePlaceholders

    registry = PlaceholderRegistry()
    registry.register_plugin(EnvironmentPlaceholders())
    registry.register_plugin(ReflectionPlaceholders())
    registry.register_plugin(ResourcePlaceholders())
    return registry


_default_registry: Optional[PlaceholderRegistry] = None


def get_registry() -> PlaceholderRegistry:
    """Общий реестр встроенных семейств."""
    global _default_registry
    if _default_registry is None:
        _default_registry = build_default_registry()
    return _default_registry


__all__ = ["PlaceholderRegistry", "build_default_registry", "get_registry"]
