"""
Резолвер плейсхолдеров.

Каждое семейство обрабатывается отдельным проходом: вхождения ищутся слева
направо, внешние раньше вложенных по порядку обхода; тело, содержащее
плейсхолдеры своего семейства, резолвится до поиска значения. Проход
повторяется на собственном результате до неподвижной точки.

Между семействами автоматических повторных проходов нет: если значение
одного семейства содержит маркеры другого, порядок задаёт вызывающий.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ..context import ResolutionContext
from ..errors import RecursionLimitError
from .base import PlaceholderPlugin
from .registry import PlaceholderRegistry, get_registry

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 32


class PlaceholderResolver:
    """
    Подстановка значений плейсхолдеров в строку.

    Ошибка любого вхождения прерывает весь вызов resolve; молча пропускаются
    только неопределённые имена нестрогих семейств.
    """

    def __init__(
            self,
            registry: Optional[PlaceholderRegistry] = None,
            max_passes: int = DEFAULT_MAX_PASSES,
    ):
        """
        Args:
            registry: Реестр семейств (по умолчанию — встроенные)
            max_passes: Предел повторных проходов одного семейства
        """
        if max_passes < 1:
            raise ValueError(f"max_passes must be positive, got {max_passes}")
        self.registry = registry or get_registry()
        self.max_passes = max_passes

    def resolve(
            self,
            raw: str,
            ctx: ResolutionContext,
            order: Optional[Sequence[str]] = None,
            strict: bool = False,
    ) -> str:
        """
        Применяет проходы семейств в заданном порядке, каждый один раз.

        Args:
            raw: Исходная строка
            ctx: Контекст резолвинга
            order: Имена семейств; по умолчанию — порядок реестра
            strict: Неопределённые имена нестрогих семейств тоже считать ошибкой

        Returns:
            Строка с подставленными значениями

        Raises:
            ResolutionError: При первой фатальной ошибке
        """
        text = raw
        for family in (order or self.registry.default_order()):
            text = self.resolve_family(text, ctx, family, strict=strict)
        return text

    def resolve_family(self, raw: str, ctx: ResolutionContext, family: str, strict: bool = False) -> str:
        """Один проход семейства до неподвижной точки."""
        plugin = self.registry.require(family)
        text = raw
        for _ in range(self.max_passes):
            text, changed = self._pass(text, ctx, plugin, strict)
            if not changed:
                return text
            logger.debug(f"{family} pass produced: {text!r}")

        raise RecursionLimitError(
            raw,
            f"still changing after {self.max_passes} passes",
            family,
        )

    def _pass(
            self,
            text: str,
            ctx: ResolutionContext,
            plugin: PlaceholderPlugin,
            strict: bool,
            depth: int = 0,
    ) -> Tuple[str, bool]:
        """
        Заменяет все внешние вхождения семейства один раз.

        Returns:
            (новый текст, была ли хотя бы одна замена)
        """
        lexer = plugin.lexer
        if not lexer.contains(text):
            return text, False

        if depth >= self.max_passes:
            raise RecursionLimitError(text, "placeholder nesting is too deep", plugin.name)

        parts: List[str] = []
        position = 0
        changed = False

        for placeholder in lexer.scan(text):
            parts.append(text[position:placeholder.start])

            body = placeholder.body
            if lexer.contains(body):
                body, inner_changed = self._pass(body, ctx, plugin, strict, depth + 1)
                changed = changed or inner_changed

            value = plugin.resolve(body, ctx, strict=strict)
            if value is None:
                parts.append(plugin.markers.wrap(body))
            else:
                parts.append(value)
                changed = True

            position = placeholder.end

        parts.append(text[position:])
        return "".join(parts), changed


def _resolver() -> PlaceholderResolver:
    return PlaceholderResolver()


def replace_environment_placeholders(text: str, ctx: ResolutionContext) -> str:
    """Подставляет ${NAME}; неопределённые остаются как есть."""
    return _resolver().resolve_family(text, ctx, "environment")


def replace_reflection_placeholders(text: str, ctx: ResolutionContext) -> str:
    """Подставляет !{NAME}; неопределённое имя — UnresolvableReferenceError."""
    return _resolver().resolve_family(text, ctx, "reflection")


def replace_resource_placeholders(text: str, ctx: ResolutionContext) -> str:
    """Подставляет @{...} из файлов и адресов хоста."""
    return _resolver().resolve_family(text, ctx, "resource")


def resolve_placeholders(text: str, ctx: ResolutionContext, order: Optional[Sequence[str]] = None) -> str:
    return _resolver().resolve(text, ctx, order)


__all__ = [
    "PlaceholderResolver",
    "DEFAULT_MAX_PASSES",
    "replace_environment_placeholders",
    "replace_reflection_placeholders",
    "replace_resource_placeholders",
    "resolve_placeholders",
]
