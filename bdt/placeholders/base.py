"""
Базовые интерфейсы семейств плейсхолдеров.

Каждое семейство (окружение, рефлексия, ресурсы) реализуется плагином,
который регистрируется в PlaceholderRegistry и знает свои маркеры,
способ поиска значения и реакцию на неопределённое имя.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Optional

from ..context import ResolutionContext
from ..errors import ResolutionError, ResolutionErrorKind
from .lexer import PlaceholderLexer
from .tokens import MarkerPair
from .transform import apply_case, split_case_suffix


class PluginPriority(enum.IntEnum):
    """Порядок проходов по умолчанию (больше — раньше)."""
    ENVIRONMENT = 100
    REFLECTION = 90
    RESOURCE = 80


class PlaceholderPlugin(ABC):
    """
    Базовый интерфейс для семейства плейсхолдеров.

    Наследники определяют имя, маркеры и lookup(). Стандартный resolve()
    разбирает суффикс регистра и применяет политику неопределённых имён.
    """

    # Поддерживает ли семейство суффиксы .toUpper/.toLower
    case_transform: bool = True
    # Неопределённое имя: ошибка (True) или литерал (False)
    strict: bool = False

    def __init__(self):
        self._lexer: Optional[PlaceholderLexer] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Возвращает имя семейства."""
        pass

    @property
    @abstractmethod
    def markers(self) -> MarkerPair:
        """Возвращает пару маркеров семейства."""
        pass

    @property
    def priority(self) -> PluginPriority:
        return PluginPriority.RESOURCE

    @property
    def lexer(self) -> PlaceholderLexer:
        if self._lexer is None:
            self._lexer = PlaceholderLexer(self.name, self.markers)
        return self._lexer

    @abstractmethod
    def lookup(self, name: str, ctx: ResolutionContext) -> Optional[str]:
        """
        Ищет значение по имени.

        Returns:
            Значение или None, если имя не определено
        """
        pass

    def undefined(self, body: str) -> ResolutionError:
        """Исключение для неопределённого имени."""
        return ResolutionError(ResolutionErrorKind.RESOLUTION_UNDEFINED, body, family=self.name)

    def resolve(self, body: str, ctx: ResolutionContext, strict: bool = False) -> Optional[str]:
        """
        Резолвит тело плейсхолдера.

        Args:
            body: Тело без маркеров
            ctx: Контекст резолвинга
            strict: Требовать определённости имени даже для нестрогого семейства

        Returns:
            Значение или None — вхождение остаётся в тексте как есть

        Raises:
            ResolutionError: Для strict-семейств и ошибок ресурсов
        """
        name, transform = split_case_suffix(body) if self.case_transform else (body, None)
        value = self.lookup(name, ctx)
        if value is None:
            if self.strict or strict:
                raise self.undefined(body)
            return None
        return apply_case(value, transform)


__all__ = ["PlaceholderPlugin", "PluginPriority"]
