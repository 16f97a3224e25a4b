"""
Лексер для поиска плейсхолдеров одного семейства.

Находит внешние вхождения слева направо. Закрывающая скобка ищется с учётом
глубины вложенности, поэтому тело может содержать плейсхолдеры того же
семейства: ${PREFIX_${ENV}} даёт одно внешнее вхождение с телом PREFIX_${ENV}.
Незакрытый маркер считается обычным текстом.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from .tokens import MarkerPair, Placeholder

logger = logging.getLogger(__name__)


class PlaceholderLexer:
    """Сканер вхождений для заданной пары маркеров."""

    def __init__(self, family: str, markers: MarkerPair):
        self.family = family
        self.markers = markers

    def scan(self, text: str) -> Iterator[Placeholder]:
        """
        Лениво выдаёт внешние вхождения в порядке появления.

        Args:
            text: Текст для сканирования

        Yields:
            Placeholder: Очередное внешнее вхождение
        """
        opening = self.markers.opening
        position = 0

        while True:
            start = text.find(opening, position)
            if start < 0:
                return

            body_start = start + len(opening)
            close = self._find_closing(text, body_start)
            if close is None:
                logger.debug(f"Unterminated {opening!r} at position {start}, kept as text")
                position = body_start
                continue

            end = close + len(self.markers.closing)
            yield Placeholder(
                family=self.family,
                markers=self.markers,
                body=text[body_start:close],
                start=start,
                end=end,
            )
            position = end

    def tokenize(self, text: str) -> List[Placeholder]:
        return list(self.scan(text))

    def contains(self, text: str) -> bool:
        return self.markers.opening in text

    def _find_closing(self, text: str, position: int) -> Optional[int]:
        """Позиция закрывающего маркера с учётом вложенных фигурных скобок."""
        depth = 1
        closing = self.markers.closing
        while position < len(text):
            char = text[position]
            if char == "{":
                depth += 1
            elif text.startswith(closing, position):
                depth -= 1
                if depth == 0:
                    return position
            position += 1
        return None


__all__ = ["PlaceholderLexer"]
