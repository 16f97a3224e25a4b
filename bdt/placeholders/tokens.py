"""
Лексические типы для резолвера плейсхолдеров.

Определяет пары маркеров семейств и найденные в тексте вхождения.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MarkerPair:
    """Открывающий и закрывающий маркеры семейства плейсхолдеров."""
    opening: str
    closing: str = "}"

    def wrap(self, body: str) -> str:
        return f"{self.opening}{body}{self.closing}"

    def __post_init__(self):
        if not self.opening.endswith("{"):
            raise ValueError(f"Opening marker must end with '{{': {self.opening!r}")


ENVIRONMENT_MARKERS = MarkerPair("${")
REFLECTION_MARKERS = MarkerPair("!{")
RESOURCE_MARKERS = MarkerPair("@{")


@dataclass(frozen=True)
class Placeholder:
    """
    Вхождение плейсхолдера с позиционной информацией.

    start/end — срез исходного текста, включая маркеры.
    """
    family: str
    markers: MarkerPair
    body: str
    start: int
    end: int

    @property
    def text(self) -> str:
        return self.markers.wrap(self.body)

    def __repr__(self) -> str:
        return f"Placeholder({self.family}, {self.body!r}, {self.start}:{self.end})"


__all__ = [
    "MarkerPair",
    "Placeholder",
    "ENVIRONMENT_MARKERS",
    "REFLECTION_MARKERS",
    "RESOURCE_MARKERS",
]
