"""
Ошибки bdt.

BDTUserError — всё, что пользователь может исправить сам (неизвестное имя,
отсутствующий ресурс, битый bdt-cfg/). CLI печатает такие ошибки одной
строкой. Ошибки программирования от него не наследуются и выходят
с полным трейсбеком.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class BDTUserError(Exception):
    """
    Base class for all user-facing errors in bdt.

    These errors indicate problems that the user can fix:
    undefined references, missing resources, broken configuration, etc.
    """
    pass


class ConfigError(BDTUserError, ValueError):
    """Invalid bdt-cfg/ content."""
    pass


class ModificationError(BDTUserError, ValueError):
    """Modification row cannot be applied to the document."""
    pass


class ResolutionErrorKind(enum.Enum):
    """Категории ошибок резолвинга плейсхолдеров."""
    # Нефатальная: используется только для диагностики, текст остаётся как есть
    RESOLUTION_UNDEFINED = "RESOLUTION_UNDEFINED"
    UNRESOLVABLE_REFERENCE = "UNRESOLVABLE_REFERENCE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    MALFORMED_RESOURCE = "MALFORMED_RESOURCE"
    RECURSION_LIMIT = "RECURSION_LIMIT"


@dataclass
class ResolutionError(BDTUserError):
    """Placeholder could not be resolved; aborts the current resolve call."""
    kind: ResolutionErrorKind
    placeholder: str
    detail: str = ""
    family: Optional[str] = None

    def __str__(self) -> str:
        where = f" ({self.family})" if self.family else ""
        tail = f": {self.detail}" if self.detail else ""
        return f"{self.kind.value}{where} for '{self.placeholder}'{tail}"


class UnresolvableReferenceError(ResolutionError):
    """Reflective placeholder references a name that is not bound."""

    def __init__(self, placeholder: str, detail: str = "", family: Optional[str] = None):
        super().__init__(ResolutionErrorKind.UNRESOLVABLE_REFERENCE, placeholder, detail, family)


class ResourceNotFoundError(ResolutionError):
    """Missing file or unreachable address."""

    def __init__(self, placeholder: str, detail: str = "", family: Optional[str] = None):
        super().__init__(ResolutionErrorKind.RESOURCE_NOT_FOUND, placeholder, detail, family)


class MalformedResourceError(ResolutionError):
    """Resource content does not parse under the declared kind."""

    def __init__(self, placeholder: str, detail: str = "", family: Optional[str] = None):
        super().__init__(ResolutionErrorKind.MALFORMED_RESOURCE, placeholder, detail, family)


class RecursionLimitError(ResolutionError):
    """A pass kept producing new placeholders (self-referential values)."""

    def __init__(self, placeholder: str, detail: str = "", family: Optional[str] = None):
        super().__init__(ResolutionErrorKind.RECURSION_LIMIT, placeholder, detail, family)


__all__ = [
    "BDTUserError",
    "ConfigError",
    "ModificationError",
    "ResolutionErrorKind",
    "ResolutionError",
    "UnresolvableReferenceError",
    "ResourceNotFoundError",
    "MalformedResourceError",
    "RecursionLimitError",
]
