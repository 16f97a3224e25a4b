"""
Модели конфигурации bdt-cfg/.

Валидируются pydantic; неизвестные ключи запрещены, чтобы опечатки
в YAML не проходили молча.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

KNOWN_FAMILIES = ("environment", "reflection", "resource")


def _canonical_tag(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("tag must not be empty")
    return value if value.startswith("@") else f"@{value}"


class GateVocabulary(BaseModel):
    """
    Словарь тегов гейта сценариев.

    Значения хранятся в каноническом виде с ведущим '@'.
    ticket — имя параметризованного тега: @tillfixed(JIRA-123).
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    ignore: str = "@ignore"
    env_condition: str = "@envCondition"
    unimplemented: str = "@unimplemented"
    manual: str = "@manual"
    too_complex: str = "@toocomplex"
    ticket: str = "@tillfixed"

    @field_validator("*")
    @classmethod
    def _ensure_at_prefix(cls, value: str) -> str:
        return _canonical_tag(value)


class GateSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    vocabulary: GateVocabulary = Field(default_factory=GateVocabulary)


class ResolverSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    resources_root: Optional[Path] = None
    max_passes: int = Field(default=32, ge=1)
    order: List[str] = Field(default_factory=lambda: list(KNOWN_FAMILIES))

    @field_validator("order")
    @classmethod
    def _known_families(cls, value: List[str]) -> List[str]:
        unknown = [name for name in value if name not in KNOWN_FAMILIES]
        if unknown:
            raise ValueError(f"unknown placeholder families: {unknown}")
        return value


class BdtConfig(BaseModel):
    """Полная конфигурация проекта."""
    model_config = ConfigDict(extra="forbid")

    root: Path
    properties: Dict[str, str] = Field(default_factory=dict)
    gate: GateSettings = Field(default_factory=GateSettings)
    resolver: ResolverSettings = Field(default_factory=ResolverSettings)

    def effective_resources_root(self) -> Path:
        base = self.resolver.resources_root
        if base is None:
            return self.root
        return base if base.is_absolute() else (self.root / base)


__all__ = [
    "GateVocabulary",
    "GateSettings",
    "ResolverSettings",
    "BdtConfig",
    "KNOWN_FAMILIES",
]
