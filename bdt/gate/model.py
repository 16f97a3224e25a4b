"""
Модели данных гейта сценариев.

Вердикт вычисляется заново при каждом запуске и нигде не сохраняется.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class GateVerdict(Enum):
    """Классификация сценария по набору тегов."""
    RUN = "RUN"
    SKIP_ENV_CONDITION = "SKIP_ENV_CONDITION"
    SKIP_UNIMPLEMENTED = "SKIP_UNIMPLEMENTED"
    SKIP_MANUAL = "SKIP_MANUAL"
    SKIP_TOO_COMPLEX = "SKIP_TOO_COMPLEX"
    SKIP_TICKET = "SKIP_TICKET"
    MISCONFIGURED = "MISCONFIGURED"

    @property
    def is_skip(self) -> bool:
        return self.value.startswith("SKIP_")


@dataclass(frozen=True)
class Classification:
    """
    Результат классификации.

    Attributes:
        verdict: Итоговый вердикт
        tickets: Идентификаторы тикетов из тегов @tillfixed(...), отсортированы
        rule: Имя сработавшего правила (None для RUN и MISCONFIGURED)
    """
    verdict: GateVerdict
    tickets: Tuple[str, ...] = ()
    rule: Optional[str] = None

    @property
    def ticket(self) -> Optional[str]:
        return self.tickets[0] if self.tickets else None


class DirectiveAction(Enum):
    RUN = "run"
    SKIP = "skip"


@dataclass(frozen=True)
class Directive:
    """Указание раннеру: выполнить сценарий или зарегистрировать пропуск."""
    action: DirectiveAction
    verdict: GateVerdict
    scenario_name: str
    reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.action is DirectiveAction.SKIP

    @classmethod
    def run(cls, verdict: GateVerdict, scenario_name: str) -> "Directive":
        return cls(DirectiveAction.RUN, verdict, scenario_name)

    @classmethod
    def skip(cls, verdict: GateVerdict, scenario_name: str, reason: str) -> "Directive":
        return cls(DirectiveAction.SKIP, verdict, scenario_name, reason)


__all__ = ["GateVerdict", "Classification", "DirectiveAction", "Directive"]
