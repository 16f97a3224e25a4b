"""
Упорядоченные правила гейта сценариев.

OVERRIDE_ORDER — данные, а не код: правила проверяются все, по порядку,
и каждое сработавшее перезаписывает результат предыдущих. Побеждает
последнее сработавшее правило списка. Это не ранжирование по важности,
а совместимый порядок перезаписи; менять его нельзя.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..config.model import GateVocabulary
from .model import GateVerdict
from .tags import TagSet


@dataclass(frozen=True)
class RuleMatch:
    rule: "GateRule"
    tickets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class GateRule:
    """
    Правило: наличие тега из словаря → вердикт.

    Attributes:
        name: Имя правила
        vocabulary_key: Поле GateVocabulary с литералом тега
        verdict: Вердикт при срабатывании
        parameterized: Тег с аргументом в скобках (тикет)
    """
    name: str
    vocabulary_key: str
    verdict: GateVerdict
    parameterized: bool = False

    def tag(self, vocabulary: GateVocabulary) -> str:
        return getattr(vocabulary, self.vocabulary_key)

    def match(self, tags: TagSet, vocabulary: GateVocabulary) -> Optional[RuleMatch]:
        tag = self.tag(vocabulary)
        if self.parameterized:
            tickets = tags.arguments_of(tag)
            return RuleMatch(self, tuple(tickets)) if tickets else None
        return RuleMatch(self) if tag in tags else None


OVERRIDE_ORDER: Tuple[GateRule, ...] = (
    GateRule("ticket", "ticket", GateVerdict.SKIP_TICKET, parameterized=True),
    GateRule("env_condition", "env_condition", GateVerdict.SKIP_ENV_CONDITION),
    GateRule("unimplemented", "unimplemented", GateVerdict.SKIP_UNIMPLEMENTED),
    GateRule("manual", "manual", GateVerdict.SKIP_MANUAL),
    GateRule("too_complex", "too_complex", GateVerdict.SKIP_TOO_COMPLEX),
)


__all__ = ["GateRule", "RuleMatch", "OVERRIDE_ORDER"]
