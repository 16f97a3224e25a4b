"""
Классификатор тегов сценария.

Алгоритм:
1. Нет тега @ignore → RUN
2. Иначе по умолчанию MISCONFIGURED
3. Каждое правило OVERRIDE_ORDER, чей тег присутствует, перезаписывает
   результат; итог — последнее сработавшее правило
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..config.model import GateVocabulary
from .model import Classification, GateVerdict
from .rules import OVERRIDE_ORDER, GateRule
from .tags import TagSet

logger = logging.getLogger(__name__)


class TagClassifier:
    """Вычисляет вердикт по набору тегов без побочных эффектов, кроме логов."""

    def __init__(
            self,
            vocabulary: Optional[GateVocabulary] = None,
            rules: Sequence[GateRule] = OVERRIDE_ORDER,
    ):
        self.vocabulary = vocabulary or GateVocabulary()
        self.rules = tuple(rules)

    def classify(self, tags: Iterable[str]) -> Classification:
        """
        Классифицирует сценарий.

        Args:
            tags: Собственные и унаследованные теги (TagSet или любые строки)

        Returns:
            Classification с вердиктом и извлечёнными тикетами
        """
        tagset = tags if isinstance(tags, TagSet) else TagSet.of(tags)

        if self.vocabulary.ignore not in tagset:
            return Classification(GateVerdict.RUN)

        result = Classification(GateVerdict.MISCONFIGURED)
        tickets: tuple = ()

        for rule in self.rules:
            match = rule.match(tagset, self.vocabulary)
            if match is None:
                continue
            if match.tickets:
                tickets = match.tickets
                logger.info(f"Ticket reference found: {', '.join(tickets)}")
            result = Classification(rule.verdict, tickets, rule.name)

        if tickets and result.tickets != tickets:
            result = Classification(result.verdict, tickets, result.rule)
        return result


def classify(tags: Iterable[str], vocabulary: Optional[GateVocabulary] = None) -> Classification:
    """Удобная функция для классификации со словарём по умолчанию."""
    return TagClassifier(vocabulary).classify(tags)


__all__ = ["TagClassifier", "classify"]
