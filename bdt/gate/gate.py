"""
Гейт сценариев: хук перед запуском сценария.

Раннер вызывает before_run() (или оборачивает свою функцию запуска через
guard()) и выполняет полученное указание. Пропущенный сценарий не
выполняет ни одного шага.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Iterable, Optional, TypeVar, Union

from .classifier import TagClassifier
from .model import Classification, Directive, GateVerdict

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SKIP_REASONS = {
    GateVerdict.SKIP_ENV_CONDITION: "it depends on an environment condition",
    GateVerdict.SKIP_UNIMPLEMENTED: "it is not yet implemented",
    GateVerdict.SKIP_MANUAL: "it is marked as manual test",
    GateVerdict.SKIP_TOO_COMPLEX: "the test is too complex",
}


def skip_reason(classification: Classification, scenario_name: str) -> str:
    """Человекочитаемая причина пропуска."""
    if classification.verdict is GateVerdict.SKIP_TICKET:
        if not classification.ticket:
            return f"Scenario '{scenario_name}' ignored because of a ticket."
        return f"Scenario '{scenario_name}' ignored because of ticket: {classification.ticket}"
    because = _SKIP_REASONS[classification.verdict]
    return f"Scenario '{scenario_name}' ignored because {because}."


class ScenarioGate:
    """
    Превращает вердикт классификатора в указание раннеру.

    MISCONFIGURED (тег @ignore без причины) считается ошибкой конфигурации:
    сценарий выполняется, чтобы не скрыть реальное падение, а в лог пишется
    ошибка с именем сценария.
    """

    def __init__(self, classifier: Optional[TagClassifier] = None, enabled: bool = True):
        self.classifier = classifier or TagClassifier()
        self.enabled = enabled

    def gate(self, verdict: Union[GateVerdict, Classification], scenario_name: str) -> Directive:
        """
        Args:
            verdict: Вердикт или полная классификация (с тикетами)
            scenario_name: Отображаемое имя сценария

        Returns:
            Directive RUN или SKIP(reason)
        """
        classification = verdict if isinstance(verdict, Classification) else Classification(verdict)

        if classification.verdict is GateVerdict.RUN:
            return Directive.run(GateVerdict.RUN, scenario_name)

        if classification.verdict is GateVerdict.MISCONFIGURED:
            ignore_tag = self.classifier.vocabulary.ignore
            logger.error(f"Scenario '{scenario_name}' failed due to wrong use of the {ignore_tag} tag.")
            return Directive.run(GateVerdict.MISCONFIGURED, scenario_name)

        reason = skip_reason(classification, scenario_name)
        logger.warning(reason)
        return Directive.skip(classification.verdict, scenario_name, reason)

    def before_run(self, tags: Iterable[str], scenario_name: str) -> Directive:
        """Классифицирует теги и возвращает указание; выключенный гейт всегда RUN."""
        if not self.enabled:
            return Directive.run(GateVerdict.RUN, scenario_name)
        return self.gate(self.classifier.classify(tags), scenario_name)

    def guard(
            self,
            run: Callable[..., T],
            on_skip: Optional[Callable[[Directive], Any]] = None,
    ) -> Callable[..., Optional[T]]:
        """
        Оборачивает функцию запуска сценария.

        Обёртка принимает (tags, scenario_name, *args, **kwargs). Для SKIP
        вызывается on_skip(directive), например отметка начала и конца
        жизненного цикла сценария без шагов; run не вызывается.
        """
        @functools.wraps(run)
        def guarded(tags: Iterable[str], scenario_name: str, *args: Any, **kwargs: Any) -> Optional[T]:
            directive = self.before_run(tags, scenario_name)
            if directive.skipped:
                if on_skip is not None:
                    on_skip(directive)
                return None
            return run(*args, **kwargs)

        return guarded


__all__ = ["ScenarioGate", "skip_reason"]
