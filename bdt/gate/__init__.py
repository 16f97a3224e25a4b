"""
Гейт сценариев по тегам.

TagClassifier вычисляет вердикт по упорядоченному списку правил,
ScenarioGate превращает вердикт в указание раннеру (RUN / SKIP).
"""

from __future__ import annotations

from .classifier import TagClassifier, classify
from .gate import ScenarioGate, skip_reason
from .model import Classification, Directive, DirectiveAction, GateVerdict
from .rules import OVERRIDE_ORDER, GateRule
from .tags import TagSet, canonical_tag

__all__ = [
    "TagClassifier",
    "classify",
    "ScenarioGate",
    "skip_reason",
    "Classification",
    "Directive",
    "DirectiveAction",
    "GateVerdict",
    "OVERRIDE_ORDER",
    "GateRule",
    "TagSet",
    "canonical_tag",
]
