"""
Интеграция с pytest-bdd.

Подключение в conftest.py:

    pytest_plugins = ["bdt.pytest_plugin"]

Перед каждым сценарием хук pytest_bdd_before_scenario спрашивает гейт;
пропускаемый сценарий завершается pytest.skip() до первого шага.
Фикстуры дают шагам контекст резолвинга плейсхолдеров.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Sequence

import pytest

from .config import BdtConfig, load_config
from .context import ContextStore, LocalVariables, ResolutionContext
from .gate import ScenarioGate, TagClassifier, TagSet
from .placeholders import PlaceholderResolver

logger = logging.getLogger(__name__)

pytest_plugins = ["bdt.steps"]

_CONFIG_KEY = pytest.StashKey[BdtConfig]()
_GATE_KEY = pytest.StashKey[ScenarioGate]()


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        "bdt_root",
        help="директория, содержащая bdt-cfg/ (по умолчанию rootdir)",
        default="",
    )
    parser.addini(
        "bdt_gate",
        type="bool",
        help="пропускать сценарии по тегам @ignore/@manual/... (по умолчанию включено)",
        default=True,
    )


def _bdt_config(config: pytest.Config) -> BdtConfig:
    if _CONFIG_KEY not in config.stash:
        raw_root = config.getini("bdt_root")
        root = Path(raw_root) if raw_root else Path(config.rootpath)
        if not root.is_absolute():
            root = Path(config.rootpath) / root
        config.stash[_CONFIG_KEY] = load_config(root)
    return config.stash[_CONFIG_KEY]


def _scenario_gate(config: pytest.Config) -> ScenarioGate:
    if _GATE_KEY not in config.stash:
        settings = _bdt_config(config).gate
        enabled = settings.enabled and bool(config.getini("bdt_gate"))
        config.stash[_GATE_KEY] = ScenarioGate(TagClassifier(settings.vocabulary), enabled=enabled)
    return config.stash[_GATE_KEY]


def scenario_tags(feature: Any, scenario: Any) -> TagSet:
    """Собственные теги сценария вместе с тегами фичи и правила."""
    groups: List[Iterable[str]] = [
        getattr(feature, "tags", None) or (),
        getattr(scenario, "tags", None) or (),
    ]
    rule = getattr(scenario, "rule", None)
    if rule is not None:
        groups.append(getattr(rule, "tags", None) or ())
    return TagSet.of(*groups)


def pytest_bdd_before_scenario(request: pytest.FixtureRequest, feature: Any, scenario: Any) -> None:
    gate = _scenario_gate(request.config)
    directive = gate.before_run(scenario_tags(feature, scenario), scenario.name)
    logger.debug(f"Gate verdict for '{scenario.name}': {directive.verdict.value}")
    if directive.skipped:
        pytest.skip(directive.reason)


# -------------------- Fixtures --------------------

@pytest.fixture(scope="session")
def bdt_config(pytestconfig: pytest.Config) -> BdtConfig:
    return _bdt_config(pytestconfig)


@pytest.fixture(scope="session")
def bdt_store() -> ContextStore:
    """Хранилище локальных переменных на всю сессию, разделённое по тестам."""
    return ContextStore()


@pytest.fixture
def local_vars(request: pytest.FixtureRequest, bdt_store: ContextStore):
    """Локальные переменные текущего теста; очищаются после него."""
    variables = bdt_store.for_unit(request.node.nodeid)
    yield variables
    variables.clear()


@pytest.fixture
def placeholder_context(
        request: pytest.FixtureRequest,
        bdt_config: BdtConfig,
        local_vars: LocalVariables,
) -> ResolutionContext:
    return ResolutionContext(
        environ=os.environ,
        system_properties=bdt_config.properties,
        local_vars=local_vars,
        owner=request.instance,
        resources_root=bdt_config.effective_resources_root(),
    )


@pytest.fixture
def placeholder_resolver(bdt_config: BdtConfig) -> PlaceholderResolver:
    return PlaceholderResolver(max_passes=bdt_config.resolver.max_passes)


@pytest.fixture
def resolve_placeholders(
        placeholder_resolver: PlaceholderResolver,
        placeholder_context: ResolutionContext,
        bdt_config: BdtConfig,
) -> Callable[..., str]:
    """Функция resolve(text, order=None) для шагов."""
    def resolve(text: str, order: Optional[Sequence[str]] = None) -> str:
        return placeholder_resolver.resolve(text, placeholder_context, order or bdt_config.resolver.order)

    return resolve
