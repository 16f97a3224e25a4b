from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .config import KNOWN_FAMILIES, load_config
from .context import ContextStore, ResolutionContext
from .errors import BDTUserError
from .gate import ScenarioGate, TagClassifier
from .placeholders import PlaceholderResolver
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bdt",
        description="Placeholder resolution and scenario gating for BDD suites",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--root",
        default=".",
        help="корень проекта с bdt-cfg/ (по умолчанию текущая директория)",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="уровень логирования (BDT_DEBUG=1 включает DEBUG)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_resolve = sub.add_parser("resolve", help="Подставить плейсхолдеры в текст")
    sp_resolve.add_argument("text", help="исходный текст; '-' для чтения из stdin")
    sp_resolve.add_argument(
        "--family",
        action="append",
        choices=list(KNOWN_FAMILIES),
        help="семейство для прохода (можно указать несколько, порядок важен)",
    )
    sp_resolve.add_argument(
        "-D",
        dest="properties",
        action="append",
        metavar="KEY=VALUE",
        help="системное свойство (перекрывает bdt-cfg/properties.yaml)",
    )
    sp_resolve.add_argument(
        "--var",
        action="append",
        metavar="KEY=VALUE",
        help="локальная переменная для !{KEY}",
    )
    sp_resolve.add_argument(
        "--resources",
        metavar="DIR",
        help="корень для относительных путей @{...}",
    )
    sp_resolve.add_argument(
        "--strict",
        action="store_true",
        help="неопределённые ${...} тоже считать ошибкой",
    )

    sp_classify = sub.add_parser("classify", help="Вердикт гейта для набора тегов (JSON)")
    sp_classify.add_argument("tags", nargs="*", help="теги сценария (с '@' или без)")
    sp_classify.add_argument("--name", default="<scenario>", help="имя сценария для сообщений")

    return p


def _parse_pairs(pairs: Optional[List[str]], option: str) -> Dict[str, str]:
    """Парсит список 'KEY=VALUE' в словарь."""
    result: Dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ValueError(f"Invalid {option} format '{pair}'. Expected 'KEY=VALUE'")
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"Invalid {option} format '{pair}': empty key")
        result[key] = value
    return result


def _setup_logging(level_name: Optional[str]) -> None:
    if level_name is None:
        level_name = "DEBUG" if os.environ.get("BDT_DEBUG") else "WARNING"
    logging.basicConfig(
        level=getattr(logging, level_name),
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _run_resolve(ns: argparse.Namespace) -> int:
    root = Path(ns.root)
    cfg = load_config(root)

    text = sys.stdin.read() if ns.text == "-" else ns.text

    properties = dict(cfg.properties)
    properties.update(_parse_pairs(ns.properties, "-D"))

    local_vars = ContextStore().for_unit()
    for key, value in _parse_pairs(ns.var, "--var").items():
        local_vars.set(key, value)

    resources_root = Path(ns.resources).resolve() if ns.resources else cfg.effective_resources_root()
    ctx = ResolutionContext(
        environ=os.environ,
        system_properties=properties,
        local_vars=local_vars,
        resources_root=resources_root,
    )

    resolver = PlaceholderResolver(max_passes=cfg.resolver.max_passes)
    order = ns.family or cfg.resolver.order
    sys.stdout.write(resolver.resolve(text, ctx, order, strict=ns.strict))
    return 0


def _run_classify(ns: argparse.Namespace) -> int:
    cfg = load_config(Path(ns.root))
    classifier = TagClassifier(cfg.gate.vocabulary)
    gate = ScenarioGate(classifier)

    classification = classifier.classify(ns.tags)
    directive = gate.gate(classification, ns.name)
    data = {
        "verdict": classification.verdict.value,
        "directive": directive.action.value,
        "reason": directive.reason,
        "tickets": list(classification.tickets),
        "rule": classification.rule,
    }
    sys.stdout.write(json.dumps(data, ensure_ascii=False) + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.log_level)

    try:
        if ns.cmd == "resolve":
            return _run_resolve(ns)

        if ns.cmd == "classify":
            return _run_classify(ns)

    except BDTUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
