"""
Библиотека общих шагов для pytest-bdd.

Шаги работают с локальными переменными единицы выполнения (теста), поэтому
значения, сохранённые одним шагом, доступны следующим через !{NAME}.
Подключается автоматически вместе с bdt.pytest_plugin.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable, List, Optional

from pytest_bdd import given, parsers, then, when

from .context import LocalVariables, ResolutionContext
from .errors import MalformedResourceError, UnresolvableReferenceError
from .modifications import ModificationRow, modify_json, modify_text
from .resources import ResourceLookup, canonical_json

logger = logging.getLogger(__name__)

FILE_KINDS = ("json", "string")


def save_in_variable(local_vars: LocalVariables, name: str, value: str) -> None:
    local_vars.set(name, value)
    logger.debug(f"Saved variable '{name}'")


def read_file_to_variable(ctx: ResolutionContext, path: str, kind: str, name: str,
                          modifications: Optional[Iterable[ModificationRow]] = None) -> str:
    """
    Читает файл ресурсов в локальную переменную, при необходимости изменив его.

    Args:
        ctx: Контекст (корень ресурсов и локальные переменные)
        path: Путь относительно корня ресурсов
        kind: "json" — компактная JSON-строка в порядке ключей документа,
              "string" — текст как есть
        name: Имя переменной
        modifications: Строки таблицы модификаций (key | OP | value [| type])

    Returns:
        Сохранённое значение

    Raises:
        ModificationError: Модификацию нельзя применить к документу
    """
    if kind not in FILE_KINDS:
        raise ValueError(f"Unsupported file kind '{kind}'. Expected one of: {', '.join(FILE_KINDS)}")

    content = ResourceLookup(ctx.resources_root).lookup(path)
    rows = list(modifications or [])

    if kind == "json":
        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedResourceError(path, f"invalid JSON: {e}", "resource") from e
        content = json.dumps(modify_json(document, rows), separators=(",", ":"), ensure_ascii=False)
    elif rows:
        content = modify_text(content, rows)

    ctx.local_vars.set(name, content)
    logger.debug(f"Read '{path}' as {kind} into variable '{name}' ({len(rows)} modification(s))")
    return content


def _alphabetical_key(element: Any) -> str:
    return element if isinstance(element, str) else canonical_json(element)


_CRITERIA: dict[str, Callable[[Any], str]] = {
    "alphabetical": _alphabetical_key,
}


def sort_elements(local_vars: LocalVariables, name: str, criteria: str = "alphabetical",
                  order: str = "ascending") -> str:
    """
    Сортирует JSON-массив, хранящийся в переменной, и сохраняет результат обратно.

    Raises:
        UnresolvableReferenceError: Переменная не определена
        MalformedResourceError: Значение не является JSON-массивом
    """
    if criteria not in _CRITERIA:
        raise ValueError(f"Unknown sort criteria '{criteria}'")
    if order not in ("ascending", "descending"):
        raise ValueError(f"Unknown sort order '{order}'")

    raw = local_vars.get(name)
    if raw is None:
        raise UnresolvableReferenceError(name, "variable is not defined")

    try:
        elements = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedResourceError(name, f"invalid JSON: {e}") from e
    if not isinstance(elements, list):
        raise MalformedResourceError(name, "value is not a JSON array")

    elements.sort(key=_CRITERIA[criteria], reverse=(order == "descending"))
    result = canonical_json(elements)
    local_vars.set(name, result)
    return result


# -------------------- Step definitions --------------------

@given(parsers.parse("I save '{value}' in variable '{name}'"))
@when(parsers.parse("I save '{value}' in variable '{name}'"))
def step_save_in_variable(value: str, name: str, local_vars, resolve_placeholders):
    save_in_variable(local_vars, name, resolve_placeholders(value))


@given(parsers.parse("I read file '{path}' as '{kind}' and save it in variable '{name}'"))
@when(parsers.parse("I read file '{path}' as '{kind}' and save it in variable '{name}'"))
def step_read_file_to_variable(path: str, kind: str, name: str, placeholder_context, resolve_placeholders):
    read_file_to_variable(placeholder_context, resolve_placeholders(path), kind, name)


@given(parsers.parse("I read file '{path}' as '{kind}' and save it in variable '{name}' with:"))
@when(parsers.parse("I read file '{path}' as '{kind}' and save it in variable '{name}' with:"))
def step_read_file_to_variable_with(path: str, kind: str, name: str, datatable: List[List[str]],
                                    placeholder_context, resolve_placeholders):
    rows = [[resolve_placeholders(cell) for cell in row] for row in datatable]
    read_file_to_variable(placeholder_context, resolve_placeholders(path), kind, name, rows)


@when(parsers.re(
    r"I sort elements in '(?P<name>[^']+)' by (?P<criteria>\w+) criteria "
    r"in (?P<order>ascending|descending) order"
))
def step_sort_elements(name: str, criteria: str, order: str, local_vars):
    sort_elements(local_vars, name, criteria, order)


@then(parsers.parse("the variable '{name}' has value '{value}'"))
def step_variable_has_value(name: str, value: str, local_vars, resolve_placeholders):
    expected = resolve_placeholders(value)
    actual = local_vars.get(name)
    assert actual == expected, f"Variable '{name}' is {actual!r}, expected {expected!r}"


__all__ = [
    "save_in_variable",
    "read_file_to_variable",
    "sort_elements",
    "FILE_KINDS",
]
