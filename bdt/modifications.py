"""
Модификации документов перед сохранением в переменную.

Строка таблицы модификаций: ключ, операция, значение и (необязательно) тип
значения. Для JSON ключ — путь через точку ("a.b.0.c", допускается префикс
"$."), для текста — искомая подстрока.

Операции над JSON:
- ADD      → создаёт ключ (или заменяет существующий)
- UPDATE   → меняет значение существующего ключа
- DELETE   → удаляет ключ
- APPEND   → дописывает значение в конец строки
- PREPEND  → дописывает значение в начало строки
- REPLACE  → замена подстроки в строке, значение вида "old->new"
- ADDTO    → добавляет значение элементом в конец массива

Над текстом допустимы DELETE, UPDATE, REPLACE, APPEND и PREPEND.
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Union

from .errors import ModificationError

logger = logging.getLogger(__name__)

REPLACE_SEPARATOR = "->"
NO_TYPE = "n/a"


class ModificationOp(enum.Enum):
    ADD = "ADD"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    APPEND = "APPEND"
    PREPEND = "PREPEND"
    REPLACE = "REPLACE"
    ADDTO = "ADDTO"


_TEXT_OPS = {
    ModificationOp.DELETE,
    ModificationOp.UPDATE,
    ModificationOp.REPLACE,
    ModificationOp.APPEND,
    ModificationOp.PREPEND,
}


@dataclass(frozen=True)
class Modification:
    """Одна строка таблицы модификаций."""
    key: str
    operation: ModificationOp
    value: str = ""
    value_type: str = NO_TYPE

    @classmethod
    def from_row(cls, row: Sequence[str]) -> "Modification":
        """
        Строит модификацию из строки таблицы: key | OP | value [| type].

        Raises:
            ModificationError: Неверное число колонок или неизвестная операция
        """
        cells = [cell.strip() for cell in row]
        if len(cells) < 2 or len(cells) > 4:
            raise ModificationError(f"Modification row needs 2 to 4 columns, got {len(cells)}: {list(row)}")
        key, op_name = cells[0], cells[1].upper()
        try:
            operation = ModificationOp(op_name)
        except ValueError:
            known = ", ".join(op.value for op in ModificationOp)
            raise ModificationError(f"Unknown modification '{cells[1]}'. Expected one of: {known}") from None
        value = cells[2] if len(cells) > 2 else ""
        value_type = cells[3].lower() if len(cells) > 3 and cells[3] else NO_TYPE
        return cls(key, operation, value, value_type)

    def typed_value(self) -> Any:
        """Значение, приведённое к указанному типу (n/a и string — как есть)."""
        kind = self.value_type
        raw = self.value
        if kind in (NO_TYPE, "string"):
            return raw
        if kind == "number":
            try:
                return int(raw)
            except ValueError:
                pass
            try:
                return float(raw)
            except ValueError:
                raise ModificationError(f"'{raw}' is not a number (key '{self.key}')") from None
        if kind == "boolean":
            lowered = raw.lower()
            if lowered not in ("true", "false"):
                raise ModificationError(f"'{raw}' is not a boolean (key '{self.key}')")
            return lowered == "true"
        if kind == "null":
            return None
        if kind in ("array", "object", "json"):
            try:
                parsed = json.loads(raw)
            except json.JSONDecodeError as e:
                raise ModificationError(f"Invalid JSON value for key '{self.key}': {e}") from e
            if kind == "array" and not isinstance(parsed, list):
                raise ModificationError(f"Value for key '{self.key}' is not a JSON array")
            if kind == "object" and not isinstance(parsed, dict):
                raise ModificationError(f"Value for key '{self.key}' is not a JSON object")
            return parsed
        raise ModificationError(f"Unknown value type '{self.value_type}' (key '{self.key}')")


ModificationRow = Union[Modification, Sequence[str]]


def parse_modifications(rows: Iterable[ModificationRow]) -> List[Modification]:
    return [row if isinstance(row, Modification) else Modification.from_row(row) for row in rows]


# -------------------- JSON --------------------

def _split_path(key: str) -> List[str]:
    path = key[2:] if key.startswith("$.") else key
    parts = path.split(".")
    if not path or any(part == "" for part in parts):
        raise ModificationError(f"Invalid key path '{key}'")
    return parts


def _child(container: Any, part: str, key: str) -> Any:
    if isinstance(container, dict):
        if part not in container:
            raise ModificationError(f"Key '{key}' not found: no '{part}'")
        return container[part]
    if isinstance(container, list):
        return container[_index(container, part, key)]
    raise ModificationError(f"Key '{key}' not found: '{part}' is not inside an object or array")


def _index(container: list, part: str, key: str) -> int:
    try:
        index = int(part)
    except ValueError:
        raise ModificationError(f"'{part}' is not an array index (key '{key}')") from None
    if not -len(container) <= index < len(container):
        raise ModificationError(f"Index {index} out of range (key '{key}')")
    return index


def _expect_string(current: Any, mod: Modification) -> str:
    if not isinstance(current, str):
        raise ModificationError(f"{mod.operation.value} needs a string value at '{mod.key}'")
    return current


def _replace_pair(mod: Modification) -> tuple[str, str]:
    if REPLACE_SEPARATOR not in mod.value:
        raise ModificationError(
            f"REPLACE value for '{mod.key}' must look like 'old{REPLACE_SEPARATOR}new', got '{mod.value}'"
        )
    old, new = mod.value.split(REPLACE_SEPARATOR, 1)
    return old, new


def _apply_json(document: Any, mod: Modification) -> Any:
    parts = _split_path(mod.key)
    parent = document
    for part in parts[:-1]:
        parent = _child(parent, part, mod.key)
    last = parts[-1]
    op = mod.operation

    if isinstance(parent, list):
        if op is ModificationOp.ADD and last == str(len(parent)):
            parent.append(mod.typed_value())
            return document
        slot: Union[int, str] = _index(parent, last, mod.key)
    elif isinstance(parent, dict):
        slot = last
        if op is not ModificationOp.ADD and last not in parent:
            raise ModificationError(f"Key '{mod.key}' not found")
    else:
        raise ModificationError(f"Key '{mod.key}' not found: parent is not an object or array")

    if op in (ModificationOp.ADD, ModificationOp.UPDATE):
        parent[slot] = mod.typed_value()
    elif op is ModificationOp.DELETE:
        del parent[slot]
    elif op is ModificationOp.APPEND:
        parent[slot] = _expect_string(parent[slot], mod) + mod.value
    elif op is ModificationOp.PREPEND:
        parent[slot] = mod.value + _expect_string(parent[slot], mod)
    elif op is ModificationOp.REPLACE:
        old, new = _replace_pair(mod)
        parent[slot] = _expect_string(parent[slot], mod).replace(old, new)
    elif op is ModificationOp.ADDTO:
        target = parent[slot]
        if not isinstance(target, list):
            raise ModificationError(f"ADDTO needs an array at '{mod.key}'")
        target.append(mod.typed_value())
    return document


def modify_json(document: Any, modifications: Iterable[ModificationRow]) -> Any:
    """
    Применяет модификации к разобранному JSON-документу (на месте).

    Returns:
        Изменённый документ
    """
    for mod in parse_modifications(modifications):
        document = _apply_json(document, mod)
        logger.debug(f"Applied {mod.operation.value} to '{mod.key}'")
    return document


# -------------------- Text --------------------

def modify_text(text: str, modifications: Iterable[ModificationRow]) -> str:
    """Применяет модификации к тексту; ключ — искомая подстрока."""
    for mod in parse_modifications(modifications):
        op = mod.operation
        if op not in _TEXT_OPS:
            raise ModificationError(f"{op.value} is not supported for plain text")
        if op is ModificationOp.DELETE:
            text = text.replace(mod.key, "")
        elif op in (ModificationOp.UPDATE, ModificationOp.REPLACE):
            text = text.replace(mod.key, mod.value)
        elif op is ModificationOp.APPEND:
            text = text + mod.value
        elif op is ModificationOp.PREPEND:
            text = mod.value + text
        logger.debug(f"Applied {op.value} to text (key '{mod.key}')")
    return text


__all__ = [
    "Modification",
    "ModificationOp",
    "ModificationRow",
    "parse_modifications",
    "modify_json",
    "modify_text",
]
