"""
Контекст резолвинга плейсхолдеров.

Содержит хранилище локальных переменных, изолированное по единицам
выполнения (по умолчанию — по потокам), и неизменяемый контекст,
который явно передаётся в резолвер вместо глобального состояния.
"""

from __future__ import annotations

import os
import threading
import weakref
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Hashable, Iterator, Mapping, MutableMapping, Optional


class ThreadUnit:
    """
    Ключ единицы выполнения одного потока.

    Сравнивается по идентичности: у каждого потока свой экземпляр,
    и после завершения потока он не достаётся новому, даже если
    интерпретатор переиспользует идентификатор потока.
    """

    __slots__ = ("thread_name", "__weakref__")

    def __init__(self, thread_name: str):
        self.thread_name = thread_name

    def __repr__(self) -> str:
        return f"ThreadUnit({self.thread_name!r})"


_thread_state = threading.local()


def current_unit() -> ThreadUnit:
    """Ключ единицы выполнения по умолчанию — текущий поток."""
    unit = getattr(_thread_state, "unit", None)
    if unit is None:
        unit = ThreadUnit(threading.current_thread().name)
        _thread_state.unit = unit
    return unit


class ContextStore:
    """
    Хранилище локальных переменных сценариев.

    Переменные разбиты по единицам выполнения: каждая единица видит
    только свои записи. Сама карта разделов защищена блокировкой,
    содержимое раздела принадлежит единственной единице выполнения.

    Разделы потоков хранятся по слабым ссылкам и исчезают вместе
    с потоком. Раздел создаётся только записью, чтение его не заводит.
    """

    def __init__(self):
        self._units: Dict[Hashable, Dict[str, str]] = {}
        self._thread_units: MutableMapping[ThreadUnit, Dict[str, str]] = weakref.WeakKeyDictionary()
        self._lock = threading.Lock()

    def _table(self, unit: Hashable) -> MutableMapping[Any, Dict[str, str]]:
        return self._thread_units if isinstance(unit, ThreadUnit) else self._units

    def for_unit(self, unit: Optional[Hashable] = None) -> "LocalVariables":
        """
        Возвращает представление переменных указанной единицы выполнения.

        Args:
            unit: Ключ единицы (id теста, имя сценария...). None — текущий поток.
        """
        return LocalVariables(self, current_unit() if unit is None else unit)

    def get(self, unit: Hashable, name: str) -> Optional[str]:
        with self._lock:
            partition = self._table(unit).get(unit)
            return None if partition is None else partition.get(name)

    def set(self, unit: Hashable, name: str, value: str) -> None:
        with self._lock:
            self._table(unit).setdefault(unit, {})[name] = value

    def snapshot(self, unit: Hashable) -> Dict[str, str]:
        with self._lock:
            return dict(self._table(unit).get(unit, {}))

    def discard(self, unit: Hashable) -> None:
        """Удаляет все переменные единицы выполнения."""
        with self._lock:
            self._table(unit).pop(unit, None)

    def units(self) -> list[Hashable]:
        with self._lock:
            return list(self._units) + list(self._thread_units)


class LocalVariables(Mapping[str, str]):
    """Представление переменных одной единицы выполнения."""

    def __init__(self, store: ContextStore, unit: Hashable):
        self._store = store
        self.unit = unit

    def __getitem__(self, name: str) -> str:
        value = self._store.get(self.unit, name)
        if value is None:
            raise KeyError(name)
        return value

    def __iter__(self) -> Iterator[str]:
        return iter(self._store.snapshot(self.unit))

    def __len__(self) -> int:
        return len(self._store.snapshot(self.unit))

    def set(self, name: str, value: Any) -> None:
        self._store.set(self.unit, name, str(value))

    def clear(self) -> None:
        self._store.discard(self.unit)

    def __repr__(self) -> str:
        return f"LocalVariables(unit={self.unit!r}, names={sorted(self)})"


def _empty_locals() -> LocalVariables:
    return ContextStore().for_unit()


@dataclass(frozen=True)
class ResolutionContext:
    """
    Контекст, передаваемый резолверу плейсхолдеров.

    Объединяет:
    - environ: переменные окружения процесса (только чтение)
    - system_properties: статические системные свойства (bdt-cfg/properties.yaml, -D)
    - local_vars: переменные текущей единицы выполнения
    - bindings / owner: состояние места вызова для рефлексивных плейсхолдеров
    - resources_root: база для относительных путей ресурсных плейсхолдеров
    """
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    system_properties: Mapping[str, str] = field(default_factory=dict)
    local_vars: LocalVariables = field(default_factory=_empty_locals)
    bindings: Mapping[str, Any] = field(default_factory=dict)
    owner: Optional[object] = None
    resources_root: Path = field(default_factory=Path.cwd)

    def lookup_environment(self, name: str) -> Optional[str]:
        """Системное свойство, иначе переменная окружения."""
        value = self.system_properties.get(name)
        if value is None:
            value = self.environ.get(name)
        return None if value is None else str(value)

    def lookup_reflection(self, name: str) -> Optional[str]:
        """
        Значение из состояния места вызова.

        Порядок: bindings → атрибут owner → локальные переменные единицы.
        Методы и служебные (dunder) атрибуты owner значениями не считаются.
        """
        if name in self.bindings:
            value = self.bindings[name]
            return None if value is None else str(value)
        if self.owner is not None and name.isidentifier() and not name.startswith("__"):
            value = getattr(self.owner, name, None)
            if value is not None and not callable(value):
                return str(value)
        return self.local_vars.get(name)

    def with_bindings(self, **bindings: Any) -> "ResolutionContext":
        merged = dict(self.bindings)
        merged.update(bindings)
        return ResolutionContext(
            environ=self.environ,
            system_properties=self.system_properties,
            local_vars=self.local_vars,
            bindings=merged,
            owner=self.owner,
            resources_root=self.resources_root,
        )


__all__ = ["ContextStore", "LocalVariables", "ResolutionContext", "ThreadUnit", "current_unit"]
