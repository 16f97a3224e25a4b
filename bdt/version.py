from __future__ import annotations

from importlib import metadata

DIST_NAME = "bdt-core"
UNKNOWN_VERSION = "0.0.0"


def tool_version() -> str:
    """
    Версия установленного дистрибутива bdt-core.

    Из исходников без установки (PYTHONPATH) метаданных нет — тогда 0.0.0.
    Модуль не импортирует остальной пакет, его можно звать из любого места.
    """
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


__all__ = ["tool_version", "DIST_NAME"]
