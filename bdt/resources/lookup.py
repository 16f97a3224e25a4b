"""
Поиск внешних ресурсов для плейсхолдеров @{...}.

Поддерживаемые формы тела:
- <path>         → содержимое файла как есть
- JSON.<path>    → JSON-документ, пересериализованный канонически
- IP.<host>      → адрес одного из локальных интерфейсов этого хоста
"""

from __future__ import annotations

import json
import logging
import socket
from pathlib import Path
from typing import Callable, Dict, Optional

from ..errors import MalformedResourceError, ResourceNotFoundError

logger = logging.getLogger(__name__)

FAMILY = "resource"

JSON_PREFIX = "JSON."
IP_PREFIX = "IP."


def canonical_json(document: object) -> str:
    """Стабильная компактная сериализация (ключи отсортированы)."""
    return json.dumps(document, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


class ResourceLookup:
    """
    Резолвер ресурсных ссылок.

    Относительные пути разрешаются от resources_root. Ошибки не повторяются:
    отсутствующий ресурс сообщается один раз через ResourceNotFoundError.
    """

    def __init__(self, resources_root: Optional[Path] = None):
        self.resources_root = resources_root or Path.cwd()
        self._kinds: Dict[str, Callable[[str, str], str]] = {
            JSON_PREFIX: self._lookup_json,
            IP_PREFIX: self._lookup_ip,
        }

    def lookup(self, body: str) -> str:
        """
        Возвращает строковое значение ресурса.

        Args:
            body: Тело плейсхолдера без маркеров

        Raises:
            ResourceNotFoundError: Файл отсутствует или адрес недоступен
            MalformedResourceError: Содержимое не соответствует виду ресурса
        """
        for prefix, handler in self._kinds.items():
            if body.startswith(prefix):
                return handler(body, body[len(prefix):])
        return self._read_text(body, body)

    def _resolve_path(self, raw_path: str) -> Path:
        path = Path(raw_path)
        if not path.is_absolute():
            path = self.resources_root / path
        return path

    def _read_text(self, body: str, raw_path: str) -> str:
        path = self._resolve_path(raw_path)
        if not path.is_file():
            raise ResourceNotFoundError(body, f"file not found: {path}", FAMILY)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ResourceNotFoundError(body, f"cannot read {path}: {e}", FAMILY) from e
        logger.debug(f"Read resource {path} ({len(content)} chars)")
        return content

    def _lookup_json(self, body: str, raw_path: str) -> str:
        text = self._read_text(body, raw_path)
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedResourceError(body, f"invalid JSON: {e}", FAMILY) from e
        return canonical_json(document)

    def _lookup_ip(self, body: str, host: str) -> str:
        """
        Адрес хоста, принадлежащий локальному интерфейсу.

        Проверяется не сетевая доступность, а то, что к адресу можно
        привязать сокет на этой машине. Удалённый хост, даже доступный
        по сети, даёт ResourceNotFoundError, как и неразрешимое имя.
        """
        if not host:
            raise ResourceNotFoundError(body, "empty address", FAMILY)
        try:
            infos = socket.getaddrinfo(host, None)
        except (socket.gaierror, UnicodeError) as e:
            raise ResourceNotFoundError(body, f"cannot resolve '{host}': {e}", FAMILY) from e

        for family, _, _, _, sockaddr in infos:
            address = sockaddr[0]
            if self._is_local_address(family, address):
                logger.debug(f"Address {address} resolved for '{host}'")
                return address

        raise ResourceNotFoundError(body, f"no local interface owns '{host}'", FAMILY)

    @staticmethod
    def _is_local_address(family: int, address: str) -> bool:
        """Адрес принадлежит хосту, если к нему можно привязать сокет."""
        try:
            with socket.socket(family, socket.SOCK_DGRAM) as sock:
                sock.bind((address, 0))
        except OSError:
            return False
        return True


__all__ = ["ResourceLookup", "canonical_json", "JSON_PREFIX", "IP_PREFIX"]
