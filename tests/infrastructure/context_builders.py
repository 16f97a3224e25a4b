"""
Построители контекста резолвинга для тестов.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from bdt.context import ContextStore, ResolutionContext


def make_context(
        *,
        environ: Optional[Dict[str, str]] = None,
        properties: Optional[Dict[str, str]] = None,
        local: Optional[Dict[str, str]] = None,
        bindings: Optional[Dict[str, Any]] = None,
        owner: Optional[object] = None,
        resources_root: Optional[Path] = None,
        store: Optional[ContextStore] = None,
        unit: Any = None,
) -> ResolutionContext:
    """
    Создаёт изолированный ResolutionContext.

    По умолчанию окружение пустое, чтобы тесты не зависели от os.environ.
    """
    local_vars = (store or ContextStore()).for_unit(unit)
    for key, value in (local or {}).items():
        local_vars.set(key, value)

    return ResolutionContext(
        environ=dict(environ or {}),
        system_properties=dict(properties or {}),
        local_vars=local_vars,
        bindings=dict(bindings or {}),
        owner=owner,
        resources_root=resources_root or Path.cwd(),
    )
