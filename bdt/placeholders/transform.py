"""Case-transform suffixes for variable placeholders (`NAME.toUpper`, `NAME.toLower`)."""

from __future__ import annotations

import enum
from typing import Optional, Tuple


class CaseTransform(enum.Enum):
    UPPER = "toUpper"
    LOWER = "toLower"

    def apply(self, value: str) -> str:
        if self is CaseTransform.UPPER:
            return value.upper()
        return value.lower()


_SUFFIXES = {t.value: t for t in CaseTransform}


def split_case_suffix(body: str) -> Tuple[str, Optional[CaseTransform]]:
    """
    Splits `NAME.toUpper` into ("NAME", UPPER).

    Only the exact, case-sensitive tokens after the last dot are recognised;
    anything else stays part of the name (dotted property names like `user.home`).
    """
    name, dot, suffix = body.rpartition(".")
    if dot and name and suffix in _SUFFIXES:
        return name, _SUFFIXES[suffix]
    return body, None


def apply_case(value: str, transform: Optional[CaseTransform]) -> str:
    return transform.apply(value) if transform else value


__all__ = ["CaseTransform", "split_case_suffix", "apply_case"]
