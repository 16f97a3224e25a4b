"""
Набор тегов сценария.

Объединяет собственные теги сценария и унаследованные (фича, правило),
убирает дубликаты и приводит теги к виду с ведущим '@'
(pytest-bdd передаёт теги без него).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List


def canonical_tag(tag: str) -> str:
    tag = tag.strip()
    return tag if tag.startswith("@") else f"@{tag}"


@dataclass(frozen=True)
class TagSet:
    """Неупорядоченный набор канонических тегов."""
    tags: FrozenSet[str] = frozenset()

    @classmethod
    def of(cls, *groups: Iterable[str]) -> "TagSet":
        """
        Строит набор из нескольких групп тегов.

        Args:
            groups: Собственные и унаследованные теги в любом порядке
        """
        collected = set()
        for group in groups:
            if isinstance(group, TagSet):
                collected |= group.tags
                continue
            if isinstance(group, str):
                group = [group]
            for tag in group:
                if tag and tag.strip():
                    collected.add(canonical_tag(tag))
        return cls(frozenset(collected))

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and canonical_tag(tag) in self.tags

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.tags))

    def __len__(self) -> int:
        return len(self.tags)

    def arguments_of(self, tag_name: str) -> List[str]:
        """
        Аргументы параметризованного тега: @tillfixed(JIRA-123) → ["JIRA-123"].

        Совпадение ищется в любом месте тега, аргумент захватывается
        до первой закрывающей скобки.
        """
        pattern = re.compile(re.escape(canonical_tag(tag_name)) + r"\((.*?)\)")
        found = []
        for tag in self:
            match = pattern.search(tag)
            if match:
                found.append(match.group(1))
        return sorted(found)


__all__ = ["TagSet", "canonical_tag"]
