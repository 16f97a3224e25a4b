"""
Тесты лексера плейсхолдеров.
"""

from __future__ import annotations

import pytest

from bdt.placeholders.lexer import PlaceholderLexer
from bdt.placeholders.tokens import ENVIRONMENT_MARKERS, RESOURCE_MARKERS, MarkerPair


class TestPlaceholderLexer:

    def setup_method(self):
        self.lexer = PlaceholderLexer("environment", ENVIRONMENT_MARKERS)

    def test_no_markers(self):
        assert self.lexer.tokenize("plain text with {braces}") == []

    def test_single_placeholder_positions(self):
        text = "host=${HOST}:80"
        [ph] = self.lexer.tokenize(text)

        assert ph.body == "HOST"
        assert text[ph.start:ph.end] == "${HOST}"
        assert ph.text == "${HOST}"

    def test_left_to_right_order(self):
        bodies = [ph.body for ph in self.lexer.scan("${A}-${B}-${C}")]
        assert bodies == ["A", "B", "C"]

    def test_nested_is_one_outer_occurrence(self):
        [ph] = self.lexer.tokenize("${PREFIX_${ENV}}")
        assert ph.body == "PREFIX_${ENV}"

    def test_unterminated_marker_is_text(self):
        # незакрытый маркер не мешает найти следующее вхождение
        bodies = [ph.body for ph in self.lexer.scan("${OPEN ${B}")]
        assert bodies == ["B"]

        assert self.lexer.tokenize("tail ${ABC") == []

    def test_other_family_markers_ignored(self):
        assert self.lexer.tokenize("!{name} @{file.txt}") == []

    def test_resource_body_keeps_dots(self):
        lexer = PlaceholderLexer("resource", RESOURCE_MARKERS)
        [ph] = lexer.tokenize("@{JSON.schemas/simple1.json}")
        assert ph.body == "JSON.schemas/simple1.json"

    def test_contains(self):
        assert self.lexer.contains("a ${B}")
        assert not self.lexer.contains("a !{B}")


def test_marker_pair_requires_brace():
    with pytest.raises(ValueError):
        MarkerPair("$(")


def test_marker_pair_wrap():
    assert MarkerPair("%{").wrap("X") == "%{X}"
