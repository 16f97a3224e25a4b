"""
Тесты загрузки bdt-cfg/.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from bdt.config import (
    KNOWN_FAMILIES,
    GateVocabulary,
    cfg_root,
    load_config,
    load_gate_settings,
    load_properties,
)
from bdt.errors import BDTUserError, ConfigError
from tests.infrastructure import write, write_yaml


def test_missing_cfg_dir_gives_defaults(tmp_path: Path):
    cfg = load_config(tmp_path)

    assert cfg.root == tmp_path.resolve()
    assert cfg.properties == {}
    assert cfg.gate.enabled is True
    assert cfg.gate.vocabulary == GateVocabulary()
    assert cfg.resolver.order == list(KNOWN_FAMILIES)
    assert cfg.resolver.max_passes == 32
    assert cfg.effective_resources_root() == tmp_path.resolve()


def test_full_config(tmp_path: Path):
    write_yaml(tmp_path / "bdt-cfg" / "properties.yaml", """
        user.home: /home/tester
        port: 8080
        secure: true
        nothing:
    """)
    write_yaml(tmp_path / "bdt-cfg" / "gate.yaml", """
        enabled: false
        vocabulary:
          ignore: "skip"
          ticket: "@bug"
    """)
    write_yaml(tmp_path / "bdt-cfg" / "resolver.yaml", """
        resources_root: src/test/resources
        max_passes: 5
        order: [resource, environment]
    """)

    cfg = load_config(tmp_path)

    assert cfg.properties == {"user.home": "/home/tester", "port": "8080", "secure": "true"}
    assert cfg.gate.enabled is False
    assert cfg.gate.vocabulary.ignore == "@skip"
    assert cfg.gate.vocabulary.ticket == "@bug"
    assert cfg.gate.vocabulary.manual == "@manual"
    assert cfg.resolver.max_passes == 5
    assert cfg.resolver.order == ["resource", "environment"]
    assert cfg.effective_resources_root() == tmp_path.resolve() / "src" / "test" / "resources"


def test_gate_short_form(tmp_path: Path):
    write_yaml(tmp_path / "bdt-cfg" / "gate.yaml", """
        manual: handmade
        too_complex: "@hard"
    """)
    settings = load_gate_settings(tmp_path)

    assert settings.enabled is True
    assert settings.vocabulary.manual == "@handmade"
    assert settings.vocabulary.too_complex == "@hard"


def test_absolute_resources_root(tmp_path: Path):
    target = tmp_path / "abs-resources"
    write(tmp_path / "bdt-cfg" / "resolver.yaml", f"resources_root: {target.as_posix()}\n")
    assert load_config(tmp_path).effective_resources_root() == target


def test_cfg_dir_override(tmp_path: Path, monkeypatch):
    write(tmp_path / "ci" / "bdt" / "properties.yaml", "stage: ci\n")
    monkeypatch.setenv("BDT_CFG_DIR", "ci/bdt")

    assert cfg_root(tmp_path) == (tmp_path / "ci" / "bdt").resolve()
    assert load_properties(tmp_path) == {"stage": "ci"}


class TestConfigErrors:

    def test_invalid_yaml(self, tmp_path: Path):
        write(tmp_path / "bdt-cfg" / "properties.yaml", "key: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(tmp_path)

    def test_not_a_mapping(self, tmp_path: Path):
        write(tmp_path / "bdt-cfg" / "properties.yaml", "- a\n- b\n")
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(tmp_path)

    def test_nested_property(self, tmp_path: Path):
        write(tmp_path / "bdt-cfg" / "properties.yaml", "db:\n  host: x\n")
        with pytest.raises(ConfigError, match="must be a scalar"):
            load_config(tmp_path)

    def test_unknown_gate_key(self, tmp_path: Path):
        write(tmp_path / "bdt-cfg" / "gate.yaml", "vocabulary:\n  ignored: '@x'\n")
        with pytest.raises(ConfigError, match="Invalid gate configuration"):
            load_config(tmp_path)

    def test_unknown_family_in_order(self, tmp_path: Path):
        write(tmp_path / "bdt-cfg" / "resolver.yaml", "order: [environment, local]\n")
        with pytest.raises(ConfigError, match="Invalid resolver configuration"):
            load_config(tmp_path)

    def test_non_positive_max_passes(self, tmp_path: Path):
        write(tmp_path / "bdt-cfg" / "resolver.yaml", "max_passes: 0\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_config_error_is_user_error(self):
        assert issubclass(ConfigError, BDTUserError)
        assert issubclass(ConfigError, ValueError)
