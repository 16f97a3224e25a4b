from pathlib import Path

import pytest

from tests.infrastructure import write, write_json, make_context

pytest_plugins = ["pytester"]


@pytest.fixture
def resources(tmp_path: Path) -> Path:
    """Каталог ресурсов: текстовые файлы, пустой файл, JSON-документы и битый JSON."""
    root = tmp_path / "resources"
    write(root / "schemas" / "krb5.conf", "[libdefaults]\n  default_realm = EXAMPLE.COM\n")
    write(root / "schemas" / "empty.txt", "")
    write_json(root / "schemas" / "simple1.json", {"b": [1, 2], "a": True})
    write(root / "schemas" / "broken.json", "{\"a\": ")
    write_json(root / "schemas" / "testCreateFile.json", {
        "key1": "value1",
        "key2": [],
        "key3": {"key3_2": "value3_2", "key3_1": "value3_1"},
    })
    write(root / "schemas" / "settings.conf", "foo = bar")
    return root


@pytest.fixture
def ctx_factory(resources: Path):
    """Фабрика контекстов с корнем ресурсов по умолчанию."""
    def factory(**kwargs):
        kwargs.setdefault("resources_root", resources)
        return make_context(**kwargs)
    return factory


@pytest.fixture(autouse=True)
def _isolated_cfg_dir(monkeypatch):
    # тесты не должны подхватывать BDT_CFG_DIR из окружения разработчика
    monkeypatch.delenv("BDT_CFG_DIR", raising=False)
