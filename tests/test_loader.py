"""Tests for catalog file loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from ctxlate.exceptions import CatalogLoadError, CatalogValidationError
from ctxlate.loader import CatalogLoader, load_catalog, load_into
from ctxlate.store import TranslationStore
from ctxlate.translator import create_translator

JA_FRAGMENT = {
    "values": {"Log": "ログ"},
    "contexts": [{"matches": {"lang": "ja"}, "values": {"Tree": "木構造"}}],
}

JA_YAML = """\
values:
  Log: ログ
  "%n commits":
    - [1, 1, "1 コミット"]
    - [2, null, "%n コミット"]
contexts:
  - matches: {lang: ja}
    values:
      Tree: 木構造
"""


@pytest.fixture
def locale_dir(tmp_path: Path) -> Path:
    (tmp_path / "ja.json").write_text(json.dumps(JA_FRAGMENT, ensure_ascii=False), encoding="utf-8")
    (tmp_path / "zh_TW.json").write_text(
        json.dumps({"values": {"Log": "日誌"}}, ensure_ascii=False), encoding="utf-8"
    )
    return tmp_path


class TestCatalogLoader:
    """Test CatalogLoader."""

    def test_load_json(self, locale_dir):
        catalog = CatalogLoader().load_file(locale_dir / "ja.json")
        assert catalog.get("Log") == "ログ"
        assert catalog.contexts[0].values["Tree"] == "木構造"

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "ja.yaml"
        path.write_text(JA_YAML, encoding="utf-8")

        translator = create_translator(CatalogLoader().load_file(path))

        assert translator.translate("%n commits", count=3) == "3 コミット"
        assert translator.translate("Tree", context={"lang": "ja"}) == "木構造"

    def test_empty_yaml_is_empty_catalog(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert len(CatalogLoader().load_file(path)) == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CatalogLoader().load_file(tmp_path / "nope.json")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "ja.po"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError, match="Unsupported catalog file format"):
            CatalogLoader().load_file(path)

    def test_unparsable_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogLoadError) as exc_info:
            CatalogLoader().load_file(path)
        assert exc_info.value.path == path

    def test_unparsable_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("values: [unclosed", encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            CatalogLoader().load_file(path)

    def test_invalid_catalog(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"values": {"x": []}}), encoding="utf-8")
        with pytest.raises(CatalogValidationError):
            CatalogLoader().load_file(path)

    def test_load_directory(self, locale_dir):
        loader = CatalogLoader()
        catalogs = loader.load_directory(locale_dir)

        assert sorted(catalogs) == ["ja", "zh_TW"]
        assert catalogs["zh_TW"].get("Log") == "日誌"
        assert loader.get("ja") is catalogs["ja"]
        assert sorted(loader.get_catalogs()) == ["ja", "zh_TW"]

    def test_load_directory_skips_invalid_files(self, locale_dir, caplog):
        (locale_dir / "broken.json").write_text("{", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="ctxlate.loader"):
            catalogs = CatalogLoader().load_directory(locale_dir)

        assert "broken" not in catalogs
        assert "Skipping catalog" in caplog.text

    def test_load_directory_requires_directory(self, locale_dir):
        with pytest.raises(NotADirectoryError):
            CatalogLoader().load_directory(locale_dir / "ja.json")


class TestLoaderFunctions:
    """Test module-level helpers."""

    def test_load_catalog(self, locale_dir):
        assert load_catalog(str(locale_dir / "ja.json")).get("Log") == "ログ"

    def test_load_into_store(self, locale_dir):
        store = TranslationStore({"values": {"Log": "Log", "Tree": "Tree"}})
        load_into(store, locale_dir / "ja.json")

        assert store.catalog.get("Log") == "ログ"
        assert store.catalog.get("Tree") == "Tree"
        assert len(store.catalog.contexts) == 1

    def test_load_into_translator(self, locale_dir):
        translator = create_translator()
        load_into(translator, locale_dir / "ja.json")
        assert translator.translate("Log") == "ログ"
