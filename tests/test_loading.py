"""Dictionary loaders, YAML parsing and load summaries."""

from pathlib import Path

import pytest

from pathlexengine.enums import LoadStatus
from pathlexengine.loading import (
    DictionaryLoadResult,
    LoadSummary,
    PackageDictionaryLoader,
    PathDictionaryLoader,
    parse_dictionary,
)


class TestParseDictionary:
    """parse_dictionary() accepts only mappings."""

    def test_nested_mapping(self) -> None:
        source = "commands:\n  help:\n    description: Show help\n"
        assert parse_dictionary(source) == {"commands": {"help": {"description": "Show help"}}}

    def test_empty_document(self) -> None:
        assert parse_dictionary("") == {}

    def test_non_mapping_rejected(self) -> None:
        with pytest.raises(ValueError, match="must be a mapping, got list"):
            parse_dictionary("- a\n- b\n", "list.yml")

    def test_invalid_yaml_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid YAML in broken.yml"):
            parse_dictionary("a: [unclosed\n", "broken.yml")


class TestPackageDictionaryLoader:
    """Bundled dictionaries are read as package data."""

    @pytest.mark.parametrize("locale", ["zh-CN", "en-US", "ja-JP", "fr-FR", "zh-TW"])
    def test_bundled_locales(self, locale: str) -> None:
        data = PackageDictionaryLoader().load(locale)
        assert "error-encountered" in data["internal"]
        assert "name" in data["general"]

    def test_bundled_dictionaries_share_keys(self) -> None:
        loader = PackageDictionaryLoader()
        english = loader.load("en-US")
        for locale in ("zh-CN", "ja-JP", "fr-FR", "zh-TW"):
            data = loader.load(locale)
            assert set(data["internal"]) == set(english["internal"]), locale
            assert set(data["general"]) == set(english["general"]), locale

    def test_missing_locale(self) -> None:
        with pytest.raises(FileNotFoundError, match="xx-XX"):
            PackageDictionaryLoader().load("xx-XX")

    def test_describe_path(self) -> None:
        loader = PackageDictionaryLoader()
        assert loader.describe_path("en-US") == "pathlexengine.locales:en-US.yml"


class TestPathDictionaryLoader:
    """On-disk dictionaries under a base directory."""

    def test_load(self, tmp_path: Path) -> None:
        (tmp_path / "en-US.yml").write_text("greet: Hello\n", encoding="utf-8")
        assert PathDictionaryLoader(tmp_path).load("en-US") == {"greet": "Hello"}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            PathDictionaryLoader(tmp_path).load("en-US")

    @pytest.mark.parametrize("locale", ["../en-US", "a/b", "a\\b", ""])
    def test_unsafe_locale_rejected(self, tmp_path: Path, locale: str) -> None:
        with pytest.raises(ValueError):
            PathDictionaryLoader(tmp_path).load(locale)

    def test_describe_path(self, tmp_path: Path) -> None:
        assert PathDictionaryLoader(tmp_path).describe_path("en-US") == str(tmp_path / "en-US.yml")


class TestLoadSummary:
    """LoadSummary aggregates load results."""

    def test_counts(self) -> None:
        error = ValueError("bad")
        summary = LoadSummary(
            results=(
                DictionaryLoadResult("en-US", LoadStatus.SUCCESS, paths=3),
                DictionaryLoadResult("de-DE", LoadStatus.NOT_FOUND),
                DictionaryLoadResult("fr-FR", LoadStatus.ERROR, error=error),
            )
        )
        assert summary.successful == 1
        assert summary.not_found == 1
        assert summary.errors == 1
        assert summary.has_errors
        assert summary.get_errors()[0].error is error
        assert summary.get_by_locale("en-US")[0].paths == 3
        assert repr(summary) == "LoadSummary(total=3, ok=1, not_found=1, errors=1)"

    def test_empty(self) -> None:
        summary = LoadSummary()
        assert not summary.has_errors
        assert summary.get_errors() == ()
