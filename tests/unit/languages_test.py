"""Unit tests for language detection and normalization."""

from pathlib import Path

import pytest

from jsstyle.core.languages import detect_language_from_path, is_supported_file, normalize_language, resolve_language
from jsstyle.errors import UnsupportedLanguageError


def test_detects_language_from_extension() -> None:
    for filename in ("main.js", "main.mjs", "main.cjs", "main.jsx", "MAIN.JS"):
        assert detect_language_from_path(Path(filename)) == "javascript"


def test_rejects_unknown_extension() -> None:
    with pytest.raises(UnsupportedLanguageError, match="Unsupported file extension"):
        detect_language_from_path(Path("main.py"))


def test_normalizes_language_aliases() -> None:
    for alias in ("JS", "js", "javascript", "jsx", "node", "ecmascript", " mjs "):
        assert normalize_language(alias) == "javascript"


def test_unknown_language_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="Unsupported language 'cobol'"):
        normalize_language("cobol")


def test_resolve_language_requires_input() -> None:
    with pytest.raises(UnsupportedLanguageError, match="Language must be provided"):
        resolve_language(None, None)


def test_resolve_language_prefers_explicit_name() -> None:
    assert resolve_language("js", Path("notes.txt")) == "javascript"


def test_is_supported_file() -> None:
    assert is_supported_file(Path("app.js")) is True
    assert is_supported_file(Path("App.JSX")) is True
    assert is_supported_file(Path("readme.md")) is False
    assert is_supported_file(Path("Makefile")) is False
