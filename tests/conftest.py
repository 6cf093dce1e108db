"""Pytest configuration and fixtures."""
from pathlib import Path

import pytest

from gqlcompose.config import DEFAULTS
from gqlcompose.discovery import SourceDocument
from gqlcompose.documents import parse_document


@pytest.fixture
def write_tree(tmp_path):
    """Write a {relative_path: text} mapping under a fresh source directory.

    Returns the source directory.
    """
    def _write(files: dict[str, str], root: Path | None = None) -> Path:
        source = root or (tmp_path / "schema")
        source.mkdir(parents=True, exist_ok=True)
        for relative, text in files.items():
            path = source / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return source

    return _write


@pytest.fixture
def make_document():
    """Parse SDL text into a Document with the given name."""
    def _make(name: str, sdl: str):
        return parse_document(SourceDocument(name=name, body=sdl))

    return _make


@pytest.fixture
def config():
    """Default runtime configuration, with a debounce suitable for tests."""
    cfg = {section: dict(values) for section, values in DEFAULTS.items()}
    cfg["discovery"]["extensions"] = list(cfg["discovery"]["extensions"])
    cfg["watch"]["debounce_seconds"] = 0.0
    return cfg
