"""Shared pytest fixtures for the ewebpack test suite.

Provides reusable fixtures for:
- Temporary project directories
- The bundled template directory and its contents
- A user template directory that shadows one bundled template
- Writing a custom ``ewebpack.json`` before a run
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

import ewebpack.templates


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Empty directory to scaffold into (auto-cleanup)."""
    path = tmp_path / "proj"
    path.mkdir()
    yield path.resolve()


@pytest.fixture
def bundled_templates() -> Path:
    """Directory holding the templates shipped with the package."""
    path = Path(ewebpack.templates.__file__).parent / "templates"
    assert path.is_dir(), f"Bundled templates not found at {path}"
    return path


@pytest.fixture
def template_text(bundled_templates: Path) -> Callable[[str], str]:
    """Return the content of a bundled template by name."""

    def _read(name: str) -> str:
        return (bundled_templates / name).read_text(encoding="utf-8")

    return _read


@pytest.fixture
def override_templates(tmp_path: Path) -> Path:
    """User template directory that replaces only ``electron-main.js``."""
    path = tmp_path / "my-templates"
    path.mkdir()
    (path / "electron-main.js").write_text(
        "// custom main process\nrequire('./app');\n", encoding="utf-8"
    )
    return path


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def write_config(project_dir: Path) -> Callable[[Any], Path]:
    """Write *data* as the project's ``ewebpack.json`` and return its path.

    Strings are written as-is so tests can provide malformed JSON.
    """

    def _write(data: Any) -> Path:
        path = project_dir / "ewebpack.json"
        text = data if isinstance(data, str) else json.dumps(data, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
