"""Tests for template lookup and copying (ewebpack.templates)."""

from __future__ import annotations

from pathlib import Path

import pytest

from ewebpack.config import EwebpackError
from ewebpack.templates import (
    MAIN_ENTRY_TEMPLATE,
    MAIN_WEBPACK_TEMPLATE,
    RENDERER_WEBPACK_TEMPLATE,
    TemplateNotFoundError,
    TemplateRenderer,
)

pytestmark = pytest.mark.unit


class TestTemplateLookup:
    @pytest.mark.parametrize(
        "name", [MAIN_ENTRY_TEMPLATE, MAIN_WEBPACK_TEMPLATE, RENDERER_WEBPACK_TEMPLATE]
    )
    def test_bundled_template_located(self, name: str, bundled_templates: Path):
        assert TemplateRenderer().locate(name) == bundled_templates / name

    @pytest.mark.parametrize(
        "name", [MAIN_ENTRY_TEMPLATE, MAIN_WEBPACK_TEMPLATE, RENDERER_WEBPACK_TEMPLATE]
    )
    def test_source_is_stored_bytes(self, name: str, bundled_templates: Path):
        content = TemplateRenderer().source(name)
        assert content == (bundled_templates / name).read_bytes()
        assert content

    def test_override_dir_shadows_bundled(self, override_templates: Path, bundled_templates: Path):
        renderer = TemplateRenderer(override_dir=override_templates)
        assert renderer.locate(MAIN_ENTRY_TEMPLATE) == override_templates / MAIN_ENTRY_TEMPLATE
        assert renderer.locate(MAIN_WEBPACK_TEMPLATE) == bundled_templates / MAIN_WEBPACK_TEMPLATE

    def test_search_path_order(self, override_templates: Path, bundled_templates: Path):
        renderer = TemplateRenderer(override_dir=override_templates)
        assert renderer.search_path == [override_templates, bundled_templates]

    def test_missing_template(self, tmp_path: Path):
        renderer = TemplateRenderer(template_dir=tmp_path)
        with pytest.raises(TemplateNotFoundError) as excinfo:
            renderer.locate(MAIN_ENTRY_TEMPLATE)
        assert excinfo.value.name == MAIN_ENTRY_TEMPLATE
        assert excinfo.value.search_path == [tmp_path]
        assert isinstance(excinfo.value, EwebpackError)

    def test_template_syntax_not_rendered(self, tmp_path: Path):
        (tmp_path / "raw.js").write_bytes(b"const a = `{{ b }}`; {% raw %}\n")
        renderer = TemplateRenderer(template_dir=tmp_path)
        assert renderer.source("raw.js") == b"const a = `{{ b }}`; {% raw %}\n"


class TestCopyTo:
    async def test_creates_parent_directories(self, tmp_path: Path, bundled_templates: Path):
        out = tmp_path / "a" / "b" / "main.js"
        written = await TemplateRenderer().copy_to(MAIN_ENTRY_TEMPLATE, out)
        assert written == out
        assert out.read_bytes() == (bundled_templates / MAIN_ENTRY_TEMPLATE).read_bytes()

    async def test_overwrites_existing_file(self, tmp_path: Path, bundled_templates: Path):
        out = tmp_path / "webpack.config.js"
        out.write_text("stale", encoding="utf-8")
        await TemplateRenderer().copy_to(RENDERER_WEBPACK_TEMPLATE, out)
        assert out.read_bytes() == (bundled_templates / RENDERER_WEBPACK_TEMPLATE).read_bytes()

    async def test_non_utf8_and_crlf_copied_unchanged(self, tmp_path: Path):
        templates = tmp_path / "tpl"
        templates.mkdir()
        payload = b"\xff\xfe// main\r\nconst s = '\xe9t\xe9';\r\n"
        (templates / MAIN_ENTRY_TEMPLATE).write_bytes(payload)
        out = tmp_path / "out" / "main.js"

        await TemplateRenderer(override_dir=templates).copy_to(MAIN_ENTRY_TEMPLATE, out)

        assert out.read_bytes() == payload

    async def test_missing_template_writes_nothing(self, tmp_path: Path):
        out = tmp_path / "main.js"
        with pytest.raises(TemplateNotFoundError):
            await TemplateRenderer(template_dir=tmp_path / "empty").copy_to("nope.js", out)
        assert not out.exists()
