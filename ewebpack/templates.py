"""Template lookup for project scaffolding.

Templates are plain files copied verbatim into the new project.  They are
looked up through a Jinja2 loader chain so a project can shadow any bundled
template by putting a file with the same name in its own template directory.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, TemplateNotFound

from .config import EwebpackError
from .utils import logger, write_bytes

# ---------------------------------------------------------------------------
# Template names
# ---------------------------------------------------------------------------

MAIN_ENTRY_TEMPLATE = "electron-main.js"
MAIN_WEBPACK_TEMPLATE = "main-webpack.config.js"
RENDERER_WEBPACK_TEMPLATE = "renderer-webpack.config.js"

TEMPLATE_DIR_ENV = "EWEBPACK_TEMPLATE_DIR"

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateNotFoundError(EwebpackError):
    """Raised when a template is missing from every search directory."""

    def __init__(self, name: str, search_path: list[Path]) -> None:
        self.name = name
        self.search_path = search_path
        searched = ", ".join(str(p) for p in search_path)
        super().__init__(f"Template '{name}' not found (searched: {searched})")


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Copies bundled templates into a project.

    The search path is the optional *override_dir* first, then the bundled
    ``ewebpack/templates/`` directory.  Content is never rendered: a template
    is written out exactly as it is stored.
    """

    def __init__(
        self,
        override_dir: str | Path | None = None,
        template_dir: str | Path | None = None,
    ) -> None:
        self.template_dir = Path(template_dir) if template_dir else _DEFAULT_TEMPLATE_DIR
        self.search_path: list[Path] = []
        if override_dir is not None:
            self.search_path.append(Path(override_dir))
        self.search_path.append(self.template_dir)

        # latin-1 decodes any byte sequence; only the resolved filename is used.
        self.env = Environment(
            loader=ChoiceLoader(
                [FileSystemLoader(str(p), encoding="latin-1") for p in self.search_path]
            ),
        )

    def locate(self, name: str) -> Path:
        """Return the file that provides template *name*.

        Raises:
            TemplateNotFoundError: If no search directory has the template.
        """
        try:
            _, filename, _ = self.env.loader.get_source(self.env, name)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(name, self.search_path) from exc
        logger.debug("Template %s resolved to %s", name, filename)
        return Path(filename)

    def source(self, name: str) -> bytes:
        """Return the stored bytes of template *name*."""
        return self.locate(name).read_bytes()

    async def copy_to(self, name: str, output_path: str | Path) -> Path:
        """Write template *name* to *output_path*, replacing any existing file.

        Parent directories are created automatically.
        """
        content = self.source(name)
        out = Path(output_path)
        await asyncio.to_thread(write_bytes, out, content)
        return out
