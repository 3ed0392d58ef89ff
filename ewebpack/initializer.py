"""Electron + webpack project initializer.

Resolves ``ewebpack.json`` for a project, creates the main and renderer
source directories and writes their entry scripts and webpack configs.
Conflicts with existing files are reported through ``InitResult`` rather than
raised, leaving exit codes and wording to the caller.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from .config import DEFAULT_CONFIG, EwebpackConfig, ProcessConfig, resolve_config
from .templates import (
    MAIN_ENTRY_TEMPLATE,
    MAIN_WEBPACK_TEMPLATE,
    RENDERER_WEBPACK_TEMPLATE,
    TemplateRenderer,
)
from .utils import logger, write_text

MAIN_ENTRY = "main.js"
RENDERER_ENTRY = "renderer.js"


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class InitStatus(str, Enum):
    """Outcome of an ``init`` run."""

    OK = "ok"
    DIRECTORY_EXISTS = "directory_exists"
    MAIN_ENTRY_EXISTS = "main_entry_exists"
    RENDERER_ENTRY_EXISTS = "renderer_entry_exists"


class InitResult(BaseModel):
    """What an ``init`` run did, and why it stopped if it did not finish."""

    status: InitStatus = InitStatus.OK
    project_root: Path
    config: EwebpackConfig
    config_created: bool = False
    created_dirs: list[Path] = Field(default_factory=list)
    written_files: list[Path] = Field(default_factory=list)
    conflict: Path | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is InitStatus.OK


# ---------------------------------------------------------------------------
# Initializer
# ---------------------------------------------------------------------------


class ProjectInitializer:
    """Scaffolds an Electron + webpack project under a target directory.

    Writes, relative to the project root:
    - ``ewebpack.json`` (only when it does not exist yet)
    - ``<main.src>/main.js`` from the bundled main-process template
    - ``<renderer.src>/renderer.js`` as an empty file
    - ``<main.src>/<main.webpack-config>`` and
      ``<renderer.src>/<renderer.webpack-config>``, always overwritten
    """

    def __init__(
        self,
        force: bool = False,
        renderer: TemplateRenderer | None = None,
        defaults: EwebpackConfig = DEFAULT_CONFIG,
    ) -> None:
        self.force = force
        self.renderer = renderer or TemplateRenderer()
        self.defaults = defaults

    # -- Public API --------------------------------------------------------

    async def initialize(self, target_path: str | Path = ".") -> InitResult:
        """Run the scaffold against *target_path*.

        Raises:
            ConfigError: If an existing ``ewebpack.json`` is malformed.
            TemplateNotFoundError: If a bundled template is missing.
            OSError: On any file-system failure.
        """
        project_root = Path(target_path).resolve()
        logger.info("Initializing Electron + Webpack project.")
        logger.debug("Provided path: %s", target_path)
        logger.debug("Resolved path to %s", project_root)

        # 1. Load or write ewebpack.json
        config, created = await resolve_config(project_root, self.defaults)
        result = InitResult(
            project_root=project_root,
            config=config,
            config_created=created,
        )
        logger.debug("Loaded config: %s", config.to_dict())

        main_dir = project_root / config.main.src
        renderer_dir = project_root / config.renderer.src

        # 2. Source directories
        for process, directory in ((config.main, main_dir), (config.renderer, renderer_dir)):
            if self.force or not directory.exists():
                logger.info("Creating directory %s", process.src)
                await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
                result.created_dirs.append(directory)
            elif _is_empty_dir(directory):
                logger.debug("Reusing empty directory %s", directory)
            else:
                return self._conflict(
                    result,
                    InitStatus.DIRECTORY_EXISTS,
                    directory,
                    f"{process.src} already exists",
                )

        # 3. Main process entry
        logger.info("Writing Electron main process: %s @ %s", MAIN_ENTRY, config.main.src)
        main_entry = main_dir / MAIN_ENTRY
        if not self.force and main_entry.exists():
            return self._conflict(
                result,
                InitStatus.MAIN_ENTRY_EXISTS,
                main_entry,
                f"Electron {MAIN_ENTRY} process already exists",
            )
        result.written_files.append(
            await self.renderer.copy_to(MAIN_ENTRY_TEMPLATE, main_entry)
        )

        # 4. Renderer process entry (starts empty)
        logger.info(
            "Writing Electron renderer process: %s @ %s", RENDERER_ENTRY, config.renderer.src
        )
        renderer_entry = renderer_dir / RENDERER_ENTRY
        if not self.force and renderer_entry.exists():
            return self._conflict(
                result,
                InitStatus.RENDERER_ENTRY_EXISTS,
                renderer_entry,
                f"Electron {RENDERER_ENTRY} process already exists",
            )
        await asyncio.to_thread(write_text, renderer_entry, "")
        result.written_files.append(renderer_entry)

        # 5. Webpack configs, never existence-checked
        logger.info(
            "Writing webpack config files @ %s %s", config.main.src, config.renderer.src
        )
        result.written_files.append(
            await self._write_webpack_config(main_dir, config.main, MAIN_WEBPACK_TEMPLATE)
        )
        result.written_files.append(
            await self._write_webpack_config(
                renderer_dir, config.renderer, RENDERER_WEBPACK_TEMPLATE
            )
        )

        result.message = f"Initialized project at {project_root}"
        return result

    # -- Helpers -----------------------------------------------------------

    async def _write_webpack_config(
        self, directory: Path, process: ProcessConfig, template: str
    ) -> Path:
        return await self.renderer.copy_to(template, directory / process.webpack_config)

    @staticmethod
    def _conflict(
        result: InitResult, status: InitStatus, path: Path, message: str
    ) -> InitResult:
        logger.debug("Stopping: %s (%s)", message, status.value)
        result.status = status
        result.conflict = path
        result.message = message
        return result


def _is_empty_dir(path: Path) -> bool:
    return path.is_dir() and not any(path.iterdir())


async def initialize(
    target_path: str | Path = ".",
    *,
    force: bool = False,
    renderer: TemplateRenderer | None = None,
) -> InitResult:
    """Convenience wrapper around ``ProjectInitializer(...).initialize()``."""
    initializer = ProjectInitializer(force=force, renderer=renderer)
    return await initializer.initialize(target_path)
