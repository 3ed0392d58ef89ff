"""ewebpack project configuration.

The ``ewebpack.json`` document describes where the main and renderer process
sources live and which webpack config file each of them uses.  Both sections
are Pydantic v2 models so a loaded document is validated before anything is
written to disk.

Models are frozen.  ``DEFAULT_CONFIG`` is shared by every run and
``merge_config`` always returns a new instance instead of updating it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .utils import load_json, logger, save_json

CONFIG_FILENAME = "ewebpack.json"

SECTIONS: tuple[str, ...] = ("main", "renderer")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class EwebpackError(Exception):
    """Base class for errors raised by ewebpack."""


class ConfigError(EwebpackError):
    """Raised when ``ewebpack.json`` is not valid JSON or has the wrong shape."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ProcessConfig(BaseModel):
    """Settings for one Electron process (main or renderer)."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    src: str = Field(..., description="Source directory, relative to the project root")
    webpack_config: str = Field(
        default="webpack.config.js",
        alias="webpack-config",
        description="Filename of the webpack config written into ``src``",
    )
    webpack_override: bool = Field(
        default=False,
        alias="webpack-override",
        description="Reserved; has no effect yet",
    )


class EwebpackConfig(BaseModel):
    """The full ``ewebpack.json`` document."""

    model_config = ConfigDict(frozen=True, extra="allow")

    main: ProcessConfig = Field(
        default_factory=lambda: ProcessConfig(src="src/main"),
    )
    renderer: ProcessConfig = Field(
        default_factory=lambda: ProcessConfig(src="src/renderer"),
    )

    def to_dict(self) -> dict[str, Any]:
        """Return the document as plain JSON-ready data, using file aliases."""
        return self.model_dump(mode="json", by_alias=True)

    async def save(self, path: Path) -> Path:
        """Persist the document to *path* as 2-space indented JSON."""
        return await save_json(self.to_dict(), path)


DEFAULT_CONFIG = EwebpackConfig()


# ---------------------------------------------------------------------------
# Merging and loading
# ---------------------------------------------------------------------------


def merge_config(
    base: EwebpackConfig,
    overrides: Any,
    *,
    path: Path | None = None,
) -> EwebpackConfig:
    """Layer a loaded document over *base* and return a new config.

    Top-level keys from *overrides* win.  For the ``main`` and ``renderer``
    sections the merge goes one level further, so a document that only sets
    ``main.src`` keeps the remaining defaults.  Unknown keys are preserved.

    Raises:
        ConfigError: If *overrides* is not an object, a section is not an
            object, or a field has the wrong type.
    """
    if not isinstance(overrides, dict):
        raise ConfigError(
            f"expected a JSON object at the top level, got {type(overrides).__name__}",
            path,
        )

    merged = base.to_dict()
    for key, value in overrides.items():
        if key in SECTIONS:
            if not isinstance(value, dict):
                raise ConfigError(
                    f"section '{key}' must be an object, got {type(value).__name__}",
                    path,
                )
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value

    try:
        return EwebpackConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(_describe_validation_error(exc), path) from exc


def load_config(path: str | Path, base: EwebpackConfig = DEFAULT_CONFIG) -> EwebpackConfig:
    """Read ``ewebpack.json`` at *path* and merge it onto *base*.

    Raises:
        ConfigError: If the file is not valid JSON or fails validation.
        OSError: If the file cannot be read.
    """
    config_path = Path(path)
    try:
        data = load_json(config_path)
    except json.JSONDecodeError as exc:
        raise ConfigError(
            f"invalid JSON ({exc.msg} at line {exc.lineno}, column {exc.colno})",
            config_path,
        ) from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"not UTF-8 text ({exc.reason})", config_path) from exc

    logger.debug("%s data: %s", CONFIG_FILENAME, data)
    return merge_config(base, data, path=config_path)


async def resolve_config(
    project_root: Path,
    base: EwebpackConfig = DEFAULT_CONFIG,
) -> tuple[EwebpackConfig, bool]:
    """Load the project's config, or write *base* if there is none.

    An existing file is read and never rewritten.

    Returns:
        ``(config, created)`` where *created* is ``True`` when the file was
        written by this call.
    """
    config_path = project_root / CONFIG_FILENAME

    if config_path.exists():
        logger.warning(
            "%s exists (using this configuration): delete this file to start over.",
            CONFIG_FILENAME,
        )
        return load_config(config_path, base), False

    logger.debug("%s does not exist; writing file.", CONFIG_FILENAME)
    await base.save(config_path)
    logger.debug("File written: %s", config_path)
    return base, True


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error["loc"])
        parts.append(f"{location}: {error['msg']}")
    return "invalid configuration; " + "; ".join(parts)
