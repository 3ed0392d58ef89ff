"""ewebpack -- scaffolding for Electron + webpack projects.

Quick usage::

    import asyncio
    from ewebpack import initialize

    result = asyncio.run(initialize("./my-app"))
    if not result.ok:
        print(result.message)
"""

__version__ = "0.1.0"

from .config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    ConfigError,
    EwebpackConfig,
    EwebpackError,
    ProcessConfig,
    load_config,
    merge_config,
)
from .initializer import InitResult, InitStatus, ProjectInitializer, initialize
from .templates import TemplateNotFoundError, TemplateRenderer

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_CONFIG",
    "EwebpackConfig",
    "EwebpackError",
    "InitResult",
    "InitStatus",
    "ProcessConfig",
    "ProjectInitializer",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "initialize",
    "load_config",
    "merge_config",
]
