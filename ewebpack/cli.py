"""Command-line interface for ewebpack.

Usage::

    ewebpack init [path] [--force]
    ewebpack --verbose i ./my-app
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .config import CONFIG_FILENAME, ConfigError
from .initializer import InitResult, ProjectInitializer
from .templates import TEMPLATE_DIR_ENV, TemplateNotFoundError, TemplateRenderer
from .utils import (
    configure_logging,
    logger,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

EXIT_OK = 0
EXIT_CONFLICT = 1
EXIT_CONFIG_ERROR = 2
EXIT_TEMPLATE_ERROR = 3
EXIT_IO_ERROR = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ewebpack",
        usage="%(prog)s <cmd> [args]",
        description="Toolkit for setting up Electron + webpack projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  ewebpack init\n"
            "  ewebpack init ./my-app --force\n"
            "  ewebpack --verbose i ./my-app\n"
        ),
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging; output extra log data to help debug issues.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.set_defaults(handler=default_command)

    commands = parser.add_subparsers(title="commands", dest="command")

    init_parser = commands.add_parser(
        "init",
        aliases=["initialize", "i"],
        help=f"Initialize an {CONFIG_FILENAME} file and the Electron + webpack project structure",
    )
    init_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path or folder to initialize the project in (default: .)",
    )
    init_parser.add_argument(
        "--force", "-f",
        action="store_true",
        default=False,
        help="Overwrite existing files. Dangerous: replaces existing entry scripts.",
    )
    init_parser.add_argument(
        "--template-dir",
        default=os.environ.get(TEMPLATE_DIR_ENV) or None,
        help=f"Directory searched for templates before the bundled ones (env: {TEMPLATE_DIR_ENV})",
    )
    init_parser.set_defaults(handler=init_command)

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def default_command(args: argparse.Namespace) -> int:
    print_warning("You didn't specify a command. Try --help")
    return EXIT_OK


def init_command(args: argparse.Namespace) -> int:
    initializer = ProjectInitializer(
        force=args.force,
        renderer=TemplateRenderer(override_dir=args.template_dir),
    )

    try:
        result = asyncio.run(initializer.initialize(args.path))
    except ConfigError as exc:
        print_error(f"Invalid {CONFIG_FILENAME}: {exc}")
        return EXIT_CONFIG_ERROR
    except TemplateNotFoundError as exc:
        print_error(str(exc))
        return EXIT_TEMPLATE_ERROR
    except OSError as exc:
        print_error(f"File system error: {exc}")
        return EXIT_IO_ERROR

    if not result.ok:
        print_error(f"{result.message}; use --force to overwrite.")
        return EXIT_CONFLICT

    _print_result(result)
    return EXIT_OK


def _print_result(result: InitResult) -> None:
    root = result.project_root
    summary = {
        "Project": str(root),
        CONFIG_FILENAME: "created" if result.config_created else "existing (loaded)",
    }
    for directory in result.created_dirs:
        summary[f"dir {_relative(directory, root)}"] = "ready"
    for path in result.written_files:
        summary[_relative(path, root)] = "written"
    print_summary_table(summary, title="ewebpack init")
    print_success(result.message)


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for the ``ewebpack`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    logger.debug("Arguments: %s", {k: v for k, v in vars(args).items() if k != "handler"})

    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
