"""Command line interface for the p5setup tool."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from p5setup.config import load_settings
from p5setup.engine.types import DeliveryMode, LibraryDescriptor
from p5setup.errors import ConfigurationError, SetupCancelled
from p5setup.prompts import ConsolePrompter, PresetPrompter, Prompter
from p5setup.services import run_setup
from p5setup.storage import FileStorage
from p5setup.versions import JsDelivrVersionFetcher

from . import settings as tool_settings

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="p5setup",
        description="Configure the library version and delivery mode of a sketch project",
    )
    parser.add_argument(
        "--project-dir",
        type=Path,
        help="Directory containing index.html (default: settings project_dir)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=tool_settings.SETTINGS_FILE,
        help="YAML settings file (default: %(default)s)",
    )
    parser.add_argument("--version", dest="lib_version", help="Library version, or 'latest'")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in DeliveryMode],
        help="Delivery mode",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Answer yes to confirmations in non-interactive runs",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report writes, deletions and downloads without performing them",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=tool_settings.log_level,
        help="Logging level (default: %(default)s)",
    )
    args = parser.parse_args(list(argv))
    if (args.lib_version is None) != (args.mode is None):
        parser.error("--version and --mode must be given together")
    return args


def _build_prompter(args: argparse.Namespace, library: LibraryDescriptor) -> Prompter:
    if args.lib_version is not None:
        return PresetPrompter(args.lib_version, args.mode, assume_yes=args.yes)
    return ConsolePrompter(package=library.package, local_dir=library.local_dir)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point. Returns the process exit status."""

    args = _parse_args(sys.argv[1:] if argv is None else argv)
    try:
        tool_settings.configure_logging(args.log_level)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        settings = load_settings(args.settings)
        project_dir = args.project_dir or tool_settings.PROJECT_DIR or settings.project_dir
        library = settings.library
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    storage = FileStorage(tool_settings.BASE_DIR / project_dir)
    prompter = _build_prompter(args, library)

    try:
        with JsDelivrVersionFetcher(
            library.package,
            base_url=settings.get("api_base_url"),
            timeout=float(settings.get("http_timeout", 15)),
        ) as fetcher:
            run_setup(storage, fetcher, prompter, settings, dry_run=args.dry_run)
    except SetupCancelled:
        return 0
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except Exception as e:  # noqa: BLE001
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
