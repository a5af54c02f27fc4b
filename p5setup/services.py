"""Service functions for wiring a library version into a sketch project.

These functions encapsulate the setup workflow so it can be unit tested
with in-memory collaborators and reused from the command line. They
handle listing versions, cleaning up a previous local copy, downloading
the library and its type definitions, reconciling the ``<script>``
reference in ``index.html`` and recording the result in the project
configuration file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from .config import SetupSettings, load_settings
from .engine.patterns import classify_reference
from .engine.reconcile import reconcile
from .engine.types import DeliveryMode, LibraryDescriptor, ReconciliationOutcome
from .engine.urls import download_url, types_url
from .errors import ConfigurationError, SetupCancelled, VersionFetchError
from .project import ConfigManager, ProjectConfig
from .prompts import CHANGE_VERSION_PROMPT, Prompter
from .storage import Storage
from .versions import VersionFetcher

logger = logging.getLogger(__name__)

LATEST = "latest"


@dataclass(frozen=True)
class SetupResult:
    """Summary of a completed (or deliberately skipped) setup run."""

    config: Optional[ProjectConfig]
    changed: bool
    outcome: Optional[ReconciliationOutcome] = None
    type_defs_version: Optional[str] = None


def _answer(prompter: Prompter, value: Any) -> Any:
    """Return ``value`` unless it signals cancellation."""

    if prompter.is_cancel(value):
        prompter.cancel("Setup cancelled")
        raise SetupCancelled("Setup cancelled")
    return value


def fetch_versions(fetcher: VersionFetcher, library: LibraryDescriptor) -> List[str]:
    """Return available versions of ``library``, logging a short preview."""

    versions = fetcher.get_versions(library.package)
    logger.info("Available %s versions: %s", library.package, ", ".join(versions[:10]))
    logger.info("Total versions available: %d", len(versions))
    return versions


def cleanup_local_copy(
    storage: Storage,
    prompter: Prompter,
    library: LibraryDescriptor,
    *,
    dry_run: bool = False,
) -> List[str]:
    """Offer to delete the local library copy and, once empty, its directory.

    Returns the paths that were deleted (or would be, in a dry run).
    """

    local_dir = library.local_dir
    artifacts = [f"{local_dir}/{library.filename(minified)}" for minified in (False, True)]
    listed = " / ".join(f"`{path}`" for path in artifacts)
    delete = _answer(
        prompter,
        prompter.confirm(f"You are switching from local to CDN. Delete the local file {listed}?"),
    )
    if not delete:
        return []

    removed: List[str] = []
    present = [path for path in artifacts if storage.exists(path)]
    if not present:
        logger.info("No local %s found to delete.", listed)
    for path in present:
        if dry_run:
            logger.info("Would delete %s", path)
            removed.append(path)
        elif storage.delete_file(path):
            logger.info("Deleted local file %s", path)
            removed.append(path)
        else:
            logger.warning("Could not delete %s", path)

    remaining = [name for name in storage.list_dir(local_dir) if f"{local_dir}/{name}" not in removed]
    if remaining or not storage.exists(local_dir):
        return removed

    delete_dir = _answer(
        prompter,
        prompter.confirm(f"The `{local_dir}` folder is empty. Delete the `{local_dir}` folder as well?"),
    )
    if delete_dir:
        if dry_run:
            logger.info("Would delete %s/", local_dir)
            removed.append(local_dir)
        elif storage.delete_dir(local_dir):
            logger.info("Deleted %s folder", local_dir)
            removed.append(local_dir)
        else:
            logger.warning("Could not delete %s folder", local_dir)
    return removed


def download_library(
    storage: Storage,
    fetcher: VersionFetcher,
    version: str,
    target: str,
    library: LibraryDescriptor,
    *,
    dry_run: bool = False,
) -> str:
    """Download ``version`` of the library into ``target`` within the project.

    The minified or plain artifact is chosen to match the file name of
    ``target``, so the copy on disk is the one the document references.
    """

    match = classify_reference(target, library)
    minified = bool(match and match.minified)
    url = download_url(version, minified, library)
    if dry_run:
        logger.info("Would download %s to %s", url, target)
        return url

    result = fetcher.download(url)
    if not result.ok:
        raise VersionFetchError(f"Could not download {url} (HTTP {result.status_code})")
    storage.create_dir(library.local_dir)
    storage.write_bytes(target, result.content)
    logger.info("Downloaded %s %s to %s", library.package, version, target)
    return url


def download_types(
    storage: Storage,
    fetcher: VersionFetcher,
    version: str,
    settings: SetupSettings,
    *,
    dry_run: bool = False,
) -> str:
    """Download type definitions matching ``version``, falling back to the latest.

    Parameters
    ----------
    storage:
        Project storage receiving the definitions file.
    fetcher:
        Source of downloads and the latest-version lookup.
    version:
        Library version whose definitions are preferred.
    settings:
        Settings naming the types package and target file.
    dry_run:
        When ``True`` nothing is downloaded or written.

    Returns
    -------
    str
        The version of the type definitions that was written.
    """

    library = settings.library
    types_file = settings.get("types_file")
    if dry_run:
        logger.info("Would download %s to %s", types_url(version, library), types_file)
        return version

    type_defs_version = version
    result = fetcher.download(types_url(version, library))
    if not result.ok:
        logger.info("Type definitions for version %s not found, using latest...", version)
        type_defs_version = fetcher.get_latest(library.types_package)
        result = fetcher.download(types_url(type_defs_version, library))
        if not result.ok:
            raise VersionFetchError(
                f"Could not download type definitions {library.types_package}@{type_defs_version}"
            )

    storage.write_bytes(types_file, result.content)
    logger.info("Downloaded type definitions (%s) to %s", type_defs_version, types_file)
    return type_defs_version


def reconcile_html(
    storage: Storage,
    version: str,
    mode: DeliveryMode,
    settings: SetupSettings,
) -> ReconciliationOutcome:
    """Read the project's HTML file and reconcile its library reference in memory."""

    html_file = settings.get("html_file")
    if not storage.exists(html_file):
        raise ConfigurationError(f"{html_file} not found in the project directory")
    return reconcile(storage.read_text(html_file), version, mode, settings.library)


def write_html(
    storage: Storage,
    outcome: ReconciliationOutcome,
    version: str,
    mode: DeliveryMode,
    settings: SetupSettings,
    *,
    dry_run: bool = False,
) -> bool:
    """Persist a reconciled document. Returns ``True`` when the file changed."""

    html_file = settings.get("html_file")
    if not outcome.changed:
        logger.warning("Could not update %s: no <script>, marker or <head> found", html_file)
        return False
    if dry_run:
        logger.info("Would update %s (%s): %s", html_file, outcome.strategy.value, outcome.reference)
        return True
    storage.write_text(html_file, outcome.document)
    logger.info("Updated %s with %s %s (%s mode)", html_file, settings.library.package, version, mode.value)
    logger.info("  Method: %s", outcome.strategy.value)
    return True


def run_setup(
    storage: Storage,
    fetcher: VersionFetcher,
    prompter: Prompter,
    settings: SetupSettings | None = None,
    *,
    dry_run: bool = False,
) -> SetupResult:
    """Run the interactive setup against one project directory.

    The sequence mirrors what a person does by hand: inspect the current
    configuration, choose a version and a delivery mode, tidy up a local
    copy that is no longer needed, fetch files, rewrite ``index.html`` and
    record the choice.

    Raises
    ------
    SetupCancelled
        When any prompt is cancelled.
    """

    settings = settings or load_settings(None)
    library = settings.library
    config_manager = ConfigManager(storage, settings.get("config_file"))

    prompter.intro(f"{library.package} Project Setup")

    config = config_manager.load()
    if config is not None:
        prompter.note(
            f"Current: {library.package} {config.version} ({config.mode.value} mode)",
            "Existing Configuration",
        )
        if not _answer(prompter, prompter.confirm_change(CHANGE_VERSION_PROMPT)):
            prompter.outro("Keeping current configuration.")
            return SetupResult(config=config, changed=False)

    versions = fetch_versions(fetcher, library)
    version = str(_answer(prompter, prompter.select_version(versions, settings.get("version_choices", 15))))
    try:
        mode = DeliveryMode(_answer(prompter, prompter.select_mode()))
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    if version == LATEST:
        version = fetcher.get_latest(library.package)

    if config is not None and config.mode is DeliveryMode.LOCAL and mode is not DeliveryMode.LOCAL:
        cleanup_local_copy(storage, prompter, library, dry_run=dry_run)

    outcome = reconcile_html(storage, version, mode, settings)

    if mode is DeliveryMode.LOCAL:
        target = outcome.reference or f"{library.local_dir}/{library.filename(False)}"
        download_library(storage, fetcher, version, target, library, dry_run=dry_run)

    type_defs_version = download_types(storage, fetcher, version, settings, dry_run=dry_run)
    write_html(storage, outcome, version, mode, settings, dry_run=dry_run)

    if dry_run:
        saved = ProjectConfig(version=version, mode=mode, type_defs_version=type_defs_version)
        logger.info("Would save configuration to %s", config_manager.config_path)
    else:
        saved = config_manager.save(version, mode, type_defs_version)
        logger.info("Configuration saved to %s", config_manager.config_path)

    prompter.outro('Setup complete! Run "npm run serve" to start coding.')
    return SetupResult(
        config=saved,
        changed=outcome.changed,
        outcome=outcome,
        type_defs_version=type_defs_version,
    )
