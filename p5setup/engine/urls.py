"""Synthesis of canonical script references."""

from __future__ import annotations

from typing import Dict, Optional

from .types import (
    DEFAULT_LIBRARY,
    DEFAULT_PROVIDER,
    DeliveryMode,
    LibraryDescriptor,
    Preferences,
    Provider,
)

CDN_TEMPLATES: Dict[Provider, str] = {
    Provider.JSDELIVR: "https://cdn.jsdelivr.net/npm/{package}@{version}/{dist_dir}/{file}",
    Provider.CDNJS: "https://cdnjs.cloudflare.com/ajax/libs/{cdnjs_name}/{version}/{file}",
    Provider.UNPKG: "https://unpkg.com/{package}@{version}/{dist_dir}/{file}",
}

LOCAL_TEMPLATE = "{local_dir}/{file}"


def build_script_url(
    version: str,
    mode: DeliveryMode | str,
    preferences: Optional[Preferences] = None,
    library: LibraryDescriptor = DEFAULT_LIBRARY,
) -> str:
    """Return the reference for ``version`` delivered via ``mode``.

    Local references never embed the version; the version of a local copy
    is only tracked in the project configuration record. CDN references
    use the preferred provider, or the canonical one when no provider
    preference exists or the preference names the local directory.
    """

    prefs = preferences or Preferences()
    file = library.filename(prefs.minified)

    if DeliveryMode(mode) is DeliveryMode.LOCAL:
        return LOCAL_TEMPLATE.format(local_dir=library.local_dir, file=file)

    provider = prefs.provider if prefs.provider in CDN_TEMPLATES else DEFAULT_PROVIDER
    return CDN_TEMPLATES[provider].format(
        package=library.package,
        cdnjs_name=library.cdnjs_name,
        dist_dir=library.dist_dir,
        version=version,
        file=file,
    )


def download_url(version: str, minified: bool = False, library: LibraryDescriptor = DEFAULT_LIBRARY) -> str:
    """Return the canonical CDN location used to fetch a local copy."""

    return build_script_url(version, DeliveryMode.CDN, Preferences(minified=minified), library)


def types_url(version: str, library: LibraryDescriptor = DEFAULT_LIBRARY) -> str:
    """Return the CDN location of the type definitions for ``version``."""

    return f"https://cdn.jsdelivr.net/npm/{library.types_package}@{version}/index.d.ts"
