"""
versions.py

Responsibility: Look up published versions of the configured package on the npm registry.

A failed lookup is not an error for the caller: `fetch_catalog` returns
`(None, None)` and the prompt falls back to a free-text version field.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests
from rich.console import Console

from biome_repro.config import Settings

logger = logging.getLogger(__name__)

Catalog = tuple[str, ...]


def _package_url(settings: Settings) -> str:
    # Scoped names keep their leading "@" but the slash must be escaped.
    return f"{settings.registry_url}/{quote(settings.package, safe='@')}"


def _parse_payload(data: Any) -> tuple[Catalog | None, str | None]:
    if not isinstance(data, dict):
        raise ValueError("registry response is not an object")

    versions = data.get("versions") or {}
    if not isinstance(versions, dict):
        raise ValueError("`versions` is not an object")

    # The registry lists versions in publication order; newest first is easier to scan.
    catalog = tuple(reversed([str(v) for v in versions]))

    tags = data.get("dist-tags") or {}
    latest = tags.get("latest") if isinstance(tags, dict) else None

    return (catalog or None), (str(latest) if latest else None)


def fetch_catalog(
    settings: Settings,
    *,
    session: requests.Session | None = None,
) -> tuple[Catalog | None, str | None]:
    """
    Return `(catalog, latest)` for `settings.package`.

    Either value may be None. Network errors, HTTP errors and malformed
    payloads all collapse into `(None, None)`.
    """
    url = _package_url(settings)
    http = session or requests.Session()
    logger.debug("Fetching versions from %s", url)
    try:
        r = http.get(url, headers={"Accept": "application/json"}, timeout=settings.timeout)
        r.raise_for_status()
        catalog, latest = _parse_payload(r.json())
    except (requests.RequestException, ValueError) as e:
        logger.info("Version lookup failed for %s: %s", settings.package, e)
        return None, None
    finally:
        if session is None:
            http.close()

    logger.debug("Fetched %d versions, latest=%s", len(catalog or ()), latest)
    return catalog, latest


def resolve_versions(
    settings: Settings,
    console: Console,
    *,
    session: requests.Session | None = None,
) -> tuple[Catalog | None, str | None]:
    """`fetch_catalog` with a progress spinner on the terminal."""
    with console.status("Fetching versions"):
        catalog, latest = fetch_catalog(settings, session=session)

    if catalog is None:
        console.print("[yellow]![/yellow] Could not fetch versions, enter one manually")
    else:
        console.print("[green]✔[/green] Fetched versions")
    return catalog, latest
