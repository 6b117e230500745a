"""
materialize.py

Responsibility: Create the project directory, copy the template into it, and pin the version.

Rules:
- Walk template files in sorted order to ensure deterministic output.
- Copy every file byte-for-byte (with permissions) via `shutil.copy2`.
- The manifest's `devDependencies[<package>]` is the only value that changes.

This module does not know about prompts, git, or CLI parsing.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path

from biome_repro.config import Settings

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


class MaterializeError(RuntimeError):
    pass


def _iter_template_files(template_dir: Path) -> list[Path]:
    """
    Return all files under template_dir, in deterministic lexicographic order
    (relative path ordering).
    """
    files: list[Path] = []
    for root, _dirs, filenames in os.walk(template_dir):
        root_path = Path(root)
        for name in filenames:
            files.append(root_path / name)
    files.sort(key=lambda p: str(p.relative_to(template_dir)).replace(os.sep, "/"))
    return files


def copy_template(template_dir: str | Path, destination_dir: str | Path) -> int:
    """
    Copy a template directory into destination_dir. Returns the number of files copied.
    """
    tpl_dir = Path(template_dir).resolve()
    dst_dir = Path(destination_dir).resolve()

    if not tpl_dir.is_dir():
        raise MaterializeError(f"Template directory not found: {tpl_dir}")

    copied = 0
    for src_path in _iter_template_files(tpl_dir):
        rel = src_path.relative_to(tpl_dir)
        dst_path = dst_dir / rel
        dst_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, dst_path)
        logger.debug("Copied %s", rel)
        copied += 1
    return copied


def dump_manifest(data: dict) -> str:
    """Serialize like `JSON.stringify(data, null, "\\t")`: tabs, no trailing newline."""
    return json.dumps(data, indent="\t", ensure_ascii=False)


def patch_manifest(manifest_path: str | Path, package: str, version: str) -> None:
    """Set `devDependencies[package]` to `version`, leaving everything else as parsed."""
    path = Path(manifest_path)
    if not path.is_file():
        raise MaterializeError(f"Manifest not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise MaterializeError(f"Manifest is not valid UTF-8: {path}") from e
    except json.JSONDecodeError as e:
        raise MaterializeError(f"Manifest is not valid JSON: {path}") from e

    if not isinstance(data, dict):
        raise MaterializeError(f"Manifest must be a JSON object: {path}")
    dev_deps = data.get("devDependencies")
    if not isinstance(dev_deps, dict):
        raise MaterializeError(f"Manifest has no `devDependencies` object: {path}")

    dev_deps[package] = version
    path.write_text(dump_manifest(data), encoding="utf-8", newline="")


def _ensure_target(root: Path, *, overwrite: bool) -> None:
    root.mkdir(parents=True, exist_ok=True)
    if not overwrite and any(root.iterdir()):
        raise MaterializeError(f"Target directory is not empty: {root} (use --overwrite to allow)")


def materialize(
    project_name: str,
    version: str,
    *,
    settings: Settings,
    cwd: str | Path | None = None,
    overwrite: bool = False,
) -> Path:
    """
    Scaffold `project_name` under `cwd` (default: the process cwd) and return its root.

    Nothing is rolled back on failure; files already written stay on disk.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    root = base / project_name

    _ensure_target(root, overwrite=overwrite)
    count = copy_template(settings.template_dir, root)
    logger.debug("Copied %d template files into %s", count, root)

    patch_manifest(root / MANIFEST_NAME, settings.package, version)
    return root
