"""
cli.py

Responsibility: CLI entrypoint for create-biome-repro.

High-level flow (single command, strictly in order):
1) Fetch the Biome version catalog (degrades to free-text input when unavailable)
2) Ask the user for name, version, package manager, and whether to publish
3) Create the project directory from the template and pin the version
4) (Optional) git init + commit, then `gh repo create`
5) Print the next commands to run

This module should orchestrate behavior but keep concerns isolated:
- Configuration: `config.py`
- Version lookup: `versions.py`
- Prompts: `prompts.py`
- Filesystem: `materialize.py`
- git / gh: `publisher.py`
- Output: `report.py`
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from biome_repro import __version__
from biome_repro.config import ConfigError, load_settings, with_overrides
from biome_repro.materialize import MaterializeError, materialize
from biome_repro.prompts import InputAborted, collect
from biome_repro.publisher import publish
from biome_repro.report import report
from biome_repro.versions import resolve_versions

logger = logging.getLogger("biome_repro")


def _configure_logging(verbose: bool, console: Console) -> None:
    handler = RichHandler(console=console, show_time=False, show_path=False)
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def create_cmd(args: argparse.Namespace, *, console: Console) -> int:
    settings = with_overrides(
        load_settings(args.config),
        template=args.template,
        templates_dir=args.templates_dir,
    )

    catalog, latest = resolve_versions(settings, console)
    answers = collect(catalog, latest, name_prefix=settings.name_prefix)

    cwd = Path.cwd()
    root = cwd / answers.project_name
    console.print(f"\nScaffolding project in {root}...", markup=False, highlight=False)
    root = materialize(
        answers.project_name,
        answers.version,
        settings=settings,
        cwd=cwd,
        overwrite=bool(args.overwrite),
    )

    publish(root, answers.publish_repo, settings=settings, console=console)

    report(answers.project_name, answers.package_manager, root, console=console, cwd=cwd)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="create-biome-repro",
        description="Scaffold a minimal project for reproducing a Biome issue",
    )
    p.add_argument("--config", default=None, help="Path to a YAML config file (or set env BIOME_REPRO_CONFIG)")
    p.add_argument("--template", default=None, help="Template name (overrides config)")
    p.add_argument("--templates-dir", default=None, help="Directory containing templates (overrides config)")
    p.add_argument("--overwrite", action="store_true", help="Allow scaffolding into a non-empty directory")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    console = Console()
    err_console = Console(stderr=True)
    _configure_logging(bool(args.verbose), err_console)

    try:
        return create_cmd(args, console=console)
    except (InputAborted, ConfigError, MaterializeError, OSError) as e:
        logger.debug("Scaffolding failed", exc_info=True)
        err_console.print(f"[red]✖[/red] {escape(str(e))}", highlight=False)
        return 1
    except KeyboardInterrupt:
        err_console.print("\n[red]✖[/red] Interrupted")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
