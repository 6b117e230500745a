"""
report.py

Responsibility: Tell the user which commands to run next.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from biome_repro.prompts import PackageManager


def _cd_target(project_name: str) -> str:
    return f'"{project_name}"' if " " in project_name else project_name


def next_steps(
    project_name: str,
    package_manager: PackageManager | str,
    root: str | Path,
    cwd: str | Path,
) -> list[str]:
    manager = PackageManager(package_manager)
    steps: list[str] = []
    if Path(root) != Path(cwd):
        steps.append(f"cd {_cd_target(project_name)}")
    if manager is PackageManager.YARN:
        steps.append(manager.value)
    else:
        steps.append(f"{manager.value} install")
    return steps


def report(
    project_name: str,
    package_manager: PackageManager | str,
    root: str | Path,
    *,
    console: Console,
    cwd: str | Path | None = None,
) -> None:
    base = Path(cwd) if cwd is not None else Path.cwd()
    console.print("\nDone. Now run:\n")
    for step in next_steps(project_name, package_manager, root, base):
        # markup=False: project names may contain square brackets.
        console.print(f"  {step}", style="green", markup=False, highlight=False)
    console.print()
