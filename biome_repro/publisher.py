"""
publisher.py

Responsibility: Optionally commit the new project to git and publish it with the GitHub CLI.

Every subprocess gets an explicit `cwd`; the process working directory is never
changed. Failures here are reported as warnings and never abort the run: the
scaffolded project is already on disk.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable

from rich.console import Console

from biome_repro.config import Settings

logger = logging.getLogger(__name__)

GH_INSTALL_URL = "https://cli.github.com"


class CommandError(RuntimeError):
    pass


Runner = Callable[..., None]


def run_command(cmd: list[str], *, cwd: str | Path | None = None, stream: bool = False) -> None:
    """
    Run a subprocess command, raising a CommandError on failure.

    With `stream=True` output goes straight to the terminal instead of being captured.
    """
    logger.debug("Running %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        if stream:
            subprocess.run(cmd, cwd=cwd, check=True)
        else:
            subprocess.run(cmd, cwd=cwd, check=True, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)
    except FileNotFoundError as e:
        raise CommandError(f"Command not found: {cmd[0]}") from e
    except OSError as e:
        raise CommandError(f"Could not run {cmd[0]}: {e}") from e
    except subprocess.CalledProcessError as e:
        output = f"\n\n{e.stdout}" if e.stdout else ""
        raise CommandError(f"Command failed ({e.returncode}): {' '.join(cmd)}{output}") from e


def gh_available(*, runner: Runner = run_command, cwd: str | Path | None = None) -> bool:
    """Return True if the GitHub CLI can be invoked."""
    try:
        runner(["gh", "--version"], cwd=cwd)
    except CommandError:
        return False
    return True


def _git_init_commit(root: Path, message: str, runner: Runner) -> None:
    runner(["git", "init"], cwd=root)
    runner(["git", "add", "-A"], cwd=root)
    runner(["git", "commit", "-m", message], cwd=root)


def _gh_repo_create(root: Path, runner: Runner) -> None:
    runner(
        [
            "gh",
            "repo",
            "create",
            "--public",
            "--source=.",
            "--disable-wiki",
            "--disable-issues",
            "--push",
        ],
        cwd=root,
        stream=True,
    )


def publish(
    root: str | Path,
    should_publish: bool,
    *,
    settings: Settings,
    console: Console,
    runner: Runner = run_command,
) -> bool:
    """
    Commit `root` and, if `gh` is installed, create a public GitHub repo from it.

    Returns True only when the remote repository was created.
    """
    if not should_publish:
        return False

    root_path = Path(root)
    try:
        _git_init_commit(root_path, settings.commit_message, runner)
        console.print("[green]✔[/green] Created initial commit")

        if not gh_available(runner=runner, cwd=root_path):
            console.print(
                f"[yellow]![/yellow] GitHub CLI not found; install it from {GH_INSTALL_URL} to publish the repository"
            )
            return False

        _gh_repo_create(root_path, runner)
    except CommandError as e:
        logger.debug("Publishing failed", exc_info=True)
        console.print(f"[yellow]![/yellow] Could not publish repository: {e}")
        return False

    console.print("[green]✔[/green] Published repository")
    return True
