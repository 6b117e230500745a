"""
prompts.py

Responsibility: Ask the user the four scaffolding questions and return them as `Answers`.

The form is described as plain `Field` records and rendered with questionary
by `ask_form`.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Sequence

import questionary


class InputAborted(RuntimeError):
    pass


class PackageManager(str, Enum):
    NPM = "npm"
    PNPM = "pnpm"
    BUN = "bun"
    YARN = "yarn"


@dataclass(frozen=True)
class Answers:
    project_name: str
    version: str
    package_manager: PackageManager
    publish_repo: bool = False


@dataclass(frozen=True)
class Field:
    """One question of the form. `kind` is one of "text", "select", "autocomplete"."""

    name: str
    kind: str
    message: str
    choices: tuple[tuple[str, Any], ...] = ()
    default: Any = None


FIELD_NAMES = ("project_name", "version", "package_manager", "publish_repo")


def default_project_name(prefix: str, now: float | None = None) -> str:
    ts = time.time() if now is None else now
    return f"{prefix}-{int(ts * 1000)}"


def default_version_index(catalog: Sequence[str] | None, latest: str | None) -> int:
    if not catalog or latest is None:
        return 0
    try:
        return list(catalog).index(latest)
    except ValueError:
        return 0


def form_fields(
    catalog: Sequence[str] | None,
    latest: str | None,
    *,
    name_prefix: str,
    now: float | None = None,
) -> list[Field]:
    if catalog:
        index = default_version_index(catalog, latest)
        version = Field(
            name="version",
            kind="autocomplete",
            message="Biome version:",
            choices=tuple((v, v) for v in catalog),
            default=catalog[index],
        )
    else:
        version = Field(name="version", kind="text", message="Biome version:")

    return [
        Field(
            name="project_name",
            kind="text",
            message="Project name:",
            default=default_project_name(name_prefix, now),
        ),
        version,
        Field(
            name="package_manager",
            kind="select",
            message="Package manager:",
            choices=tuple((pm.value, pm) for pm in PackageManager),
        ),
        Field(
            name="publish_repo",
            kind="select",
            message="Publish repository?",
            choices=(("yes", True), ("no", False)),
        ),
    ]


def _not_blank(value: str) -> bool | str:
    return bool(value.strip()) or "A value is required"


def _one_of(values: Iterable[str]) -> Callable[[str], bool | str]:
    allowed = set(values)

    def validate(value: str) -> bool | str:
        return value in allowed or "Pick a version from the list"

    return validate


def _to_question(field: Field) -> questionary.Question:
    if field.kind == "text":
        return questionary.text(field.message, default=field.default or "", validate=_not_blank)
    if field.kind == "autocomplete":
        return questionary.autocomplete(
            field.message,
            choices=[title for title, _value in field.choices],
            default=field.default or "",
            match_middle=True,
            validate=_one_of(value for _title, value in field.choices),
        )
    if field.kind == "select":
        return questionary.select(
            field.message,
            choices=[questionary.Choice(title=title, value=value) for title, value in field.choices],
        )
    raise ValueError(f"Unknown field kind: {field.kind}")


def ask_form(fields: Sequence[Field]) -> dict[str, Any]:
    """Render `fields` as one questionary form; returns {} when cancelled."""
    return questionary.form(**{f.name: _to_question(f) for f in fields}).ask()


def collect(
    catalog: Sequence[str] | None,
    latest: str | None,
    *,
    name_prefix: str,
    ask: Callable[[Sequence[Field]], dict[str, Any]] = ask_form,
) -> Answers:
    """
    Present the form and return the answers.

    Raises `InputAborted` if the user cancels before every field is answered.
    """
    result = ask(form_fields(catalog, latest, name_prefix=name_prefix))

    if not result or any(result.get(name) is None for name in FIELD_NAMES):
        raise InputAborted("Operation cancelled")

    return Answers(
        project_name=str(result["project_name"]).strip(),
        version=str(result["version"]).strip(),
        package_manager=PackageManager(result["package_manager"]),
        publish_repo=bool(result["publish_repo"]),
    )
