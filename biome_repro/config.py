"""
config.py

Responsibility: Load the optional YAML configuration file into a typed `Settings`.

Lookup order:
- an explicit path (`--config`)
- the `BIOME_REPRO_CONFIG` environment variable
- `~/.config/biome-repro/config.yaml` if it exists

When nothing is found the built-in defaults are used. The rest of the tool
should treat the returned `Settings` as the single source of truth.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

ENV_VAR = "BIOME_REPRO_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/biome-repro/config.yaml")
BUNDLED_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    """Values that control where versions come from and what gets scaffolded."""

    registry_url: str = "https://registry.npmjs.org"
    package: str = "@biomejs/biome"
    template: str = "biome"
    templates_dir: Path = BUNDLED_TEMPLATES_DIR
    name_prefix: str = "biome-repro"
    commit_message: str = "Initial commit"
    timeout: float = 10.0

    @property
    def template_dir(self) -> Path:
        return self.templates_dir / self.template


def _find_config(path: str | Path | None) -> Path | None:
    if path is not None:
        explicit = Path(path).expanduser()
        if not explicit.exists():
            raise ConfigError(f"Config file does not exist: {explicit}")
        return explicit

    from_env = os.environ.get(ENV_VAR)
    if from_env:
        env_path = Path(from_env).expanduser()
        if not env_path.exists():
            raise ConfigError(f"Config file from ${ENV_VAR} does not exist: {env_path}")
        return env_path

    default = DEFAULT_CONFIG_PATH.expanduser()
    return default if default.exists() else None


def _coerce(data: dict[str, Any], source: Path) -> Settings:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown keys in {source}: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key, raw in data.items():
        if raw is None:
            continue
        if key == "templates_dir":
            # Relative paths are resolved against the config file, not the cwd.
            candidate = Path(str(raw)).expanduser()
            if not candidate.is_absolute():
                candidate = source.parent / candidate
            values[key] = candidate.resolve()
        elif key == "timeout":
            try:
                timeout = float(raw)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"`timeout` must be a number, got {raw!r}") from e
            if timeout <= 0:
                raise ConfigError("`timeout` must be positive.")
            values[key] = timeout
        else:
            text = str(raw).strip()
            if not text:
                raise ConfigError(f"`{key}` must not be empty.")
            values[key] = text

    if "registry_url" in values:
        values["registry_url"] = values["registry_url"].rstrip("/")

    return Settings(**values)


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load `Settings` from YAML, falling back to defaults when no file is found.

    Recognised keys mirror the `Settings` fields:
    - registry_url, package, template, templates_dir
    - name_prefix, commit_message, timeout
    """
    config_path = _find_config(path)
    if config_path is None:
        logger.debug("No config file found; using defaults")
        return Settings()

    logger.debug("Loading config from %s", config_path)
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {config_path}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")
    return _coerce(data, config_path)


def with_overrides(
    settings: Settings,
    *,
    template: str | None = None,
    templates_dir: str | Path | None = None,
) -> Settings:
    """Apply CLI overrides on top of loaded settings."""
    changes: dict[str, Any] = {}
    if template:
        changes["template"] = template
    if templates_dir:
        changes["templates_dir"] = Path(templates_dir).expanduser().resolve()
    return replace(settings, **changes) if changes else settings
