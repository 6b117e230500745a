from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from biome_repro.config import Settings


@pytest.fixture()
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def template_dir(tmp_path: Path) -> Path:
    """A small template with a manifest, a nested file and a binary file."""
    tpl = tmp_path / "templates" / "demo"
    (tpl / "src").mkdir(parents=True)
    (tpl / "package.json").write_text(
        '{\n\t"name": "demo",\n\t"private": true,\n\t"devDependencies": {\n\t\t"@biomejs/biome": "1.0.0",\n\t\t"typescript": "5.0.0"\n\t},\n\t"zeta": "ünïcode"\n}',
        encoding="utf-8",
    )
    (tpl / "src" / "index.ts").write_text("export const x = 1;\r\n", encoding="utf-8", newline="")
    (tpl / "logo.bin").write_bytes(bytes(range(256)))
    return tpl
