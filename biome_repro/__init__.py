"""
biome_repro package

This package implements create-biome-repro, an interactive scaffolder for
minimal Biome reproduction projects.

Key responsibilities are split across modules:
- `config.py`: optional YAML configuration -> `Settings`
- `versions.py`: npm registry lookup of available Biome versions
- `prompts.py`: the interactive questionary form -> `Answers`
- `materialize.py`: template copying and `package.json` version pinning
- `publisher.py`: git init/commit and `gh repo create` via subprocesses
- `report.py`: the "next steps" output
- `cli.py`: CLI entrypoint and orchestration (versions -> prompts -> files -> git -> report)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
