"""Filesystem locations used by the CLI and report writer.

Environment variable overrides:
  GWBM_CONFIG      JSON configuration file read when no --config is given
  GWBM_OUTPUT_DIR  directory receiving tables, summaries and figures
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


def default_output_dir() -> Path:
    env = os.environ.get("GWBM_OUTPUT_DIR")
    if env:
        return Path(env).expanduser()
    return Path.cwd() / "gwbm_output"


def default_config_path() -> Optional[Path]:
    env = os.environ.get("GWBM_CONFIG")
    if not env:
        return None
    return Path(env).expanduser()


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


__all__ = [
    "default_output_dir",
    "default_config_path",
    "ensure_dir",
]
