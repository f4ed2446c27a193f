"""
Load .env from project root; expose BREADBOARD_OUTPUT_DIR, BREADBOARD_THEME, BREADBOARD_EXPORT_NAME.
Call load_env() before using in main or other modules.
"""
from __future__ import annotations

import os
from pathlib import Path

THEME_NAMES = ("light", "dark")


def _project_root() -> Path:
    """Project root (directory containing src/)."""
    p = Path(__file__).resolve()
    # src/config/config.py -> two levels up
    for _ in range(3):
        p = p.parent
        if (p / "src").is_dir():
            return p
    return Path.cwd()


def load_env() -> None:
    """Load env vars from project root .env if present; existing variables win."""
    root = _project_root()
    env_file = root / ".env"
    if not env_file.is_file():
        return
    for line in env_file.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, _, v = line.partition("=")
        k, v = k.strip(), v.strip().strip("'\"")
        if k and v:
            os.environ.setdefault(k, v)


def get_output_dir() -> Path:
    """Output root; default <project_root>/output."""
    load_env()
    out = os.environ.get("BREADBOARD_OUTPUT_DIR")
    if out:
        return Path(out)
    return _project_root() / "output"


def get_theme_name() -> str:
    """'light' (default) or 'dark'; unknown values fall back to light."""
    load_env()
    name = os.environ.get("BREADBOARD_THEME", "light").strip().lower()
    return name if name in THEME_NAMES else "light"


def get_export_name() -> str:
    """File name of the markdown export."""
    load_env()
    return os.environ.get("BREADBOARD_EXPORT_NAME") or "breadboard.md"
