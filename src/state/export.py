"""
Write the outline text as a markdown document.
"""
from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "breadboard.md"


def export_markdown(text: str, out_path: Path | str) -> Path:
    """Write text unchanged (UTF-8); a directory target gets the default file name."""
    out_path = Path(out_path)
    if out_path.is_dir():
        out_path = out_path / DEFAULT_EXPORT_NAME
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")
    logger.debug("Exported outline to %s", out_path)
    return out_path
