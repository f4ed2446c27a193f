"""Config: load .env, expose BREADBOARD_OUTPUT_DIR, BREADBOARD_THEME, BREADBOARD_EXPORT_NAME."""
from .config import (
    load_env,
    get_output_dir,
    get_theme_name,
    get_export_name,
)

__all__ = [
    "load_env",
    "get_output_dir",
    "get_theme_name",
    "get_export_name",
]
