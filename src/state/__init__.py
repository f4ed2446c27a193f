"""State: URL-fragment encoding of editor state; markdown export."""
from .url_state import encode_state, encode_text, decode_state, get_initial_state
from .export import export_markdown, DEFAULT_EXPORT_NAME

__all__ = [
    "encode_state",
    "encode_text",
    "decode_state",
    "get_initial_state",
    "export_markdown",
    "DEFAULT_EXPORT_NAME",
]
