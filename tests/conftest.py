"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import pytest

LOGIN_OUTLINE = (
    "Login Page\n"
    "- Username.input\n"
    "- Login.button => Dashboard\n"
    "\n"
    "Dashboard\n"
    "- Logout.button => Login Page"
)


@pytest.fixture
def login_outline() -> str:
    """Two places linking to each other."""
    return LOGIN_OUTLINE


@pytest.fixture
def login_doc():
    from src.outline import parse_outline

    return parse_outline(LOGIN_OUTLINE)


@pytest.fixture
def login_graph(login_doc):
    from src.layout import build_graph, LIGHT_THEME

    return build_graph(login_doc, LIGHT_THEME)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Avoid loading project .env in tests unless explicitly set."""
    for key in ("BREADBOARD_OUTPUT_DIR", "BREADBOARD_THEME", "BREADBOARD_EXPORT_NAME"):
        monkeypatch.delenv(key, raising=False)
