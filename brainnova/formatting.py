"""Render the lightweight markup used in responses.

Responses mark emphasis with ``**bold**`` and break lines with ``\\n``.
The engine never emits anything else, so rendering is a pair of
substitutions per target.
"""

from __future__ import annotations

import html
import re

__all__ = ["render", "render_ansi", "render_html", "render_plain"]

_BOLD = re.compile(r"\*\*(.*?)\*\*")

ANSI_BOLD = "\033[1m"
ANSI_RESET = "\033[0m"


def render_plain(text: str) -> str:
    return _BOLD.sub(r"\1", text)


def render_ansi(text: str) -> str:
    return _BOLD.sub(lambda m: f"{ANSI_BOLD}{m.group(1)}{ANSI_RESET}", text)


def render_html(text: str) -> str:
    escaped = html.escape(text, quote=False)
    return _BOLD.sub(r"<b>\1</b>", escaped).replace("\n", "<br>")


def render(text: str, style: str = "plain") -> str:
    """Render ``text`` for ``style`` ("plain", "ansi" or "html")."""
    renderers = {"plain": render_plain, "ansi": render_ansi, "html": render_html}
    renderer = renderers.get(style)
    if renderer is None:
        raise ValueError(f"Unknown render style: {style}")
    return renderer(text)
