"""
Pattern extraction for user input.

Each rule the response engine dispatches on lives here as a named
predicate or extractor, so the grammar can be tested on its own:

    "help" / "reset"                  -> universal commands
    teach: {"topic": "x", ...}        -> structured teach directive
    Subject is Definition             -> implicit definition
    ... yes / ok / save ...           -> confirmation of a pending fact
    search|find|define <query>        -> web query
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

__all__ = [
    "TeachDirective",
    "match_command",
    "parse_teach_directive",
    "extract_definition",
    "is_confirmation",
    "strip_search_verbs",
]

COMMANDS = ("help", "reset")

_TEACH_DIRECTIVE = re.compile(r'^teach:\s*(\{.*\})$', re.IGNORECASE)
_DEFINITION = re.compile(r'^([\w\s]+)\s+(?:is|means)\s+(.+)$', re.IGNORECASE)
_CONFIRMATION = re.compile(r'\b(yes|ok|save)\b', re.IGNORECASE)
_SEARCH_VERBS = re.compile(r'^(?:(?:search|find|define)\b\s*)+', re.IGNORECASE)


@dataclass
class TeachDirective:
    """Outcome of parsing a ``teach:`` line."""
    payload: Optional[Dict[str, Any]] = None  # Parsed JSON object
    error: Optional[str] = None               # "invalid_json" or "missing_fields"

    @property
    def ok(self) -> bool:
        return self.error is None


def match_command(text: str) -> Optional[str]:
    """Return "help" or "reset" when the whole trimmed input is that word."""
    command = text.strip().lower()
    return command if command in COMMANDS else None


def parse_teach_directive(text: str) -> Optional[TeachDirective]:
    """
    Parse ``teach: {json}``.

    Returns:
        None if ``text`` is not a teach directive at all, otherwise a
        TeachDirective carrying either the payload or an error code.
    """
    match = _TEACH_DIRECTIVE.match(text.strip())
    if not match:
        return None

    try:
        payload = json.loads(match.group(1))
    except json.JSONDecodeError:
        return TeachDirective(error="invalid_json")

    if not isinstance(payload, dict):
        return TeachDirective(error="invalid_json")

    topic = payload.get('topic')
    core = payload.get('core')
    if not (isinstance(topic, str) and topic and isinstance(core, str) and core):
        return TeachDirective(error="missing_fields")

    return TeachDirective(payload=payload)


def extract_definition(text: str) -> Optional[Tuple[str, str]]:
    """
    Extract (subject, definition) from "Subject is/means Definition".

    Questions are never definitions, so any '?' disqualifies the text.
    """
    if '?' in text:
        return None

    match = _DEFINITION.match(text.strip())
    if not match:
        return None

    subject = match.group(1).strip()
    definition = match.group(2).strip()
    if not subject or not definition:
        return None
    return subject, definition


def is_confirmation(text: str) -> bool:
    """True if the text contains yes, ok or save as a whole word."""
    return _CONFIRMATION.search(text) is not None


def strip_search_verbs(text: str) -> str:
    """Drop leading search/find/define words: "define rust" -> "rust"."""
    return _SEARCH_VERBS.sub('', text.strip()).strip()
