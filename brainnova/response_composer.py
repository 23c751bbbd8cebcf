"""
Response composition for Brainnova.

The ResponseEngine turns one line of user text into a ComposedResponse:
display text (``**bold**`` markers and newlines are part of the format),
a short uppercase reason tag and a 0-100 confidence.

All per-conversation state (active mode, pending fact awaiting a yes)
lives in a SessionState passed into every call, so independent sessions
can share one engine and one store.

Dispatch order:

    help / reset                       (any mode)
    standard: teach directive -> memory recall -> "X is Y" -> confirmation -> miss
    analytic: memory recall with Logic/Process sections, or no data
    web:      external lookup, auto-saved on success
"""

import logging
from dataclasses import dataclass
from typing import Optional

from brainnova.fact_store import FactStore
from brainnova.facts import Fact
from brainnova.knowledge_augmenter import LookupHit
from brainnova.modes import Mode
from brainnova.pattern_extractor import (
    extract_definition,
    is_confirmation,
    match_command,
    parse_teach_directive,
    strip_search_verbs,
)

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands:\n"
    "• `reset` (Wipe)\n"
    "• `teach: {json}` (Advanced)\n"
    "• `Topic is Definition` (Simple)"
)
DEFAULT_WHY = "Imported via console"
WEB_WHY = "Web Scraped"


@dataclass
class ComposedResponse:
    """What the engine hands to the presentation layer."""
    text: str
    reason: str
    confidence: int


@dataclass
class PendingFact:
    """A taught fact waiting for the user to say yes."""
    topic: str
    core: str


@dataclass
class SessionState:
    """Mutable per-conversation state."""
    mode: Mode = Mode.STANDARD
    pending: Optional[PendingFact] = None


class ResponseEngine:
    """
    Decides how to answer a message and applies any resulting writes.

    Args:
        store: FactStore to recall from and teach into
        lookup: Object with ``lookup(query)`` returning a LookupResult;
            None disables the web mode (every query is a miss)
    """

    def __init__(self, store: FactStore, lookup=None):
        self.store = store
        self.lookup = lookup

    def respond(self, state: SessionState, text: str) -> ComposedResponse:
        command = match_command(text)
        if command == "help":
            return ComposedResponse(HELP_TEXT, "HELP", 100)
        if command == "reset":
            self.store.reset()
            return ComposedResponse("Memory wiped.", "SYSTEM", 100)

        logger.debug(f"Routing '{text}' to {state.mode.value} mode")
        if state.mode is Mode.WEB:
            return self._respond_web(text)
        if state.mode is Mode.ANALYTIC:
            return self._respond_analytic(text)
        return self._respond_standard(state, text)

    def _respond_standard(self, state: SessionState, text: str) -> ComposedResponse:
        # 1. Structured teach directive
        directive = parse_teach_directive(text)
        if directive is not None:
            if directive.error == "invalid_json":
                return ComposedResponse(
                    "Invalid JSON format. Ensure keys are quoted.\nEx: `{\"topic\":\"hi\"}`",
                    "SYNTAX ERROR",
                    0,
                )
            if directive.error == "missing_fields":
                return ComposedResponse(
                    "JSON must contain 'topic' and 'core' keys.", "SYNTAX ERROR", 0
                )

            payload = dict(directive.payload)
            why = payload.get('why')
            if not (isinstance(why, str) and why):
                payload['why'] = DEFAULT_WHY
            fact = Fact.from_dict(payload)
            self.store.save(fact.topic, fact)
            return ComposedResponse(
                f"**Learned:** {fact.topic}\n**Definition:** {fact.core}\n(Structure Saved)",
                "JSON INJECTION",
                100,
            )

        # 2. Memory recall (must run before the "X is Y" check)
        key = self.store.find(text)
        if key is not None:
            fact = self.store.get(key)
            return ComposedResponse(
                f"**{fact.topic or key}**\n{fact.core}", "MEMORY HIT", 100
            )

        # 3. Implicit teaching
        definition = extract_definition(text)
        if definition is not None:
            topic, core = definition
            state.pending = PendingFact(topic=topic, core=core)
            return ComposedResponse(
                f"I don't know **{topic}**. Save as:\n\"{core}\"?", "PATTERN DETECT", 50
            )

        # 4. Confirmation of a pending fact
        if state.pending is not None and is_confirmation(text):
            pending = state.pending
            self.store.save(pending.topic, Fact(topic=pending.topic, core=pending.core))
            state.pending = None
            return ComposedResponse("Saved.", "WRITE", 100)

        return ComposedResponse(
            "Unknown. Use 'teach:' or switch to v6 to search online.", "MISS", 0
        )

    def _respond_analytic(self, text: str) -> ComposedResponse:
        key = self.store.find(text)
        if key is None:
            return ComposedResponse(
                "I need data to analyze. Teach me first.", "NO DATA", 0
            )

        fact = self.store.get(key)
        out = f"**Analysis: {fact.topic or key}**\n{fact.core}"
        if fact.why:
            out += f"\n\n**Logic:** {fact.why}"
        if fact.how:
            out += "\n\n**Process:**\n" + "\n".join(f"• {step}" for step in fact.how)

        return ComposedResponse(out, "DEEP RECALL", 100)

    def _respond_web(self, text: str) -> ComposedResponse:
        query = strip_search_verbs(text)
        result = self.lookup.lookup(query) if self.lookup and query else None

        if not isinstance(result, LookupHit) or not (result.title and result.extract):
            logger.debug(f"Web lookup for '{query}' found nothing: {result}")
            return ComposedResponse("Could not find valid data online.", "404", 0)

        fact = Fact(
            topic=result.title,
            core=result.extract,
            why=WEB_WHY,
            how=[result.source],
        )
        self.store.save(fact.topic, fact)
        return ComposedResponse(
            f"**{result.title}**\n{result.extract}\n\n[Auto-saved to Memory]",
            "WEB FETCH",
            100,
        )
