"""
Behaviour modes.

- standard: recall, structured teaching, "X is Y" teaching with confirmation
- analytic: recall only, with rationale and process steps
- web:      look the query up online and remember the answer
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Mode(Enum):
    """Response strategy selector, in toggle order"""
    STANDARD = "standard"
    ANALYTIC = "analytic"
    WEB = "web"


@dataclass(frozen=True)
class ModeInfo:
    """How a mode is presented to the user"""
    id: str
    name: str
    color: str


MODE_INFO: Dict[Mode, ModeInfo] = {
    Mode.STANDARD: ModeInfo(id="v1", name="v1.5 Standard", color="#A3A3A3"),
    Mode.ANALYTIC: ModeInfo(id="v2", name="v2 DeepThought", color="#60a5fa"),
    Mode.WEB: ModeInfo(id="v6", name="v6 Web Surfer", color="#8b5cf6"),
}


def next_mode(current: Mode) -> Mode:
    """Return the mode after ``current``, wrapping around."""
    modes = list(Mode)
    return modes[(modes.index(current) + 1) % len(modes)]
