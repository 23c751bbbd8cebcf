"""
Fact records for Brainnova's memory.

A fact is a short topic/definition pair with optional rationale ("why")
and ordered process steps ("how"). Facts are stored under their topic
lower-cased; the topic itself keeps its display casing.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Fact:
    """A stored topic/definition record."""
    topic: str                               # Display name, e.g. "Python"
    core: str                                # Definition body (required)
    why: Optional[str] = None                # Rationale / provenance
    how: List[str] = field(default_factory=list)  # Process steps

    @property
    def key(self) -> str:
        """Storage key: the topic lower-cased, nothing else normalised."""
        return self.topic.lower()

    def is_complete(self) -> bool:
        return bool(self.topic) and bool(self.core)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'topic': self.topic, 'core': self.core}
        if self.why:
            data['why'] = self.why
        if self.how:
            data['how'] = list(self.how)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional['Fact']:
        """
        Build a fact from a JSON-shaped record.

        Returns None when the record is not a mapping or lacks a non-empty
        string ``topic`` / ``core``. A non-list ``how`` is ignored.
        """
        if not isinstance(data, dict):
            return None

        topic = data.get('topic')
        core = data.get('core')
        if not isinstance(topic, str) or not isinstance(core, str):
            return None
        if not topic or not core:
            return None

        why = data.get('why')
        how = data.get('how')
        return cls(
            topic=topic,
            core=core,
            why=why if isinstance(why, str) and why else None,
            how=[str(step) for step in how] if isinstance(how, list) else [],
        )
