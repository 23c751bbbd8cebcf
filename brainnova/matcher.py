"""
Topic matcher - find the stored topic a piece of text refers to.

This is a containment heuristic, not a search index:

1. The lower-cased text equal to a stored key wins outright.
2. Otherwise the first key (in iteration order) where the text contains
   the key, or the key contains the text, is returned.
3. Otherwise nothing matches.

There is no scoring. Short keys will match unrelated long queries
("ai" hits "tell me about rain"); callers rely on that behaviour.
"""

from typing import Iterable, Optional


def find_topic(text: str, keys: Iterable[str]) -> Optional[str]:
    """
    Return the stored key matching ``text`` or None.

    Args:
        text: Free user text
        keys: Stored topic keys (already lower-cased)
    """
    lower = text.lower()
    keys = list(keys)

    if lower in keys:
        return lower

    for key in keys:
        if key in lower or lower in key:
            return key

    return None
