"""
AI Dictionary for the GS1 scan decoder.

Static table of the Application Identifiers needed to recover field
boundaries from un-bracketed scanner output. Each AI maps to its fixed
data length, or 0 when the field is variable-length and runs until the
next separator (or the end of the input).

Reference: https://ref.gs1.org/ai/
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class AIEntry:
    """
    A single GS1 Application Identifier entry.

    Attributes:
        ai: The Application Identifier code (2-3 digits)
        title: Human-readable title
        length: Fixed data length, 0 for variable-length fields
    """
    ai: str
    title: str
    length: int = 0

    @property
    def is_variable(self) -> bool:
        return self.length == 0


# (ai, title, fixed length or 0)
_RAW_ENTRIES: Tuple[Tuple[str, str, int], ...] = (
    ("01", "GTIN", 14),
    ("02", "CONTENT", 14),
    ("10", "BATCH/LOT", 0),
    ("11", "PROD DATE", 6),
    ("12", "DUE DATE", 6),
    ("13", "PACK DATE", 6),
    ("15", "BEST BEFORE or BEST BY", 6),
    ("16", "SELL BY", 6),
    ("17", "USE BY or EXPIRY", 6),
    ("20", "VARIANT", 2),
    ("21", "SERIAL", 0),
    ("22", "CPV", 0),
    ("30", "VAR. COUNT", 0),
    ("37", "COUNT", 0),
    ("240", "ADDITIONAL ID", 0),
    ("241", "CUST. PART No.", 0),
    ("242", "MTO VARIANT", 0),
    ("250", "SECONDARY SERIAL", 0),
    ("251", "REF. TO SOURCE", 0),
)

# AIs the field extractor understands
EXTRACTED_AIS = frozenset({"01", "17", "10", "21", "30"})


class AIDictionary:
    """
    Read-only lookup over AI entries.

    Matching prefers a 3-character AI over a 2-character one at the same
    position.
    """

    AI_LENGTHS_TRIED = (3, 2)

    def __init__(self, entries: Optional[Dict[str, AIEntry]] = None):
        self._entries: Mapping[str, AIEntry] = MappingProxyType(dict(entries or {}))

    def get(self, ai: str) -> Optional[AIEntry]:
        """Get AI entry by code."""
        return self._entries.get(ai)

    def find_match(self, text: str, start: int = 0) -> Tuple[Optional[AIEntry], int]:
        """
        Find the AI starting at position 'start'.

        Returns (AIEntry, code length) or (None, 0) if no known AI begins there.
        """
        for size in self.AI_LENGTHS_TRIED:
            if start + size > len(text):
                continue
            entry = self._entries.get(text[start:start + size])
            if entry is not None:
                return entry, size
        return None, 0

    def __contains__(self, ai: str) -> bool:
        return ai in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def all_entries(self) -> Dict[str, AIEntry]:
        """Return a copy of all AI entries."""
        return dict(self._entries)

    def lengths(self) -> Dict[str, int]:
        """Return the code -> fixed length table (0 = variable)."""
        return {ai: entry.length for ai, entry in self._entries.items()}


AI_DICTIONARY = AIDictionary(
    {ai: AIEntry(ai=ai, title=title, length=length) for ai, title, length in _RAW_ENTRIES}
)


def load_ai_dictionary() -> AIDictionary:
    """Return the process-wide AI dictionary."""
    return AI_DICTIONARY
