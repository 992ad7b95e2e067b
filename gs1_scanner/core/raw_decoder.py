"""
Raw-to-Bracketed Decoder

Rebuilds the human-readable bracketed form ``(AI)value(AI)value`` from a
scanner payload that carries no ``(AI)`` markers.

Key rules:
- The payload is split on the separator marker first; a value never spans
  a separator.
- At each position a 3-character AI is tried before a 2-character AI.
- Fixed-length AIs take exactly their length (clamped to the part end).
- Variable-length AIs take the rest of the part. Two variable-length AIs
  written back to back without a separator cannot be told apart; the first
  one swallows the second.
- A character that does not start a known AI is skipped. Skips are counted
  so callers can tell when field boundaries may have drifted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .ai_dictionary import AIDictionary, load_ai_dictionary

logger = logging.getLogger(__name__)

SEPARATOR_MARKER = "|"


@dataclass(frozen=True)
class DecodedElement:
    """One ``(AI)value`` token produced by the decoder."""
    ai: str
    value: str
    part_index: int
    start_pos: int
    end_pos: int

    def bracketed(self) -> str:
        return f"({self.ai}){self.value}"


@dataclass(frozen=True)
class DecodeResult:
    """
    Result of decoding an un-bracketed payload.

    Attributes:
        payload: Input handed to the decoder
        bracketed: Bracketed rendering, or the payload itself when nothing decoded
        elements: Decoded tokens in output order
        skipped_positions: (part index, position) of every dropped character
    """
    payload: str
    bracketed: str
    elements: Tuple[DecodedElement, ...] = ()
    skipped_positions: Tuple[Tuple[int, int], ...] = field(default_factory=tuple)

    @property
    def skipped(self) -> int:
        return len(self.skipped_positions)

    @property
    def decoded(self) -> bool:
        return bool(self.elements)


def _decode_part(
    part: str,
    part_index: int,
    dictionary: AIDictionary,
) -> Tuple[List[DecodedElement], List[Tuple[int, int]]]:
    elements: List[DecodedElement] = []
    skipped: List[Tuple[int, int]] = []
    pos = 0

    while pos < len(part):
        entry, code_len = dictionary.find_match(part, pos)
        if entry is None:
            skipped.append((part_index, pos))
            pos += 1
            continue

        value_start = pos + code_len
        if entry.length > 0:
            value_end = min(value_start + entry.length, len(part))
        else:
            value_end = len(part)

        elements.append(DecodedElement(
            ai=entry.ai,
            value=part[value_start:value_end],
            part_index=part_index,
            start_pos=pos,
            end_pos=value_end,
        ))
        pos = value_end

    return elements, skipped


def decode_with_diagnostics(
    payload: str,
    dictionary: Optional[AIDictionary] = None,
    separator: str = SEPARATOR_MARKER,
) -> DecodeResult:
    """
    Decode an un-bracketed payload and report what was dropped.

    Args:
        payload: Scanner data with separators already normalized to ``separator``
        dictionary: AI dictionary to use (defaults to the built-in table)
        separator: Field separator marker

    Returns:
        DecodeResult with the bracketed string and skip diagnostics
    """
    dictionary = dictionary or load_ai_dictionary()

    elements: List[DecodedElement] = []
    skipped: List[Tuple[int, int]] = []
    for part_index, part in enumerate(payload.split(separator)):
        part_elements, part_skipped = _decode_part(part, part_index, dictionary)
        elements.extend(part_elements)
        skipped.extend(part_skipped)

    bracketed = "".join(e.bracketed() for e in elements) or payload

    if skipped:
        logger.warning(
            "Decoder skipped %d character(s) not starting a known AI in %r",
            len(skipped), payload,
        )
    logger.debug("Decoded %r -> %r", payload, bracketed)

    return DecodeResult(
        payload=payload,
        bracketed=bracketed,
        elements=tuple(elements),
        skipped_positions=tuple(skipped),
    )


def decode(payload: str, dictionary: Optional[AIDictionary] = None) -> str:
    """
    Convert an un-bracketed payload into ``(AI)value`` form.

    Example:
        >>> decode("010629700000123417250630|10ABC001|21SN123")
        '(01)06297000001234(17)250630(10)ABC001(21)SN123'
    """
    return decode_with_diagnostics(payload, dictionary).bracketed
