"""Locate extracted claim sentences inside the paragraphs of an article."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from ..models.segments import ClaimMatch, Segment

logger = logging.getLogger(__name__)

PARAGRAPH_BREAK = "\n\n"


def split_paragraphs(article: str) -> List[str]:
    """Split ``article`` on blank lines, dropping whitespace-only paragraphs."""

    return [p for p in article.split(PARAGRAPH_BREAK) if p.strip()]


def _fold(text: str) -> Tuple[str, List[int], List[int]]:
    """Lowercase ``text`` keeping offset maps in both directions.

    ``to_original[i]`` is the index in ``text`` of folded character ``i``;
    ``to_folded[j]`` is the folded index where original character ``j`` starts.
    Both lists carry a trailing sentinel for the end of the string.
    """

    pieces: List[str] = []
    to_original: List[int] = []
    to_folded: List[int] = []
    position = 0
    for index, ch in enumerate(text):
        lowered = ch.lower()
        pieces.append(lowered)
        to_folded.append(position)
        to_original.extend([index] * len(lowered))
        position += len(lowered)
    to_original.append(len(text))
    to_folded.append(position)
    return "".join(pieces), to_original, to_folded


def find_claim_matches(paragraph: str, claims: Sequence[str]) -> List[ClaimMatch]:
    """Return every case-insensitive occurrence of every claim in ``paragraph``.

    Occurrences of the same claim never overlap each other; occurrences of
    different claims may. Results are in claim order, then position order.
    """

    folded, to_original, to_folded = _fold(paragraph)
    matches: List[ClaimMatch] = []
    for claim_index, claim in enumerate(claims):
        if not claim:
            logger.debug("Skipping empty claim at index %d", claim_index)
            continue
        needle = claim.lower()
        cursor = 0
        while cursor < len(folded):
            found = folded.find(needle, cursor)
            if found == -1:
                break
            start = to_original[found]
            end = min(start + len(claim), len(paragraph))
            matches.append(ClaimMatch(start=start, end=end, claim_index=claim_index))
            cursor = to_folded[end]
    return matches


def resolve_overlaps(matches: Sequence[ClaimMatch]) -> List[ClaimMatch]:
    """Keep the earliest-starting match of every overlapping group.

    Matches are ordered by start offset, ties by claim index, and then
    accepted greedily: a match survives only if it intersects nothing
    already accepted. Match length plays no part in the decision.
    """

    ordered = sorted(matches, key=lambda m: (m.start, m.claim_index))
    kept: List[ClaimMatch] = []
    for match in ordered:
        if any(match.overlaps(existing) for existing in kept):
            continue
        kept.append(match)
    return kept


def align(paragraph: str, claims: Sequence[str]) -> List[Segment]:
    """Partition ``paragraph`` into plain and claim segments.

    Concatenating the ``text`` of the returned segments always reproduces
    ``paragraph``. When no claim is found the whole paragraph comes back as a
    single plain segment.
    """

    kept = resolve_overlaps(find_claim_matches(paragraph, claims))
    if not kept:
        return [Segment(text=paragraph, claim_index=None)]

    segments: List[Segment] = []
    cursor = 0
    for match in kept:
        if match.start > cursor:
            segments.append(Segment(text=paragraph[cursor:match.start]))
        segments.append(
            Segment(text=paragraph[match.start:match.end], claim_index=match.claim_index)
        )
        cursor = match.end
    if cursor < len(paragraph):
        segments.append(Segment(text=paragraph[cursor:]))

    logger.debug("Aligned %d claim span(s) in paragraph of %d chars", len(kept), len(paragraph))
    return segments


def align_article(article: str, claims: Sequence[str]) -> List[List[Segment]]:
    """Align ``claims`` against every paragraph of ``article``."""

    return [align(paragraph, claims) for paragraph in split_paragraphs(article)]


__all__ = [
    "PARAGRAPH_BREAK",
    "align",
    "align_article",
    "find_claim_matches",
    "resolve_overlaps",
    "split_paragraphs",
]
