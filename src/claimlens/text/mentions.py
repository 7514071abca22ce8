"""Loose, stem-aware highlighting of role mentions inside free text.

Recipe and justification nodes refer back to the words of a claim without
any positional information. :func:`highlight_mentions` ties that prose back
to the known role words: it favours recall over exact span boundaries.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Sequence, Set

from ..models.segments import MentionFragment

logger = logging.getLogger(__name__)

_NON_LETTER_RE = re.compile(r"[^a-zA-Z]")
_WHITESPACE_RE = re.compile(r"\s+")
MIN_WORD_LENGTH = 3


def stem(word: str) -> str:
    """Return a crude singular form of ``word`` (lowercased)."""

    lower = word.lower()
    if lower.endswith("ies"):
        return lower[:-3] + "y"
    if lower.endswith("es"):
        return lower[:-2]
    if lower.endswith("s") and len(lower) > 3:
        return lower[:-1]
    return lower


def _plural_forms(word: str) -> List[str]:
    forms = [word, word + "s", word + "es"]
    if word.endswith("y"):
        forms.append(word[:-1] + "ies")
    return forms


class _Targets:
    """Lowercased words and stems derived from a list of phrases."""

    def __init__(self, phrases: Iterable[str]) -> None:
        # dicts keep insertion order for deterministic tie-breaking
        self.words: Dict[str, None] = {}
        self.stems: Dict[str, None] = {}
        for phrase in phrases:
            if not phrase or not phrase.strip():
                continue
            self.words[phrase.lower()] = None
            for token in _WHITESPACE_RE.split(phrase):
                clean = _NON_LETTER_RE.sub("", token)
                if len(clean) >= MIN_WORD_LENGTH:
                    self.words[clean.lower()] = None
                    self.stems[stem(clean)] = None

    def __bool__(self) -> bool:
        return bool(self.words)

    def candidates(self) -> List[str]:
        merged = dict(self.words)
        merged.update(self.stems)
        return sorted(merged, key=len, reverse=True)

    def pattern(self) -> "re.Pattern[str]":
        alternatives: List[str] = []
        for candidate in self.candidates():
            escaped = re.escape(candidate)
            inflected = "|".join(re.escape(form) for form in _plural_forms(candidate))
            alternatives.append(f"'{escaped}'")
            alternatives.append(rf"\b(?:{inflected})\b")
        return re.compile(f"({'|'.join(alternatives)})", re.IGNORECASE)

    def matches(self, piece: str) -> bool:
        lower = piece.lower()
        clean = lower.strip("'")
        if lower in self.words or clean in self.words:
            return True
        return stem(clean) in self.stems


def mention_targets(phrases: Sequence[str]) -> Set[str]:
    """Return every lowercased string :func:`highlight_mentions` looks for."""

    return set(_Targets(phrases).candidates())


def highlight_mentions(text: str, phrases: Sequence[str]) -> List[MentionFragment]:
    """Split ``text`` into fragments, flagging those that mention ``phrases``.

    A mention is a whole-word, case-insensitive occurrence of a phrase, of
    one of its words longer than two letters, or of a crude stem of such a
    word, optionally wrapped in single quotes. Simple plural inflections of
    a target (``s``, ``es``, ``y`` to ``ies``) are caught too, so "militant"
    and "militants" highlight each other.
    """

    targets = _Targets(phrases)
    if not targets or not text:
        return [MentionFragment(text=text)]

    fragments = [
        MentionFragment(text=piece, highlighted=targets.matches(piece))
        for piece in targets.pattern().split(text)
        if piece
    ]
    logger.debug(
        "Highlighted %d of %d fragment(s)",
        sum(1 for f in fragments if f.highlighted),
        len(fragments),
    )
    return fragments


__all__ = ["MIN_WORD_LENGTH", "highlight_mentions", "mention_targets", "stem"]
