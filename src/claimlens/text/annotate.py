"""Overlay semantic-role spans onto a claim sentence."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence, Union

from ..models.claim import RoleSpan
from ..models.segments import AnnotatedSegment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Plain:
    text: str


_Part = Union[_Plain, AnnotatedSegment]


def _split_on_role(text: str, role: RoleSpan) -> List[_Part]:
    pattern = re.compile(f"({re.escape(role.word)})", re.IGNORECASE)
    target = role.word.lower()
    parts: List[_Part] = []
    for piece in pattern.split(text):
        if piece.lower() == target:
            parts.append(AnnotatedSegment(text=piece, role=role.role, is_action=role.is_action))
        elif piece:
            parts.append(_Plain(piece))
    return parts


def annotate(sentence: str, roles: Sequence[RoleSpan]) -> List[AnnotatedSegment]:
    """Split ``sentence`` into role-tagged and untagged segments.

    Roles are applied longest word first. Each role claims every
    case-insensitive occurrence of its word in the text that no earlier
    (longer) role has claimed, so a phrase like "Northern Israel" is never
    re-split by a shorter role word such as "Israel".
    """

    ordered = sorted(roles, key=lambda r: len(r.word), reverse=True)
    parts: List[_Part] = [_Plain(sentence)]
    for role in ordered:
        if not role.word:
            logger.debug("Skipping role %r with empty word", role.role)
            continue
        updated: List[_Part] = []
        for part in parts:
            if isinstance(part, _Plain):
                updated.extend(_split_on_role(part.text, role))
            else:
                updated.append(part)
        parts = updated

    return [
        AnnotatedSegment(text=part.text) if isinstance(part, _Plain) else part
        for part in parts
    ]


__all__ = ["annotate"]
