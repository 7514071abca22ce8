"""Helpers for semantic role labels and role words."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from ..models.claim import RoleSpan

KNOWN_ROLES = (
    "Agent",
    "Action",
    "Patient",
    "Instrument",
    "Location",
    "Time",
    "Content",
    "Theme",
    "Init_location",
    "Path",
    "Final_location",
    "Scope",
    "Co_agent",
    "Beneficiary",
)

PREPOSITIONS = (
    "from", "to", "over", "under", "above", "below", "into", "onto",
    "through", "across", "along", "around", "behind", "beside", "between",
    "beyond", "by", "for", "in", "near", "of", "off", "on", "out",
    "past", "since", "toward", "towards", "upon", "with", "within", "without",
)

_LEADING_PREPOSITION_RE = re.compile(
    rf"^(?:{'|'.join(PREPOSITIONS)})\s+", re.IGNORECASE
)


def base_role(label: str) -> str:
    """Return the part of ``label`` before the first dot.

    >>> base_role("Content.quote")
    'Content'
    """

    return label.split(".", 1)[0]


def capitalise(label: str) -> str:
    return label[:1].upper() + label[1:].lower()


def role_family(label: str) -> str:
    """Normalise ``label`` to the capitalised form used for grouping."""

    return capitalise(base_role(label))


def is_known_role(label: str) -> bool:
    return role_family(label) in KNOWN_ROLES


def strip_prepositions(word: str) -> str:
    """Drop a single leading preposition, e.g. ``"from Gaza"`` -> ``"Gaza"``."""

    return _LEADING_PREPOSITION_RE.sub("", word, count=1)


def agent_word(roles: Iterable[RoleSpan]) -> Optional[str]:
    for role in roles:
        if role.role.lower() == "agent":
            return role.word
    return None


__all__ = [
    "KNOWN_ROLES",
    "PREPOSITIONS",
    "agent_word",
    "base_role",
    "capitalise",
    "is_known_role",
    "role_family",
    "strip_prepositions",
]
