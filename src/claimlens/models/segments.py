from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ClaimMatch:
    """Half-open character range where a claim was found inside a paragraph."""

    start: int
    end: int
    claim_index: int

    def overlaps(self, other: "ClaimMatch") -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class Segment:
    """Slice of a paragraph, tagged with the claim it belongs to (if any)."""

    text: str
    claim_index: Optional[int] = None

    @property
    def is_claim(self) -> bool:
        return self.claim_index is not None

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "claim_index": self.claim_index}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Segment":
        index = data.get("claim_index")
        return cls(
            text=str(data.get("text", "")),
            claim_index=None if index is None else int(index),
        )


@dataclass(frozen=True)
class AnnotatedSegment:
    """Slice of a claim sentence, tagged with its semantic role (if any)."""

    text: str
    role: Optional[str] = None
    is_action: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "role": self.role, "is_action": self.is_action}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnnotatedSegment":
        role = data.get("role")
        return cls(
            text=str(data.get("text", "")),
            role=None if role is None else str(role),
            is_action=bool(data.get("is_action", False)),
        )


@dataclass(frozen=True)
class MentionFragment:
    """Piece of free text produced by the mention highlighter."""

    text: str
    highlighted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "highlighted": self.highlighted}


__all__ = ["AnnotatedSegment", "ClaimMatch", "MentionFragment", "Segment"]
