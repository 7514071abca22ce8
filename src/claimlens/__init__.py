"""Claim alignment and semantic-role annotation helpers."""

from .models import AnnotatedSegment, RoleSpan, Segment
from .text import align, align_article, annotate, highlight_mentions

__all__ = [
    "AnnotatedSegment",
    "RoleSpan",
    "Segment",
    "align",
    "align_article",
    "annotate",
    "highlight_mentions",
]
