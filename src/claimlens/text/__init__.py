"""Text alignment and annotation utilities."""

from .align import align, align_article, split_paragraphs
from .annotate import annotate
from .mentions import highlight_mentions, stem
from .roles import base_role, role_family, strip_prepositions

__all__ = [
    "align",
    "align_article",
    "annotate",
    "base_role",
    "highlight_mentions",
    "role_family",
    "split_paragraphs",
    "stem",
    "strip_prepositions",
]
