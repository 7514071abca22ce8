"""Value objects shared by the alignment and annotation helpers."""

from .claim import (
    Article,
    Claim,
    ClaimRecipes,
    Evidence,
    Location,
    RecipeRelationship,
    RecipeSection,
    RoleRecipe,
    RoleSpan,
    TreeNode,
)
from .segments import AnnotatedSegment, ClaimMatch, MentionFragment, Segment

__all__ = [
    "AnnotatedSegment",
    "Article",
    "Claim",
    "ClaimMatch",
    "ClaimRecipes",
    "Evidence",
    "Location",
    "MentionFragment",
    "RecipeRelationship",
    "RecipeSection",
    "RoleRecipe",
    "RoleSpan",
    "Segment",
    "TreeNode",
]
