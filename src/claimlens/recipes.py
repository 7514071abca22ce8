"""Recipe (justification tree) helpers.

Builds section titles for the main recipe and per-role recipes, propagates
evidence support through recipe trees and assembles a display-ready view of a
claim whose node texts are run through :func:`highlight_mentions`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .models.claim import (
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
from .text.mentions import highlight_mentions
from .text.roles import agent_word, capitalise, strip_prepositions

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

UNKNOWN_DATE = "Unknown date"
UNKNOWN_LOCATION = "an unknown location"
DEFAULT_AGENT = "Agent"

# ISO-8601 calendar dates, optionally with a time and a UTC offset
_ISO_DATE_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}(?:T\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?(?:Z|[+-]\d{2}:\d{2})?)?$"
)
_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M%z",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S.%f%z",
)


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse ``YYYY-MM-DD`` or ``YYYY-MM-DDTHH:MM[:SS[.ffffff]][Z|±HH:MM]``.

    Anything else, including out-of-range fields, gives ``None``.
    """

    if not value or not _ISO_DATE_RE.match(value.strip()):
        return None
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def has_time(value: Optional[str]) -> bool:
    parsed = parse_date(value)
    if parsed is None:
        return False
    return (parsed.hour, parsed.minute, parsed.second) != (0, 0, 0)


def format_date(value: Optional[str], include_time: bool = False) -> str:
    """Format ``value`` as e.g. ``"7 October 2023"``."""

    parsed = parse_date(value)
    if parsed is None:
        return UNKNOWN_DATE
    text = f"{parsed.day} {MONTHS[parsed.month - 1]} {parsed.year}"
    if include_time:
        text += f" at {parsed.hour:02d}:{parsed.minute:02d}"
    return text


def format_date_range(start: Optional[str], end: Optional[str], stative: bool = False) -> str:
    """Describe the period between ``start`` and ``end`` in prose.

    Stative claims hold "at the time of" a period rather than happening
    "on" it.
    """

    start_valid = parse_date(start) is not None
    end_valid = parse_date(end) is not None
    if not start_valid and not end_valid:
        return "On an unknown date"

    show_time = has_time(start) or has_time(end)
    prefix = "At the time of" if stative else "On"

    if not start_valid:
        return f"Before {format_date(end, show_time)}"
    if start == end or not end_valid:
        return f"{prefix} {format_date(start, show_time)}"
    if stative:
        return f"At the time of {format_date(start, show_time)} to {format_date(end, show_time)}"
    return f"Between {format_date(start, show_time)} and {format_date(end, show_time)}"


def main_recipe_sections(
    agent: str,
    recipes: Optional[ClaimRecipes],
    start: Optional[str],
    end: Optional[str],
    location: Optional[str],
    stative: bool = False,
) -> List[RecipeSection]:
    if recipes is None:
        return []
    place = (location or "").strip() or UNKNOWN_LOCATION
    sections: List[RecipeSection] = []
    for section in recipes.main_sections:
        if section.type == "dated":
            title = f"{format_date_range(start, end, stative)} in {place}, '{agent}':"
        else:
            title = f"On any date, '{agent}':"
        sections.append(RecipeSection(title=title, items=section.items, type=section.type))
    return sections


def role_recipe_section(role_word: str, recipe: RoleRecipe) -> Optional[RecipeSection]:
    """Return the titled section for ``recipe``, or ``None`` if it has no items."""

    if recipe.items is None:
        return None
    name = recipe.name or role_word
    if recipe.is_group:
        if recipe.aggregate_count is not None:
            title = f"'{name}' is {recipe.aggregate_count} entities where each entity:"
        else:
            title = f"'{name}' is a group of entities where each entity:"
    else:
        title = f"'{name}':"
    return RecipeSection(title=title, items=recipe.items)


@dataclass(frozen=True)
class RoleRecipeData:
    sections: Tuple[RecipeSection, ...] = ()
    location: Optional[Location] = None
    wikidata: Tuple[Tuple[str, Optional[str]], ...] = ()
    relationships: Tuple[RecipeRelationship, ...] = ()


def role_recipe_data(role_word: str, role_name: str, recipes: Optional[ClaimRecipes]) -> RoleRecipeData:
    if recipes is None:
        return RoleRecipeData()
    entries = recipes.role_recipes.get(role_name)
    if not entries:
        return RoleRecipeData()

    # a place short-circuits everything else
    for recipe in entries:
        if recipe.location is not None:
            return RoleRecipeData(location=recipe.location)

    sections = []
    for recipe in entries:
        section = role_recipe_section(role_word, recipe)
        if section is not None:
            sections.append(section)
    return RoleRecipeData(
        sections=tuple(sections),
        wikidata=tuple((r.wikidata, r.name) for r in entries if r.wikidata),
        relationships=tuple(rel for r in entries for rel in r.relationships),
    )


def roles_with_recipes(
    roles: Sequence[RoleSpan], recipes: Optional[ClaimRecipes]
) -> List[Tuple[int, RoleSpan]]:
    """Return ``(index, role)`` for non-action roles that own a role recipe."""

    if recipes is None:
        return []
    return [
        (index, role)
        for index, role in enumerate(roles)
        if not role.is_action and recipes.role_recipes.get(capitalise(role.role))
    ]


def supported_ids(evidence: Iterable[Evidence]) -> Set[str]:
    ids: Set[str] = set()
    for item in evidence:
        ids.update(item.supports)
    return ids


def is_supported(node: TreeNode, ids: Set[str]) -> bool:
    """True when ``node`` or any of its descendants is backed by evidence."""

    return any(node_id in ids for node_id in node.iter_ids())


def relationship_map(relationships: Iterable[RecipeRelationship]) -> Dict[str, str]:
    return {rel.target: rel.type for rel in relationships}


@dataclass
class _ViewContext:
    role_words: List[str]
    relationships: Dict[str, str] = field(default_factory=dict)
    supported: Set[str] = field(default_factory=set)


def _node_view(node: TreeNode, ctx: _ViewContext, in_caused: bool = False) -> Dict[str, Any]:
    caused = ctx.relationships.get(node.id) == "causes"
    consequence = caused or in_caused
    # continuation items read as "...<lowercase text>"
    text = node.text if consequence else node.text[:1].lower() + node.text[1:]
    return {
        "id": node.id,
        "text": text,
        "continuation": not consequence,
        "caused": caused,
        "supported": is_supported(node, ctx.supported),
        "frame": node.frame,
        "fragments": [f.to_dict() for f in highlight_mentions(text, ctx.role_words)],
        "children": [_node_view(child, ctx, consequence) for child in node.children],
    }


def _section_view(section: RecipeSection, ctx: _ViewContext) -> Dict[str, Any]:
    return {
        "title": section.title,
        "fragments": [f.to_dict() for f in highlight_mentions(section.title, ctx.role_words)],
        "items": [_node_view(item, ctx) for item in section.items],
    }


def build_recipe_view(claim: Claim) -> Dict[str, Any]:
    """Assemble the main and per-role recipe trees of ``claim`` for display."""

    role_words = claim.role_words()
    supported = supported_ids(claim.evidence)
    recipes = claim.recipes

    role_views: List[Dict[str, Any]] = []
    for index, role in roles_with_recipes(claim.roles, recipes):
        word = strip_prepositions(role.word)
        data = role_recipe_data(word, capitalise(role.role), recipes)
        ctx = _ViewContext(role_words, relationship_map(data.relationships), supported)
        role_views.append(
            {
                "index": index,
                "word": word,
                "role": role.role,
                "location": (
                    None
                    if data.location is None
                    else {"lat": data.location.lat, "lng": data.location.lng}
                ),
                "wikidata": [{"id": qid, "name": name or word} for qid, name in data.wikidata],
                "sections": [_section_view(s, ctx) for s in data.sections],
            }
        )

    main_ctx = _ViewContext(
        role_words,
        relationship_map(recipes.main_relationships if recipes else ()),
        supported,
    )
    sections = main_recipe_sections(
        agent_word(claim.roles) or DEFAULT_AGENT,
        recipes,
        claim.start_date,
        claim.end_date,
        claim.location,
        claim.stative,
    )
    return {
        "id": claim.id,
        "sentence": claim.sentence,
        "roles": role_views,
        "main": [_section_view(s, main_ctx) for s in sections],
    }


__all__ = [
    "RoleRecipeData",
    "build_recipe_view",
    "format_date",
    "format_date_range",
    "has_time",
    "is_supported",
    "main_recipe_sections",
    "parse_date",
    "relationship_map",
    "role_recipe_data",
    "role_recipe_section",
    "roles_with_recipes",
    "supported_ids",
]
