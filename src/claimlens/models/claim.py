"""Claim, role and recipe records as loaded from fixture data.

Every record is frozen and built through ``from_dict`` so that the text
helpers only ever see plain, immutable values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


def _str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class RoleSpan:
    """Word or phrase of a claim sentence carrying a semantic role label."""

    word: str
    role: str
    is_action: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "role": self.role, "isAction": self.is_action}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoleSpan":
        return cls(
            word=str(data.get("word", "")),
            role=str(data.get("role", "")),
            is_action=bool(data.get("isAction", data.get("is_action", False))),
        )


@dataclass(frozen=True)
class TreeNode:
    id: str
    text: str
    children: Tuple["TreeNode", ...] = ()
    frame: Optional[str] = None

    def iter_ids(self) -> Iterable[str]:
        yield self.id
        for child in self.children:
            yield from child.iter_ids()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TreeNode":
        return cls(
            id=str(data.get("id", "")),
            text=str(data.get("text", "")),
            children=tuple(cls.from_dict(child) for child in data.get("children") or []),
            frame=_str_or_none(data.get("frame")),
        )


@dataclass(frozen=True)
class RecipeRelationship:
    source: str
    target: str
    type: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RecipeRelationship":
        return cls(
            source=str(data.get("from", "")),
            target=str(data.get("to", "")),
            type=str(data.get("type", "")),
        )


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float


@dataclass(frozen=True)
class RoleRecipe:
    """Justification tree (or entity pointer) attached to one role."""

    name: Optional[str] = None
    items: Optional[Tuple[TreeNode, ...]] = None
    relationships: Tuple[RecipeRelationship, ...] = ()
    is_group: bool = False
    aggregate_count: Optional[int] = None
    location: Optional[Location] = None
    wikidata: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoleRecipe":
        items = data.get("items")
        location = data.get("location")
        count = data.get("aggregateCount")
        return cls(
            name=_str_or_none(data.get("name")),
            items=None if items is None else tuple(TreeNode.from_dict(i) for i in items),
            relationships=tuple(
                RecipeRelationship.from_dict(r) for r in data.get("relationships") or []
            ),
            is_group=bool(data.get("isGroup", False)),
            aggregate_count=None if count is None else int(count),
            location=(
                None
                if location is None
                else Location(lat=float(location["lat"]), lng=float(location["lng"]))
            ),
            wikidata=_str_or_none(data.get("wikidata")),
        )


@dataclass(frozen=True)
class RecipeSection:
    """A titled list of recipe tree nodes, ready for display."""

    title: str
    items: Tuple[TreeNode, ...] = ()
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RecipeSection":
        return cls(
            title=str(data.get("title") or ""),
            items=tuple(TreeNode.from_dict(i) for i in data.get("items") or []),
            type=_str_or_none(data.get("type")),
        )


@dataclass(frozen=True)
class ClaimRecipes:
    main_sections: Tuple[RecipeSection, ...] = ()
    main_relationships: Tuple[RecipeRelationship, ...] = ()
    role_recipes: Mapping[str, Tuple[RoleRecipe, ...]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClaimRecipes":
        main = data.get("mainRecipe") or {}
        role_recipes: Dict[str, Tuple[RoleRecipe, ...]] = {}
        for role_name, raw in (data.get("roleRecipes") or {}).items():
            if raw is None:
                continue
            entries = raw if isinstance(raw, list) else [raw]
            role_recipes[str(role_name)] = tuple(RoleRecipe.from_dict(e) for e in entries)
        return cls(
            main_sections=tuple(
                RecipeSection.from_dict(s) for s in main.get("sections") or []
            ),
            main_relationships=tuple(
                RecipeRelationship.from_dict(r) for r in main.get("relationships") or []
            ),
            role_recipes=role_recipes,
        )


@dataclass(frozen=True)
class Evidence:
    id: str
    type: str
    supports: Tuple[str, ...] = ()
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    source: Optional[str] = None
    source_type: Optional[str] = None
    evidence_category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Evidence":
        return cls(
            id=str(data.get("id", "")),
            type=str(data.get("type", "")),
            supports=tuple(str(s) for s in data.get("supports") or []),
            title=_str_or_none(data.get("title")),
            description=_str_or_none(data.get("description")),
            url=_str_or_none(data.get("url")),
            source=_str_or_none(data.get("source")),
            source_type=_str_or_none(data.get("sourceType")),
            evidence_category=_str_or_none(data.get("evidenceCategory")),
        )


@dataclass(frozen=True)
class Claim:
    """An enriched claim: sentence, roles, dates, place, evidence and recipes."""

    id: int
    sentence: str
    roles: Tuple[RoleSpan, ...] = ()
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    location: Optional[str] = None
    stative: bool = False
    frame: Optional[str] = None
    evidence: Tuple[Evidence, ...] = ()
    recipes: Optional[ClaimRecipes] = None

    def role_words(self) -> List[str]:
        return [role.word for role in self.roles]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Claim":
        recipes = data.get("recipes")
        return cls(
            id=int(data["id"]),
            sentence=str(data.get("sentence", "")),
            roles=tuple(RoleSpan.from_dict(r) for r in data.get("roles") or []),
            start_date=_str_or_none(data.get("startDate")),
            end_date=_str_or_none(data.get("endDate")),
            location=_str_or_none(data.get("location")),
            stative=bool(data.get("stative", False)),
            frame=_str_or_none(data.get("frame")),
            evidence=tuple(Evidence.from_dict(e) for e in data.get("evidence") or []),
            recipes=None if recipes is None else ClaimRecipes.from_dict(recipes),
        )


@dataclass(frozen=True)
class Article:
    content: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Article":
        return cls(content=str(data.get("content", "")))


__all__ = [
    "Article",
    "Claim",
    "ClaimRecipes",
    "Evidence",
    "Location",
    "RecipeRelationship",
    "RecipeSection",
    "RoleRecipe",
    "RoleSpan",
    "TreeNode",
]
