"""Load article and claim fixtures from JSON files."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Union

import jsonschema
import yaml

from .models.claim import Article, Claim, RoleSpan

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"

FIXTURE_FILES: Dict[str, str] = {
    "article": "article.json",
    "claims": "claims.json",
    "claims-vague": "claims_vague.json",
}


class FixtureError(ValueError):
    """Raised when a fixture file is missing, unreadable or malformed."""


@lru_cache(maxsize=None)
def _schema(name: str) -> Dict[str, Any]:
    with (SCHEMA_DIR / f"{name}.schema.yaml").open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise FixtureError(f"cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise FixtureError(f"{path} is not valid JSON: {exc}") from exc


def _validate(record: Any, schema: str, where: str) -> None:
    try:
        jsonschema.validate(record, _schema(schema))
    except jsonschema.ValidationError as exc:
        raise FixtureError(f"{where}: {exc.message}") from exc


def _unwrap_claims(payload: Any, path: Path) -> List[Any]:
    if isinstance(payload, dict) and "claims" in payload:
        payload = payload["claims"]
    if not isinstance(payload, list):
        raise FixtureError(f"{path}: expected a list of claims")
    return payload


def load_article(path: Path) -> Article:
    payload = _read_json(path)
    _validate(payload, "article", str(path))
    return Article.from_dict(payload)


def load_claims(path: Path) -> List[Claim]:
    """Return the enriched claims stored at ``path``."""

    claims = []
    for position, record in enumerate(_unwrap_claims(_read_json(path), path)):
        _validate(record, "claim", f"{path}[{position}]")
        claims.append(Claim.from_dict(record))
    logger.info("Loaded %d claim(s) from %s", len(claims), path)
    return claims


def load_vague_claims(path: Path) -> List[str]:
    """Return the plain claim sentences stored at ``path``."""

    records = _unwrap_claims(_read_json(path), path)
    sentences: List[str] = []
    for position, record in enumerate(records):
        if isinstance(record, dict):
            record = record.get("sentence")
        if not isinstance(record, str):
            raise FixtureError(f"{path}[{position}]: expected a claim sentence")
        sentences.append(record)
    return sentences


def parse_role_spans(text: str, where: str = "--roles") -> List[RoleSpan]:
    """Parse a JSON list of role records such as ``[{"word": "Gaza", "role": "Location"}]``."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FixtureError(f"{where} is not valid JSON: {exc}") from exc
    schema = {
        "type": "array",
        "items": {"$ref": "#/definitions/role"},
        "definitions": _schema("claim")["definitions"],
    }
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as exc:
        raise FixtureError(f"{where}: {exc.message}") from exc
    return [RoleSpan.from_dict(record) for record in payload]


def load_fixture(data_dir: Path, kind: str) -> Union[Article, List[Claim], List[str]]:
    """Load the fixture of ``kind`` (``article``, ``claims`` or ``claims-vague``)."""

    file_name = FIXTURE_FILES.get(kind)
    if file_name is None:
        raise FixtureError(f"unknown fixture kind: {kind}")
    path = Path(data_dir) / file_name
    if kind == "article":
        return load_article(path)
    if kind == "claims":
        return load_claims(path)
    return load_vague_claims(path)


__all__ = [
    "FIXTURE_FILES",
    "FixtureError",
    "load_article",
    "load_claims",
    "load_fixture",
    "load_vague_claims",
    "parse_role_spans",
]
