from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import ConfigError, load_settings
from .fixtures import (
    FixtureError,
    load_article,
    load_claims,
    load_fixture,
    load_vague_claims,
    parse_role_spans,
)
from .models.claim import Claim
from .models.segments import AnnotatedSegment
from .recipes import build_recipe_view
from .text.align import align_article
from .text.annotate import annotate
from .text.mentions import highlight_mentions
from .text.roles import is_known_role, role_family

logger = logging.getLogger(__name__)


def _print_json(data: object) -> None:
    """Serialise ``data`` to JSON and print it to stdout."""

    print(json.dumps(data, ensure_ascii=False))


def _claims_from(args: argparse.Namespace) -> List[Claim]:
    if args.claims is not None:
        return load_claims(args.claims)
    return load_fixture(args.data_dir, "claims")


def _select(claims: List[Claim], claim_id: Optional[int]) -> List[Claim]:
    if claim_id is None:
        return claims
    selected = [c for c in claims if c.id == claim_id]
    if not selected:
        raise FixtureError(f"no claim with id {claim_id}")
    return selected


def _handle_align(args: argparse.Namespace) -> None:
    if args.article is not None:
        article = load_article(args.article)
    else:
        article = load_fixture(args.data_dir, "article")
    if args.vague_claims is not None:
        sentences = load_vague_claims(args.vague_claims)
    else:
        sentences = [c.sentence for c in _claims_from(args)]
    paragraphs = align_article(article.content, sentences)
    _print_json([[s.to_dict() for s in segments] for segments in paragraphs])


def _annotated_view(segment: AnnotatedSegment) -> Dict[str, Any]:
    view = segment.to_dict()
    # role family picks the display colour; unknown labels get none
    view["family"] = (
        role_family(segment.role)
        if segment.role is not None and is_known_role(segment.role)
        else None
    )
    return view


def _handle_annotate(args: argparse.Namespace) -> None:
    if args.sentence is not None:
        roles = parse_role_spans(args.roles) if args.roles is not None else []
        _print_json([_annotated_view(s) for s in annotate(args.sentence, roles)])
        return
    output = []
    for claim in _select(_claims_from(args), args.id):
        output.append(
            {
                "id": claim.id,
                "segments": [_annotated_view(s) for s in annotate(claim.sentence, claim.roles)],
            }
        )
    _print_json(output)


def _handle_mentions(args: argparse.Namespace) -> None:
    _print_json([f.to_dict() for f in highlight_mentions(args.text, args.phrase)])


def _handle_recipe(args: argparse.Namespace) -> None:
    _print_json([build_recipe_view(c) for c in _select(_claims_from(args), args.id)])


def build_parser(data_dir: Path) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="claimlens")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.add_argument(
        "--data-dir", type=Path, default=data_dir, help="Directory holding fixture JSON"
    )
    sub = parser.add_subparsers(dest="command")

    align = sub.add_parser("align", help="Locate claims inside article paragraphs")
    align.add_argument("--article", type=Path, help="Article JSON ({content: ...})")
    source = align.add_mutually_exclusive_group()
    source.add_argument("--claims", type=Path, help="Enriched claims JSON")
    source.add_argument("--vague-claims", type=Path, help="JSON list of claim sentences")
    align.set_defaults(func=_handle_align)

    annotate_parser = sub.add_parser("annotate", help="Overlay role spans on claim sentences")
    annotate_parser.add_argument("--claims", type=Path, help="Enriched claims JSON")
    annotate_parser.add_argument("--id", type=int, help="Only annotate this claim")
    annotate_parser.add_argument("--sentence", help="Annotate a single sentence")
    annotate_parser.add_argument(
        "--roles", help="JSON list of {word, role, isAction} for --sentence"
    )
    annotate_parser.set_defaults(func=_handle_annotate)

    mentions = sub.add_parser("mentions", help="Highlight role mentions in free text")
    mentions.add_argument("--text", required=True)
    mentions.add_argument("--phrase", action="append", default=[], help="Phrase to highlight")
    mentions.set_defaults(func=_handle_mentions)

    recipe = sub.add_parser("recipe", help="Render recipe trees for a claim")
    recipe.add_argument("--claims", type=Path, help="Enriched claims JSON")
    recipe.add_argument("--id", type=int, help="Only render this claim")
    recipe.set_defaults(func=_handle_recipe)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    parser = build_parser(settings.data_dir)
    args = parser.parse_args(argv)
    if getattr(args, "roles", None) is not None and args.sentence is None:
        parser.error("--roles requires --sentence")
    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.log_level)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        args.func(args)
    except FixtureError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
