"""Command-line front end for the review assistant.

Usage:
  python -m moviemania_ai draft "Inception" 4 --genres Sci-Fi Thriller
  python -m moviemania_ai sentiment "Loved every minute of it."
  python -m moviemania_ai --key-index 3 search "feel-good 90s comedies"
  python -m moviemania_ai --no-cache similar "Alien" "funnier"
  python -m moviemania_ai predict '{"favoriteGenres": ["Drama"]}' '{"title": "Heat"}'
  python -m moviemania_ai insights '{"totalMovies": 120, "avgRating": 3.9}'

Taste, movie and profile arguments are JSON objects.
"""

import argparse
import json
import logging
import sys
from dataclasses import replace

from moviemania_ai.config import load_settings
from moviemania_ai.service import GeminiService, run_sync
from moviemania_ai.transport import error_response

log = logging.getLogger(__name__)


def _json_object(value: str) -> dict:
    try:
        obj = json.loads(value)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"not valid JSON: {e}") from e
    if not isinstance(obj, dict):
        raise argparse.ArgumentTypeError("expected a JSON object")
    return obj


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moviemania_ai", description=__doc__.splitlines()[0]
    )
    parser.add_argument(
        "--key-index", type=int, default=None, help="pin the starting API key"
    )
    parser.add_argument("--max-retries", type=int, default=None)
    parser.add_argument("--no-cache", action="store_true", help="bypass the disk cache")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("draft", help="write a short review draft")
    p.add_argument("title")
    p.add_argument("rating", type=float)
    p.add_argument("--genres", nargs="*", default=[])

    p = sub.add_parser("expand", help="turn bullet points into a paragraph")
    p.add_argument("bullets")

    p = sub.add_parser("despoil", help="rewrite a review without spoilers")
    p.add_argument("text")

    p = sub.add_parser("sentiment", help="sentiment analysis (JSON)")
    p.add_argument("text")

    p = sub.add_parser("tags", help="suggest tags (JSON)")
    p.add_argument("text")

    p = sub.add_parser("search", help="parse a natural-language search (JSON)")
    p.add_argument("query")

    p = sub.add_parser("similar", help="similar movies with a twist (JSON)")
    p.add_argument("title")
    p.add_argument("modifier")

    p = sub.add_parser("predict", help="predict the user's rating (JSON)")
    p.add_argument("taste", type=_json_object)
    p.add_argument("movie", type=_json_object)

    p = sub.add_parser("match", help="taste match percentage (JSON)")
    p.add_argument("taste", type=_json_object)
    p.add_argument("movie", type=_json_object)

    p = sub.add_parser("insights", help="fun insights from a viewing profile (JSON)")
    p.add_argument("profile", type=_json_object)
    return parser


def _dispatch(service: GeminiService, args):
    idx = args.key_index
    if args.command == "draft":
        return service.generate_review_draft(args.title, args.rating, args.genres, idx)
    if args.command == "expand":
        return service.expand_thoughts(args.bullets, idx)
    if args.command == "despoil":
        return service.remove_spoilers(args.text, idx)
    if args.command == "sentiment":
        return service.analyze_sentiment(args.text, idx)
    if args.command == "tags":
        return service.suggest_tags(args.text, idx)
    if args.command == "search":
        return service.parse_natural_query(args.query, idx)
    if args.command == "similar":
        return service.find_similar_movies(args.title, args.modifier, idx)
    if args.command == "predict":
        return service.predict_rating(args.taste, args.movie, idx)
    if args.command == "match":
        return service.calculate_taste_match(args.taste, args.movie, idx)
    return service.generate_insights(args.profile, idx)


def main(argv=None, service: GeminiService | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if service is None:
        settings = load_settings()
        if args.no_cache:
            settings = replace(settings, cache=False)
        if args.max_retries is not None:
            settings = replace(settings, max_retries=args.max_retries)
        service = GeminiService(settings)

    try:
        result = run_sync(_dispatch(service, args))
    except Exception as e:
        log.debug("AI request failed: %r", e)
        _, message = error_response(e, "AI request failed.")
        print(message, file=sys.stderr)
        return 1

    print(result if isinstance(result, str) else json.dumps(result, indent=2))
    if args.verbose:
        print(
            f"  {service.total_input_tokens} in | {service.total_output_tokens} out",
            file=sys.stderr,
        )
    return 0
