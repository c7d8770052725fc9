"""CLI for Review Digest: summarize one subject from a JSON corpus file."""

import argparse
import json
import sys
from dataclasses import replace

from review_digest.config.composition import build_chunked_use_case, build_extractive_use_case
from review_digest.config.logging_config import setup_logging
from review_digest.config.settings import AppSettings
from review_digest.infrastructure.sources.json_file_source import JsonFileFeedbackSource


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="review-digest", description="Summarize ratings and posts about one subject."
    )
    parser.add_argument("--subject", required=True, help="Subject id (e.g. a movie id)")
    parser.add_argument("--corpus", required=True, help="JSON file keyed by subject id")
    parser.add_argument(
        "--strategy", choices=("extractive", "chunked"), default="extractive"
    )
    parser.add_argument("--k", type=int, default=None, help="Units selected by MMR")
    parser.add_argument(
        "--mmr-lambda", type=float, default=None, help="Relevance vs. novelty (0-1)"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = AppSettings()
    if args.k is not None:
        settings = replace(settings, summary_k=args.k)
    if args.mmr_lambda is not None:
        settings = replace(settings, mmr_lambda=args.mmr_lambda)
    setup_logging(settings)

    source = JsonFileFeedbackSource(args.corpus)
    if args.strategy == "chunked":
        uc = build_chunked_use_case(settings, source=source)
    else:
        uc = build_extractive_use_case(settings, source=source)
    result = uc.summarize(args.subject)

    if result.ok and result.value is not None:
        print(json.dumps(result.value.to_dict(), indent=2, ensure_ascii=False))
        return 0
    err = result.error
    print(f"[ERROR] {type(err).__name__}: {err}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
