"""
Zero-shot Matching Script

Scores every image against every candidate text with a SigLIP model and
prints, for each image, the probability of each text.

Usage:
    python -m app.matching_cli [--which VARIANT] [--images a.jpg,b.jpg] [--sequences "a cat,a dog"]
"""

import argparse
import json
import sys

from vlmatch.config import model_registry, settings
from vlmatch.constants import APP_TITLE
from vlmatch.core.exceptions import ServiceError
from vlmatch.core.ml.engines import ZeroShotMatcher
from vlmatch.core.ml.utils.result_ranker import format_report, report_to_dict
from vlmatch.log import get_logger, setup_logging

logger = get_logger(__name__)


def comma_list(value: str) -> list[str]:
    """Split a comma separated argument, dropping empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=APP_TITLE)
    parser.add_argument(
        "--which",
        default=settings.matching.default_variant,
        choices=sorted(model_registry.list_available_models()),
        help="Model variant",
    )
    parser.add_argument("--hf-repo", help="Hub repository id, overrides the variant's repository")
    parser.add_argument("--model-dir", help="Local directory with model weights")
    parser.add_argument("--config", help="Local config.json (file or directory)")
    parser.add_argument("--tokenizer", help="Local tokenizer.json file or tokenizer directory")
    parser.add_argument("--images", type=comma_list, help="Comma separated image paths")
    parser.add_argument("--sequences", type=comma_list, help="Comma separated candidate texts")
    parser.add_argument("-i", "--image-size", type=positive_int, help="Override the model's image size")
    parser.add_argument("--cpu", action="store_true", help="Run on CPU")
    parser.add_argument("--top-k", type=positive_int, help="List only the k most probable texts per image")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument(
        "--log-level",
        default="DEBUG" if settings.debug else settings.log_level,
        help="Logging level (DEBUG when VLMATCH_DEBUG is set)",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    # An explicit but empty list is passed on so the matcher rejects it
    images = settings.matching.default_images if args.images is None else args.images
    texts = settings.matching.default_texts if args.sequences is None else args.sequences
    device = "cpu" if args.cpu else settings.model.device

    matcher = ZeroShotMatcher(
        model_config_name=args.which,
        device=device,
        image_size=args.image_size or settings.matching.image_size,
        overflow_policy=settings.matching.overflow_policy,
        max_workers=settings.matching.max_workers,
        hf_repo=args.hf_repo,
        model_dir=args.model_dir,
        config_path=args.config,
        tokenizer_path=args.tokenizer,
        cache_dir=settings.model.cache_dir,
    )
    report = matcher.match(images, texts)

    if args.json:
        print(json.dumps(report_to_dict(report, args.top_k), indent=2))
    else:
        print(format_report(report, args.top_k))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        return run(args)
    except ServiceError as e:
        logger.debug("Matching failed", exc_info=True)
        print(f"Error [{e.error_type}]: {e}", file=sys.stderr)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
