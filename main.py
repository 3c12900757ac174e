"""CLI entrypoint for the hex crossword layout engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from hexaword.core.constants import DEFAULT_GRID_RADIUS, DEFAULT_SEED, PlacementStrategy
from hexaword.data.preparation import validate_words
from hexaword.engine.generator import GeneratorConfig, HexawordGenerator
from hexaword.utils.logger import configure_logging, get_logger
from hexaword.utils.pretty import print_generation_stats


LOGGER = get_logger("hexaword.cli")


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Lay out a word list as a hexagonal crossword",
    )
    parser.add_argument("--words", nargs="+", metavar="WORD", help="Words to place")
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line (# comments and blank lines ignored)",
    )
    parser.add_argument(
        "--radius",
        type=int,
        default=DEFAULT_GRID_RADIUS,
        help=f"Hex grid radius (default {DEFAULT_GRID_RADIUS})",
    )
    parser.add_argument("--seed", type=str, default=DEFAULT_SEED, help="Seed string for reproducibility")
    parser.add_argument(
        "--strategy",
        type=str,
        choices=[s.value for s in PlacementStrategy],
        default=PlacementStrategy.FRONTIER.value,
        help="Placement strategy (frontier, exact, auto)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=1,
        help="Attempts with derived seeds before giving up on a full layout",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip board invariant validation",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print the board and statistics",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    words: List[str] = []
    if args.words:
        words.extend(args.words)
    if args.words_file:
        words.extend(parse_words_file(args.words_file))
    if not words:
        parser.error("provide --words and/or --words-file")

    check = validate_words(words)
    for error in check.errors:
        LOGGER.warning("Word list: %s", error)

    try:
        config = GeneratorConfig(
            grid_radius=args.radius,
            seed=args.seed,
            strategy=args.strategy,
            retry_limit=args.retries,
            validate=not args.no_validate,
        )
    except ValueError as exc:
        parser.error(str(exc))

    result = HexawordGenerator(config).generate(words)
    if not args.quiet:
        print_generation_stats(result, stream=sys.stderr)

    output_text = json.dumps(result.to_jsonable(), ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0 if result.success else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
