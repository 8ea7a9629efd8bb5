"""Command-line interface for ScentLocker.

Usage:
    scentlocker convert data/perfumes.csv data/perfumes.json
    scentlocker search "black orchid"
    scentlocker search "dark sweet evening" --mode vibe --accord vanilla
    scentlocker match photo.jpg
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from scentlocker.core.catalog import FragranceCatalog
from scentlocker.core.locker import Locker
from scentlocker.core.search.filters import FragranceFilters, PriceRange
from scentlocker.core.use_cases import (
    SearchFragrancesUseCase,
    SearchMode,
    VisualSearchUseCase,
)
from scentlocker.core.visual_matcher import VisualMatcher
from scentlocker.infrastructure.dataset.csv_converter import convert_csv_file
from scentlocker.infrastructure.locker.json_locker import JsonLockerRepository
from scentlocker.infrastructure.vision.hf_embedding_client import HuggingFaceEmbeddingClient
from scentlocker.utils import get_config, get_logger, log_execution_time, set_log_level
from scentlocker.utils.exceptions import AppException
from scentlocker.utils.image_validation import read_image_file

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="scentlocker",
        description="Search a fragrance dataset and manage your perfume locker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a CSV export to the JSON dataset format
  scentlocker convert fra_cleaned.csv data/perfumes.json

  # Name search with filters
  scentlocker search "orchid" --min-rating 4 --concentration EDP

  # Mood search
  scentlocker search "something dark and sweet for date night"

  # Identify a bottle and add it to the locker
  scentlocker match bottle.jpg
        """
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Path to configuration file (default: auto-detect)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=None,
        help='Override log level'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    # convert
    convert = subparsers.add_parser('convert', help='Convert a CSV export to JSON')
    convert.add_argument('input', type=Path, help='CSV file to convert')
    convert.add_argument(
        'output',
        type=Path,
        nargs='?',
        default=Path('data/perfumes.json'),
        help='JSON output path (default: data/perfumes.json)'
    )
    convert.add_argument('--no-progress', action='store_true', help='Hide the progress bar')

    # search
    search = subparsers.add_parser('search', help='Search the dataset by name or vibe')
    search.add_argument('query', type=str, help='Search text')
    search.add_argument(
        '--mode',
        choices=[m.value for m in SearchMode],
        default=SearchMode.AUTO.value,
        help='auto picks vibe or lexical from the query wording (default: auto)'
    )
    search.add_argument('--limit', type=int, default=None, help='Maximum results')
    search.add_argument('--brand', action='append', default=[], help='Restrict to brand (repeatable)')
    search.add_argument('--accord', action='append', default=[], help='Require an accord (repeatable)')
    search.add_argument('--include-note', action='append', default=[], help='Require a note (repeatable)')
    search.add_argument('--exclude-note', action='append', default=[], help='Exclude a note (repeatable)')
    search.add_argument(
        '--context',
        action='append',
        default=[],
        choices=['day', 'night', 'office', 'date'],
        help='Wear context (repeatable)'
    )
    search.add_argument(
        '--concentration',
        action='append',
        default=[],
        choices=['EDT', 'EDP', 'Parfum'],
        help='Concentration (repeatable)'
    )
    search.add_argument('--origin', action='append', default=[], help='Brand origin country (repeatable)')
    search.add_argument('--min-rating', type=float, default=0.0, help='Minimum rating (0-5)')
    search.add_argument('--max-price', type=float, default=None, help='Maximum price')
    search.add_argument('--min-reviews', type=int, default=None, help='Minimum review count')

    # match
    match = subparsers.add_parser('match', help='Identify a bottle photo')
    match.add_argument('image', type=Path, help='JPEG, PNG or WEBP photo')
    match.add_argument('--no-save', action='store_true', help="Don't add the match to the locker")

    return parser.parse_args(argv)


def build_filters(args: argparse.Namespace) -> FragranceFilters:
    """Map search flags onto a FragranceFilters model."""
    price_range = PriceRange()
    if args.max_price is not None:
        price_range = PriceRange(max=args.max_price)

    return FragranceFilters(
        price_range=price_range,
        brands=args.brand,
        accords=args.accord,
        wear_context=args.context,
        min_rating=args.min_rating,
        concentration=args.concentration,
        notes_include=args.include_note,
        notes_exclude=args.exclude_note,
        brand_origin=args.origin,
        min_review_count=args.min_reviews,
    )


def run_convert(args: argparse.Namespace) -> int:
    with log_execution_time(logger, "CSV conversion"):
        count = convert_csv_file(args.input, args.output, show_progress=not args.no_progress)

    print("\n" + "=" * 60)
    print("CONVERSION SUMMARY")
    print("=" * 60)
    print(f"Input: {args.input}")
    print(f"Output: {args.output}")
    print(f"Records: {count}")
    print("=" * 60)
    return 0


def run_search(args: argparse.Namespace, config) -> int:
    catalog = FragranceCatalog.from_path(config.dataset.path)
    catalog.load()

    use_case = SearchFragrancesUseCase.from_config(config, catalog)
    result = use_case.execute(
        args.query,
        mode=SearchMode(args.mode),
        limit=args.limit,
        filters=build_filters(args),
    )

    print("\n" + "=" * 60)
    print(f"{result.mode.value.upper()} SEARCH: {result.query}")
    print("=" * 60)

    if not result.fragrances:
        print(result.message)
        return 0

    if result.vibe_matches:
        for i, match in enumerate(result.vibe_matches, 1):
            fragrance = match.fragrance
            print(f"  {i}. {fragrance.name} - {fragrance.brand} ({match.similarity:.0%})")
            print(f"     {match.explanation}")
    else:
        for i, fragrance in enumerate(result.fragrances, 1):
            rating = f" ★ {fragrance.rating:.2f}" if fragrance.rating is not None else ""
            print(f"  {i}. {fragrance.name} - {fragrance.brand}{rating}")

    print(f"\n{result.count} result(s)")
    return 0


async def run_match(args: argparse.Namespace, config) -> int:
    catalog = FragranceCatalog.from_path(config.dataset.path)
    catalog.load()

    locker = None
    if not args.no_save:
        locker = Locker(JsonLockerRepository(config.locker.storage_path))

    image = read_image_file(args.image)

    async with HuggingFaceEmbeddingClient.from_config(config.vision) as provider:
        use_case = VisualSearchUseCase(
            catalog=catalog,
            provider=provider,
            locker=locker,
            matcher=VisualMatcher(threshold=config.vision.match_threshold),
            candidate_limit=config.vision.candidate_limit,
        )
        with log_execution_time(logger, "visual search"):
            result = await use_case.execute(image, source=str(args.image))

    print("\n" + "=" * 60)
    print("VISUAL SEARCH")
    print("=" * 60)
    print(f"Candidates compared: {result.candidates_compared}")
    print(result.message)
    if result.matched:
        print(f"Brand: {result.fragrance.brand or 'unknown'}")
        if result.added_to_locker:
            print("✓ Added to your locker")
        elif locker is not None:
            print("Already in your locker")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_args(argv)

    try:
        if args.command == 'convert':
            if args.log_level:
                set_log_level(logger, args.log_level)
            return run_convert(args)

        config = get_config(args.config)
        set_log_level(logger, args.log_level or config.log_level)

        logger.info("=" * 60)
        logger.info(f"ScentLocker - {args.command}")
        logger.info("=" * 60)
        logger.info(f"Dataset: {config.dataset.path}")

        if args.command == 'search':
            return run_search(args, config)
        return asyncio.run(run_match(args, config))

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("\n✗ Cancelled by user")
        return 1

    except AppException as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"\n✗ {e.message}")
        return 1

    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        print(f"\n✗ {e}")
        return 1


def run() -> None:
    """Console-script wrapper."""
    sys.exit(main())


if __name__ == '__main__':
    run()
