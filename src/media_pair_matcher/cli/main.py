"""CLI entry point for media pair matcher."""

import argparse
import json
import logging
import sys

from .. import __version__
from ..core import (
    ApplicationConfig,
    BatchParameters,
    BatchSession,
    FolderKind,
    MatcherError,
    MatchResult,
    MediaFolderLister,
    PairMatcher,
    RuleSet,
    sequential_id_factory,
)


def setup_logging(level: str = "INFO") -> None:
    """
    Set up logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def progress_callback(current: int, total: int | None = None, message: str = "") -> None:
    """Report listing progress on stderr so stdout stays machine readable."""
    if message:
        print(f"\r{message}", end="", flush=True, file=sys.stderr)
    elif total:
        percent = (current / total) * 100
        print(f"\rProgress: {current}/{total} ({percent:.1f}%)", end="", flush=True, file=sys.stderr)
    else:
        print(f"\rProcessed: {current} files", end="", flush=True, file=sys.stderr)


def build_session(
    args: argparse.Namespace, config: ApplicationConfig | None = None
) -> BatchSession:
    """Create a batch session from parsed command line arguments."""
    config = config or ApplicationConfig()
    patterns = list(args.rule) if args.rule else list(config.default_patterns)
    patterns.extend(args.extra_rule or [])

    matcher = PairMatcher(
        config=config, id_factory=sequential_id_factory() if args.sequential_ids else None
    )
    lister = MediaFolderLister(
        progress_callback=progress_callback if args.output_format == "text" else None
    )
    parameters = BatchParameters(
        first_segment_adjust=args.first_segment_adjust,
        last_segment_adjust=args.last_segment_adjust,
        skip_subtitles=args.skip_subtitles,
    )

    session = BatchSession(
        on_add_to_queue=lambda jobs: None,
        lister=lister,
        matcher=matcher,
        rule_set=RuleSet(patterns),
        parameters=parameters,
    )
    session.set_folder(FolderKind.REFERENCE, args.reference)
    session.set_folder(FolderKind.FOREIGN, args.foreign)
    session.set_folder(FolderKind.OUTPUT, args.output)
    return session


def print_match_results(result: MatchResult, unmatched_only: bool = False) -> None:
    """
    Print match results to console.

    Args:
        result: Results from the match pass
        unmatched_only: Only list reference files without a match
    """
    print("\n" + "=" * 60)
    print("MATCH PREVIEW")
    print("=" * 60)

    print(f"Reference videos: {len(result.preview)}")
    print(f"Matched: {result.matched_count}")
    print(f"Unmatched: {result.unmatched_count}")

    rows = [row for row in result.preview if not (unmatched_only and row.matched)]
    if rows:
        print("\n" + "-" * 60)
        for row in rows:
            marker = "✅" if row.matched else "❌"
            print(f"{marker} {row.reference}")
            print(f"    key: {row.key}")
            print(f"    foreign: {row.foreign or '(no match)'}")

    if result.collisions:
        print("\n" + "-" * 60)
        print("KEY COLLISIONS (last foreign file wins)")
        print("-" * 60)
        for collision in result.collisions:
            print(f"  {collision.key}: kept {collision.kept}, ignored {collision.discarded}")

    if not result.jobs:
        print("\nNo jobs created.")
        return

    print("\n" + "-" * 60)
    print("JOBS")
    print("-" * 60)
    for job in result.jobs:
        print(f"[{job.id}] {job.output_video}")
        print(f"    reference: {job.ref_video}")
        print(f"    foreign:   {job.foreign_video}")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="media-pair-matcher",
        description="Media Pair Matcher - Pair reference and foreign videos by normalized filename",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview matches between two folders
  media-pair-matcher /videos/original /videos/dubbed /videos/out

  # Replace the default rules
  media-pair-matcher REF FOREIGN OUT --rule '\\.[^.]+$' --rule '[-_.\\s]'

  # Keep the default rules and also strip "proper"
  media-pair-matcher REF FOREIGN OUT --extra-rule 'proper'

  # JSON output with reproducible job ids
  media-pair-matcher REF FOREIGN OUT --output-format json --sequential-ids
        """,
    )

    parser.add_argument("reference", help="Folder with the reference videos")
    parser.add_argument("foreign", help="Folder with the foreign videos")
    parser.add_argument("output", help="Folder the processed videos will be written to")

    # Rule options
    parser.add_argument(
        "--rule",
        action="append",
        metavar="PATTERN",
        help="Removal rule (regular expression); replaces the default rules, repeatable",
    )
    parser.add_argument(
        "--extra-rule",
        action="append",
        metavar="PATTERN",
        help="Removal rule appended after the other rules, repeatable",
    )

    # Job parameters
    parser.add_argument(
        "--first-segment-adjust", type=float, default=0, help="First segment adjustment (default: 0)"
    )
    parser.add_argument(
        "--last-segment-adjust", type=float, default=0, help="Last segment adjustment (default: 0)"
    )
    parser.add_argument(
        "--skip-subtitles", action="store_true", help="Mark jobs to skip subtitle handling"
    )
    parser.add_argument(
        "--sequential-ids",
        action="store_true",
        help="Number jobs batch-1, batch-2, ... instead of using random ids",
    )

    # Output options
    parser.add_argument(
        "--unmatched-only", action="store_true", help="Only list reference files without a match"
    )
    parser.add_argument(
        "--output-format",
        choices=["text", "json"],
        default="text",
        help="Output format for results (default: text)",
    )

    # Logging options
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (default: from configuration, INFO)",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the CLI application.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    config = ApplicationConfig()
    setup_logging(args.log_level or config.log_level)
    logger = logging.getLogger(__name__)

    try:
        session = build_session(args, config)
        if args.output_format == "text":
            print(f"Listing {args.reference} and {args.foreign}", file=sys.stderr)
        result = session.load_jobs()
        if args.output_format == "text":
            print(file=sys.stderr)  # New line after progress

        if args.output_format == "json":
            print(json.dumps(result.model_dump(mode="json"), indent=2))
        else:
            print_match_results(result, unmatched_only=args.unmatched_only)

        return 0

    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.")
        return 1
    except MatcherError as e:
        logger.debug("Match pass failed", exc_info=True)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
