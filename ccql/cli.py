# ccql/cli.py
"""
Command line interface for ccql.

Usage:
    ccql duplicates --threshold 0.8 --min-count 2 --show-variants
    ccql --format json duplicates --input prompts.txt
"""
import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import (
    AppConfig,
    AssignmentStrategy,
    ConfigError,
    EditMetric,
    SortOrder,
    load_config,
    validate_threshold,
)
from .logging_config import get_logger, setup_logging
from .services.clustering_service import PromptClusteringService
from .services.ingestion_service import IngestionError, IngestionService
from .services.report_service import DuplicateReport, DuplicateReportService

logger = get_logger('cli')

CANONICAL_WIDTH = 80


def _threshold(value: str) -> float:
    try:
        return validate_threshold(float(value))
    except (ValueError, ConfigError) as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _non_negative(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser(config: Optional[AppConfig] = None) -> argparse.ArgumentParser:
    """Build the argument parser; defaults come from the given config."""
    config = config or AppConfig()

    parser = argparse.ArgumentParser(
        prog='ccql',
        description='Query and analyze assistant prompt history'
    )
    parser.add_argument('--data-dir', type=Path, default=None,
                        help='Assistant data directory (default: $CLAUDE_DATA_DIR or ~/.claude)')
    parser.add_argument('-f', '--format', choices=['table', 'json'], default='table',
                        help='Output format')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--config', default=None,
                        help='Path to a JSON config file')

    subparsers = parser.add_subparsers(dest='command', required=True)

    dup = subparsers.add_parser(
        'duplicates',
        help='Find repeated/similar prompts using fuzzy matching'
    )
    dup.add_argument('-t', '--threshold', type=_threshold,
                     default=config.dedup.similarity_threshold,
                     help='Similarity threshold 0.0-1.0 (default: %(default)s)')
    dup.add_argument('-m', '--min-count', type=_non_negative,
                     default=config.report.min_count,
                     help='Minimum count to show (default: %(default)s)')
    dup.add_argument('-l', '--limit', type=_non_negative,
                     default=config.report.limit,
                     help='Maximum clusters to show, 0 for all (default: %(default)s)')
    dup.add_argument('--show-variants', action='store_true',
                     default=config.report.show_variants,
                     help='Show variants in each cluster')
    dup.add_argument('-s', '--sort', choices=[s.value for s in SortOrder],
                     default=config.report.sort.value,
                     help='Sort by count or latest use (default: %(default)s)')
    dup.add_argument('--min-length', type=_non_negative,
                     default=config.report.min_length,
                     help='Minimum prompt length in characters (default: %(default)s)')
    dup.add_argument('--strategy', choices=[s.value for s in AssignmentStrategy],
                     default=config.dedup.strategy.value,
                     help='Cluster assignment strategy (default: %(default)s)')
    dup.add_argument('--metric', choices=[m.value for m in EditMetric],
                     default=config.dedup.metric.value,
                     help='Edit distance metric (default: %(default)s)')
    dup.add_argument('-i', '--input', type=Path, default=None,
                     help='Read prompts from this file (.jsonl history or one prompt per line)')

    return parser


def render_table(report: DuplicateReport, show_variants: bool) -> str:
    """Render a report as an aligned text table."""
    if report.is_empty:
        return "No duplicate prompts found."

    lines = [f"{'COUNT':>7}  PROMPT", f"{'-' * 7}  {'-' * 40}"]
    for row in report.rows:
        canonical = " ".join(row.canonical.split())
        if len(canonical) > CANONICAL_WIDTH:
            canonical = canonical[:CANONICAL_WIDTH - 3] + "..."
        lines.append(f"{row.count:>7}  {canonical}")
        if show_variants:
            for variant in row.variants[1:]:
                lines.append(f"{'':>7}    ~ {' '.join(variant.split())}")

    lines.append("")
    lines.append(
        f"{len(report.rows)} clusters shown "
        f"({report.total_clusters} total from {report.total_prompts} prompts)"
    )
    return "\n".join(lines)


def run_duplicates(args: argparse.Namespace, config: AppConfig) -> int:
    """Execute the duplicates command."""
    dedup_config = replace(
        config.dedup,
        similarity_threshold=args.threshold,
        metric=EditMetric(args.metric),
        strategy=AssignmentStrategy(args.strategy),
    )
    report_config = replace(
        config.report,
        min_count=args.min_count,
        limit=args.limit,
        min_length=args.min_length,
        sort=SortOrder(args.sort),
        show_variants=args.show_variants,
    )

    ingestion = IngestionService(config, data_dir=args.data_dir)
    if args.input is not None:
        records = ingestion.load(args.input)
    else:
        records = ingestion.load_history()

    report_service = DuplicateReportService(
        clustering_service=PromptClusteringService(dedup_config),
        config=report_config,
    )
    report = report_service.build(records)

    if args.format == 'json':
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(render_table(report, report_config.show_variants))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    argv = sys.argv[1:] if argv is None else argv

    # Config file must be known before the parser picks its defaults
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument('--config', default=None)
    pre_args, _ = pre.parse_known_args(argv)

    try:
        config = load_config(pre_args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    args = build_parser(config).parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else None)

    try:
        if args.command == 'duplicates':
            return run_duplicates(args, config)
    except (ConfigError, IngestionError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 2


if __name__ == '__main__':
    sys.exit(main())
