"""
Onion CLI - Main entry point.

Provides command-line access to build() and query().
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, Sequence

from onion_layers import (
    OnionBuilder,
    OnionConfig,
    QueryCounter,
    QueryEngine,
    QueryLine,
)
from onion_layers.config import QueryLineConfig
from onion_layers.logging import LogEvent, StructuredLogger
from onion_layers.samples import SAMPLE_POINTS, SAMPLE_QUERIES


def load_config(args: argparse.Namespace) -> OnionConfig:
    """
    Resolve the configuration from --config and --sample.

    --sample supplies points (and query lines) when the config has none.
    """
    config = OnionConfig.from_yaml(args.config) if args.config else OnionConfig()

    if args.sample:
        return OnionConfig(
            build=config.build,
            query=config.query,
            logging=config.logging,
            points=config.points or list(SAMPLE_POINTS),
            queries=config.queries or [
                QueryLineConfig(name=name, start=start, end=end)
                for name, start, end in SAMPLE_QUERIES
            ],
        )
    return config


def query_lines(
    config: OnionConfig,
    ad_hoc: Optional[Sequence[Sequence[float]]]
) -> List[QueryLineConfig]:
    """Ad-hoc --line values win over configured query lines."""
    if ad_hoc:
        return [
            QueryLineConfig(name=f"line_{n}", start=(x1, y1), end=(x2, y2))
            for n, (x1, y1, x2, y2) in enumerate(ad_hoc)
        ]
    return list(config.queries)


def run_build(config: OnionConfig, logger: StructuredLogger) -> Dict[str, Any]:
    onion = OnionBuilder().with_config(config).with_logger(logger).build()
    stats = onion.stats()
    return {
        'stats': stats.to_dict(),
        'layers': [list(layer.vertices) for layer in onion.layers],
    }


def run_query(
    config: OnionConfig,
    lines: List[QueryLineConfig],
    logger: StructuredLogger
) -> Dict[str, Any]:
    if not lines:
        raise ValueError("No query lines (use --line or a config with queries)")

    onion = OnionBuilder().with_config(config).with_logger(logger).build()
    engine = QueryEngine(config=config.query, logger=logger)
    counter = QueryCounter()

    results = []
    for line_config in lines:
        result = engine.run(onion, QueryLine(start=line_config.start, end=line_config.end))
        counter.update(result)
        entry = result.to_dict()
        entry['name'] = line_config.name
        results.append(entry)

    stats = counter.get_stats()
    return {
        'queries': results,
        'summary': {
            'queries': stats.queries,
            'points_reported': stats.points_reported,
            'early_terminations': stats.early_terminations,
        },
    }


def main(argv: Optional[Sequence[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="onion-cli",
        description="Convex layer point location (onion peeling + fractional cascading)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Layer and cascade statistics for the built-in sample
  onion-cli --sample build

  # Scene from YAML
  onion-cli --config config/onion.yaml build

  # Configured query lines
  onion-cli --config config/onion.yaml query

  # Ad-hoc query lines (x1 y1 x2 y2), repeatable
  onion-cli --sample query --line 0 300 600 300 --line 0 0 600 600
"""
    )

    # Global arguments
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config (build/query/logging, points, queries)"
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Use the built-in 13-point sample when the config has no points"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from config, WARNING)"
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('build', help='Build the onion and print statistics')

    query_parser = subparsers.add_parser('query', help='Report points above query lines')
    query_parser.add_argument(
        '--line',
        nargs=4,
        type=float,
        action='append',
        metavar=('X1', 'Y1', 'X2', 'Y2'),
        help='Query line through (X1, Y1) and (X2, Y2)'
    )

    # Parse arguments
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute command
    logger = StructuredLogger(component="cli", level=args.log_level or "WARNING")
    try:
        config = load_config(args)
        logger.set_level(args.log_level or config.logging.level)

        if args.command == 'build':
            output = run_build(config, logger)

        elif args.command == 'query':
            output = run_query(config, query_lines(config, args.line), logger)

    except (FileNotFoundError, TypeError, ValueError) as e:
        logger.error(
            event=LogEvent.CONFIG_ERROR,
            message="Command failed",
            metadata={'command': args.command},
            exc_info=e,
        )
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(output, indent=2))


if __name__ == '__main__':
    main()
