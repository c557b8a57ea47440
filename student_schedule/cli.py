#!/usr/bin/env python3
"""
Command-line interface for the student schedule builder.
Builds a conflict-free schedule from a section catalog and prints a summary.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from .config import LOG_LEVELS, load_config
from .planner import SchedulePlanner


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Student Schedule Builder CLI',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        '--input-dir',
        type=str,
        default=None,
        help='Directory containing the section catalog (default: SCHEDULE_INPUT_DIR or "input")'
    )

    parser.add_argument(
        '--crn',
        dest='crns',
        action='append',
        required=True,
        help='CRN of a section to add; repeat for each section'
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help='Fail on the first conflict instead of skipping conflicting sections'
    )

    parser.add_argument(
        '--env-file',
        type=str,
        default=None,
        help='Path to a .env file with SCHEDULE_* settings'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=LOG_LEVELS,
        default=None,
        help='Logging level (default: SCHEDULE_LOG_LEVEL or INFO)'
    )

    parser.add_argument(
        '--json-output',
        action='store_true',
        help='Output results as JSON'
    )

    return parser.parse_args(argv)


def setup_logging(log_level):
    """Configure logging."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {log_level}')

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main(argv=None):
    """Main entry point for the CLI."""
    args = parse_args(argv)

    try:
        config = load_config(
            env_file=args.env_file,
            overrides={'input_dir': args.input_dir, 'log_level': args.log_level}
        )
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {str(e)}")
        sys.exit(1)

    setup_logging(config.log_level)

    input_dir = Path(config.input_dir)
    if not input_dir.exists():
        print(f"Error: Input directory does not exist: {input_dir}")
        sys.exit(1)

    try:
        planner = SchedulePlanner(input_dir=str(input_dir), config=config)
        results = planner.plan(args.crns, strict=args.strict)
    except Exception as e:
        print(f"Error: {str(e)}")
        sys.exit(1)

    if args.json_output:
        print(json.dumps(results, indent=2))
        if not results['success']:
            sys.exit(1)
        return

    print("\nSchedule Results:")

    if not results['success']:
        print(f"  Error: {results['error']}")
        sys.exit(1)

    summary = results['schedule_summary']
    print(f"  Sections: {summary['section_count']}")
    print(f"  Total credits: {summary['total_credits']}")
    print(f"  Earliest start: {summary['earliest_start'] or '-'}")
    print(f"  Latest end: {summary['latest_end'] or '-'}")

    if results['rejected']:
        print("\nSkipped (conflicts):")
        for item in results['rejected']:
            print(f"  {item['crn']} conflicts with {item['conflicts_with']}")

    print("\nBusy minutes per day:")
    for day, minutes in summary['busy_minutes'].items():
        print(f"  {day}: {minutes}")


if __name__ == '__main__':
    main()
