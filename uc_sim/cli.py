"""
CLI module for the UC event simulator.

Handles argument parsing, target and generation validation, and dispatch
to the orchestration module.
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

from .config import DEFAULT_RUN_CONFIG, load_run_config, merge_run_config, validate_run_config
from .engine import MAX_GENERATIONS
from .errors import ConfigurationError, SimulationError, UsageError
from .orchestration import run_from_config, validate_target
from .policies import POLICY_NAMES


DESCRIPTION = """\
Given a target sequence of chunks T and a number of generations n, generate
all rearrangements made from a 'reference' haplotype (made up by linearly
ordering chunks) by n generations of unequal crossover events.

The first (leftmost in the target) and last (rightmost in the target) chunk
are considered flanking chunks and are never involved in recombination;
other chunks must lie between these in ASCII order.
"""

EPILOG = """\
Examples:
  simulate_uc_events 01215456 2                      # Report to stdout
  simulate_uc_events 01215456 2 --output dup4.tsv    # Report to file
  simulate_uc_events --config run.yaml               # Everything from YAML
  simulate_uc_events 012 1 --policy everything       # Keep every history
"""


def parse_generations(value: Any) -> int:
    """
    Parse and check the number of generations.

    Args:
        value: Generation count as given (string from the command line or
            integer from YAML)

    Returns:
        Number of generations

    Raises:
        UsageError: If the value is not an integer
        ConfigurationError: If the value is outside 1..MAX_GENERATIONS
    """
    if isinstance(value, bool):
        raise UsageError(f"Number of generations must be an integer, got: {value}")

    try:
        generations = int(value)
    except (TypeError, ValueError):
        raise UsageError(f"Number of generations must be an integer, got: {value}")

    if generations > MAX_GENERATIONS:
        raise ConfigurationError(
            f"More than {MAX_GENERATIONS} generations may make your computer explode"
        )
    if generations < 1:
        raise ConfigurationError(f"Number of generations must be at least 1, got: {generations}")

    return generations


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simulate_uc_events",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG
    )

    parser.add_argument('target', nargs='?', help='Target sequence of chunks, e.g. 01215456')
    parser.add_argument(
        'generations', nargs='?',
        help=f'Number of generations (1-{MAX_GENERATIONS})'
    )

    parser.add_argument('--config', '-c', metavar='PATH', help='Run configuration YAML file')
    parser.add_argument(
        '--policy', '-p',
        choices=POLICY_NAMES,
        help='History recording policy (default: default)'
    )
    parser.add_argument('--output', '-o', metavar='PATH', help='Write report to PATH instead of stdout')
    parser.add_argument('--registry-csv', metavar='PATH', help='Save every CNV found to a CSV file')
    parser.add_argument('--metadata', metavar='PATH', help='Save run summary to a YAML file')
    parser.add_argument('--plot', metavar='PATH', help='Save summary plot (PNG)')
    parser.add_argument('--overwrite', action='store_true', default=None, help='Overwrite existing output files')
    parser.add_argument('--quiet', '-q', action='store_true', default=None, help='No progress messages')

    return parser


def build_run_config(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Combine defaults, the optional YAML file and command-line arguments.

    Returns:
        Validated run configuration with checked target and generations

    Raises:
        UsageError: If target or generation count is missing
        ConfigurationError: If the configuration is invalid
    """
    config = DEFAULT_RUN_CONFIG
    if args.config:
        config = merge_run_config(config, load_run_config(args.config))

    config = merge_run_config(config, {
        'target': args.target,
        'generations': args.generations,
        'policy': args.policy,
        'quiet': args.quiet,
        'output': {
            'report': args.output,
            'registry': args.registry_csv,
            'metadata': args.metadata,
            'plot': args.plot,
            'overwrite': args.overwrite,
        },
    })

    if config['target'] is None or config['generations'] is None:
        raise UsageError("Both a target and a number of generations are required")

    if not isinstance(config['target'], str):
        raise ConfigurationError(
            f"'target' must be a string (quote it in YAML), got: {config['target']!r}"
        )

    config['generations'] = parse_generations(config['generations'])
    validate_run_config(config)

    return config


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point with command-line argument parsing."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = build_run_config(args)
        for warning in validate_target(config['target']):
            print(f"Warning: {warning}", file=sys.stderr)

        run_from_config(config)

    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(file=sys.stderr)
        parser.print_help(sys.stderr)
        sys.exit(1)
    except (SimulationError, FileNotFoundError, FileExistsError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        sys.exit(1)

    if not config['quiet']:
        print("Thanks for using simulate_uc_events!", file=sys.stderr)
