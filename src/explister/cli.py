"""
Command-line interface for listing experiments.

Usage:
    # Table of experiments in the current project
    explister-ls

    # Another project, newest first, only running experiments
    explister-ls -R path/to/project --sort started-desc --filter "status = running"

    # JSON for scripting, or bare IDs for piping
    explister-ls --json
    explister-ls -q | xargs -n1 echo

    # Defaults from a config file (flags still win)
    explister-ls --config explister.yaml

The report goes to stdout; log messages go to stderr.
"""

import argparse
import logging
import sys
from typing import List, Optional

from dacite import DaciteError

from explister.config import ListingConfig, load_config
from explister.listing import Format, list_experiments
from explister.params import FilterError, Filters, Sorter
from explister.project import ExperimentRepository, RepositoryError

logger = logging.getLogger("explister")


def setup_logging(log_level: str = "WARNING") -> None:
    """Configure logging to stderr, keeping stdout for the report."""
    level = getattr(logging, log_level.upper())

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter('%(asctime)s | %(levelname)s | %(message)s', '%H:%M:%S')
    )

    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="explister-ls",
        description="List experiments and their checkpoints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Filters:
    <name> <operator> <value>, operator one of = == != < <= > >=
    Names can be: started, step, user, host, command, status,
    a metric of the best checkpoint, or a param.

Examples:
    explister-ls --filter "val_loss < 0.2" --filter "status = stopped"
    explister-ls --sort step-desc --all
        """,
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--repository", "-R",
        type=str,
        default=None,
        help="Project directory (default: from config, or current directory)",
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--json",
        action="store_true",
        help="Print experiments as JSON",
    )
    output.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print experiment IDs",
    )

    parser.add_argument(
        "--all", "-a",
        action="store_true",
        dest="all_params",
        help="Show all params, not only those that differ between experiments",
    )
    parser.add_argument(
        "--filter", "-f",
        action="append",
        dest="filters",
        default=[],
        help="Only show experiments matching this filter (repeatable)",
    )
    parser.add_argument(
        "--sort", "-s",
        type=str,
        default=None,
        help="Sort key, optionally suffixed with -asc or -desc (default: started)",
    )
    parser.add_argument(
        "--heartbeat-timeout",
        type=float,
        default=None,
        help="Seconds without heartbeat after which an experiment is stopped",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    return parser.parse_args(argv)


def apply_overrides(config: ListingConfig, args: argparse.Namespace) -> ListingConfig:
    """Apply command-line overrides to configuration."""
    if args.repository is not None:
        config.repository_dir = args.repository
    if args.json:
        config.format = Format.JSON
    elif args.quiet:
        config.format = Format.QUIET
    if args.all_params:
        config.all_params = True
    if args.filters:
        config.filters = list(config.filters) + list(args.filters)
    if args.sort is not None:
        config.sort = args.sort
    if args.heartbeat_timeout is not None:
        config.heartbeat_timeout_seconds = args.heartbeat_timeout
    if args.log_level is not None:
        config.log_level = args.log_level

    # Re-run validation on the overridden values
    config.__post_init__()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    args = parse_args(argv)
    setup_logging(args.log_level or "WARNING")

    try:
        config = load_config(args.config) if args.config else ListingConfig()
        config = apply_overrides(config, args)
        setup_logging(config.log_level)

        repository = ExperimentRepository(
            config.repository_dir,
            heartbeat_timeout=config.heartbeat_timeout_seconds,
        )
        list_experiments(
            repository,
            config.format,
            all_params=config.all_params,
            filters=Filters.parse(config.filters),
            sorter=Sorter.parse(config.sort),
        )
    except (RepositoryError, FilterError, DaciteError, OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
