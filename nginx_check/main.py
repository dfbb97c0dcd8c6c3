"""Command-line entry point for the NGINX status check."""

import argparse
import sys
from typing import Any, Dict, List, Optional

from .collectors.nginx_collector import NginxCollector
from .config.loader import ConfigLoader
from .config.models import (
    CheckConfig,
    DEFAULT_HOSTNAME,
    DEFAULT_PORT,
    DEFAULT_STATUS_PATH,
    DEFAULT_TIMEOUT,
    LOG_LEVELS,
)
from .config.settings import Settings
from .errors import ConfigError, NginxCheckError
from .utils.exposition import render_records
from .utils.logger import setup_logger
from .utils.status import CheckState


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser; defaults are applied after merging sources."""
    parser = argparse.ArgumentParser(
        prog='nginx-check',
        description='Performs on-demand metrics monitoring of NGINX instances',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Every option can also be set through its NGINX_CHECK_* environment variable
or a YAML file given with --config. Command-line flags win over environment
variables, which win over the config file.

Examples:
  # Check the local status page on port 81
  nginx-check

  # Check an explicit URL with a 5 second timeout
  nginx-check --url http://web01:8080/nginx_status --timeout 5
        """
    )

    parser.add_argument(
        '--hostname',
        help=f'The NGINX hostname (env NGINX_CHECK_HOSTNAME, default: {DEFAULT_HOSTNAME})'
    )

    parser.add_argument(
        '-p', '--port',
        type=int,
        help=f'The NGINX port number (env NGINX_CHECK_PORT, default: {DEFAULT_PORT})'
    )

    parser.add_argument(
        '--status-path',
        dest='status_path',
        help=f'The NGINX status path (env NGINX_CHECK_STATUS_PATH, default: {DEFAULT_STATUS_PATH})'
    )

    parser.add_argument(
        '-u', '--url',
        help='The NGINX status path URL, overrides hostname, port and status path '
             '(env NGINX_CHECK_URL)'
    )

    parser.add_argument(
        '-t', '--timeout',
        type=int,
        help='The request timeout in seconds, 0 for no timeout '
             f'(env NGINX_CHECK_TIMEOUT, default: {DEFAULT_TIMEOUT})'
    )

    parser.add_argument(
        '--config',
        default=Settings.config_file(),
        help='Path to a YAML configuration file (env NGINX_CHECK_CONFIG)'
    )

    parser.add_argument(
        '--log-level',
        dest='log_level',
        choices=list(LOG_LEVELS),
        help='Logging level, logs go to stderr (env LOG_LEVEL, default: WARNING)'
    )

    return parser


def resolve_config(args: argparse.Namespace) -> CheckConfig:
    """
    Merge config file, environment and command-line values.

    Args:
        args: Parsed command-line arguments

    Returns:
        CheckConfig: Validated configuration

    Raises:
        ConfigError: If the config file or a value is invalid
    """
    values: Dict[str, Any] = {}

    if args.config:
        try:
            values.update(ConfigLoader.read_file(args.config))
        except FileNotFoundError as e:
            raise ConfigError(str(e)) from e

    values.update(Settings.overrides())

    for field in ("hostname", "port", "status_path", "url", "timeout", "log_level"):
        value = getattr(args, field)
        if value is not None:
            values[field] = value

    return ConfigLoader.build(values)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the check once.

    Prints the metrics on success. On failure prints the error and no
    metrics, and returns the CRITICAL exit code.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        int: Process exit code
    """
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args)
        target = config.resolve_target()
    except ConfigError as e:
        print(f"error validating input: {e}")
        return CheckState.CRITICAL.exit_code

    logger = setup_logger("nginx_check", config.log_level)
    collector = NginxCollector(target, config.timeout, logger)

    try:
        records = collector.collect()
    except NginxCheckError as e:
        print(f"error generating nginx metrics: {e}")
        return CheckState.CRITICAL.exit_code

    sys.stdout.write(render_records(records))
    return CheckState.OK.exit_code


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    run()
