"""
Command-line interface for triggering a Jenkins build and waiting on it.

This module parses arguments, assembles the run configuration, and maps the
outcome of the run to a process exit code. It is the only place that decides
how the process ends.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..client.jenkins import JenkinsClient
from ..config import load_config
from ..lifecycle import Submitter
from ..models.config import TriggerConfig
from ..validation import (
    ErrorSeverity,
    TriggerError,
    ValidationError,
    handle_error,
    parse_key_value,
)
from .orchestrator import TriggerRunner

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INTERRUPTED = 130

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"


def setup_logging(level: str) -> None:
    """Configure root logging to stdout with full timestamps."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildtrigger",
        description="Trigger a Jenkins job and wait until it finishes.",
        epilog="Settings not given on the command line are read from JENKINS_* "
               "environment variables; PARAMETER_<NAME> variables become build parameters.",
    )
    parser.add_argument("-c", "--config", type=Path, help="TOML configuration file.")
    parser.add_argument("--uri", help="Jenkins base URL (JENKINS_URI).")
    parser.add_argument("--job", help="Job name (JENKINS_JOB).")
    parser.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Build parameter; may be repeated. Overrides PARAMETER_<NAME>.",
    )
    parser.add_argument("--queue-interval", type=float, help="Seconds between queue polls (QUEUE_POLL_INTERVAL).")
    parser.add_argument("--build-interval", type=float, help="Seconds between build polls (JOB_POLL_INTERVAL).")
    parser.add_argument("--timeout", type=float, help="Timeout for each wait phase in seconds (TIMEOUT).")
    parser.add_argument("--queue-timeout", type=float, help="Timeout for the queue wait only (QUEUE_TIMEOUT).")
    parser.add_argument("--build-timeout", type=float, help="Timeout for the build wait only (JOB_TIMEOUT).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the configuration and show the request without contacting Jenkins.",
    )
    return parser


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate parsed arguments into settings overrides."""
    overrides: Dict[str, Any] = {
        "uri": args.uri,
        "job": args.job,
        "queue_interval": args.queue_interval,
        "build_interval": args.build_interval,
        "timeout": args.timeout,
        "queue_timeout": args.queue_timeout,
        "build_timeout": args.build_timeout,
    }
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    parameters = dict(parse_key_value(item, field_name="--param") for item in args.param)
    if parameters:
        overrides["parameters"] = parameters
    return {k: v for k, v in overrides.items() if v is not None}


def describe_run(config: TriggerConfig) -> None:
    logger.info(f"Starting job: {config.job.name} on Jenkins here: {config.base_url}")
    logger.debug(
        f"QUEUE_POLL_INTERVAL: {config.queue_policy.interval:g} "
        f"JOB_POLL_INTERVAL: {config.build_policy.interval:g} "
        f"QUEUE_TIMEOUT: {config.queue_policy.timeout:g} "
        f"JOB_TIMEOUT: {config.build_policy.timeout:g}"
    )


def main_cli(argv: Optional[List[str]] = None, environ=None) -> int:
    """
    Main command-line entry point.

    Args:
        argv: Argument list, defaults to sys.argv[1:]
        environ: Environment mapping, defaults to os.environ

    Returns:
        Process exit code: 0 on success, the failing error's exit_code
        otherwise, 130 when interrupted
    """
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")

    try:
        return run_cli(args, os.environ if environ is None else environ)
    except KeyboardInterrupt:
        logger.warning("Interrupted; a build that already started keeps running on the server")
        return EXIT_INTERRUPTED


def run_cli(args: argparse.Namespace, environ) -> int:
    """Load configuration and perform the run described by parsed arguments."""
    try:
        config = load_config(
            config_path=args.config,
            environ=environ,
            overrides=overrides_from_args(args),
        )
    except ValidationError as e:
        handle_error(e, "configuration loading", severity=ErrorSeverity.ERROR, reraise=False, logger=logger)
        return e.exit_code

    setup_logging(config.log_level)
    describe_run(config)

    if args.dry_run:
        with JenkinsClient(config.base_url, config.credentials) as client:
            endpoint = Submitter(client).endpoint(config.job)
        logger.info(f"Dry run: would POST {endpoint}")
        for key in sorted(config.job.parameters):
            logger.info(f'{key}="{config.job.parameters[key]}"')
        return EXIT_OK

    runner = TriggerRunner(config)
    try:
        outcome = runner.run()
    except TriggerError as e:
        handle_error(e, f"job '{config.job.name}'", severity=ErrorSeverity.ERROR, reraise=False, logger=logger)
        return e.exit_code
    finally:
        runner.client.close()

    logger.info(outcome.summary())
    return EXIT_OK


def main() -> None:
    sys.exit(main_cli())


if __name__ == "__main__":
    main()
