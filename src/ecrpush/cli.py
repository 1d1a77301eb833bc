"""Main CLI entry point for ecrpush."""

import argparse
import logging
import os
import sys

from ecrpush.config import DEFAULT_PROFILE, load_config, validate_profile
from ecrpush.exceptions import (
    AuthenticationError,
    BuildError,
    ConfigError,
    ProfileNotFoundError,
    PushError,
    StepError,
    TagError,
    ValidationError,
)
from ecrpush.lib.logger import setup_logger
from ecrpush.lib.output import Colors, error, print_dict, step, success
from ecrpush.registry import RegistryOrchestrator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "deploy.yml"

STEP_FAILURE_PREFIXES = {
    AuthenticationError: "Authentication failed",
    BuildError: "Build failed",
    TagError: "Tag failed",
    PushError: "Push failed",
}


class UsageFormatter(argparse.RawDescriptionHelpFormatter):
    """Help formatter that prints "Usage:" on its own line."""

    def add_usage(self, usage, actions, groups, prefix=None):
        return super().add_usage(usage, actions, groups, prefix or "Usage:\n  ")


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser.

    Flag defaults come from ECRPUSH_CONFIG / ECRPUSH_PROFILE when set,
    otherwise "deploy.yml" and "dev".

    Returns
    -------
    argparse.ArgumentParser
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="ecrpush",
        usage="%(prog)s -config deploy.yml -profile dev",
        description="Authenticate to Amazon ECR, build a Docker image, tag it and push it",
        formatter_class=UsageFormatter,
    )
    parser._optionals.title = "Options"

    parser.add_argument(
        "-config",
        "--config",
        dest="config",
        default=os.environ.get("ECRPUSH_CONFIG", DEFAULT_CONFIG_FILE),
        help="Path to the configuration YAML file (default: %(default)s)",
    )
    parser.add_argument(
        "-profile",
        "--profile",
        dest="profile",
        default=os.environ.get("ECRPUSH_PROFILE", DEFAULT_PROFILE),
        help="Configuration profile to use, e.g. dev, prod (default: %(default)s)",
    )
    return parser


def deploy(config_path: str, profile_name: str) -> int:
    """
    Load, select, validate and push one profile.

    Parameters
    ----------
    config_path : str
        Path to the YAML deploy file.
    profile_name : str
        Profile to deploy.

    Returns
    -------
    int
        0 when every step succeeded, 1 on the first failure.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        error(f"Error loading configuration: {e}")
        return 1

    try:
        profile = config.get_profile(profile_name)
    except ProfileNotFoundError as e:
        error(str(e))
        return 1

    step(f"Loaded configuration for profile '{profile_name}':", Colors.YELLOW)
    print_dict(profile.to_dict(), indent=1)

    try:
        validate_profile(profile)
    except ValidationError as e:
        error(f"Invalid configuration: {e}")
        return 1

    try:
        RegistryOrchestrator(profile).run()
    except StepError as e:
        error(f"{STEP_FAILURE_PREFIXES.get(type(e), 'Step failed')}: {e}")
        return 1

    success("Container built and pushed to ECR")
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point for the ecrpush command.

    Parameters
    ----------
    argv : list of str, optional
        Arguments to parse instead of ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code: 0 for success, 1 for any failure, 130 for keyboard
        interrupt.
    """
    args = create_parser().parse_args(argv)
    setup_logger()

    try:
        return deploy(args.config, args.profile)
    except KeyboardInterrupt:
        print()
        return 130
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        error(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
