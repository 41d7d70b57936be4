"""rust2luau CLI entry point."""

import sys

from pydantic import ValidationError

from rust2luau.args import Args, bind_and_run
from rust2luau.cli import EXIT_FILE_ERROR, run_check, run_transpile
from rust2luau.config_loader import load_config
from rust2luau.log import get_logger, init_logging
from rust2luau.version import show_version


def run(args: Args) -> None:
    """Configure logging and settings, then translate or check the inputs."""
    if args.version:
        show_version()

    init_logging(args)
    logger = get_logger(__name__)

    if args.check:
        sys.exit(run_check(args.input_paths, json_output=args.json))

    try:
        config = load_config(args)
    except (ValueError, ValidationError) as config_err:
        logger.error("Invalid configuration: %s", config_err)  # noqa: TRY400
        sys.exit(EXIT_FILE_ERROR)

    sys.exit(run_transpile(args.input_paths, args.out, config))


def main() -> None:
    """Entry point for the CLI."""
    bind_and_run(run)


if __name__ == "__main__":
    main()
