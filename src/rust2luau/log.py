"""Logging helper module."""

from logging import (
    DEBUG,
    INFO,
    Formatter,
    Logger,
    StreamHandler,
    getLogger,
)

from rust2luau.args import Args

_PACKAGE_LOGGER = "rust2luau"


def init_logging(args: Args) -> None:
    """Initialize logging for the command line tool.

    Should be called once when the application starts. Generated code goes
    to stdout, so log records are always written to stderr.
    """
    console_handler = StreamHandler()
    console_handler.setFormatter(Formatter("%(levelname)s: %(message)s"))

    root_logger = getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    configure_3p_loggers(root_logger)

    if args.verbose:
        root_logger.setLevel(DEBUG)
        root_logger.debug("Debug logging enabled.")
    else:
        root_logger.setLevel(INFO)


def get_logger(name: str) -> Logger:
    """Proxy for logging.getLogger."""
    return getLogger(name)


def configure_3p_loggers(root_logger: Logger) -> None:
    """Keep third-party loggers (lark) from echoing into the console."""
    for name in root_logger.manager.loggerDict:
        if name.startswith(_PACKAGE_LOGGER):
            continue
        third_party_logger = getLogger(name)
        third_party_logger.handlers.clear()
