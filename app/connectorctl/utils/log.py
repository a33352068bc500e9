"""Logging setup for the connectorctl CLI."""

import logging

from rich.logging import RichHandler

from connectorctl.utils.formatting import err_console

_LOGGER_NAME = "connectorctl"


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Route connectorctl log records to the stderr console.

    Args:
        verbose: Log at DEBUG level (git invocations, skipped paths).
        quiet: Only log errors.

    Returns:
        The package root logger.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Drop handlers from a previous invocation in the same process (CliRunner).
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(console=err_console, show_time=False, show_path=verbose)
    handler.setLevel(level)
    logger.addHandler(handler)
    return logger
