"""
Shared logger for ndview.

Every module imports :data:`logger` from here instead of calling
``logging.getLogger`` itself, so the imaging code and the CLI write
through one handler and the CLI can change verbosity in one place.
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logger(
        name: str = __name__,
        level: int = logging.INFO,
        formatter: logging.Formatter | None = None,
        handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Return the named logger, attaching a stream handler on first use.

    Repeated calls reuse the existing handler, so importing several
    modules never duplicates log lines.

    Args:
        name: Logger name.
        level: Initial logging level.
        formatter: Formatter for the new handler; defaults to
            :data:`LOG_FORMAT`.
        handler: Handler to attach; defaults to stderr.

    Returns:
        The configured logger.

    """
    named = logging.getLogger(name)
    named.setLevel(level)
    if named.handlers:
        return named
    handler = handler or logging.StreamHandler()
    handler.setFormatter(formatter or logging.Formatter(LOG_FORMAT))
    named.addHandler(handler)
    named.propagate = False
    return named


def set_verbosity(verbose: bool) -> None:  # noqa: FBT001
    """Switch the shared logger between INFO and DEBUG."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


logger = setup_logger("ndview")
