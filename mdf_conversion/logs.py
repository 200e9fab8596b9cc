import logging
from typing import Final, Mapping, Optional

__all__ = (
    "DEFAULT_VERBOSITY",
    "TRACE",
    "VERBOSITY_LEVELS",
    "configure_logging",
    "set_verbosity",
)

TRACE: Final = 5
"""Finer than ``logging.DEBUG``."""

logging.addLevelName(TRACE, "TRACE")

VERBOSITY_LEVELS: Final[Mapping[int, int]] = {
    0: logging.CRITICAL,
    1: logging.ERROR,
    2: logging.WARNING,
    3: logging.INFO,
    4: logging.DEBUG,
    5: TRACE,
}
"""Lowest severity shown for each ``--verbose`` value."""

DEFAULT_VERBOSITY: Final = 1

LOG_FORMAT: Final = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    """
    Attach a stderr handler to the root logger unless one is configured
    already. The threshold stays at the default verbosity until
    :func:`set_verbosity` is called.
    """
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(VERBOSITY_LEVELS[DEFAULT_VERBOSITY])


def set_verbosity(verbose: int) -> Optional[int]:
    """
    Apply a ``--verbose`` value to the root logger.

    Returns
    -------
    Optional[int]
        The level set, or ``None`` when ``verbose`` is out of range and
        nothing changed.
    """
    level = VERBOSITY_LEVELS.get(verbose)
    if level is not None:
        logging.getLogger().setLevel(level)
    return level
