"""lebesgue.logger

Consistent logging across the library and the command line tool.
"""

import sys

from loguru import logger

log = logger

# indexed by the number of -v flags
LEVELS = ("SUCCESS", "INFO", "DEBUG", "TRACE")
MAX_VERBOSITY = len(LEVELS) - 1

BRIEF = "<level>{message}</level>"
DETAILED = (
    "<green>{elapsed}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def initialize(verbose: int):
    if not 0 <= verbose <= MAX_VERBOSITY:
        raise ValueError(f"verbosity must lie in [0, {MAX_VERBOSITY}], got {verbose}")

    log.remove()
    log.add(
        sys.stderr,
        format=DETAILED if verbose >= 2 else BRIEF,
        level=LEVELS[verbose],
    )
