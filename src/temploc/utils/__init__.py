"""temploc utility modules.

- logging: Standardized logging with human/verbose/JSON modes and a TRACE level
"""

from temploc.utils.logging import TRACE, get_logger, setup_logging

__all__ = [
    "TRACE",
    "get_logger",
    "setup_logging",
]
