"""pyextglob Core - shared constants, options, validation and logging.

Import specific names from submodules:
    from pyextglob.core.constants import ErrorCode, Limits
    from pyextglob.core.logger import get_logger
    from pyextglob.core.options import Dialect, MatchOptions
    from pyextglob.core.validators import ValidationError
"""

from pyextglob.core import constants, logger, options, validators

__all__ = [
    "constants",
    "logger",
    "options",
    "validators",
]
