"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    NOT_FOUND = 2
    USAGE_ERROR = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROG = "librarian"
    DEFAULT_PATH = "/usr/local/share/librarian:/usr/share/librarian"
    PATH_SEPARATOR = ":"
    ENV_LIBRARIAN_PATH = "LIBRARIAN_PATH"
    ENV_LIBRARIAN_CONFIG = "LIBRARIAN_CONFIG"
    ENV_LOG_LEVEL = "LIBRARIAN_LOG_LEVEL"
    DEPS_VARIABLE = "deps"
    VERSION_DELIMITER = "="
    RELATIONAL_OPERATORS = "<>="
    LOG_FORMAT = "%(name)s: [%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    DEFAULT_LOG_LEVEL = "WARNING"
