"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the command line.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    PARSE_ERROR = 2
    NO_MATCH = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration defaults; not intended to provide behavior.
    """

    DEFAULT_REGISTRY = "https://registry.pinref.dev"
    DEFAULT_NAMESPACE = "official"
    DEFAULT_TYPE = "package"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    ENV_LOG_LEVEL = "PINREF_LOG_LEVEL"
    ENV_CONFIG = "PINREF_CONFIG"
    ENV_DEFAULT_REGISTRY = "PINREF_DEFAULT_REGISTRY"
    ENV_DEFAULT_NAMESPACE = "PINREF_DEFAULT_NAMESPACE"

    # Searched in order when no explicit config path is given
    CONFIG_FILES = [
        "pinref.yml",
        "pinref.yaml",
        "~/.config/pinref/config.yml",
        "~/.config/pinref/config.yaml",
    ]
