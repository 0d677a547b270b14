"""
Configuration settings for the ZLS data generator.

Constants describing the langref dialect live at module level. Settings that
can change between runs (URLs, timeouts, logging) are read from environment
variables, optionally loaded from a `.env` file, through `get_config()`.
"""
import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Langref dialect
BUILTIN_SECTION_ANCHOR = "Builtin Functions"
CODE_LANGUAGE = "zig"

# Defaults
DEFAULT_LANGREF_URL = "https://raw.githubusercontent.com/ziglang/zig/{version}/doc/langref.html.in"
DEFAULT_DOC_ROOT = "https://ziglang.org/documentation"
DEFAULT_CONFIG_OPTIONS_PATH = str(Path(__file__).parent / "data" / "config.json")

# README markers
README_START_INDICATOR = "<!-- DO NOT EDIT | THIS SECTION IS AUTO-GENERATED | DO NOT EDIT -->"
README_END_INDICATOR = "<!-- DO NOT EDIT -->"

# Logging format
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class GeneratorConfig:
    """
    Runtime configuration for the generator.

    Values are taken from environment variables, falling back to defaults:

    - ZLS_GEN_LANGREF_URL: URL template for `langref.html.in`, with a `{version}` field
    - ZLS_GEN_DOC_ROOT: Root of the online language reference used for links
    - ZLS_GEN_REQUEST_TIMEOUT: HTTP timeout in seconds
    - ZLS_GEN_MAX_RETRIES: Download attempts before giving up
    - ZLS_GEN_RETRY_DELAY: Minimum delay between attempts in seconds
    - ZLS_GEN_LOG_LEVEL: Logging level name
    - ZLS_GEN_LOG_FILE: Optional log file

    Example:
        ```python
        config = GeneratorConfig(env_file=".env")
        print(config.langref_url)
        ```
    """

    def __init__(self, env_file: Optional[str] = None):
        if env_file:
            logger.info(f"Loading environment variables from {env_file}")
            load_dotenv(env_file, override=True)
        else:
            load_dotenv()

        self._initialize_config()
        self._validate_config()

    def _initialize_config(self) -> None:
        self._langref_url = os.getenv("ZLS_GEN_LANGREF_URL", DEFAULT_LANGREF_URL)
        self._doc_root = os.getenv("ZLS_GEN_DOC_ROOT", DEFAULT_DOC_ROOT).rstrip("/")
        self._request_timeout = int(os.getenv("ZLS_GEN_REQUEST_TIMEOUT", "30"))
        self._max_retries = int(os.getenv("ZLS_GEN_MAX_RETRIES", "3"))
        self._retry_delay = int(os.getenv("ZLS_GEN_RETRY_DELAY", "2"))
        self._log_level = os.getenv("ZLS_GEN_LOG_LEVEL", "INFO").upper()
        self._log_file = os.getenv("ZLS_GEN_LOG_FILE") or None

    def _validate_config(self) -> None:
        """
        Validate numeric settings and the URL template.
        Raises ValueError if validation fails.
        """
        for name, value in [
            ("request_timeout", self._request_timeout),
            ("max_retries", self._max_retries),
            ("retry_delay", self._retry_delay),
        ]:
            if value <= 0:
                raise ValueError(f"Configuration error: {name} must be positive, got {value}")

        if "{version}" not in self._langref_url:
            raise ValueError(f"Configuration error: langref_url must contain '{{version}}', got {self._langref_url}")

    @property
    def langref_url(self) -> str:
        return self._langref_url

    @property
    def doc_root(self) -> str:
        return self._doc_root

    @property
    def request_timeout(self) -> int:
        return self._request_timeout

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def retry_delay(self) -> int:
        return self._retry_delay

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def log_file(self) -> Optional[str]:
        return self._log_file

    def as_dict(self) -> Dict[str, Any]:
        """Export all configuration as a dictionary."""
        return {
            "ZLS_GEN_LANGREF_URL": self._langref_url,
            "ZLS_GEN_DOC_ROOT": self._doc_root,
            "ZLS_GEN_REQUEST_TIMEOUT": self._request_timeout,
            "ZLS_GEN_MAX_RETRIES": self._max_retries,
            "ZLS_GEN_RETRY_DELAY": self._retry_delay,
            "ZLS_GEN_LOG_LEVEL": self._log_level,
            "ZLS_GEN_LOG_FILE": self._log_file,
        }


_config_instance: Optional[GeneratorConfig] = None


def get_config(env_file: Optional[str] = None) -> GeneratorConfig:
    """
    Get the global configuration instance, creating it if it doesn't exist.

    Args:
        env_file: Optional path to an environment file (.env)

    Returns:
        GeneratorConfig instance
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = GeneratorConfig(env_file)

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next `get_config()` re-reads the environment."""
    global _config_instance
    _config_instance = None
