# core/config.py

"""
Runtime configuration for the School Portal client.

Settings are read from the process environment after an optional `.env` file has been loaded with
python-dotenv. Command-line flags (see `cli.main`) take precedence over the environment.

Recognized variables:
- PORTAL_BASE_URL: root URL of the records backend
- PORTAL_TIMEOUT: per-request timeout in seconds
- PORTAL_LOG_LEVEL: threshold for console diagnostics (DEBUG, INFO, WARNING, ...)
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

DEFAULT_BASE_URL = "http://localhost:18080"
DEFAULT_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Config:

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        log_level: str = DEFAULT_LOG_LEVEL,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = Config.validate_timeout(timeout)
        self.log_level = log_level.upper()

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Config:
        """
        Builds a `Config` from environment variables.

        Args:
            dotenv_path (str | None, optional): Explicit `.env` file to load. Defaults to python-dotenv's lookup.

        Returns:
            A `Config` populated from the environment, falling back to defaults for unset variables.

        Raises:
            ValueError: If PORTAL_TIMEOUT is not a positive number.

        Notes:
            - Variables already present in the environment win over values in the `.env` file.
        """
        load_dotenv(dotenv_path)

        return cls(
            base_url=os.getenv("PORTAL_BASE_URL", DEFAULT_BASE_URL),
            timeout=os.getenv("PORTAL_TIMEOUT", DEFAULT_TIMEOUT),
            log_level=os.getenv("PORTAL_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )

    @staticmethod
    def validate_timeout(timeout: float | str) -> float:
        try:
            value = float(timeout)
        except (TypeError, ValueError):
            raise ValueError(f"Timeout must be a number of seconds, got {timeout!r}.")

        if value <= 0:
            raise ValueError(f"Timeout must be positive, got {value}.")

        return value

    def __repr__(self) -> str:
        return f"Config({self.base_url}, {self.timeout}, {self.log_level})"


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    numeric_level = logging.getLevelName(level.upper())

    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger("portal").setLevel(numeric_level)
