# File: retrieval_core/config/settings.py

import os
import logging
from dotenv import load_dotenv
from typing import List, Optional, Union
from pathlib import Path

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigurationError(Exception):
    """Custom exception for configuration errors."""
    pass


class Configuration:
    """
    Handles loading and access to retriever settings.
    Loads settings from environment variables (optionally via a .env file)
    and falls back to defaults when a variable is missing or malformed.
    """

    def __init__(self, dotenv_path: Optional[Union[str, Path]] = None):
        """
        Initializes the Configuration object.

        Raises:
            ConfigurationError: If an explicit dotenv_path does not point to a file.
        """
        if dotenv_path is not None and not Path(dotenv_path).is_file():
            raise ConfigurationError(f".env file not found: {dotenv_path}")
        load_dotenv(dotenv_path=dotenv_path)
        logger.info(f"Loaded .env file from: {dotenv_path or 'default locations'}")

        # --- Retrieval Settings ---
        self._retrieval_k: int = self._get_env_variable_as_int("RETRIEVAL_K", 4)
        self._score_threshold: Optional[float] = self._get_env_variable_as_float("RETRIEVAL_SCORE_THRESHOLD", None)

        # --- Retriever Identity ---
        self._retriever_tags: List[str] = self._get_env_variable_as_list("RETRIEVER_TAGS")
        self._retriever_verbose: bool = self._get_env_variable_as_bool("RETRIEVER_VERBOSE", False)

        # --- Logging ---
        self._log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        self._validate_config()
        logger.info("Configuration loaded.")
        logger.debug(f"Configuration details: {self!r}")

    def _get_env_variable_as_int(self, name: str, default: int) -> int:
        value_str = os.getenv(name)
        if value_str is None: return default
        try: return int(value_str)
        except ValueError:
            logger.warning(f"Invalid int value for env var '{name}': '{value_str}'. Using default: {default}.")
            return default

    def _get_env_variable_as_float(self, name: str, default: Optional[float]) -> Optional[float]:
        value_str = os.getenv(name)
        if value_str is None or not value_str.strip(): return default
        try: return float(value_str)
        except ValueError:
            logger.warning(f"Invalid float value for env var '{name}': '{value_str}'. Using default: {default}.")
            return default

    def _get_env_variable_as_bool(self, name: str, default: bool) -> bool:
        value_str = os.getenv(name)
        if value_str is None: return default
        lowered = value_str.strip().lower()
        if lowered in _TRUE_VALUES: return True
        if lowered in _FALSE_VALUES: return False
        logger.warning(f"Invalid bool value for env var '{name}': '{value_str}'. Using default: {default}.")
        return default

    def _get_env_variable_as_list(self, name: str) -> List[str]:
        value_str = os.getenv(name)
        if not value_str: return []
        return [item.strip() for item in value_str.split(",") if item.strip()]

    def _validate_config(self):
        """Clamp out-of-range values back to something usable."""
        if self._retrieval_k <= 0: logger.warning(f"RETRIEVAL_K invalid ({self._retrieval_k}). Using 1."); self._retrieval_k = 1
        if self._log_level not in _LOG_LEVELS: logger.warning(f"LOG_LEVEL '{self._log_level}' invalid. Using INFO."); self._log_level = "INFO"

    # --- Getter Methods ---
    def get_retrieval_k(self) -> int: return self._retrieval_k
    def get_score_threshold(self) -> Optional[float]: return self._score_threshold
    def get_retriever_tags(self) -> List[str]: return list(self._retriever_tags)
    def get_retriever_verbose(self) -> bool: return self._retriever_verbose
    def get_log_level(self) -> str: return self._log_level

    def get_log_level_value(self) -> int:
        """Numeric logging level for use with setup_logger."""
        return logging.getLevelName(self._log_level)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(retrieval_k={self._retrieval_k}, "
                f"score_threshold={self._score_threshold}, tags={self._retriever_tags}, "
                f"verbose={self._retriever_verbose}, log_level='{self._log_level}')")
