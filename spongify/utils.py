"""
SpOnGiFy - Utility Functions
============================
Terminal colors, logging setup and configuration loading.
"""

import codecs
import copy
import logging
import sys
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from .alternator import Advance

DEFAULT_CONFIG_FILE = "spongify.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "style": "alternating",
    "reset_per_line": True,
    "clipboard_separator": " ",
    "encoding": "utf-8",
    "seed": None,
    "advance": "letters",
}

ADVANCE_MODES = {mode.value for mode in Advance}


class Colors:
    """ANSI color codes for terminal output."""
    RESET = '\033[0m'
    CYAN = '\033[36m'

    @classmethod
    def disable(cls):
        """Disable colors (for non-TTY output)."""
        for attr in dir(cls):
            if not attr.startswith('_') and isinstance(getattr(cls, attr), str):
                setattr(cls, attr, '')


def setup_logging(
    log_file: Optional[str] = None,
    verbose: int = 0,
    quiet: bool = False
) -> logging.Logger:
    """
    Setup logging configuration.

    Console output goes to stderr so that stdout only ever carries text.

    Args:
        log_file: Optional path to a log file
        verbose: Verbosity level (0-2)
        quiet: Suppress console output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("spongify")
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []  # Clear existing handlers
    logger.propagate = False

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)

        if verbose >= 2:
            console_handler.setLevel(logging.DEBUG)
        elif verbose >= 1:
            console_handler.setLevel(logging.INFO)
        else:
            console_handler.setLevel(logging.WARNING)

        console_format = logging.Formatter(
            f'{Colors.CYAN}[%(levelname)s]{Colors.RESET} %(message)s'
        )
        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into ``base`` in place."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            merge_dicts(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file; ``spongify.yaml`` in the working
            directory is used when omitted

    Returns:
        Configuration dictionary, defaults filled in
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    path = Path(config_path or DEFAULT_CONFIG_FILE)
    if not path.exists():
        if config_path:
            logging.getLogger("spongify").warning(f"Config file not found: {path}")
        return config

    try:
        with open(path, 'r', encoding='utf-8') as f:
            user_config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logging.getLogger("spongify").warning(f"Could not load config file: {e}")
        return config

    if isinstance(user_config, dict):
        merge_dicts(config, user_config)
    elif user_config is not None:
        logging.getLogger("spongify").warning(f"Ignoring config file {path}: expected a mapping")

    return validate_config(config)


def _valid_encoding(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        codecs.lookup(value)
    except LookupError:
        return False
    return True


# Each key's check; a failing value is replaced by its default.
CONFIG_CHECKS = {
    "style": lambda v: isinstance(v, str) and bool(v.strip()),
    "reset_per_line": lambda v: isinstance(v, bool),
    "clipboard_separator": lambda v: isinstance(v, str),
    "encoding": _valid_encoding,
    "seed": lambda v: v is None or (isinstance(v, int) and not isinstance(v, bool)),
    "advance": lambda v: isinstance(v, str) and v in ADVANCE_MODES,
}


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Fill in missing keys and replace values of the wrong type or range with their defaults."""
    for key, check in CONFIG_CHECKS.items():
        if key not in config:
            config[key] = DEFAULT_CONFIG[key]
            continue
        if not check(config.get(key)):
            logging.getLogger("spongify").warning(
                f"Invalid value for '{key}' in config: {config.get(key)!r}, "
                f"using {DEFAULT_CONFIG[key]!r}"
            )
            config[key] = DEFAULT_CONFIG[key]
    return config
