"""
Configuration management for ame2020.

Settings can be customized via environment variables before importing ame2020.

Environment Variables
---------------------
AME2020_DATA_DIR : str
    Directory for downloaded data files (default: <package>/../../data).
AME2020_DOWNLOAD_TIMEOUT : int
    HTTP timeout in seconds (default: 60).
AME2020_REQUEST_DELAY : float
    Minimum delay between requests to the same mirror (default: 1.0).
AME2020_LOG_LEVEL : str
    Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO).

Examples
--------
Configure via shell environment::

    export AME2020_DATA_DIR=/data/nuclear
    export AME2020_LOG_LEVEL=DEBUG
    ame2020 download
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

__all__ = [
    "Config",
    "setup_logging",
    "get_logger",
]

_PACKAGE_DIR = Path(__file__).parent
_DEFAULT_DATA_DIR = _PACKAGE_DIR.parent.parent / "data"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _positive_int(name: str, default: int) -> int:
    value = os.environ.get(name, str(default))
    return max(1, int(value)) if value.isdigit() else default


def _non_negative_float(name: str, default: float) -> float:
    try:
        return max(0.0, float(os.environ.get(name, str(default))))
    except ValueError:
        return default


def _log_level(name: str, default: str) -> str:
    level = os.environ.get(name, default).upper()
    return level if level in _LOG_LEVELS else default


class Config:
    """
    Configuration settings for ame2020.

    Attributes:
        DATA_DIR: Directory for downloaded mass tables.
        DOWNLOAD_TIMEOUT: HTTP timeout for downloading data files (seconds).
        REQUEST_DELAY: Minimum delay between HTTP requests to same domain (seconds).
        LOG_LEVEL: Logging verbosity (DEBUG, INFO, WARNING, ERROR).
        ELEMENT_SYMBOLS: Canonical Z -> symbol mapping used to validate records.
    """

    DATA_DIR: Path = Path(os.environ.get("AME2020_DATA_DIR", str(_DEFAULT_DATA_DIR)))

    DOWNLOAD_TIMEOUT: int = _positive_int("AME2020_DOWNLOAD_TIMEOUT", 60)
    REQUEST_DELAY: float = _non_negative_float("AME2020_REQUEST_DELAY", 1.0)

    LOG_LEVEL: str = _log_level("AME2020_LOG_LEVEL", "INFO")

    # Element symbols as written in the AME2020 'EL' column (Z=0 is the free neutron)
    ELEMENT_SYMBOLS: dict[int, str] = {
        0: 'n', 1: 'H', 2: 'He', 3: 'Li', 4: 'Be', 5: 'B', 6: 'C', 7: 'N', 8: 'O',
        9: 'F', 10: 'Ne', 11: 'Na', 12: 'Mg', 13: 'Al', 14: 'Si', 15: 'P', 16: 'S',
        17: 'Cl', 18: 'Ar', 19: 'K', 20: 'Ca', 21: 'Sc', 22: 'Ti', 23: 'V', 24: 'Cr',
        25: 'Mn', 26: 'Fe', 27: 'Co', 28: 'Ni', 29: 'Cu', 30: 'Zn', 31: 'Ga', 32: 'Ge',
        33: 'As', 34: 'Se', 35: 'Br', 36: 'Kr', 37: 'Rb', 38: 'Sr', 39: 'Y', 40: 'Zr',
        41: 'Nb', 42: 'Mo', 43: 'Tc', 44: 'Ru', 45: 'Rh', 46: 'Pd', 47: 'Ag', 48: 'Cd',
        49: 'In', 50: 'Sn', 51: 'Sb', 52: 'Te', 53: 'I', 54: 'Xe', 55: 'Cs', 56: 'Ba',
        57: 'La', 58: 'Ce', 59: 'Pr', 60: 'Nd', 61: 'Pm', 62: 'Sm', 63: 'Eu', 64: 'Gd',
        65: 'Tb', 66: 'Dy', 67: 'Ho', 68: 'Er', 69: 'Tm', 70: 'Yb', 71: 'Lu', 72: 'Hf',
        73: 'Ta', 74: 'W', 75: 'Re', 76: 'Os', 77: 'Ir', 78: 'Pt', 79: 'Au', 80: 'Hg',
        81: 'Tl', 82: 'Pb', 83: 'Bi', 84: 'Po', 85: 'At', 86: 'Rn', 87: 'Fr', 88: 'Ra',
        89: 'Ac', 90: 'Th', 91: 'Pa', 92: 'U', 93: 'Np', 94: 'Pu', 95: 'Am', 96: 'Cm',
        97: 'Bk', 98: 'Cf', 99: 'Es', 100: 'Fm', 101: 'Md', 102: 'No', 103: 'Lr',
        104: 'Rf', 105: 'Db', 106: 'Sg', 107: 'Bh', 108: 'Hs', 109: 'Mt', 110: 'Ds',
        111: 'Rg', 112: 'Cn', 113: 'Nh', 114: 'Fl', 115: 'Mc', 116: 'Lv', 117: 'Ts',
        118: 'Og',
    }

    @classmethod
    def get_element_symbol(cls, z: int) -> str | None:
        """Get element symbol from atomic number Z, or None if Z is unknown."""
        return cls.ELEMENT_SYMBOLS.get(z)

    @classmethod
    def reload(cls) -> None:
        """
        Reload configuration from environment variables.

        Example:
            >>> import os
            >>> os.environ["AME2020_LOG_LEVEL"] = "DEBUG"
            >>> Config.reload()
        """
        cls.DATA_DIR = Path(os.environ.get("AME2020_DATA_DIR", str(_DEFAULT_DATA_DIR)))
        cls.DOWNLOAD_TIMEOUT = _positive_int("AME2020_DOWNLOAD_TIMEOUT", 60)
        cls.REQUEST_DELAY = _non_negative_float("AME2020_REQUEST_DELAY", 1.0)
        cls.LOG_LEVEL = _log_level("AME2020_LOG_LEVEL", "INFO")


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Set up logging for ame2020.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). If None, uses
            AME2020_LOG_LEVEL environment variable or INFO.

    Returns:
        The root ame2020 logger.
    """
    if level is None:
        level = Config.LOG_LEVEL

    logger = logging.getLogger("ame2020")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Only add handler if none exist (avoid duplicates)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for an ame2020 submodule.

    Args:
        name: Module name (e.g., "reader", "table").

    Returns:
        Logger instance for the module.
    """
    return logging.getLogger(f"ame2020.{name}")
