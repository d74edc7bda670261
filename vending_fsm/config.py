"""
Configuration for the vending machine.

All settings are loaded from environment variables.
"""

import logging
import os
from typing import List

# Parse problems found while loading, reported by validate_config()
_LOAD_ERRORS: List[str] = []


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _LOAD_ERRORS.append(f"{name} is not an integer: {raw!r}")
        return default


def _log_level_env(name: str, default: str) -> str:
    raw = os.environ.get(name, "").strip().upper()
    if not raw:
        return default
    # getLevelName maps known names to their numeric level
    if not isinstance(logging.getLevelName(raw), int):
        _LOAD_ERRORS.append(f"{name} is not a logging level: {raw!r}")
        return default
    return raw


# --- Machine Configuration ---
# One price for every item
ITEM_PRICE = _int_env("VENDING_ITEM_PRICE", 10)
INITIAL_STOCK = _int_env("VENDING_INITIAL_STOCK", 10)

# --- Application Configuration ---
APP_NAME = "Vending Machine FSM"
APP_VERSION = "1.0.0"
LOG_LEVEL = _log_level_env("LOG_LEVEL", "INFO")


def validate_config() -> List[str]:
    """
    Validate machine configuration.
    Returns list of error messages (empty if valid).
    """
    errors = list(_LOAD_ERRORS)

    if ITEM_PRICE <= 0:
        errors.append(f"VENDING_ITEM_PRICE must be positive, got {ITEM_PRICE}")

    if INITIAL_STOCK < 0:
        errors.append(f"VENDING_INITIAL_STOCK must not be negative, got {INITIAL_STOCK}")

    return errors
