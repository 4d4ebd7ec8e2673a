"""Utility module for handling environment variables."""

import os

from dotenv import find_dotenv, load_dotenv


def load_env() -> bool:
    """Load environment variables from a .env file without overriding existing ones."""
    return load_dotenv(find_dotenv(usecwd=True), override=False)


def get_first_env(*var_names: str, default: str = "") -> str:
    """Return the first non-empty environment variable among ``var_names``."""
    for var_name in var_names:
        value = os.getenv(var_name)
        if value:
            return value
    return default


def mask_secret(value: str) -> str:
    """Mask the secret with asterisks, showing only the first and last character."""
    if len(value) <= 2:
        return "*" * len(value)
    return value[0] + "*" * (len(value) - 2) + value[-1]
