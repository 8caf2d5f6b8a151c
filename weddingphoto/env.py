"""Reading settings from the environment."""

import os


def get_env(key: str, default: str) -> str:
    """Return the variable ``key``, or ``default`` when it is unset or empty."""
    value = os.environ.get(key, "")
    return value if value else default