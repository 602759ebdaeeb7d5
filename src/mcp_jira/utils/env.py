"""Environment variable helpers for mcp-jira."""

import os


def is_env_truthy(env_var_name: str, default: str = "") -> bool:
    """Check if environment variable is set to a standard truthy value.

    Considers 'true', '1', 'yes', 'y', 'on' as truthy values (case-insensitive).

    Args:
        env_var_name: Name of the environment variable to check
        default: Default value if environment variable is not set

    Returns:
        True if the environment variable is set to a truthy value, False otherwise
    """
    return os.getenv(env_var_name, default).lower() in ("true", "1", "yes", "y", "on")


def is_env_ssl_verify(env_var_name: str, default: str = "true") -> bool:
    """Check SSL verification setting with secure defaults.

    Defaults to true unless explicitly set to false values.

    Args:
        env_var_name: Name of the environment variable to check
        default: Default value if environment variable is not set

    Returns:
        True unless explicitly set to false values
    """
    return os.getenv(env_var_name, default).lower() not in ("false", "0", "no")


def first_env(*env_var_names: str) -> str | None:
    """Return the first non-empty value among several environment variables."""
    for name in env_var_names:
        value = os.getenv(name)
        if value:
            return value
    return None


def getenv_int(env_var_name: str, default: int = 0) -> int:
    """Read an integer environment variable.

    Raises:
        ValueError: If the variable is set but is not an integer.
    """
    raw = os.getenv(env_var_name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{env_var_name} must be an integer, got '{raw}'") from e
