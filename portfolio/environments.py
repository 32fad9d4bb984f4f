"""Build environments for the portfolio site.

The site is either served locally while editing (``development``) or
compiled for deployment (``build``). The active environment is resolved
once per process and selects which configuration overrides apply.
"""

from __future__ import annotations

import os
from enum import Enum

from .errors import ConfigError

ENV_VAR = "PORTFOLIO_ENV"

ALIASES = {
    "dev": "development",
    "production": "build",
    "prod": "build",
}


class BuildEnvironment(str, Enum):
    """Deployment mode selecting the configuration overrides."""

    DEVELOPMENT = "development"
    BUILD = "build"

    def __str__(self) -> str:
        return self.value


def resolve_environment(
    value: BuildEnvironment | str | None = None,
    default: BuildEnvironment | str | None = None,
) -> BuildEnvironment:
    """Resolve a build environment from an explicit value or the process environment.

    Lookup order is ``value``, then the ``PORTFOLIO_ENV`` variable, then
    ``default``, then ``development``.

    Args:
        value: Environment member or name (case-insensitive).
        default: Fallback used when neither value nor PORTFOLIO_ENV is set.

    Returns:
        The resolved BuildEnvironment.

    Raises:
        ConfigError: If the name is not a known environment.

    Examples:
        >>> resolve_environment("Production")
        <BuildEnvironment.BUILD: 'build'>
    """
    for candidate in (value, os.environ.get(ENV_VAR), default):
        if isinstance(candidate, BuildEnvironment):
            return candidate
        if candidate is not None and str(candidate).strip():
            return _parse(str(candidate))
    return BuildEnvironment.DEVELOPMENT


def _parse(name: str) -> BuildEnvironment:
    key = name.strip().lower()
    key = ALIASES.get(key, key)
    try:
        return BuildEnvironment(key)
    except ValueError:
        choices = ", ".join(env.value for env in BuildEnvironment)
        raise ConfigError(
            f"Unknown environment '{name.strip()}' (expected one of: {choices})"
        ) from None
