"""Numeric limits and build flags - no circular dependencies."""

from __future__ import annotations

import os


def _is_debug_build() -> bool:
    """Check if this is a debug/beta build.

    Debug mode is enabled when:
    1. CARDFLOW_DEBUG env var is set to "1" or "true" (explicit override)
    2. Version contains "dev", "a", "b" or "rc" (pre-release)
    3. The package is not installed (local development)

    Production releases (e.g., "0.3.0") have debug disabled by default.
    """
    env_debug = os.environ.get("CARDFLOW_DEBUG", "").lower()
    if env_debug in ("1", "true"):
        return True
    if env_debug in ("0", "false"):
        return False

    try:
        from importlib.metadata import version

        pkg_version = version("cardflow")
    except Exception:
        pkg_version = "dev"

    version_lower = pkg_version.lower()
    return any(indicator in version_lower for indicator in ("dev", "a", "b", "rc", "alpha", "beta"))


DEBUG_BUILD: bool = _is_debug_build()
"""True for beta/dev builds, False for production releases."""


MAX_CONTENT_LENGTH = 500
MAX_LOG_MESSAGE_LENGTH = 4096
MAX_LOG_LINES = 2000
