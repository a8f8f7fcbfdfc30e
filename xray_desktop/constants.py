"""Configuration defaults for xray-desktop.

Environment lookups live here and nowhere else; the rest of the package
receives them through ``BridgeConfig``.
"""

from __future__ import annotations

import os
from pathlib import Path


# ============================================================================
# Environment Variables
# ============================================================================

ENV_NODE_BINARY: str = "NODE_BINARY"
"""Selects the backend executable name or path."""

ENV_BRIDGE_TIMEOUT: str = "XRAY_DESKTOP_BRIDGE_TIMEOUT"
"""Optional per-call deadline in seconds. Unset means wait indefinitely."""

ENV_DEBUG: str = "XRAY_DESKTOP_DEBUG"
"""Set to 1 to enable debug logging and backend crash tracebacks."""


# ============================================================================
# Backend Location
# ============================================================================

DEFAULT_NODE_BINARY: str = "node"
"""Backend executable used when NODE_BINARY is not set."""

BRIDGE_SCRIPT_RELPATH: tuple[str, ...] = ("backend", "desktop-bridge.cjs")
"""Entry script location relative to the installation root."""


def get_install_root() -> Path:
    """Return the installation root (the directory holding ``xray_desktop/``)."""
    return Path(__file__).resolve().parent.parent


def get_bridge_script_path() -> Path:
    """Get the backend entry script path.

    Returns:
        Path to ``<install root>/backend/desktop-bridge.cjs``
    """
    return get_install_root().joinpath(*BRIDGE_SCRIPT_RELPATH)


def get_node_binary() -> str:
    """Get the backend executable, respecting the NODE_BINARY override."""
    return os.environ.get(ENV_NODE_BINARY) or DEFAULT_NODE_BINARY


def get_bridge_timeout() -> float | None:
    """Read the optional bridge deadline, returning None when unset or invalid."""
    raw = os.environ.get(ENV_BRIDGE_TIMEOUT, "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def get_debug() -> bool:
    """Check whether XRAY_DESKTOP_DEBUG=1 is set."""
    return os.environ.get(ENV_DEBUG) == "1"


# ============================================================================
# Bridge Messages
# ============================================================================

EMPTY_RESPONSE_MESSAGE: str = "Bridge returned empty response"
"""Failure message when the backend writes nothing to stdout or stderr."""

UNKNOWN_ERROR_MESSAGE: str = "Unknown bridge error"
"""Failure message for ``ok: false`` with no error text anywhere."""

SPAWN_ERROR_PREFIX: str = "Failed to run bridge"
INVALID_JSON_PREFIX: str = "Invalid bridge JSON"


# ============================================================================
# Deep Links
# ============================================================================

DEEP_LINK_SCHEME: str = "xraycp"
DEEP_LINK_IMPORT_ACTION: str = "import"
DEEP_LINK_BASE_URL_SCHEMES: tuple[str, ...] = ("http", "https")
