from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from xray_desktop.constants import get_bridge_script_path, get_bridge_timeout, get_node_binary


class BridgeAction(str, Enum):
    """Closed set of action names understood by the backend.

    The values are part of the wire contract and must match exactly.
    """

    IMPORT_TOKEN = "importToken"
    CONNECT = "connect"
    SET_MODE = "setMode"
    DISCONNECT = "disconnect"
    UPDATE_DISGUISE = "updateDisguise"
    STATUS = "status"


class BridgeConfig(BaseModel):
    """How to reach the backend process.

    Built once by the host and passed into ``BridgeTransport``; tests build
    one directly to point at a fake backend.
    """

    model_config = ConfigDict(frozen=True)

    node_binary: str
    """Executable name or path used to run the entry script."""

    script_path: Path
    """Backend entry script, passed as the first argument."""

    timeout: Optional[float] = Field(default=None, gt=0)
    """Seconds to wait for the backend; None waits until it exits."""

    @classmethod
    def from_env(cls) -> BridgeConfig:
        """Build a config from NODE_BINARY / XRAY_DESKTOP_BRIDGE_TIMEOUT."""
        return cls(
            node_binary=get_node_binary(),
            script_path=get_bridge_script_path(),
            timeout=get_bridge_timeout(),
        )


class BridgeCall(BaseModel):
    """One (action, payload) request. Immutable, never persisted."""

    model_config = ConfigDict(frozen=True)

    action: str
    payload: Any = None


class BridgeResponse(BaseModel):
    """Response envelope the backend writes to stdout.

    Success: ``{"ok": true, "data": <any JSON|omitted>}``
    Failure: ``{"ok": false, "error": <string|omitted>}``
    """

    model_config = ConfigDict(frozen=True)

    ok: StrictBool
    data: Any = None
    error: Optional[StrictStr] = None


# ============================================================================
# Operation payloads
# ============================================================================


class WirePayload(BaseModel):
    """Base for operation payloads; aliases are the backend's field names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ImportTokenPayload(WirePayload):
    base_url: StrictStr = Field(alias="baseUrl")
    token: StrictStr


class SetModePayload(WirePayload):
    mode: StrictStr


class UpdateDisguisePayload(WirePayload):
    base_url: StrictStr = Field(alias="baseUrl")
    server_id: StrictStr = Field(alias="serverId")
    admin_api_key: StrictStr = Field(alias="adminApiKey")
    disguise: dict[str, Any]


class ImportLink(BaseModel):
    """Parsed ``xraycp://import`` deep link."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    token: str
