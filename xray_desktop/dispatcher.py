"""Command dispatcher: the operations the desktop UI can invoke.

Each operation packs its arguments under the backend's field names, calls
the transport with a fixed action, and either returns the backend value or
discards it. Transport failures propagate unchanged.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from xray_desktop.bridge import BridgeTransport
from xray_desktop.errors import ValidationError
from xray_desktop.models import (
    BridgeAction,
    BridgeConfig,
    ImportTokenPayload,
    SetModePayload,
    UpdateDisguisePayload,
    WirePayload,
)

# Operation name -> (action, returns a value). Kept in sync with the
# CommandDispatcher methods below.
OPERATIONS: dict[str, tuple[BridgeAction, bool]] = {
    "import_token": (BridgeAction.IMPORT_TOKEN, False),
    "connect": (BridgeAction.CONNECT, True),
    "set_mode": (BridgeAction.SET_MODE, True),
    "disconnect": (BridgeAction.DISCONNECT, False),
    "update_disguise": (BridgeAction.UPDATE_DISGUISE, True),
    "status": (BridgeAction.STATUS, True),
}


def _pack(model: type[WirePayload], **fields: Any) -> dict[str, Any]:
    missing = [name for name, value in fields.items() if value is None]
    if missing:
        raise ValidationError(f"Missing required argument: {', '.join(missing)}")
    try:
        return model(**fields).to_wire()
    except PydanticValidationError as exc:
        err = exc.errors()[0]
        field = ".".join(str(part) for part in err["loc"])
        raise ValidationError(f"Invalid argument {field}: {err['msg']}") from exc


class CommandDispatcher:
    """Typed front for the backend's fixed operation set."""

    def __init__(self, transport: BridgeTransport) -> None:
        self.transport = transport

    @classmethod
    def from_config(cls, config: Optional[BridgeConfig] = None) -> CommandDispatcher:
        return cls(BridgeTransport(config or BridgeConfig.from_env()))

    def import_token(self, base_url: str, token: str) -> None:
        """Import a share token issued by the control panel at ``base_url``."""
        payload = _pack(ImportTokenPayload, base_url=base_url, token=token)
        self.transport.invoke(BridgeAction.IMPORT_TOKEN, payload)

    def connect(self) -> Any:
        """Start the tunnel; returns the backend's status object."""
        return self.transport.invoke(BridgeAction.CONNECT, {})

    def set_mode(self, mode: str) -> Any:
        """Switch between ``proxy`` and ``vpn``; the backend validates the name."""
        payload = _pack(SetModePayload, mode=mode)
        return self.transport.invoke(BridgeAction.SET_MODE, payload)

    def disconnect(self) -> None:
        self.transport.invoke(BridgeAction.DISCONNECT, {})

    def update_disguise(
        self,
        base_url: str,
        server_id: str,
        admin_api_key: str,
        disguise: dict[str, Any],
    ) -> Any:
        """Send a disguise configuration for ``server_id`` through the backend."""
        payload = _pack(
            UpdateDisguisePayload,
            base_url=base_url,
            server_id=server_id,
            admin_api_key=admin_api_key,
            disguise=disguise,
        )
        return self.transport.invoke(BridgeAction.UPDATE_DISGUISE, payload)

    def status(self) -> Any:
        return self.transport.invoke(BridgeAction.STATUS, {})

    def operation(self, name: str) -> Callable[..., Any]:
        """Look up an operation method by name, rejecting anything else."""
        if name not in OPERATIONS:
            raise ValidationError(f"Unknown operation: {name}")
        return getattr(self, name)
