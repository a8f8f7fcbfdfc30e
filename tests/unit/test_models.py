"""Unit tests for xray_desktop.models and the env-derived configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from xray_desktop.constants import get_bridge_script_path, get_bridge_timeout, get_node_binary
from xray_desktop.models import (
    BridgeCall,
    BridgeConfig,
    BridgeResponse,
    ImportTokenPayload,
    UpdateDisguisePayload,
)


class TestBridgeConfig:
    def test_from_env_defaults(self, monkeypatch):
        monkeypatch.delenv("NODE_BINARY", raising=False)
        monkeypatch.delenv("XRAY_DESKTOP_BRIDGE_TIMEOUT", raising=False)
        config = BridgeConfig.from_env()
        assert config.node_binary == "node"
        assert config.timeout is None
        assert config.script_path.parts[-2:] == ("backend", "desktop-bridge.cjs")

    def test_node_binary_override(self, monkeypatch):
        monkeypatch.setenv("NODE_BINARY", "/opt/node/bin/node")
        assert BridgeConfig.from_env().node_binary == "/opt/node/bin/node"

    def test_empty_override_falls_back(self, monkeypatch):
        monkeypatch.setenv("NODE_BINARY", "")
        assert get_node_binary() == "node"

    def test_timeout_from_env(self, monkeypatch):
        monkeypatch.setenv("XRAY_DESKTOP_BRIDGE_TIMEOUT", "12.5")
        assert BridgeConfig.from_env().timeout == 12.5

    @pytest.mark.parametrize("raw", ["", "abc", "0", "-3"])
    def test_invalid_timeout_means_no_deadline(self, monkeypatch, raw):
        monkeypatch.setenv("XRAY_DESKTOP_BRIDGE_TIMEOUT", raw)
        assert get_bridge_timeout() is None

    def test_script_path_is_install_relative(self):
        package_dir = Path(__file__).resolve().parents[2]
        assert get_bridge_script_path() == package_dir / "backend" / "desktop-bridge.cjs"

    def test_non_positive_timeout_rejected(self, tmp_path):
        with pytest.raises(PydanticValidationError):
            BridgeConfig(node_binary="node", script_path=tmp_path, timeout=0)

    def test_frozen(self, tmp_path):
        config = BridgeConfig(node_binary="node", script_path=tmp_path)
        with pytest.raises(PydanticValidationError):
            config.node_binary = "other"


class TestBridgeResponse:
    def test_strict_ok(self):
        with pytest.raises(PydanticValidationError):
            BridgeResponse.model_validate({"ok": "true"})

    def test_data_and_error_optional(self):
        response = BridgeResponse.model_validate({"ok": True})
        assert response.data is None
        assert response.error is None

    def test_error_must_be_string(self):
        with pytest.raises(PydanticValidationError):
            BridgeResponse.model_validate({"ok": False, "error": {"code": "x"}})


class TestBridgeCall:
    def test_immutable(self):
        call = BridgeCall(action="status", payload={})
        with pytest.raises(PydanticValidationError):
            call.action = "connect"


class TestWirePayloads:
    def test_import_token_aliases(self):
        payload = ImportTokenPayload(base_url="https://panel.example", token="t")
        assert payload.to_wire() == {"baseUrl": "https://panel.example", "token": "t"}

    def test_update_disguise_aliases(self):
        payload = UpdateDisguisePayload(
            base_url="u", server_id="s", admin_api_key="k", disguise={"serverName": "a.b"}
        )
        assert payload.to_wire() == {
            "baseUrl": "u",
            "serverId": "s",
            "adminApiKey": "k",
            "disguise": {"serverName": "a.b"},
        }

    def test_extra_fields_forbidden(self):
        with pytest.raises(PydanticValidationError):
            ImportTokenPayload(base_url="u", token="t", extra="x")
