"""Unit tests for napalm_eapi.utils.render."""

from __future__ import annotations

import json

from napalm_eapi.model.interface import EthernetSettings, InterfaceSettings, VxlanSettings
from napalm_eapi.utils.render import render_interfaces


def test_render_keeps_type_specific_fields() -> None:
    rendered = render_interfaces({
        "Loopback0": InterfaceSettings(name="Loopback0", description="router-id"),
        "Ethernet1": EthernetSettings(name="Ethernet1", flowcontrol_send="on"),
    })
    assert rendered["Loopback0"] == {
        "name": "Loopback0",
        "type": "generic",
        "description": "router-id",
        "shutdown": False,
    }
    assert rendered["Ethernet1"]["type"] == "ethernet"
    assert rendered["Ethernet1"]["flowcontrol_send"] == "on"
    assert "sflow" not in rendered["Loopback0"]


def test_render_is_json_serialisable() -> None:
    rendered = render_interfaces({"Vxlan1": VxlanSettings(name="Vxlan1", source_interface="Loopback0")})
    assert json.loads(json.dumps(rendered)) == rendered


def test_render_empty() -> None:
    assert render_interfaces({}) == {}
