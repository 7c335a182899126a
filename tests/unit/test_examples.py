"""Unit tests for the helpers in examples/set_portchannel_members.py."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest

from napalm_eapi.api.interfaces import Interfaces

_EXAMPLE = Path(__file__).resolve().parents[2] / "examples" / "set_portchannel_members.py"

RUNNING_CONFIG = """\
interface Ethernet1
   no shutdown
   channel-group 10 mode active
!
interface Loopback0
   no shutdown
!
interface Port-Channel10
   no shutdown
   port-channel lacp fallback timeout 90
!
interface Port-Channel20
   no shutdown
!
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _StaticNode:
    running_config = RUNNING_CONFIG

    def enable(self, commands: Any, encoding: str = "json") -> list[dict[str, Any]]:
        output = "Port Channel Port-Channel10:\n  Active Ports: Ethernet1\n"
        if "port-channel 10 " not in str(commands):
            output = ""
        return [{"command": commands, "result": {"output": output}, "encoding": encoding}]


def _load_example() -> ModuleType:
    spec = importlib.util.spec_from_file_location("set_portchannel_members", _EXAMPLE)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _interfaces() -> Interfaces:
    return Interfaces(_StaticNode())  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# current_members
# ---------------------------------------------------------------------------

class TestCurrentMembers:
    def test_returns_members(self) -> None:
        example = _load_example()
        assert example.current_members(_interfaces(), "Port-Channel10") == ["Ethernet1"]

    def test_unparseable_block_exits_cleanly(self, capsys: pytest.CaptureFixture[str]) -> None:
        example = _load_example()
        with pytest.raises(SystemExit) as exc_info:
            example.current_members(_interfaces(), "Port-Channel20")
        assert exc_info.value.code == 1
        assert "cannot read Port-Channel20" in capsys.readouterr().err

    def test_non_portchannel_exits_cleanly(self, capsys: pytest.CaptureFixture[str]) -> None:
        example = _load_example()
        with pytest.raises(SystemExit):
            example.current_members(_interfaces(), "Loopback0")
        assert "not a port-channel" in capsys.readouterr().err

    def test_missing_interface_exits_cleanly(self, capsys: pytest.CaptureFixture[str]) -> None:
        example = _load_example()
        with pytest.raises(SystemExit):
            example.current_members(_interfaces(), "Port-Channel99")
        assert "is not configured" in capsys.readouterr().err
