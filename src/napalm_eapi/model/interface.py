"""Typed models for interface resource records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

InterfaceType = Literal["generic", "ethernet", "portchannel", "vxlan"]


@dataclass
class InterfaceSettings:
    """Attributes common to every interface in the running configuration.

    Attributes:
        name: Full interface identifier (e.g. ``"Loopback0"``).
        type: Interface type tag, fixed by the record class.
        description: Interface description, ``""`` when not configured.
        shutdown: ``True`` if the interface is administratively disabled.
    """

    name: str
    type: InterfaceType = field(default="generic", init=False)
    description: str = ""
    shutdown: bool = False


@dataclass
class EthernetSettings(InterfaceSettings):
    """Physical Ethernet interface.

    Attributes:
        sflow: ``True`` if sFlow sampling is enabled on the interface.
        flowcontrol_send: ``"on"`` or ``"off"``.
        flowcontrol_receive: ``"on"`` or ``"off"``.
    """

    type: InterfaceType = field(default="ethernet", init=False)
    sflow: bool = True
    flowcontrol_send: str = "off"
    flowcontrol_receive: str = "off"


@dataclass
class PortChannelSettings(InterfaceSettings):
    """Port-Channel (LAG) interface.

    Attributes:
        members: Ethernet interfaces bound to the channel group, in the
            order the switch reports them.
        lacp_mode: ``"active"``, ``"passive"`` or ``"on"``, as configured on
            the first member.
        minimum_links: Value of ``port-channel min-links``.
        lacp_fallback: ``"static"``, ``"individual"`` or ``"disabled"``.
        lacp_timeout: Value of ``port-channel lacp fallback timeout``.
    """

    type: InterfaceType = field(default="portchannel", init=False)
    members: list[str] = field(default_factory=list)
    lacp_mode: str = "on"
    minimum_links: str = "0"
    lacp_fallback: str = "disabled"
    lacp_timeout: str = ""


@dataclass
class VxlanSettings(InterfaceSettings):
    """VXLAN tunnel interface.

    Attributes:
        source_interface: Interface whose address sources VXLAN traffic.
        multicast_group: Flood multicast group address.
    """

    type: InterfaceType = field(default="vxlan", init=False)
    source_interface: str = ""
    multicast_group: str = ""


@dataclass
class MemberChangeSet:
    """Planned port-channel membership changes.

    Attributes:
        remove: Interfaces to unbind, in current-member order.
        add: Interfaces to bind, in desired-member order.
    """

    remove: list[str] = field(default_factory=list)
    add: list[str] = field(default_factory=list)
