"""Interface resource API for EOS switches.

:class:`Interfaces` is the entry point.  It resolves each interface name to
one of four handlers by the first two characters of the name:

====== =========================
Prefix Handler
====== =========================
``ET`` :class:`EthernetInterface`
``PO`` :class:`PortchannelInterface`
``VX`` :class:`VxlanInterface`
other  :class:`BaseInterface`
====== =========================

Handlers read attributes from the running configuration and build command
batches for mutations.  Every mutator returns ``True`` if the switch accepted
the whole batch.  Mutators taking ``value``/``default`` follow one rule:
``default=True`` emits the ``default <keyword>`` form regardless of
``value``; otherwise a set value emits ``<keyword> <value>`` and a missing
(or empty) value emits ``no <keyword>``.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from napalm_eapi.api.entity import Entity
from napalm_eapi.client.errors import EapiParseError, UnsupportedOperationError
from napalm_eapi.client.node import EapiNode, text_output
from napalm_eapi.model.interface import (
    EthernetSettings,
    InterfaceSettings,
    InterfaceType,
    PortChannelSettings,
    VxlanSettings,
)
from napalm_eapi.parser.config import parse_interface_names
from napalm_eapi.parser.interface import (
    parse_description,
    parse_flowcontrol,
    parse_group_id,
    parse_lacp_fallback,
    parse_lacp_mode,
    parse_lacp_timeout,
    parse_members,
    parse_minimum_links,
    parse_multicast_group,
    parse_sflow,
    parse_shutdown,
    parse_source_interface,
)
from napalm_eapi.utils.member_diff import plan_member_changes
from napalm_eapi.vendor.eos.commands import (
    CHANNEL_GROUP,
    DEFAULT_INTERFACE,
    INTERFACE,
    NO_CHANNEL_GROUP,
    NO_INTERFACE,
    SHOW_PORTCHANNEL_ALL_PORTS,
)
from napalm_eapi.vendor.eos.mappings import FLOWCONTROL_DIRECTIONS, LACP_MODES, PREFIX_TO_TYPE

logger = logging.getLogger(__name__)

DEFAULT_VXLAN_INTERFACE: str = "Vxlan1"


class BaseInterface(Entity):
    """Attributes and operations common to every EOS interface.

    Used directly for interfaces without a dedicated handler (Loopback,
    Vlan, Management, ...), and as the base class of the other handlers.
    """

    OPERATIONS: frozenset[str] = frozenset(
        {"create", "delete", "default", "set_description", "set_shutdown"}
    )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, name: str) -> InterfaceSettings | None:
        """Return the interface record, or ``None`` if *name* is not configured.

        Raises:
            EapiParseError: If a required attribute is missing from the block.
        """
        config = self.get_block(INTERFACE.format(name=name))
        if config is None:
            return None
        return self._parse(name, config)

    def _parse(self, name: str, config: str) -> InterfaceSettings:
        return InterfaceSettings(name=name, **self._common_attributes(config))

    @staticmethod
    def _common_attributes(config: str) -> dict[str, Any]:
        return {
            "description": parse_description(config),
            "shutdown": parse_shutdown(config),
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create(self, name: str) -> bool:
        """Create the interface.  Succeeds if it already exists.

        *name* must be the full identifier (``Loopback0``, not ``Lo0``).
        """
        return self.configure(INTERFACE.format(name=name))

    def delete(self, name: str) -> bool:
        """Delete the interface.  Succeeds if it does not exist."""
        return self.configure(NO_INTERFACE.format(name=name))

    def default(self, name: str) -> bool:
        """Return the interface to its default configuration.

        For virtual interfaces this is equivalent to deleting them.
        """
        return self.configure(DEFAULT_INTERFACE.format(name=name))

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def set_description(
        self,
        name: str,
        value: str | None = None,
        default: bool = False,
    ) -> bool:
        """Configure ``description``; an empty *value* negates it."""
        return self._configure_interface(
            name, self._value_command("description", value, default)
        )

    def set_shutdown(
        self,
        name: str,
        value: bool | None = None,
        default: bool = False,
    ) -> bool:
        """Configure the administrative state.

        ``value=True`` disables the interface, anything falsy enables it.
        """
        if default:
            command = "default shutdown"
        else:
            command = "shutdown" if value else "no shutdown"
        return self._configure_interface(name, command)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _configure_interface(self, name: str, *commands: str) -> bool:
        return self.configure([INTERFACE.format(name=name), *commands])

    @staticmethod
    def _value_command(keyword: str, value: object, default: bool) -> str:
        if default:
            return f"default {keyword}"
        if value is None or value == "":
            return f"no {keyword}"
        return f"{keyword} {value}"


class EthernetInterface(BaseInterface):
    """Physical Ethernet interfaces.

    Physical ports cannot be created or deleted; use :meth:`default` to
    clear their configuration.
    """

    OPERATIONS: frozenset[str] = (BaseInterface.OPERATIONS - {"create", "delete"}) | {
        "set_sflow",
        "set_flowcontrol",
        "set_flowcontrol_send",
        "set_flowcontrol_receive",
    }

    def _parse(self, name: str, config: str) -> EthernetSettings:
        return EthernetSettings(
            name=name,
            **self._common_attributes(config),
            sflow=parse_sflow(config),
            flowcontrol_send=parse_flowcontrol(config, "send"),
            flowcontrol_receive=parse_flowcontrol(config, "receive"),
        )

    def create(self, name: str) -> bool:
        """Always raises: Ethernet interfaces are physical.

        Raises:
            UnsupportedOperationError: Always.
        """
        raise UnsupportedOperationError(operation="create", interface=name)

    def delete(self, name: str) -> bool:
        """Always raises: Ethernet interfaces are physical.

        Raises:
            UnsupportedOperationError: Always.
        """
        raise UnsupportedOperationError(operation="delete", interface=name)

    def set_sflow(
        self,
        name: str,
        value: bool | None = None,
        default: bool = False,
    ) -> bool:
        """Enable (``value=True``) or disable sFlow sampling on the interface."""
        if default:
            command = "default sflow"
        else:
            command = "sflow enable" if value else "no sflow enable"
        return self._configure_interface(name, command)

    def set_flowcontrol(
        self,
        name: str,
        direction: str,
        value: str | None = None,
        default: bool = False,
    ) -> bool:
        """Configure flowcontrol for one direction.

        Args:
            name: Interface name.
            direction: ``"send"`` or ``"receive"``.
            value: ``"on"`` or ``"off"``; ``None`` negates the setting.
            default: Use the ``default`` keyword.

        Raises:
            ValueError: If *direction* is not ``send`` or ``receive``.
        """
        if direction not in FLOWCONTROL_DIRECTIONS:
            raise ValueError(
                f"direction must be one of {sorted(FLOWCONTROL_DIRECTIONS)}, got {direction!r}"
            )
        return self._configure_interface(
            name, self._value_command(f"flowcontrol {direction}", value, default)
        )

    def set_flowcontrol_send(
        self,
        name: str,
        value: str | None = None,
        default: bool = False,
    ) -> bool:
        return self.set_flowcontrol(name, "send", value=value, default=default)

    def set_flowcontrol_receive(
        self,
        name: str,
        value: str | None = None,
        default: bool = False,
    ) -> bool:
        return self.set_flowcontrol(name, "receive", value=value, default=default)


class PortchannelInterface(BaseInterface):
    """Port-Channel (LAG) interfaces.

    Membership is read from the live ``show port-channel <id> all-ports``
    output rather than from the configuration text, and the LACP mode is
    taken from the ``channel-group`` line of the first member.
    """

    OPERATIONS: frozenset[str] = BaseInterface.OPERATIONS | {
        "set_minimum_links",
        "set_members",
        "add_member",
        "remove_member",
        "set_lacp_mode",
        "set_lacp_fallback",
        "set_lacp_timeout",
    }

    def _parse(self, name: str, config: str) -> PortChannelSettings:
        members = self.get_members(name)
        return PortChannelSettings(
            name=name,
            **self._common_attributes(config),
            members=members,
            lacp_mode=self._lacp_mode(members),
            minimum_links=parse_minimum_links(config),
            lacp_fallback=parse_lacp_fallback(config),
            lacp_timeout=parse_lacp_timeout(config),
        )

    def get_members(self, name: str) -> list[str]:
        """Return the Ethernet interfaces bound to the channel group."""
        command = SHOW_PORTCHANNEL_ALL_PORTS.format(group=parse_group_id(name))
        response = self.node.enable(command, encoding="text")
        return parse_members(text_output(response[0]))

    def get_lacp_mode(self, name: str) -> str:
        """Return the LACP mode of the channel group (``"on"`` if it has no members)."""
        return self._lacp_mode(self.get_members(name))

    def _lacp_mode(self, members: list[str]) -> str:
        if not members:
            return parse_lacp_mode(None)
        return parse_lacp_mode(self.get_block(INTERFACE.format(name=members[0])))

    # ------------------------------------------------------------------
    # Channel attributes
    # ------------------------------------------------------------------

    def set_minimum_links(
        self,
        name: str,
        value: int | str | None = None,
        default: bool = False,
    ) -> bool:
        return self._configure_interface(
            name, self._value_command("port-channel min-links", value, default)
        )

    def set_lacp_fallback(
        self,
        name: str,
        value: str | None = None,
        default: bool = False,
    ) -> bool:
        """Configure LACP fallback (``static`` or ``individual``).

        ``value="disabled"`` is treated like ``None`` and negates the setting.
        """
        if value == "disabled":
            value = None
        return self._configure_interface(
            name, self._value_command("port-channel lacp fallback", value, default)
        )

    def set_lacp_timeout(
        self,
        name: str,
        value: int | str | None = None,
        default: bool = False,
    ) -> bool:
        return self._configure_interface(
            name, self._value_command("port-channel lacp fallback timeout", value, default)
        )

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def set_members(self, name: str, members: list[str]) -> bool:
        """Reconcile the channel group membership with *members*.

        Interfaces no longer wanted are removed first, then missing ones are
        added.  Stops at the first failing change and returns ``False``;
        changes already applied are kept.
        """
        plan = plan_member_changes(self.get_members(name), members)
        logger.debug("%s membership plan: remove=%s add=%s", name, plan.remove, plan.add)

        for intf in plan.remove:
            if not self.remove_member(name, intf):
                return False
        for intf in plan.add:
            if not self.add_member(name, intf):
                return False
        return True

    def add_member(self, name: str, member: str) -> bool:
        """Bind *member* to the channel group using the group's current LACP mode."""
        mode = self.get_lacp_mode(name)
        group = parse_group_id(name)
        return self.configure(
            [INTERFACE.format(name=member), CHANNEL_GROUP.format(group=group, mode=mode)]
        )

    def remove_member(self, name: str, member: str) -> bool:
        """Unbind *member* from the channel group."""
        group = parse_group_id(name)
        return self.configure(
            [INTERFACE.format(name=member), NO_CHANNEL_GROUP.format(group=group)]
        )

    def set_lacp_mode(self, name: str, mode: str) -> bool:
        """Rebind every member with a new LACP mode in one batch.

        All members are unbound before any is rebound.

        Returns:
            ``False`` without contacting the switch if *mode* is not one of
            ``on``, ``passive`` or ``active``.
        """
        if mode not in LACP_MODES:
            logger.warning("Invalid LACP mode %r for %s; expected one of %s",
                           mode, name, sorted(LACP_MODES))
            return False

        group = parse_group_id(name)
        members = self.get_members(name)
        if not members:
            logger.debug("%s has no members; nothing to change", name)
            return True

        remove_commands: list[str] = []
        add_commands: list[str] = []
        for member in members:
            remove_commands += [INTERFACE.format(name=member), NO_CHANNEL_GROUP.format(group=group)]
            add_commands += [
                INTERFACE.format(name=member),
                CHANNEL_GROUP.format(group=group, mode=mode),
            ]
        return self.configure(remove_commands + add_commands)


class VxlanInterface(BaseInterface):
    """VXLAN tunnel interfaces.  Name arguments default to ``Vxlan1``."""

    OPERATIONS: frozenset[str] = BaseInterface.OPERATIONS | {
        "set_source_interface",
        "set_multicast_group",
    }

    def get(self, name: str = DEFAULT_VXLAN_INTERFACE) -> VxlanSettings | None:
        return super().get(name)  # type: ignore[return-value]

    def _parse(self, name: str, config: str) -> VxlanSettings:
        return VxlanSettings(
            name=name,
            **self._common_attributes(config),
            source_interface=parse_source_interface(config),
            multicast_group=parse_multicast_group(config),
        )

    def set_source_interface(
        self,
        name: str = DEFAULT_VXLAN_INTERFACE,
        value: str | None = None,
        default: bool = False,
    ) -> bool:
        return self._configure_interface(
            name, self._value_command("vxlan source-interface", value, default)
        )

    def set_multicast_group(
        self,
        name: str = DEFAULT_VXLAN_INTERFACE,
        value: str | None = None,
        default: bool = False,
    ) -> bool:
        return self._configure_interface(
            name, self._value_command("vxlan multicast-group", value, default)
        )


_HANDLER_CLASSES: dict[InterfaceType, type[BaseInterface]] = {
    "generic": BaseInterface,
    "ethernet": EthernetInterface,
    "portchannel": PortchannelInterface,
    "vxlan": VxlanInterface,
}


class Interfaces(Entity):
    """Entry point for reading and configuring interfaces on one node.

    Holds one handler per interface type, created on first use and shared
    by every name of that type.

    Args:
        node: The switch to operate on.
    """

    def __init__(self, node: EapiNode) -> None:
        super().__init__(node)
        self._instances: dict[InterfaceType, BaseInterface] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    @staticmethod
    def handler_type(name: str) -> InterfaceType:
        """Return the interface type tag *name* resolves to."""
        return PREFIX_TO_TYPE.get(name[:2].upper(), "generic")

    def get_instance(self, name: str) -> BaseInterface:
        """Return the (cached) handler responsible for *name*."""
        kind = self.handler_type(name)
        with self._lock:
            instance = self._instances.get(kind)
            if instance is None:
                instance = _HANDLER_CLASSES[kind](self.node)
                self._instances[kind] = instance
        return instance

    def supports(self, operation: str, name: str) -> bool:
        """Return ``True`` if the handler for *name* implements *operation*."""
        return operation in self.get_instance(name).OPERATIONS

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, name: str) -> InterfaceSettings | None:
        """Return the record for *name*, or ``None`` if it is not configured."""
        return self.get_instance(name).get(name)

    def get_all(self) -> dict[str, InterfaceSettings]:
        """Return a record for every interface in the running configuration.

        Interfaces whose block cannot be parsed are logged and left out.
        """
        result: dict[str, InterfaceSettings] = {}
        for name in parse_interface_names(self.config):
            try:
                data = self.get(name)
            except EapiParseError as exc:
                logger.warning("Skipping interface %s: %s", name, exc)
                continue
            if data is not None:
                result[name] = data
        return result

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create(self, name: str) -> bool:
        return self._dispatch("create", name)

    def delete(self, name: str) -> bool:
        return self._dispatch("delete", name)

    def default(self, name: str) -> bool:
        return self._dispatch("default", name)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def set_description(self, name: str, value: str | None = None, default: bool = False) -> bool:
        return self._dispatch("set_description", name, value=value, default=default)

    def set_shutdown(self, name: str, value: bool | None = None, default: bool = False) -> bool:
        return self._dispatch("set_shutdown", name, value=value, default=default)

    def set_sflow(self, name: str, value: bool | None = None, default: bool = False) -> bool:
        return self._dispatch("set_sflow", name, value=value, default=default)

    def set_flowcontrol(
        self,
        name: str,
        direction: str,
        value: str | None = None,
        default: bool = False,
    ) -> bool:
        return self._dispatch("set_flowcontrol", name, direction, value=value, default=default)

    def set_flowcontrol_send(
        self, name: str, value: str | None = None, default: bool = False
    ) -> bool:
        return self._dispatch("set_flowcontrol_send", name, value=value, default=default)

    def set_flowcontrol_receive(
        self, name: str, value: str | None = None, default: bool = False
    ) -> bool:
        return self._dispatch("set_flowcontrol_receive", name, value=value, default=default)

    def set_minimum_links(
        self, name: str, value: int | str | None = None, default: bool = False
    ) -> bool:
        return self._dispatch("set_minimum_links", name, value=value, default=default)

    def set_lacp_fallback(
        self, name: str, value: str | None = None, default: bool = False
    ) -> bool:
        return self._dispatch("set_lacp_fallback", name, value=value, default=default)

    def set_lacp_timeout(
        self, name: str, value: int | str | None = None, default: bool = False
    ) -> bool:
        return self._dispatch("set_lacp_timeout", name, value=value, default=default)

    def set_lacp_mode(self, name: str, mode: str) -> bool:
        return self._dispatch("set_lacp_mode", name, mode)

    def set_members(self, name: str, members: list[str]) -> bool:
        return self._dispatch("set_members", name, members)

    def add_member(self, name: str, member: str) -> bool:
        return self._dispatch("add_member", name, member)

    def remove_member(self, name: str, member: str) -> bool:
        return self._dispatch("remove_member", name, member)

    def set_source_interface(
        self, name: str, value: str | None = None, default: bool = False
    ) -> bool:
        return self._dispatch("set_source_interface", name, value=value, default=default)

    def set_multicast_group(
        self, name: str, value: str | None = None, default: bool = False
    ) -> bool:
        return self._dispatch("set_multicast_group", name, value=value, default=default)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _dispatch(self, operation: str, name: str, *args: Any, **kwargs: Any) -> bool:
        """Forward *operation* to the handler for *name*.

        Raises:
            UnsupportedOperationError: If the handler does not implement it.
        """
        handler = self.get_instance(name)
        if operation not in handler.OPERATIONS:
            raise UnsupportedOperationError(operation=operation, interface=name)
        result: bool = getattr(handler, operation)(name, *args, **kwargs)
        return result
