"""Attribute parsers for EOS interface configuration blocks.

Every ``parse_*`` function takes the text of one ``interface <name>`` block
(as returned by :func:`~napalm_eapi.parser.config.find_block`) and extracts a
single attribute, falling back to the documented default when the attribute
is not configured.
"""

from __future__ import annotations

import re

from napalm_eapi.client.errors import EapiParseError

DEFAULT_DESCRIPTION: str = ""
DEFAULT_FLOWCONTROL: str = "off"
DEFAULT_LACP_MODE: str = "on"
DEFAULT_MIN_LINKS: str = "0"
DEFAULT_LACP_FALLBACK: str = "disabled"
DEFAULT_SOURCE_INTERFACE: str = ""
DEFAULT_MULTICAST_GROUP: str = ""

_DESCRIPTION_RE: re.Pattern[str] = re.compile(r"^\s{3}description\s(.+)$", re.MULTILINE)
_NO_SHUTDOWN_RE: re.Pattern[str] = re.compile(r"^\s*no shutdown\s*$", re.MULTILINE)
_NO_SFLOW_RE: re.Pattern[str] = re.compile(r"^\s*no sflow enable\s*$", re.MULTILINE)

# Member names in ``show port-channel <id> all-ports`` text output,
# e.g. "Ethernet1" or "Ethernet3/1/2".
_MEMBER_RE: re.Pattern[str] = re.compile(r"Ethernet[\d/]*")
_CHANNEL_GROUP_MODE_RE: re.Pattern[str] = re.compile(r"channel-group \d+ mode (\w+)")
_MIN_LINKS_RE: re.Pattern[str] = re.compile(r"port-channel min-links (\d+)$", re.MULTILINE)
_LACP_FALLBACK_RE: re.Pattern[str] = re.compile(r"lacp fallback (static|individual)")
_LACP_TIMEOUT_RE: re.Pattern[str] = re.compile(r"lacp fallback timeout (\d+)$", re.MULTILINE)

_SOURCE_INTERFACE_RE: re.Pattern[str] = re.compile(r"source-interface (\S+)$", re.MULTILINE)
_MULTICAST_GROUP_RE: re.Pattern[str] = re.compile(r"multicast-group (\S+)$", re.MULTILINE)

_GROUP_ID_RE: re.Pattern[str] = re.compile(r"\d+")


# ---------------------------------------------------------------------------
# Common attributes
# ---------------------------------------------------------------------------

def parse_description(config: str) -> str:
    """Return the interface description, or ``""`` if none is configured."""
    m = _DESCRIPTION_RE.search(config)
    return m.group(1) if m else DEFAULT_DESCRIPTION


def parse_shutdown(config: str) -> bool:
    """Return the administrative shutdown state.

    EOS always renders ``no shutdown`` for an enabled interface in the
    ``all`` view, so any block without that line is reported as shut down.
    """
    return _NO_SHUTDOWN_RE.search(config) is None


# ---------------------------------------------------------------------------
# Ethernet
# ---------------------------------------------------------------------------

def parse_sflow(config: str) -> bool:
    """Return ``False`` only if the block disables sFlow explicitly."""
    return _NO_SFLOW_RE.search(config) is None


def parse_flowcontrol(config: str, direction: str) -> str:
    """Return the flowcontrol value for *direction* (``send`` or ``receive``).

    Args:
        config: Interface configuration block.
        direction: ``"send"`` or ``"receive"``.

    Returns:
        The configured keyword (normally ``"on"`` or ``"off"``), or ``"off"``.
    """
    m = re.search(rf"flowcontrol {re.escape(direction)} (\w+)$", config, re.MULTILINE)
    return m.group(1) if m else DEFAULT_FLOWCONTROL


# ---------------------------------------------------------------------------
# Port-Channel
# ---------------------------------------------------------------------------

def parse_group_id(name: str) -> str:
    """Return the channel-group number embedded in an interface name.

    Raises:
        EapiParseError: If *name* contains no digits.
    """
    m = _GROUP_ID_RE.search(name)
    if m is None:
        raise EapiParseError(f"No channel-group id in interface name {name!r}")
    return m.group(0)


def parse_members(output: str) -> list[str]:
    """Extract member interface names from ``show port-channel … all-ports`` text."""
    return _MEMBER_RE.findall(output)


def parse_lacp_mode(config: str | None) -> str:
    """Return the ``channel-group`` mode from a member's block.

    Args:
        config: Configuration block of a member interface, or ``None`` if
            the channel has no members (or the member block is missing).
    """
    if config is None:
        return DEFAULT_LACP_MODE
    m = _CHANNEL_GROUP_MODE_RE.search(config)
    return m.group(1) if m else DEFAULT_LACP_MODE


def parse_minimum_links(config: str) -> str:
    m = _MIN_LINKS_RE.search(config)
    return m.group(1) if m else DEFAULT_MIN_LINKS


def parse_lacp_fallback(config: str) -> str:
    m = _LACP_FALLBACK_RE.search(config)
    return m.group(1) if m else DEFAULT_LACP_FALLBACK


def parse_lacp_timeout(config: str) -> str:
    """Return the LACP fallback timeout in seconds.

    The ``all`` view of the running configuration always carries this line,
    so its absence means the block is not what we expect.

    Raises:
        EapiParseError: If the block has no ``lacp fallback timeout`` line.
    """
    m = _LACP_TIMEOUT_RE.search(config)
    if m is None:
        raise EapiParseError("No 'port-channel lacp fallback timeout' line in block")
    return m.group(1)


# ---------------------------------------------------------------------------
# VXLAN
# ---------------------------------------------------------------------------

def parse_source_interface(config: str) -> str:
    m = _SOURCE_INTERFACE_RE.search(config)
    return m.group(1) if m else DEFAULT_SOURCE_INTERFACE


def parse_multicast_group(config: str) -> str:
    m = _MULTICAST_GROUP_RE.search(config)
    return m.group(1) if m else DEFAULT_MULTICAST_GROUP
