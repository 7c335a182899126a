#!/usr/bin/env python3
"""Example: reconcile a port-channel's members (dry-run by default).

Usage::

    # Dry-run: show which members would be removed and added.
    export EOS_HOST=192.0.2.10
    export PORT_CHANNEL=Port-Channel10
    export MEMBERS=Ethernet1,Ethernet2
    python examples/set_portchannel_members.py

    # Apply:
    export APPLY=1
    python examples/set_portchannel_members.py

Environment variables:
    EOS_HOST         Switch IP or hostname (required).
    EOS_USERNAME     eAPI username (default: admin).
    EOS_PASSWORD     eAPI password (default: empty).
    EOS_TRANSPORT    "https" (default) or "http".
    EOS_VERIFY_TLS   Set to "1" to verify TLS certificates (default: off).
    PORT_CHANNEL     Full port-channel name, e.g. Port-Channel10 (required).
    MEMBERS          Comma-separated desired member list (required, may be empty).
    APPLY            Set to "1" to actually apply changes (default: dry-run).
"""

from __future__ import annotations

import os
import sys
from typing import NoReturn

from napalm_eapi.api.interfaces import Interfaces
from napalm_eapi.client.errors import EapiParseError
from napalm_eapi.client.node import EapiNode
from napalm_eapi.client.session import EapiCredentials, EapiSession
from napalm_eapi.model.interface import PortChannelSettings
from napalm_eapi.utils.member_diff import plan_member_changes


def _fail(message: str) -> NoReturn:
    print(f"ERROR: {message}", file=sys.stderr)
    sys.exit(1)


def current_members(interfaces: Interfaces, name: str) -> list[str]:
    """Return the members of port-channel *name*, exiting with an error if unusable."""
    try:
        record = interfaces.get(name)
    except EapiParseError as exc:
        _fail(f"cannot read {name}: {exc}")
    if record is None:
        _fail(f"{name} is not configured.")
    if not isinstance(record, PortChannelSettings):
        _fail(f"{name} is not a port-channel (type {record.type!r}).")
    return record.members


def main() -> None:
    host = os.environ.get("EOS_HOST", "")
    if not host:
        _fail("EOS_HOST environment variable is required.")

    name = os.environ.get("PORT_CHANNEL", "")
    if not name:
        _fail("PORT_CHANNEL environment variable is required.")
    if "MEMBERS" not in os.environ:
        _fail("MEMBERS environment variable is required.")
    desired = [m.strip() for m in os.environ["MEMBERS"].split(",") if m.strip()]

    username = os.environ.get("EOS_USERNAME", "admin")
    password = os.environ.get("EOS_PASSWORD", "")
    transport = os.environ.get("EOS_TRANSPORT", "https")
    verify_tls = os.environ.get("EOS_VERIFY_TLS", "0") == "1"
    apply = os.environ.get("APPLY", "0") == "1"

    session = EapiSession(
        base_url=f"{transport}://{host}" if "://" not in host else host,
        credentials=EapiCredentials(username, password),
        verify_tls=verify_tls,
    )
    try:
        interfaces = Interfaces(EapiNode(session))
        members = current_members(interfaces, name)

        plan = plan_member_changes(members, desired)
        print(f"{name} current members: {members}")
        print(f"  remove: {plan.remove or '-'}")
        print(f"  add:    {plan.add or '-'}")

        if not apply:
            print("Dry-run only. Set APPLY=1 to apply.")
            return

        if not interfaces.set_members(name, desired):
            _fail("switch rejected a membership change.")
        print(f"{name} members now: {current_members(interfaces, name)}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
