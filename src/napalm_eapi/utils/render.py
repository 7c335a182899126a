"""Renderer for interface records."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from napalm_eapi.model.interface import InterfaceSettings


def render_interfaces(records: dict[str, InterfaceSettings]) -> dict[str, dict[str, Any]]:
    """Serialize *records* to a JSON-serializable dict keyed by interface name.

    Each value holds exactly the fields of the record's type, ``type``
    included.
    """
    return {name: asdict(record) for name, record in records.items()}
