#!/usr/bin/env python3
"""Print every interface record of an EOS switch as JSON.

Opens the switch through :class:`~napalm_eapi.driver.EapiDriver`, reads the
running configuration once and dumps one object per ``interface`` block,
keyed by interface name.

Environment variables:
    EOS_HOST         Switch IP, hostname or base URL (required).
    EOS_USERNAME     eAPI username (default: admin).
    EOS_PASSWORD     eAPI password (default: empty).
    EOS_TRANSPORT    "https" (default) or "http".
    EOS_VERIFY_TLS   Set to "1" to verify TLS certificates (default: off).
"""

from __future__ import annotations

import json
import os
import sys

from napalm_eapi.client.errors import EapiError
from napalm_eapi.driver import EapiDriver
from napalm_eapi.utils.render import render_interfaces


def main() -> None:
    host = os.environ.get("EOS_HOST", "")
    if not host:
        print("ERROR: EOS_HOST environment variable is required.", file=sys.stderr)
        sys.exit(1)

    driver = EapiDriver(
        hostname=host,
        username=os.environ.get("EOS_USERNAME", "admin"),
        password=os.environ.get("EOS_PASSWORD", ""),
        optional_args={
            "transport": os.environ.get("EOS_TRANSPORT", "https"),
            "verify_tls": os.environ.get("EOS_VERIFY_TLS", "0") == "1",
        },
    )
    try:
        driver.open()
        records = driver.interfaces.get_all()
    except EapiError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        driver.close()

    print(json.dumps(render_interfaces(records), indent=2))


if __name__ == "__main__":
    main()
