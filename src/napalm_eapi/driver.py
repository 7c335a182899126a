"""EOS eAPI NAPALM driver: top-level NetworkDriver implementation."""

from __future__ import annotations

import logging
import time
from typing import Any

from napalm.base.base import NetworkDriver

from napalm_eapi.api.interfaces import Interfaces
from napalm_eapi.client.errors import EapiError
from napalm_eapi.client.node import EapiNode, text_output
from napalm_eapi.client.session import EapiCredentials, EapiSession
from napalm_eapi.parser.config import parse_interface_names
from napalm_eapi.vendor.eos.commands import SHOW_HOSTNAME, SHOW_INTERFACES, SHOW_VERSION

logger = logging.getLogger(__name__)

_VENDOR: str = "Arista"


class EapiDriver(NetworkDriver):  # type: ignore[misc]
    """NAPALM driver for Arista EOS switches reached through eAPI.

    Communicates with the switch via JSON-RPC over HTTP(S).  Interface
    configuration is read from and written to the running configuration
    through :class:`~napalm_eapi.api.interfaces.Interfaces`, available as
    :attr:`interfaces` once the driver is open.

    Args:
        hostname: IP address or hostname of the switch, optionally including
            the URL scheme (e.g. ``https://192.0.2.10``).
        username: eAPI username.
        password: eAPI password.
        timeout: Request timeout in seconds.
        optional_args: Optional driver configuration overrides.
            Supported keys:

            - ``transport`` (str): ``"https"`` (default) or ``"http"``.
            - ``port`` (int): TCP port (default 443, or 80 for http).
            - ``verify_tls`` (bool): Verify TLS certificates (default ``False``).
            - ``enable_password`` (str): Password for the ``enable`` prompt.
    """

    def __init__(
        self,
        hostname: str,
        username: str,
        password: str,
        timeout: int = 60,
        optional_args: dict[str, Any] | None = None,
    ) -> None:
        self.hostname = hostname
        self.username = username
        self.password = password
        self.timeout = timeout
        self.optional_args: dict[str, Any] = optional_args or {}

        self._transport: str = str(self.optional_args.get("transport", "https")).lower()
        if self._transport not in ("http", "https"):
            raise ValueError(f"transport must be 'http' or 'https', got {self._transport!r}")
        self._verify_tls: bool = bool(self.optional_args.get("verify_tls", False))
        self._port: int = int(
            self.optional_args.get("port", 443 if self._transport == "https" else 80)
        )
        self._enable_password: str | None = self.optional_args.get("enable_password")
        self._session: EapiSession | None = None
        self._node: EapiNode | None = None
        self._interfaces: Interfaces | None = None

        logger.debug(
            "EapiDriver initialised: host=%s transport=%s port=%d user=%s",
            self.hostname,
            self._transport,
            self._port,
            self.username,
        )

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Create the eAPI session and check that the switch answers.

        Raises:
            EapiAuthError: If the switch rejects the credentials.
            EapiRequestError: If the switch cannot be reached.
        """
        base_url = self._build_base_url()
        logger.info("Opening connection to %s", base_url)
        creds = EapiCredentials(username=self.username, password=self.password)
        session = EapiSession(
            base_url=base_url,
            credentials=creds,
            timeout_s=float(self.timeout),
            verify_tls=self._verify_tls,
        )
        node = EapiNode(session, enable_password=self._enable_password)
        try:
            node.enable(SHOW_HOSTNAME)
        except EapiError:
            session.close()
            raise
        self._session = session
        self._node = node
        self._interfaces = Interfaces(node)

    def close(self) -> None:
        """Close the HTTP session (best-effort; never raises)."""
        if self._session is not None:
            logger.info("Closing connection to %s", self.hostname)
            try:
                self._session.close()
            except Exception:  # noqa: BLE001
                logger.debug("Session close failed (ignored)", exc_info=True)
            finally:
                self._session = None
                self._node = None
                self._interfaces = None

    def is_alive(self) -> dict[str, bool]:
        """Return liveness status of the driver."""
        return {"is_alive": self._node is not None}

    # ------------------------------------------------------------------
    # Resource APIs
    # ------------------------------------------------------------------

    @property
    def interfaces(self) -> Interfaces:
        """Interface resource API bound to the open node.

        Raises:
            EapiError: If the driver is not open.
        """
        if self._interfaces is None:
            raise EapiError("Session not open; call open() first.")
        return self._interfaces

    # ------------------------------------------------------------------
    # NAPALM getters
    # ------------------------------------------------------------------

    def get_facts(self) -> dict[str, Any]:
        """Return general device facts conforming to the NAPALM schema.

        Returns:
            A dict with keys: ``hostname``, ``fqdn``, ``vendor``, ``model``,
            ``serial_number``, ``os_version``, ``uptime``, ``interface_list``.

        Raises:
            EapiError: If the session is not open.
        """
        node = self._require_node()
        version, hostname = (
            entry["result"] for entry in node.enable([SHOW_VERSION, SHOW_HOSTNAME])
        )
        uptime = _elapsed_since(version.get("bootupTimestamp"), time.time())

        return {
            "hostname": hostname.get("hostname", ""),
            "fqdn": hostname.get("fqdn", ""),
            "vendor": _VENDOR,
            "model": version.get("modelName", "unknown"),
            "serial_number": version.get("serialNumber", ""),
            "os_version": version.get("version", ""),
            "uptime": uptime,
            "interface_list": parse_interface_names(node.running_config),
        }

    def get_interfaces(self) -> dict[str, Any]:
        """Return interface information conforming to the NAPALM schema.

        Administrative state and description come from the running
        configuration; link state, speed, MTU and MAC address come from
        ``show interfaces``.  Interfaces without operational data report
        ``is_up=False`` and zero/empty values.

        Returns:
            Dict keyed by interface name, each value with keys ``is_up``,
            ``is_enabled``, ``description``, ``last_flapped``, ``speed``,
            ``mtu``, ``mac_address``.

        Raises:
            EapiError: If the session is not open.
        """
        node = self._require_node()
        records = self.interfaces.get_all()
        oper_by_name: dict[str, Any] = (
            node.enable(SHOW_INTERFACES)[0]["result"].get("interfaces", {})
        )

        now = time.time()
        result: dict[str, Any] = {}
        for name, record in records.items():
            oper = oper_by_name.get(name, {})
            result[name] = {
                "is_up": oper.get("lineProtocolStatus") == "up",
                "is_enabled": not record.shutdown,
                "description": record.description,
                "last_flapped": _elapsed_since(oper.get("lastStatusChangeTimestamp"), now),
                "speed": float(oper.get("bandwidth", 0)) / 1e6,
                "mtu": int(oper.get("mtu", 0)),
                "mac_address": oper.get("physicalAddress", ""),
            }
        return result

    def cli(self, commands: list[str], encoding: str = "text") -> dict[str, Any]:
        """Run operational commands and return their output keyed by command.

        Args:
            commands: CLI commands to run.
            encoding: ``"text"`` (default) for raw output, ``"json"`` for
                structured output.

        Raises:
            EapiError: If the session is not open.
            EapiCommandError: If the switch rejects a command.
        """
        node = self._require_node()
        if encoding == "text":
            return {
                entry["command"]: text_output(entry)
                for entry in node.enable(commands, encoding="text")
            }
        return {entry["command"]: entry["result"] for entry in node.enable(commands)}

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_base_url(self) -> str:
        """Construct the switch base URL from hostname / port / transport settings."""
        if "://" in self.hostname:
            return self.hostname.rstrip("/")
        default_port = 443 if self._transport == "https" else 80
        if self._port == default_port:
            return f"{self._transport}://{self.hostname}"
        return f"{self._transport}://{self.hostname}:{self._port}"

    def _require_node(self) -> EapiNode:
        """Return the active node or raise :exc:`.EapiError`."""
        if self._node is None:
            raise EapiError("Session not open; call open() first.")
        return self._node


def _elapsed_since(timestamp: float | None, now: float) -> float:
    """Return seconds from an eAPI epoch *timestamp* to *now*, or ``-1.0`` if unknown."""
    if timestamp is None:
        return -1.0
    return float(now - timestamp)
