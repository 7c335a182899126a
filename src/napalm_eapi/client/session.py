"""JSON-RPC session for the EOS eAPI ``runCmds`` method."""

from __future__ import annotations

import itertools
import json
import logging
from dataclasses import dataclass
from typing import Any, Literal

from napalm_eapi.client.errors import (
    JSONRPC_PROTOCOL_CODES,
    EapiCommandError,
    EapiParseError,
    EapiProtocolError,
)
from napalm_eapi.client.http import EapiHTTP
from napalm_eapi.vendor.eos.commands import (
    COMMAND_API,
    EAPI_VERSION,
    JSONRPC_VERSION,
    RUN_CMDS,
)

logger = logging.getLogger(__name__)

Encoding = Literal["json", "text"]

# A command is either a plain CLI string or an eAPI command object such as
# ``{"cmd": "enable", "input": "<password>"}``.
Command = str | dict[str, str]


@dataclass(frozen=True)
class EapiCredentials:
    """Immutable credential pair for an eAPI endpoint.

    Args:
        username: eAPI username.
        password: eAPI password.
    """

    username: str
    password: str


class EapiSession:
    """Runs command batches against one switch through eAPI.

    Wraps :class:`.EapiHTTP` and adds:
    - JSON-RPC 2.0 request framing with a per-session request id.
    - Decoding of the ``result`` / ``error`` envelope.
    - Mapping of JSON-RPC errors to :exc:`.EapiCommandError`.

    eAPI is stateless; every :meth:`run_commands` call is one HTTP request and
    the switch stops at the first failing command of the batch.

    Args:
        base_url: Switch base URL, e.g. ``https://192.0.2.10``.
        credentials: Username/password pair.
        timeout_s: Request timeout in seconds (default 60).
        verify_tls: Whether to verify TLS certificates (default False).
    """

    def __init__(
        self,
        base_url: str,
        credentials: EapiCredentials,
        timeout_s: float = 60.0,
        verify_tls: bool = False,
    ) -> None:
        self._http: EapiHTTP = EapiHTTP(
            base_url=base_url,
            username=credentials.username,
            password=credentials.password,
            timeout_s=timeout_s,
            verify_tls=verify_tls,
        )
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Public request methods
    # ------------------------------------------------------------------

    def run_commands(
        self,
        commands: list[Command],
        encoding: Encoding = "json",
    ) -> list[dict[str, Any]]:
        """Execute *commands* and return one result dict per command.

        Args:
            commands: CLI commands in execution order.
            encoding: ``"json"`` for structured output or ``"text"`` for
                raw CLI output (returned as ``{"output": "..."}``).

        Returns:
            The JSON-RPC ``result`` list, index-aligned with *commands*.

        Raises:
            EapiCommandError: If the switch reports a JSON-RPC error.
            EapiParseError: If the response is not a valid JSON-RPC envelope.
        """
        request_id = f"napalm-eapi-{next(self._ids)}"
        payload: dict[str, Any] = {
            "jsonrpc": JSONRPC_VERSION,
            "method": RUN_CMDS,
            "params": {
                "version": EAPI_VERSION,
                "cmds": commands,
                "format": encoding,
            },
            "id": request_id,
        }
        logger.debug("runCmds id=%s format=%s cmds=%s", request_id, encoding, commands)
        resp = self._http.post_json(COMMAND_API, payload)
        body = self._parse_json(resp.text)

        error = body.get("error")
        if error is not None:
            raise self._command_error(error, commands)

        result = body.get("result")
        if not isinstance(result, list):
            raise EapiParseError(
                f"eAPI response id={request_id} has no result list: {resp.text[:200]!r}"
            )
        return result

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _command_error(error: dict[str, Any], commands: list[Command]) -> EapiCommandError:
        """Build an :exc:`.EapiCommandError` from a JSON-RPC ``error`` member.

        Reserved JSON-RPC codes yield the :exc:`.EapiProtocolError` subclass.
        """
        code = int(error.get("code", -1))
        errors: list[str] = []
        for entry in error.get("data") or []:
            if isinstance(entry, dict):
                errors.extend(str(e) for e in entry.get("errors", []))
        if code in JSONRPC_PROTOCOL_CODES:
            logger.warning("eAPI rejected the request: code=%d %s", code, error.get("message"))
            cls: type[EapiCommandError] = EapiProtocolError
        else:
            cls = EapiCommandError
        return cls(
            code=code,
            message=str(error.get("message", "")),
            commands=list(commands),
            errors=errors,
        )

    @staticmethod
    def _parse_json(text: str) -> dict[str, Any]:
        """Parse *text* as JSON, raising :exc:`.EapiParseError` on failure."""
        try:
            body = json.loads(text)
        except (json.JSONDecodeError, ValueError) as exc:
            raise EapiParseError(f"Non-JSON response from eAPI: {text[:200]!r}") from exc
        if not isinstance(body, dict):
            raise EapiParseError(f"Unexpected eAPI response: {text[:200]!r}")
        return body
