"""Switch node: running-configuration access and command execution."""

from __future__ import annotations

import logging
from typing import Any

from napalm_eapi.client.errors import EapiParseError
from napalm_eapi.client.session import Command, EapiSession, Encoding
from napalm_eapi.vendor.eos.commands import CONFIGURE, ENABLE, SHOW_RUNNING_CONFIG

logger = logging.getLogger(__name__)


class EapiNode:
    """One EOS switch reachable through an :class:`.EapiSession`.

    Provides the three primitives the interface API is built on:

    - :attr:`running_config`: the full ``show running-config all`` text,
      fetched lazily and cached until the next :meth:`config` call.
    - :meth:`enable`: run operational (privileged EXEC) commands.
    - :meth:`config`: run configuration-mode commands as one request.

    Args:
        session: Session used to reach the switch.
        enable_password: Password for the ``enable`` prompt, if the switch
            requires one.
    """

    def __init__(self, session: EapiSession, enable_password: str | None = None) -> None:
        self._session = session
        self._enable_password = enable_password
        self._running_config: str | None = None

    # ------------------------------------------------------------------
    # Running configuration
    # ------------------------------------------------------------------

    @property
    def running_config(self) -> str:
        """Full running configuration, including default values."""
        if self._running_config is None:
            response = self.enable(SHOW_RUNNING_CONFIG, encoding="text")
            self._running_config = text_output(response[0])
            logger.debug(
                "Fetched running-config from %s (%d bytes)",
                self._session.base_url,
                len(self._running_config),
            )
        return self._running_config

    def refresh(self) -> None:
        """Drop the cached running configuration."""
        self._running_config = None

    # ------------------------------------------------------------------
    # Command execution
    # ------------------------------------------------------------------

    def enable(
        self,
        commands: str | list[Command],
        encoding: Encoding = "json",
    ) -> list[dict[str, Any]]:
        """Run privileged EXEC commands.

        Args:
            commands: A single command or a list of commands.
            encoding: ``"json"`` or ``"text"``.

        Returns:
            One dict per command with keys ``command``, ``result`` and
            ``encoding``.

        Raises:
            EapiCommandError: If the switch rejects any command.
        """
        cmds = _as_list(commands)
        results = self._run([self._enable_command(), *cmds], encoding)
        return [
            {"command": cmd, "result": result, "encoding": encoding}
            for cmd, result in zip(cmds, results[1:])
        ]

    def config(self, commands: str | list[Command]) -> list[dict[str, Any]]:
        """Run configuration-mode commands in a single request.

        The switch applies commands in order and stops at the first one it
        rejects.  The cached running configuration is dropped whether or not
        the batch succeeds.

        Args:
            commands: A single command or a list of commands.

        Returns:
            One result dict per submitted command.

        Raises:
            EapiCommandError: If the switch rejects any command.
        """
        cmds = _as_list(commands)
        try:
            results = self._run([self._enable_command(), CONFIGURE, *cmds], "json")
        finally:
            self.refresh()
        return results[2:]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _enable_command(self) -> Command:
        if self._enable_password:
            return {"cmd": ENABLE, "input": self._enable_password}
        return ENABLE

    def _run(self, commands: list[Command], encoding: Encoding) -> list[dict[str, Any]]:
        return self._session.run_commands(commands, encoding=encoding)


def _as_list(commands: str | list[Command]) -> list[Command]:
    if isinstance(commands, str):
        return [commands]
    return list(commands)


def text_output(entry: dict[str, Any]) -> str:
    """Return the ``output`` field of a text-encoded result entry."""
    result = entry.get("result")
    if not isinstance(result, dict) or "output" not in result:
        raise EapiParseError(f"Text result without 'output' for {entry.get('command')!r}")
    return str(result["output"])
