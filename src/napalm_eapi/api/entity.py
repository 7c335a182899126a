"""Base class for configuration resources backed by an :class:`.EapiNode`."""

from __future__ import annotations

import logging

from napalm_eapi.client.errors import EapiCommandError, EapiRequestError, EapiResponseError
from napalm_eapi.client.node import EapiNode
from napalm_eapi.client.session import Command
from napalm_eapi.parser.config import find_block

logger = logging.getLogger(__name__)


class Entity:
    """Shared plumbing for resource APIs: block lookup and command submission.

    Args:
        node: The switch the resource lives on.
    """

    def __init__(self, node: EapiNode) -> None:
        self.node = node

    @property
    def config(self) -> str:
        """The node's full running configuration."""
        return self.node.running_config

    def get_block(self, anchor: str) -> str | None:
        """Return the configuration block whose header line equals *anchor*."""
        return find_block(self.config, anchor)

    def configure(self, commands: str | list[Command]) -> bool:
        """Submit configuration commands as one batch.

        Args:
            commands: A single command or a list of commands.

        Returns:
            ``True`` if the switch accepted every command, ``False`` if it
            rejected the batch or could not be reached.
        """
        try:
            self.node.config(commands)
        except (EapiCommandError, EapiRequestError, EapiResponseError) as exc:
            logger.warning("Configuration rejected: %s (commands=%s)", exc, commands)
            return False
        return True
