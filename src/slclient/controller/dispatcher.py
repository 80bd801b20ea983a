"""
Command Dispatcher
Routes typed commands to the map and the server, and tidies incoming lines.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol, TYPE_CHECKING

from slclient.model import directions

if TYPE_CHECKING:
    from slclient.model.engine import SpatialGraph

logger = logging.getLogger(__name__)

NOT_CONNECTED_MESSAGE = "Nicht verbunden."
PROMPT_PREFIX = ">"


class LineSender(Protocol):
    @property
    def is_connected(self) -> bool: ...

    def send(self, line: str) -> None: ...


class CommandDispatcher:
    """
    Lives on the GUI thread. Every call into the map goes through here.

    Args:
        transport: Anything with `is_connected` and `send(line)`.
        map_provider: Returns the engine of the open map window, or None if
            no map is shown. Moves are only recorded while a map is open.
    """

    def __init__(
        self,
        transport: LineSender,
        map_provider: Callable[[], Optional[SpatialGraph]] = lambda: None,
    ) -> None:
        self.transport = transport
        self.map_provider = map_provider
        self.awaiting_response: bool = False

    def handle_input(self, command: str) -> List[str]:
        """
        Process one line typed by the user.

        Returns:
            Status messages to show in the output pane.
        """
        if not command or not command.strip():
            return []

        token = command.strip().lower()
        graph = self.map_provider()
        if graph is not None and directions.is_direction(token):
            graph.move(token)

        if self.transport.is_connected:
            self.transport.send(command)
            self.awaiting_response = True
            return []

        return [NOT_CONNECTED_MESSAGE]

    def process_incoming(self, line: str) -> tuple[str, bool]:
        """
        Clean up a line received from the server.

        Returns:
            (text, first_reply) where `first_reply` is True for the first
            line after a command was sent. The output pane separates replies
            from earlier output with a blank line.
        """
        if line.startswith(PROMPT_PREFIX):
            line = line[len(PROMPT_PREFIX):].lstrip()

        first_reply = self.awaiting_response
        self.awaiting_response = False
        return line, first_reply
