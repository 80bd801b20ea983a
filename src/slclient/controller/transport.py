"""
Line Transport (Telnet)
=======================
A plain line-based TCP client for MUD servers.

Why is this file needed?
------------------------
The GUI and the map only ever deal with whole text lines. This class hides
the socket: connect, send a line, read lines until the server hangs up.
Telnet option negotiation is not handled; lines are passed through as text.

Errors never leave this class. A failed connect returns False, a failed send
is logged and dropped, a broken receive ends the line stream.
"""
from __future__ import annotations

import logging
import socket
import threading
from typing import BinaryIO, Iterator, Optional

logger = logging.getLogger(__name__)

LINE_ENDING = b"\r\n"


class TelnetTransport:
    def __init__(self, encoding: str = "utf-8", connect_timeout: float = 10.0) -> None:
        self.encoding = encoding
        self.connect_timeout = connect_timeout

        self._sock: Optional[socket.socket] = None
        self._reader: Optional[BinaryIO] = None
        self._send_lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._sock is not None

    def connect(self, host: str, port: int) -> bool:
        """Open the connection. Returns False if the server is unreachable."""
        self.disconnect()
        logger.info(f"Connecting to {host}:{port}...")
        try:
            sock = socket.create_connection((host, port), timeout=self.connect_timeout)
            # Reads block until data arrives or the connection drops
            sock.settimeout(None)
        except OSError as e:
            logger.warning(f"Connection to {host}:{port} failed: {e}")
            return False

        self._sock = sock
        self._reader = sock.makefile("rb")
        logger.info(f"Connected to {host}:{port}")
        return True

    def send(self, line: str) -> None:
        """Send one line, CRLF-terminated. Best effort, no retry."""
        if not line or not line.strip() or self._sock is None:
            return
        data = line.encode(self.encoding, errors="replace") + LINE_ENDING
        try:
            with self._send_lock:
                self._sock.sendall(data)
        except OSError as e:
            logger.warning(f"Send failed: {e}")

    def receive_line(self) -> Optional[str]:
        """
        Block until the next line arrives.
        Returns None once the connection is closed or broken.
        """
        reader = self._reader
        if reader is None:
            return None
        try:
            raw = reader.readline()
        except (OSError, ValueError) as e:
            # ValueError: the file was closed by disconnect() from another thread
            logger.debug(f"Receive ended: {e}")
            return None
        if not raw:
            return None
        return raw.decode(self.encoding, errors="replace").rstrip("\r\n")

    def iter_lines(self) -> Iterator[str]:
        """Yield received lines until the connection drops."""
        while True:
            line = self.receive_line()
            if line is None:
                logger.info("Connection closed.")
                return
            yield line

    def disconnect(self) -> None:
        sock, reader = self._sock, self._reader
        self._sock = None
        self._reader = None
        if sock is None:
            return
        try:
            # Wakes up a reader blocked in another thread
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            logger.debug("Socket was already shut down.")
        try:
            if reader is not None:
                reader.close()
            sock.close()
        except OSError as e:
            logger.debug(f"Error while closing socket: {e}")
        logger.info("Disconnected.")
