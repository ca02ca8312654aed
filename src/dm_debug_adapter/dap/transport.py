"""DAP transport implementations.

The adapter is spawned by the editor and speaks DAP over its own
stdin/stdout, one Content-Length framed JSON document per message.
"""

from __future__ import annotations

import sys
from abc import ABC
from abc import abstractmethod
from typing import TYPE_CHECKING

import anyio

from dm_debug_adapter.dap.protocol import frame_message
from dm_debug_adapter.dap.protocol import parse_content_length
from dm_debug_adapter.exceptions import DAPProtocolError
from dm_debug_adapter.exceptions import TransportClosedError

if TYPE_CHECKING:
    from anyio import AsyncFile


class DAPTransport(ABC):
    """Abstract base class for DAP transports."""

    @abstractmethod
    async def receive(self) -> str:
        """Receive one complete message payload.

        Raises:
            TransportClosedError: If the client closed the connection.
        """

    @abstractmethod
    async def send(self, payload: str) -> None:
        """Send one complete, already encoded message payload."""

    @abstractmethod
    async def aclose(self) -> None:
        """Release the underlying streams."""


class StdioTransport(DAPTransport):
    """Transport over a pair of binary files, normally stdin and stdout."""

    def __init__(self, reader: AsyncFile[bytes], writer: AsyncFile[bytes]) -> None:
        """Initialize stdio transport.

        Args:
            reader: File the client writes requests to.
            writer: File the client reads responses and events from.
        """
        self._reader = reader
        self._writer = writer

    @classmethod
    def from_stdio(cls) -> StdioTransport:
        """Bind to this process's stdin and stdout."""
        return cls(anyio.wrap_file(sys.stdin.buffer), anyio.wrap_file(sys.stdout.buffer))

    async def receive(self) -> str:
        """Read the header block, then exactly Content-Length bytes."""
        header = await self._read_header()
        content_length = parse_content_length(header)

        content = await self._reader.read(content_length)
        if len(content) < content_length:
            raise DAPProtocolError("Connection closed while reading content")

        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DAPProtocolError("Invalid payload encoding") from e

    async def _read_header(self) -> bytes:
        """Read header lines up to the blank separator line."""
        lines: list[bytes] = []
        while True:
            line = await self._reader.readline()
            if not line:
                if lines:
                    raise DAPProtocolError("Connection closed while reading header")
                raise TransportClosedError("Client closed the input stream")

            line = line.rstrip(b"\r\n")
            if line:
                lines.append(line)
            elif lines:
                return b"\r\n".join(lines)

    async def send(self, payload: str) -> None:
        """Write a framed payload and flush it to the client."""
        await self._writer.write(frame_message(payload))
        await self._writer.flush()

    async def aclose(self) -> None:
        """Flush pending output; the standard streams stay open."""
        await self._writer.flush()
