"""The debug adapter message loop."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dm_debug_adapter.dap.messages import DAPEvent
from dm_debug_adapter.dap.messages import DAPResponse
from dm_debug_adapter.dap.protocol import REQUEST_TYPE
from dm_debug_adapter.dap.protocol import decode_envelope
from dm_debug_adapter.dap.protocol import decode_request
from dm_debug_adapter.dap.protocol import encode_message
from dm_debug_adapter.exceptions import CommandError
from dm_debug_adapter.exceptions import DAPProtocolError
from dm_debug_adapter.exceptions import TransportClosedError
from dm_debug_adapter.handlers import build_registry

if TYPE_CHECKING:
    from pydantic import BaseModel

    from dm_debug_adapter.dap.transport import DAPTransport
    from dm_debug_adapter.dispatch import CommandRegistry
    from dm_debug_adapter.session import DebugSession
    from dm_debug_adapter.supervisor import ProcessSupervisor

logger = logging.getLogger(__name__)


class DebugAdapter:
    """Serves one DAP client, one request at a time."""

    def __init__(
        self,
        transport: DAPTransport,
        session: DebugSession,
        supervisor: ProcessSupervisor,
        registry: CommandRegistry | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            transport: Connection to the DAP client
            session: Session state for this client
            supervisor: Spawns and stops the debuggee
            registry: Command handlers; defaults to every implemented command
        """
        self.transport = transport
        self.session = session
        self.supervisor = supervisor
        self.registry = registry or build_registry()

    async def run(self) -> None:
        """Serve requests until the client closes the connection.

        Raises:
            DAPProtocolError: On a malformed or non-request message. Such
                messages end the session.
        """
        logger.info("acting as debug adapter")
        while True:
            try:
                message = await self.transport.receive()
            except TransportClosedError:
                logger.info("client closed the connection")
                return
            await self.handle_input(message)

    async def handle_input(self, message: str) -> None:
        """Handle one raw message payload and write the response."""
        envelope = decode_envelope(message)
        if envelope.type != REQUEST_TYPE:
            raise DAPProtocolError(f"unknown `type` field {envelope.type!r}")

        request = decode_request(message)
        logger.debug("request %s: %s", request.seq, request.command)

        try:
            body = await self.registry.dispatch(self, request.command, request.arguments)
        except CommandError as e:
            logger.warning("request %s (%s) failed: %s", request.seq, request.command, e)
            response = DAPResponse(
                seq=self.session.next_seq(),
                request_seq=request.seq,
                command=request.command,
                success=False,
                message=str(e),
            )
        else:
            response = DAPResponse(
                seq=self.session.next_seq(),
                request_seq=request.seq,
                command=request.command,
                success=True,
                body=body,
            )

        await self.transport.send(encode_message(response))

    async def issue_event(self, event: str, body: BaseModel) -> None:
        """Write an event immediately, ahead of any pending response."""
        message = DAPEvent(
            seq=self.session.next_seq(),
            event=event,
            body=body.model_dump(by_alias=True, exclude_none=True),
        )
        logger.debug("event %s: %s", message.seq, event)
        await self.transport.send(encode_message(message))
