"""Pytest configuration and fixtures."""

from __future__ import annotations

import contextlib
import json
import sys
from collections import deque
from pathlib import Path
from typing import TYPE_CHECKING
from typing import Any

import anyio
import pytest

from dm_debug_adapter.adapter import DebugAdapter
from dm_debug_adapter.dap.transport import DAPTransport
from dm_debug_adapter.exceptions import TransportClosedError
from dm_debug_adapter.session import DebugSession
from dm_debug_adapter.supervisor import ProcessSupervisor

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from collections.abc import Callable
    from collections.abc import Iterable

FIXTURES = Path(__file__).parent / "fixtures"


class MemoryTransport(DAPTransport):
    """Transport that replays canned payloads and records what is sent."""

    def __init__(self, incoming: Iterable[str | dict[str, Any]] = ()) -> None:
        self.incoming: deque[str | dict[str, Any]] = deque(incoming)
        self.sent: list[dict[str, Any]] = []
        self.closed = False

    async def receive(self) -> str:
        if not self.incoming:
            raise TransportClosedError("no more messages")
        item = self.incoming.popleft()
        return item if isinstance(item, str) else json.dumps(item)

    async def send(self, payload: str) -> None:
        self.sent.append(json.loads(payload))

    async def aclose(self) -> None:
        self.closed = True

    @property
    def events(self) -> list[dict[str, Any]]:
        return [m for m in self.sent if m["type"] == "event"]

    @property
    def responses(self) -> list[dict[str, Any]]:
        return [m for m in self.sent if m["type"] == "response"]


@contextlib.asynccontextmanager
async def _running_adapter(
    debuggee_exe: str = sys.executable,
    incoming: Iterable[str | dict[str, Any]] = (),
) -> AsyncIterator[DebugAdapter]:
    transport = MemoryTransport(incoming)
    async with anyio.create_task_group() as reapers:
        supervisor = ProcessSupervisor(debuggee_exe, reapers)
        adapter = DebugAdapter(transport, DebugSession(), supervisor)
        try:
            yield adapter
        finally:
            child = adapter.session.take_child()
            if child is not None:
                with contextlib.suppress(ProcessLookupError):
                    child.kill()
                await child.wait()
            reapers.cancel_scope.cancel()


@pytest.fixture
def running_adapter() -> Callable[..., contextlib.AbstractAsyncContextManager[DebugAdapter]]:
    """Factory for an adapter wired to a MemoryTransport.

    The debuggee executable defaults to the current Python interpreter, so a
    launch ``dmb`` of a fixture script runs that script.
    """
    return _running_adapter


@pytest.fixture
def sleeper_script() -> str:
    """Debuggee that runs until killed."""
    return str(FIXTURES / "sleeper.py")


@pytest.fixture
def exit_code_script() -> str:
    """Debuggee that exits immediately with status 3."""
    return str(FIXTURES / "exit_code.py")


@pytest.fixture
def memory_transport() -> type[MemoryTransport]:
    """The in-memory transport class, for tests that build their own adapter."""
    return MemoryTransport
