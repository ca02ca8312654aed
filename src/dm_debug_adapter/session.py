"""Debug session state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic import ConfigDict

from dm_debug_adapter.types import SessionState

if TYPE_CHECKING:
    from anyio.abc import Process

    from dm_debug_adapter.dap.messages import InitializeArguments

SEQ_MAX = 2**63 - 1
SEQ_MIN = -(2**63)

# ClientCapabilities field -> (initialize argument alias, default when omitted)
CLIENT_CAPABILITY_DEFAULTS: dict[str, tuple[str, bool]] = {
    "lines_start_at_1": ("linesStartAt1", True),
    "columns_start_at_1": ("columnsStartAt1", True),
    "variable_type": ("supportsVariableType", False),
    "variable_paging": ("supportsVariablePaging", False),
    "run_in_terminal": ("supportsRunInTerminalRequest", False),
    "memory_references": ("supportsMemoryReferences", False),
}


class ClientCapabilities(BaseModel):
    """What the client told us it supports during initialize."""

    lines_start_at_1: bool
    columns_start_at_1: bool
    variable_type: bool
    variable_paging: bool
    run_in_terminal: bool
    memory_references: bool

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_arguments(cls, arguments: InitializeArguments) -> ClientCapabilities:
        """Resolve negotiated flags, filling omitted ones from the defaults table."""
        given = arguments.model_dump(by_alias=True)
        values: dict[str, bool] = {}
        for field, (alias, default) in CLIENT_CAPABILITY_DEFAULTS.items():
            value = given.get(alias)
            values[field] = default if value is None else value
        return cls(**values)


class SequenceCounter:
    """Outgoing ``seq`` source shared by responses and events.

    Starts at 0 and is incremented before use, so the first message gets 1.
    Wraps around like a signed 64-bit integer instead of overflowing.
    """

    def __init__(self, start: int = 0) -> None:
        self._value = start

    @property
    def current(self) -> int:
        """The last value handed out."""
        return self._value

    def next(self) -> int:
        """Increment and return the new value."""
        self._value = SEQ_MIN if self._value >= SEQ_MAX else self._value + 1
        return self._value


class DebugSession:
    """State owned by a single adapter connection.

    Holds the negotiated client capabilities, the outgoing sequence counter
    and at most one debuggee process.
    """

    def __init__(self, seq: SequenceCounter | None = None) -> None:
        self.capabilities: ClientCapabilities | None = None
        self._seq = seq or SequenceCounter()
        self._child: Process | None = None

    @property
    def state(self) -> SessionState:
        """Current state derived from capabilities and the tracked child."""
        if self._child is not None:
            return SessionState.RUNNING
        if self.capabilities is None:
            return SessionState.UNINITIALIZED
        return SessionState.INITIALIZED

    @property
    def child(self) -> Process | None:
        """The tracked debuggee, if any."""
        return self._child

    def next_seq(self) -> int:
        """Mint the ``seq`` for the next outgoing message."""
        return self._seq.next()

    def track_child(self, process: Process) -> Process | None:
        """Start tracking ``process``.

        Returns the previously tracked process, which is no longer owned by
        the session and is not waited on.
        """
        previous, self._child = self._child, process
        return previous

    def take_child(self) -> Process | None:
        """Remove and return the tracked process, transferring ownership."""
        child, self._child = self._child, None
        return child
