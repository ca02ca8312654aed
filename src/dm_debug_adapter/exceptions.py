"""Custom exceptions for dm-debug-adapter."""

from __future__ import annotations


class DebugAdapterError(Exception):
    """Base exception for all dm-debug-adapter errors."""


class DAPError(DebugAdapterError):
    """Error from DAP protocol communication."""


class DAPProtocolError(DAPError):
    """Invalid DAP message or protocol violation.

    These cannot be correlated with a request, so they end the session.
    """


class TransportClosedError(DAPError):
    """The client closed the input stream."""


class CommandError(DebugAdapterError):
    """A request failed; reported to the client as ``success: false``."""


class UnknownCommandError(CommandError):
    """No handler is registered for the requested command."""


class InvalidArgumentsError(CommandError):
    """Request arguments did not match the command's argument model."""


class DebuggeeError(CommandError):
    """Failed to kill or wait on the debuggee process."""


class DebuggeeLaunchError(DebuggeeError):
    """Failed to spawn the debuggee process."""


class DuplicateCommandError(DebugAdapterError):
    """Two handlers were registered under the same command name."""
