"""DAP message types.

DAP has three message types sharing a ``seq``/``type`` header:
- Request: client → adapter (with seq, command, arguments)
- Response: adapter → client (with request_seq, success, body)
- Event: adapter → client (with event, body)
"""

from __future__ import annotations

from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import StrictInt
from pydantic import StrictStr


class ProtocolMessage(BaseModel):
    """The envelope shared by every DAP message.

    Only used to sniff ``type`` before the full decode.
    """

    seq: StrictInt
    type: StrictStr


class DAPMessage(BaseModel):
    """Base class for all DAP messages."""

    seq: StrictInt


class DAPRequest(DAPMessage):
    """A DAP request message from client to adapter."""

    type: Literal["request"] = "request"
    command: str
    # Left opaque; each command validates its own arguments
    arguments: Any = None


class DAPResponse(DAPMessage):
    """A DAP response message from adapter to client."""

    type: Literal["response"] = "response"
    request_seq: int
    success: bool
    command: str
    message: str | None = None
    body: dict[str, Any] | None = None


class DAPEvent(DAPMessage):
    """A DAP event message from adapter to client."""

    type: Literal["event"] = "event"
    event: str
    body: dict[str, Any] | None = None


# === Request argument types ===


class InitializeArguments(BaseModel):
    """Arguments for the initialize request.

    The negotiation flags are left unset when the client omits them; the
    session applies ``CLIENT_CAPABILITY_DEFAULTS`` afterwards.
    """

    client_id: str | None = Field(default=None, alias="clientID")
    client_name: str | None = Field(default=None, alias="clientName")
    adapter_id: str | None = Field(default=None, alias="adapterID")
    locale: str | None = None
    path_format: str | None = Field(default=None, alias="pathFormat")
    lines_start_at1: bool | None = Field(default=None, alias="linesStartAt1")
    columns_start_at1: bool | None = Field(default=None, alias="columnsStartAt1")
    supports_variable_type: bool | None = Field(default=None, alias="supportsVariableType")
    supports_variable_paging: bool | None = Field(default=None, alias="supportsVariablePaging")
    supports_run_in_terminal_request: bool | None = Field(
        default=None, alias="supportsRunInTerminalRequest"
    )
    supports_memory_references: bool | None = Field(
        default=None, alias="supportsMemoryReferences"
    )

    model_config = ConfigDict(populate_by_name=True)


class LaunchArguments(BaseModel):
    """Arguments for the launch request common to every adapter."""

    no_debug: bool | None = Field(default=None, alias="noDebug")
    restart: Any | None = Field(default=None, alias="__restart")

    model_config = ConfigDict(populate_by_name=True)


class VscLaunchArguments(LaunchArguments):
    """Launch arguments as sent by the VS Code extension.

    VS Code also sends ``__sessionId``, ``name``, ``preLaunchTask``,
    ``request`` and ``type``; those are accepted and ignored.
    """

    dmb: str = Field(description="Path to the compiled .dmb to run.")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class DisconnectArguments(BaseModel):
    """Arguments for the disconnect request."""

    restart: bool | None = None
    terminate_debuggee: bool | None = Field(default=None, alias="terminateDebuggee")
    suspend_debuggee: bool | None = Field(default=None, alias="suspendDebuggee")

    model_config = ConfigDict(populate_by_name=True)


# === Response and event bodies ===


class Capabilities(BaseModel):
    """Capabilities advertised by the adapter in the initialize response.

    Anything left as ``None`` is omitted from the response, which DAP clients
    read as unsupported.
    """

    supports_configuration_done_request: bool | None = Field(
        default=None, alias="supportsConfigurationDoneRequest"
    )
    supports_function_breakpoints: bool | None = Field(
        default=None, alias="supportsFunctionBreakpoints"
    )
    supports_conditional_breakpoints: bool | None = Field(
        default=None, alias="supportsConditionalBreakpoints"
    )
    supports_evaluate_for_hovers: bool | None = Field(
        default=None, alias="supportsEvaluateForHovers"
    )
    supports_step_back: bool | None = Field(default=None, alias="supportsStepBack")
    supports_restart_request: bool | None = Field(default=None, alias="supportsRestartRequest")
    supports_terminate_request: bool | None = Field(
        default=None, alias="supportsTerminateRequest"
    )
    support_terminate_debuggee: bool | None = Field(
        default=None, alias="supportTerminateDebuggee"
    )
    support_suspend_debuggee: bool | None = Field(default=None, alias="supportSuspendDebuggee")

    model_config = ConfigDict(populate_by_name=True)


class ExitedEventBody(BaseModel):
    """Body of the ``exited`` event."""

    exit_code: int = Field(alias="exitCode")

    model_config = ConfigDict(populate_by_name=True)


class TerminatedEventBody(BaseModel):
    """Body of the ``terminated`` event."""

    restart: Any | None = None
