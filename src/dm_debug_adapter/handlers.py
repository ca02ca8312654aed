"""Handlers for the DAP commands this adapter implements."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dm_debug_adapter.dap.messages import Capabilities
from dm_debug_adapter.dap.messages import DisconnectArguments
from dm_debug_adapter.dap.messages import ExitedEventBody
from dm_debug_adapter.dap.messages import InitializeArguments
from dm_debug_adapter.dap.messages import TerminatedEventBody
from dm_debug_adapter.dap.messages import VscLaunchArguments
from dm_debug_adapter.dispatch import CommandRegistry
from dm_debug_adapter.dispatch import command
from dm_debug_adapter.session import ClientCapabilities

if TYPE_CHECKING:
    from dm_debug_adapter.adapter import DebugAdapter

logger = logging.getLogger(__name__)

# Disconnect terminates unless told otherwise. Attach mode, once it exists,
# should default to False.
DEFAULT_TERMINATE_DEBUGGEE = True


@command("initialize", InitializeArguments)
async def initialize(adapter: DebugAdapter, params: InitializeArguments) -> Capabilities:
    """Record the client's capabilities and advertise ours."""
    adapter.session.capabilities = ClientCapabilities.from_arguments(params)
    logger.info(
        "client: %s (%s), adapter id %s, locale %s, path format %s",
        params.client_name,
        params.client_id,
        params.adapter_id,
        params.locale,
        params.path_format,
    )
    logger.info("client capabilities: %s", adapter.session.capabilities)

    return Capabilities(support_terminate_debuggee=True)


@command("launch", VscLaunchArguments)
async def launch(adapter: DebugAdapter, params: VscLaunchArguments) -> None:
    """Start DreamSeeker on the requested .dmb."""
    # noDebug is accepted and ignored; there is no debug mode to switch off
    logger.debug("launch requested for %s", params.dmb)

    process = await adapter.supervisor.spawn(params.dmb)
    orphan = adapter.session.track_child(process)
    if orphan is not None:
        logger.warning(
            "launch replaced running debuggee pid=%s; it is no longer tracked", orphan.pid
        )


@command("disconnect", DisconnectArguments)
async def disconnect(adapter: DebugAdapter, params: DisconnectArguments) -> None:
    """Kill or detach from the debuggee, if one is running."""
    terminate = params.terminate_debuggee
    if terminate is None:
        terminate = DEFAULT_TERMINATE_DEBUGGEE

    child = adapter.session.take_child()
    if child is None:
        return

    if terminate:
        exit_code = await adapter.supervisor.kill_and_wait(child)
        await adapter.issue_event("exited", ExitedEventBody(exit_code=exit_code))
    else:
        adapter.supervisor.detach(child)
        await adapter.issue_event("terminated", TerminatedEventBody())


HANDLERS = (initialize, launch, disconnect)


def build_registry() -> CommandRegistry:
    """Build the registry of every implemented command."""
    return CommandRegistry(HANDLERS)
