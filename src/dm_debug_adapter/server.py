"""Command-line entry point for the DreamSeeker debug adapter."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

import anyio

from dm_debug_adapter.adapter import DebugAdapter
from dm_debug_adapter.config import get_config
from dm_debug_adapter.dap.transport import StdioTransport
from dm_debug_adapter.exceptions import DAPProtocolError
from dm_debug_adapter.session import DebugSession
from dm_debug_adapter.supervisor import ProcessSupervisor

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dm_debug_adapter.dap.transport import DAPTransport

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse the command line; exits with a usage message on bad input."""
    parser = argparse.ArgumentParser(
        prog="dm-debug-adapter",
        description="Debug adapter that launches DreamSeeker for a DAP client",
    )
    parser.add_argument(
        "--dreamseeker-exe",
        required=True,
        metavar="PATH",
        help="path to dreamseeker.exe",
    )
    return parser.parse_args(argv)


async def serve(dreamseeker_exe: str, transport: DAPTransport | None = None) -> None:
    """Run the adapter until the client disconnects.

    Raises:
        DAPProtocolError: If the client sent a message that could not be
            handled; the session is over at that point.
    """
    transport = transport or StdioTransport.from_stdio()
    fatal: DAPProtocolError | None = None
    async with anyio.create_task_group() as reapers:
        supervisor = ProcessSupervisor(dreamseeker_exe, reapers)
        adapter = DebugAdapter(transport, DebugSession(), supervisor)
        try:
            await adapter.run()
        except DAPProtocolError as e:
            # Raised outside the task group so it is not wrapped in an ExceptionGroup
            fatal = e
        finally:
            await transport.aclose()
            # Stop waiting on detached debuggees; they keep running
            reapers.cancel_scope.cancel()

    if fatal is not None:
        raise fatal


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the dm-debug-adapter command."""
    args = parse_args(argv)
    config = get_config()

    # stdout carries the protocol, so logs go to stderr only
    logging.basicConfig(
        level=config.log_level_number,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logger.info("dreamseeker: %s", args.dreamseeker_exe)

    try:
        anyio.run(serve, args.dreamseeker_exe)
    except KeyboardInterrupt:
        logger.info("debug adapter stopped by user")
    except DAPProtocolError:
        logger.error("fatal protocol error, shutting down", exc_info=True)
        raise SystemExit(1) from None


if __name__ == "__main__":
    main()
