"""Debuggee process supervision."""

from __future__ import annotations

import contextlib
import logging
import subprocess
from typing import TYPE_CHECKING

import anyio

from dm_debug_adapter.exceptions import DebuggeeError
from dm_debug_adapter.exceptions import DebuggeeLaunchError

if TYPE_CHECKING:
    from anyio.abc import Process
    from anyio.abc import TaskGroup

logger = logging.getLogger(__name__)

TRUST_FLAG = "-trusted"
EXIT_CODE_UNKNOWN = -1


class ProcessSupervisor:
    """Spawns the debuggee and tears it down on disconnect.

    Detached processes are reaped by tasks started in ``task_group``. Those
    tasks discard the exit status and never raise into the group, so a failed
    wait cannot take the session down with it.
    """

    def __init__(self, debuggee_exe: str, task_group: TaskGroup) -> None:
        """Initialize the supervisor.

        Args:
            debuggee_exe: Path to the DreamSeeker executable.
            task_group: Task group that hosts reaper tasks for detached
                processes. Cancelling it abandons any pending waits.
        """
        self.debuggee_exe = debuggee_exe
        self._task_group = task_group

    def command(self, dmb: str) -> list[str]:
        """Build the command line used to run ``dmb``."""
        return [self.debuggee_exe, dmb, TRUST_FLAG]

    async def spawn(self, dmb: str) -> Process:
        """Start the debuggee with all standard streams sent to the null device.

        Raises:
            DebuggeeLaunchError: If the executable could not be started.
        """
        try:
            process = await anyio.open_process(
                self.command(dmb),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise DebuggeeLaunchError(f"Failed to launch {self.debuggee_exe}: {e}") from e

        logger.info("launched debuggee pid=%s: %s", process.pid, dmb)
        return process

    async def kill_and_wait(self, process: Process) -> int:
        """Kill ``process`` and block until it has exited.

        There is no timeout: a process that survives the kill blocks the
        caller until it does exit.

        Returns:
            The exit code, or ``EXIT_CODE_UNKNOWN`` if the process was ended
            by a signal.

        Raises:
            DebuggeeError: If the process could not be killed or waited on.
        """
        try:
            # Already exited is fine, wait() still collects the status
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            returncode = await process.wait()
        except OSError as e:
            raise DebuggeeError(f"Failed to stop debuggee pid={process.pid}: {e}") from e

        exit_code = returncode if returncode >= 0 else EXIT_CODE_UNKNOWN
        logger.info("debuggee pid=%s exited with code %s", process.pid, exit_code)
        return exit_code

    def detach(self, process: Process) -> None:
        """Let ``process`` keep running and reap it in the background.

        Returns immediately. The caller must already have given up ownership
        of ``process``.
        """
        logger.info("detaching from debuggee pid=%s", process.pid)
        self._task_group.start_soon(
            self._reap, process, name=f"detached debuggee wait() pid={process.pid}"
        )

    async def _reap(self, process: Process) -> None:
        """Wait for a detached process so the OS can release it."""
        try:
            await process.wait()
        except Exception:
            logger.debug("wait() on detached debuggee pid=%s failed", process.pid, exc_info=True)
