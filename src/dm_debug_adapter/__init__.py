"""Debug Adapter Protocol front-end that launches DreamSeeker."""

from __future__ import annotations

from dm_debug_adapter.adapter import DebugAdapter
from dm_debug_adapter.config import AdapterSettings
from dm_debug_adapter.config import get_config
from dm_debug_adapter.config import load_config
from dm_debug_adapter.exceptions import CommandError
from dm_debug_adapter.exceptions import DAPError
from dm_debug_adapter.exceptions import DAPProtocolError
from dm_debug_adapter.exceptions import DebugAdapterError
from dm_debug_adapter.exceptions import DebuggeeError
from dm_debug_adapter.exceptions import DebuggeeLaunchError
from dm_debug_adapter.exceptions import TransportClosedError
from dm_debug_adapter.exceptions import UnknownCommandError
from dm_debug_adapter.session import DebugSession
from dm_debug_adapter.supervisor import ProcessSupervisor

__version__ = "0.1.0"

__all__ = [
    "AdapterSettings",
    "CommandError",
    "DAPError",
    "DAPProtocolError",
    "DebugAdapter",
    "DebugAdapterError",
    "DebugSession",
    "DebuggeeError",
    "DebuggeeLaunchError",
    "ProcessSupervisor",
    "TransportClosedError",
    "UnknownCommandError",
    "get_config",
    "load_config",
]
