"""DAP (Debug Adapter Protocol) envelope, framing and transport."""

from __future__ import annotations

from dm_debug_adapter.dap.transport import DAPTransport
from dm_debug_adapter.dap.transport import StdioTransport

__all__ = ["DAPTransport", "StdioTransport"]
