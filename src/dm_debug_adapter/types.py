"""Shared enums for dm-debug-adapter."""

from __future__ import annotations

from enum import StrEnum


class SessionState(StrEnum):
    """Debug session state."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    RUNNING = "running"
