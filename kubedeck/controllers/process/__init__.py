"""Process execution for kubectl and other external commands."""

from kubedeck.controllers.process.executor import (
    CommandSpec,
    ProcessError,
    ProcessExecutor,
    ProcessHandle,
    ProcessResult,
    SpawnError,
)

__all__ = [
    "CommandSpec",
    "ProcessError",
    "ProcessExecutor",
    "ProcessHandle",
    "ProcessResult",
    "SpawnError",
]
