"""fdleakcheck - detect file descriptor leaks in the running process."""

import logging

from fdleakcheck.builder import SnapshotBuilder, snapshot, take_snapshot
from fdleakcheck.errors import (
    ChildExitError,
    DescriptorParseError,
    FdLeakCheckError,
    OutputReadError,
    SnapshotError,
    SpawnError,
)
from fdleakcheck.models import FdSnapshot
from fdleakcheck.runner import CommandRunner

__all__ = [
    "ChildExitError",
    "CommandRunner",
    "DescriptorParseError",
    "FdLeakCheckError",
    "FdSnapshot",
    "OutputReadError",
    "SnapshotBuilder",
    "SnapshotError",
    "SpawnError",
    "snapshot",
    "take_snapshot",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
