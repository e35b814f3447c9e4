"""Snapshot acquisition for fdleakcheck."""

import asyncio
import logging
import os

import psutil

from fdleakcheck.errors import DescriptorParseError, FdLeakCheckError, SnapshotError
from fdleakcheck.models import FdSnapshot
from fdleakcheck.runner import CommandRunner

logger = logging.getLogger(__name__)

LIST_FDS_COMMAND = "ls -1 /proc/{pid}/fd"

# Per-descriptor diagnostic tool, keyed by platform
DETAIL_COMMANDS = {
    "sunos": "pfiles {pid}",
    "linux": "ls -l /proc/{pid}/fd",
}
FALLBACK_DETAIL_COMMAND = "lsof -p {pid}"

STEP_LIST_FDS = "list open fds"
STEP_DETAILED_LISTING = "detailed fd listing"


def default_detail_command() -> str:
    """Get the diagnostic command template for the running platform."""
    if psutil.SUNOS:
        return DETAIL_COMMANDS["sunos"]
    if psutil.LINUX:
        return DETAIL_COMMANDS["linux"]
    return FALLBACK_DETAIL_COMMAND


def parse_fd_listing(listing: str) -> tuple[int, ...]:
    """
    Parse one-entry-per-line descriptor numbers into a sorted tuple.

    Blank lines are skipped. Anything else that is not a plain decimal
    number means the census cannot be trusted and raises
    DescriptorParseError. Duplicates are kept.
    """
    fds: list[int] = []
    for line in listing.splitlines():
        entry = line.strip()
        if not entry:
            continue
        if not (entry.isascii() and entry.isdigit()):
            raise DescriptorParseError(line)
        fds.append(int(entry, 10))
    return tuple(sorted(fds))


class SnapshotBuilder:
    """
    Takes FdSnapshots of a process's descriptor table.

    Each snapshot runs two commands one after the other: a plain listing of
    ``/proc/<pid>/fd`` used for comparison, and the platform's detailed
    diagnostic tool whose output is kept for humans. Neither command is
    talked to over a pipe, so taking a snapshot does not change the census.

    If this process opens or closes descriptors from another thread while a
    snapshot is being taken, the result may be inconsistent.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        pid: int | None = None,
        detail_command: str | None = None,
    ) -> None:
        """
        Initialize the SnapshotBuilder.

        Args:
            runner: Command runner to use. Defaults to a CommandRunner keyed
                on ``pid``.
            pid: Process whose descriptors are listed. Defaults to the
                current process.
            detail_command: Template for the diagnostic command, formatted
                with ``pid``. Defaults to the platform's tool.
        """
        self._pid = os.getpid() if pid is None else pid
        self._runner = runner if runner is not None else CommandRunner(pid=self._pid)
        self._detail_command = detail_command or default_detail_command()

    @property
    def pid(self) -> int:
        """Get the process id whose descriptors are listed."""
        return self._pid

    def take(self) -> FdSnapshot:
        """
        Take a snapshot of the open descriptors.

        Raises:
            SnapshotError: Either step failed; the cause is chained.
        """
        try:
            listing = self._runner.run(LIST_FDS_COMMAND.format(pid=self._pid))
            open_fds = parse_fd_listing(listing)
        except FdLeakCheckError as e:
            raise SnapshotError(STEP_LIST_FDS, e) from e

        try:
            detailed_listing = self._runner.run(self._detail_command.format(pid=self._pid))
        except FdLeakCheckError as e:
            raise SnapshotError(STEP_DETAILED_LISTING, e) from e

        logger.debug("pid %d has %d open fds: %s", self._pid, len(open_fds), open_fds)
        return FdSnapshot(open_fds=open_fds, detailed_listing=detailed_listing)


def take_snapshot(builder: SnapshotBuilder | None = None) -> FdSnapshot:
    """Take a snapshot of the current process's open descriptors."""
    if builder is None:
        builder = SnapshotBuilder()
    return builder.take()


async def snapshot(builder: SnapshotBuilder | None = None) -> FdSnapshot:
    """
    Take a snapshot without blocking the event loop.

    The two commands still run strictly one after the other, in a single
    worker thread. Do not await two of these concurrently.
    """
    return await asyncio.to_thread(take_snapshot, builder)
