"""Data models for fdleakcheck."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class FdSnapshot:
    """Immutable census of the descriptors a process had open."""

    open_fds: tuple[int, ...]  # Sorted ascending
    detailed_listing: str  # Raw diagnostic tool output, never parsed

    def differs(self, other: "FdSnapshot") -> bool:
        """
        Return True if the two snapshots saw different descriptors.

        Both censuses are sorted when a snapshot is taken, so comparing the
        sequences element by element is enough. The detailed listing is not
        consulted.
        """
        if not isinstance(other, FdSnapshot):
            raise TypeError("cannot call differs() with a non-snapshot")
        return self.open_fds != other.open_fds

    def describe(self) -> str:
        """Get the human-readable listing of every open descriptor."""
        return self.detailed_listing
