"""Tests for fdleakcheck data models."""

import pytest

from fdleakcheck.models import FdSnapshot


def make_snapshot(*fds: int, listing: str = "") -> FdSnapshot:
    """Build an FdSnapshot by hand from already sorted descriptor numbers."""
    return FdSnapshot(open_fds=tuple(fds), detailed_listing=listing)


def test_fd_snapshot_creation():
    """Test FdSnapshot dataclass creation."""
    snapshot = FdSnapshot(open_fds=(0, 1, 2), detailed_listing="0 -> /dev/null\n")

    assert snapshot.open_fds == (0, 1, 2)
    assert snapshot.detailed_listing == "0 -> /dev/null\n"


def test_fd_snapshot_is_frozen():
    """Test that FdSnapshot is immutable (frozen)."""
    snapshot = make_snapshot(0, 1, 2)

    # Attempting to modify should raise an error
    try:
        snapshot.open_fds = (0,)
        raise AssertionError("Should have raised FrozenInstanceError")
    except AttributeError:
        pass  # Expected behavior for frozen dataclass


def test_fd_snapshot_uses_slots():
    """Test that FdSnapshot uses __slots__."""
    snapshot = make_snapshot(0, 1, 2)

    # Slots-based dataclasses don't have __dict__
    assert not hasattr(snapshot, "__dict__")


class TestDiffers:
    """Tests for FdSnapshot.differs."""

    def test_identical_census_does_not_differ(self):
        """Test independently built snapshots with the same fds agree."""
        a = make_snapshot(0, 1, 2, 3, listing="first")
        b = make_snapshot(0, 1, 2, 3, listing="second")

        assert not a.differs(b)

    def test_snapshot_does_not_differ_from_itself(self):
        """Test differs is false when comparing a snapshot with itself."""
        a = make_snapshot(0, 1, 2, 3)

        assert not a.differs(a)

    def test_extra_descriptor_differs(self):
        """Test a newly opened descriptor is detected."""
        before = make_snapshot(0, 1, 2, 3)
        after = make_snapshot(0, 1, 2, 3, 4)

        assert before.differs(after)

    def test_same_count_different_numbers_differ(self):
        """Test snapshots with equal length but different fds differ."""
        a = make_snapshot(0, 1, 2, 5)
        b = make_snapshot(0, 1, 2, 6)

        assert a.differs(b)

    def test_differs_is_symmetric(self):
        """Test a.differs(b) == b.differs(a) for several pairs."""
        snapshots = [
            make_snapshot(),
            make_snapshot(0, 1, 2),
            make_snapshot(0, 1, 2, 3),
            make_snapshot(0, 1, 2, 3, 3),
        ]
        for a in snapshots:
            for b in snapshots:
                assert a.differs(b) == b.differs(a)

    def test_duplicates_are_not_normalized(self):
        """Test duplicated descriptor numbers count as a difference."""
        a = make_snapshot(0, 1, 2, 3)
        b = make_snapshot(0, 1, 2, 3, 3)

        assert a.differs(b)

    def test_detailed_listing_is_ignored(self):
        """Test the detailed listing plays no part in the comparison."""
        a = make_snapshot(0, 1, 2, listing="0 -> /dev/pts/0")
        b = make_snapshot(0, 1, 2, listing="0 -> /dev/null")

        assert not a.differs(b)

    def test_differs_rejects_non_snapshot(self):
        """Test differs refuses to compare against something else."""
        a = make_snapshot(0, 1, 2)

        with pytest.raises(TypeError, match="non-snapshot"):
            a.differs((0, 1, 2))


def test_describe_returns_listing_verbatim():
    """Test describe hands back the stored listing unchanged."""
    listing = "lr-x------ 1 root root 64 Oct 19 10:00 3 -> /etc/passwd\n"
    snapshot = make_snapshot(0, 1, 2, 3, listing=listing)

    assert snapshot.describe() == listing
