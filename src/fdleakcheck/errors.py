"""Exceptions raised by fdleakcheck."""


class FdLeakCheckError(Exception):
    """Base class for every error raised while taking a snapshot."""


class SpawnError(FdLeakCheckError):
    """The shell (or the command it runs) could not be started."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f'exec "{command}": {reason}')
        self.command = command


class ChildExitError(FdLeakCheckError):
    """
    The child exited with a non-zero status or was killed by a signal.

    Exactly one of ``exit_code`` and ``signal_name`` is set.
    """

    def __init__(
        self,
        command: str,
        exit_code: int | None = None,
        signal_name: str | None = None,
    ) -> None:
        if signal_name is not None:
            message = f"child unexpectedly terminated by signal {signal_name}"
        else:
            message = f"child unexpectedly exited with status {exit_code}"
        super().__init__(f'"{command}": {message}')
        self.command = command
        self.exit_code = exit_code
        self.signal_name = signal_name


class OutputReadError(FdLeakCheckError):
    """The child's captured output could not be read back."""

    def __init__(self, command: str, path: str, reason: str) -> None:
        super().__init__(f'read "{path}" (output of "{command}"): {reason}')
        self.command = command
        self.path = path


class DescriptorParseError(FdLeakCheckError):
    """A line of the descriptor listing is not a descriptor number."""

    def __init__(self, line: str) -> None:
        super().__init__(f"unexpected entry in descriptor listing: {line!r}")
        self.line = line


class SnapshotError(FdLeakCheckError):
    """Wraps the failure of one step of taking a snapshot."""

    def __init__(self, step: str, cause: Exception) -> None:
        super().__init__(f"{step}: {cause}")
        self.step = step
