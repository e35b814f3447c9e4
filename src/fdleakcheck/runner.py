"""Run a shell command and capture its output without holding a pipe to it."""

import logging
import os
import signal
import subprocess

from fdleakcheck.errors import ChildExitError, OutputReadError, SpawnError

logger = logging.getLogger(__name__)

# TMPDIR is not honored: the path ends up on a bash command line.
DEFAULT_TMP_ROOT = "/tmp"
DEFAULT_SHELL = "bash"
DEFAULT_PREFIX = "python-fdleakcheck"


def _signal_name(signum: int) -> str:
    """Return the symbolic name for a signal number, e.g. ``SIGKILL``."""
    try:
        return signal.Signals(signum).name
    except ValueError:
        return str(signum)


class CommandRunner:
    """
    Runs one shell command at a time and returns its standard output.

    The child's stdin, stdout and stderr are all connected to the null
    device; its output is redirected by the shell into a temporary file that
    is read back once the child has exited. By the time ``run`` returns, the
    calling process has no descriptor left open that it did not have before
    the call, whatever the outcome.

    The temporary file is named after ``pid`` only, so a runner must not be
    used from two threads at once, and neither may two runners sharing a pid.
    """

    def __init__(
        self,
        pid: int | None = None,
        tmp_root: str = DEFAULT_TMP_ROOT,
        shell: str = DEFAULT_SHELL,
        prefix: str = DEFAULT_PREFIX,
    ) -> None:
        """
        Initialize the CommandRunner.

        Args:
            pid: Identifier used to name the temporary file. Defaults to the
                current process id.
            tmp_root: Directory the temporary file is created in.
            shell: Shell the command is passed to with ``-c``.
            prefix: File name prefix for the temporary file.
        """
        self._pid = os.getpid() if pid is None else pid
        self._tmp_root = tmp_root
        self._shell = shell
        self._prefix = prefix

    @property
    def pid(self) -> int:
        """Get the identifier the temporary file is named after."""
        return self._pid

    @property
    def tmpfile(self) -> str:
        """Get the path of the temporary file used by ``run``."""
        return os.path.join(self._tmp_root, f"{self._prefix}.{self._pid}")

    def run(self, command: str) -> str:
        """
        Run ``command`` through the shell and return everything it printed.

        ``command`` is interpolated into a shell command line as is, so it
        must not contain untrusted input.

        Raises:
            SpawnError: The shell could not be started.
            ChildExitError: The command exited non-zero or was killed.
            OutputReadError: The captured output could not be read.
        """
        tmpfile = self.tmpfile
        try:
            self._spawn_and_wait(command, tmpfile)
            return self._read_output(command, tmpfile)
        finally:
            # Best effort; a leftover file does not change the result.
            try:
                os.unlink(tmpfile)
            except OSError as e:
                logger.debug("could not remove %s: %s", tmpfile, e)

    def _spawn_and_wait(self, command: str, tmpfile: str) -> None:
        """Start the child, wait for it and check how it terminated."""
        logger.debug("running %r via %s", command, self._shell)
        try:
            completed = subprocess.run(
                [self._shell, "-c", f"{command} > {tmpfile}"],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as e:
            raise SpawnError(command, e.strerror or str(e)) from e

        returncode = completed.returncode
        if returncode < 0:
            raise ChildExitError(command, signal_name=_signal_name(-returncode))
        if returncode != 0:
            raise ChildExitError(command, exit_code=returncode)

    def _read_output(self, command: str, tmpfile: str) -> str:
        """Read the captured output; the file is closed before returning."""
        try:
            with open(tmpfile, encoding="utf-8", errors="replace") as f:
                output = f.read()
        except OSError as e:
            raise OutputReadError(command, tmpfile, e.strerror or str(e)) from e
        logger.debug("read %d characters from %s", len(output), tmpfile)
        return output
