"""
Spawning of the supervised main program.

The main program is this very launcher started again with -supervisor=false.
It receives the program secret on its standard input, one line followed by EOF,
and its stdout/stderr are pumped into ByteLogWriters by background threads.
"""

import logging
import subprocess
import sys
import threading
from dataclasses import dataclass, field

from .diagnostics import ByteLogWriter
from .errors import ExecutableNotFoundError, MainProgramExited, SpawnError

logger = logging.getLogger(__name__)

# How long to wait for output pumps to drain after the program exits
PUMP_JOIN_TIMEOUT = 5


@dataclass
class ProcessInfo:
    """Information about a running main program."""

    process: subprocess.Popen
    pump_threads: list[threading.Thread] = field(default_factory=list)

    @property
    def pid(self) -> int:
        return self.process.pid

    def wait(self) -> MainProgramExited:
        """Block until the program terminates, then describe how it ended."""
        returncode = self.process.wait()
        for thread in self.pump_threads:
            thread.join(timeout=PUMP_JOIN_TIMEOUT)
        return MainProgramExited(returncode)


def get_executable_command() -> list[str]:
    """Return the command that starts this launcher again."""
    if not sys.executable:
        raise ExecutableNotFoundError("cannot determine the path of the Python interpreter")
    return [sys.executable, "-m", "launchguard"]


def spawn_main_program(
    command: list[str],
    secret: str,
    stdout: ByteLogWriter,
    stderr: ByteLogWriter,
) -> ProcessInfo:
    """Start the main program and feed the secret into its standard input."""
    try:
        process = subprocess.Popen(
            command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except (OSError, ValueError) as e:
        raise SpawnError(f"failed to start main program: {e}") from e

    info = ProcessInfo(process=process)
    for stream, writer in ((process.stdout, stdout), (process.stderr, stderr)):
        thread = threading.Thread(target=writer.pump, args=(stream,), daemon=True)
        thread.start()
        info.pump_threads.append(thread)

    try:
        process.stdin.write((secret + "\n").encode("utf-8"))
        process.stdin.close()
    except OSError as e:
        # Do not leave a half-started program behind, only one may run at a time
        logger.warning(f"Failed to hand secret to main program (PID {process.pid}), killing it")
        process.kill()
        info.wait()
        raise SpawnError(f"failed to write secret to main program: {e}") from e

    logger.info(f"Started main program with PID {process.pid}")
    return info
