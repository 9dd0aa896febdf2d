"""Exceptions raised by the launcher."""

import signal


class LaunchGuardError(Exception):
    """Base exception for launcher errors."""
    pass


class ExecutableNotFoundError(LaunchGuardError):
    """Raised when the launcher cannot determine its own executable."""
    pass


class SpawnError(LaunchGuardError):
    """Raised when the main program cannot be started or handed its secret."""
    pass


class DaemonNotFoundError(LaunchGuardError):
    """Raised when a requested daemon has no registered implementation."""
    pass


class MainProgramExited(LaunchGuardError):
    """The supervised main program terminated, for whatever reason."""

    def __init__(self, returncode: int):
        self.returncode = returncode
        if returncode < 0:
            try:
                name = signal.Signals(-returncode).name
            except ValueError:
                name = str(-returncode)
            message = f"main program was terminated by signal {name}"
        else:
            message = f"main program exited with status {returncode}"
        super().__init__(message)
