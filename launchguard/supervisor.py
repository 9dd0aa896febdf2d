"""
Supervisor of the main program.

Starts the main program as a child process and restarts it whenever it
terminates. If the program keeps crashing within FAILURE_THRESHOLD of its last
start, every further crash moves on to the next set of launch parameters, first
dropping advanced flags and then shedding daemons one by one, so that healthy
daemons stay online for as long as possible. Each failure is reported by mail
when recipients are configured.
"""

import logging
import threading
import time
from typing import Callable

from .config import config as default_config
from .diagnostics import ByteLogWriter, stderr_writer, stdout_writer
from .errors import ExecutableNotFoundError, SpawnError
from .launch import LaunchParameterResolver
from .mailer import MailClient
from .notify import FailureNotifier
from .process import get_executable_command, spawn_main_program

logger = logging.getLogger(__name__)


class Supervisor:
    """Keeps the main program running, shedding daemons under rapid crashes."""

    def __init__(
        self,
        cli_flags: list[str],
        daemon_names: list[str],
        secret: str = "",
        notifier: FailureNotifier | None = None,
        config=None,
        stdout: ByteLogWriter | None = None,
        stderr: ByteLogWriter | None = None,
        spawn: Callable = spawn_main_program,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or default_config
        self.resolver = LaunchParameterResolver(cli_flags, daemon_names)
        self.secret = secret
        self.stdout = stdout or stdout_writer(self.config.output_capacity)
        self.stderr = stderr or stderr_writer(self.config.output_capacity)
        self.notifier = notifier or FailureNotifier(
            MailClient.from_config(self.config),
            self.config.notification_recipients,
            self.stdout,
            self.stderr,
            subject_keyword=self.config.mail_subject_keyword,
            public_ip_url=self.config.public_ip_url,
            max_report_bytes=self.config.max_report_bytes,
        )
        self._spawn = spawn
        self._clock = clock
        self._sleep = sleep

        self.attempt = 0
        self.last_attempt_time = None

    @property
    def daemon_names(self) -> tuple[str, ...]:
        return self.resolver.daemon_names

    def start(self, stop_event: threading.Event | None = None):
        """Launch the main program and restart it on failure.

        Blocks indefinitely. Returns only once stop_event is set.
        Raises ExecutableNotFoundError if the launcher cannot locate itself.
        """
        try:
            command = get_executable_command()
        except ExecutableNotFoundError as e:
            logger.critical(f"Failed to determine path to this program executable: {e}")
            raise

        logger.info(f"Supervisor started for daemons {list(self.daemon_names)}")
        self.last_attempt_time = self._clock()

        while stop_event is None or not stop_event.is_set():
            self.run_once(command)

        logger.info("Supervisor stopped")

    def run_once(self, command: list[str]):
        """Launch the main program once, wait for it, then handle its failure."""
        cli_flags, daemon_names = self.resolver.resolve(self.attempt)
        logger.info(f"Attempt {self.attempt}: starting main program with CLI flags {cli_flags}")

        pid = None
        try:
            info = self._spawn(command + cli_flags, self.secret, self.stdout, self.stderr)
        except SpawnError as e:
            logger.warning(f"Attempt {self.attempt}: failed to start main program: {e}")
            cause = e
        else:
            pid = info.pid
            self.last_attempt_time = self._clock()
            # The main program is not supposed to exit, a clean exit is a failure too
            cause = info.wait()
            logger.warning(f"Attempt {self.attempt}: {cause}")

        self.handle_failure(cli_flags, cause, pid)

    def handle_failure(self, cli_flags: list[str], cause, pid: int | None = None):
        # Give the pipes a moment so the report carries the program's last words
        self._sleep(self.config.flush_delay_sec)
        self.notifier.notify_failure(cli_flags, cause, pid)

        if self._clock() - self.last_attempt_time < self.config.failure_threshold_sec:
            self.attempt += 1
            logger.warning(
                f"Main program failed within {self.config.failure_threshold_sec}s of its last start, "
                f"moving on to launch attempt {self.attempt}"
            )
        self._sleep(self.config.start_attempt_interval_sec)
