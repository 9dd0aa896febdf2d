"""
The main program: what the launcher runs when it is not supervising.

Daemon implementations are looked up in the "launchguard.daemons" entry point
group, so that network services ship in their own distributions. Each daemon
runs on its own thread and is restarted in-process when it fails; a crash that
takes the whole process down is left to the supervisor.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from importlib.metadata import entry_points
from typing import Callable

from .errors import DaemonNotFoundError

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "launchguard.daemons"

# Restart delays of a failing daemon grow by this much per failure, up to the cap
RESTART_DELAY_STEP_SEC = 10
MAX_RESTART_DELAY_SEC = 60


@dataclass
class DaemonContext:
    """What a daemon gets to know when it starts."""

    name: str
    config_path: str
    secret: str
    stop_event: threading.Event = field(default_factory=threading.Event)
    max_workers: int = 0


def read_secret(stream) -> str:
    """Read the one-line secret the supervisor writes to standard input."""
    line = stream.readline()
    if isinstance(line, bytes):
        line = line.decode("utf-8")
    return line.rstrip("\r\n")


def registered_daemons() -> set[str]:
    """Names of all daemons that have an implementation installed."""
    return {entry_point.name for entry_point in entry_points(group=ENTRY_POINT_GROUP)}


def load_daemon(name: str) -> Callable[[DaemonContext], None]:
    """Find the implementation of a daemon by name."""
    for entry_point in entry_points(group=ENTRY_POINT_GROUP):
        if entry_point.name == name:
            try:
                return entry_point.load()
            except Exception as e:
                raise DaemonNotFoundError(f"failed to load daemon {name}: {e}") from e
    raise DaemonNotFoundError(f"no implementation is registered for daemon {name}")


def restart_delay(failures: int) -> int:
    """Seconds to wait before restarting after the given number of consecutive failures."""
    return min(RESTART_DELAY_STEP_SEC * (failures - 1), MAX_RESTART_DELAY_SEC)


def auto_restart(
    name: str,
    func: Callable[[], None],
    stop_event: threading.Event,
    sleep: Callable[[float], None] = time.sleep,
):
    """Call func until it returns normally, restarting it with a growing delay when it fails.

    Gives up as soon as stop_event is set.
    """
    failures = 0
    while True:
        try:
            func()
            logger.info(f"Daemon {name} has stopped")
            return
        except Exception as e:
            failures += 1
            delay = restart_delay(failures)
            logger.warning(f"Daemon {name} failed ({e}), restarting in {delay} seconds")
        if delay:
            sleep(delay)
        if stop_event.is_set():
            logger.warning(f"Daemon {name} will not be restarted, stop was requested")
            return


def run_main_program(
    config_path: str,
    daemon_names: list[str],
    secret: str,
    max_workers: int = 0,
    stop_event: threading.Event | None = None,
    loader: Callable[[str], Callable] = load_daemon,
):
    """Start all daemons and block until every one of them has stopped.

    Raises DaemonNotFoundError before starting anything if a daemon is unknown.
    """
    stop_event = stop_event or threading.Event()
    daemons = [(name, loader(name)) for name in daemon_names]

    threads = []
    for name, daemon in daemons:
        context = DaemonContext(
            name=name,
            config_path=config_path,
            secret=secret,
            stop_event=stop_event,
            max_workers=max_workers,
        )
        thread = threading.Thread(
            target=auto_restart,
            args=(name, lambda d=daemon, c=context: d(c), stop_event),
            name=f"daemon-{name}",
            daemon=True,
        )
        thread.start()
        threads.append(thread)
        logger.info(f"Started daemon {name}")

    for thread in threads:
        thread.join()
