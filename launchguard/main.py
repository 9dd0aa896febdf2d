"""
Launcher entry point.

With -supervisor (the default) the launcher supervises itself: it starts a copy
of itself as the main program and keeps it alive. With -supervisor=false it is
the main program and runs the requested daemons.
"""

import getpass
import logging
import sys
from logging.handlers import RotatingFileHandler

from .config import config
from .daemons import unknown_daemons
from .errors import DaemonNotFoundError, ExecutableNotFoundError
from .flags import parse_flags
from .program import read_secret, registered_daemons, run_main_program
from .supervisor import Supervisor

logger = logging.getLogger(__name__)


def configure_logging(log_file):
    """Log to a rotating file in the data directory and to the console.

    Supervisor and main program run in separate processes and must not share
    a rotating file, so each one passes its own.
    """
    log_formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Rotating file handler (auto-compaction)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=config.log_max_bytes,
        backupCount=config.log_backup_count,
    )
    file_handler.setFormatter(log_formatter)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(log_formatter)

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        handlers=[file_handler, console_handler],
    )


def obtain_secret() -> str:
    """Get the program secret from the environment, or ask for it."""
    if config.program_secret:
        return config.program_secret
    if sys.stdin.isatty():
        return getpass.getpass("Enter program secret: ")
    return read_secret(sys.stdin)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    args = parse_flags(argv)
    configure_logging(config.supervisor_log if args.supervisor else config.main_program_log)

    unknown = unknown_daemons(args.daemons, registered_daemons())
    if unknown:
        logger.error(f"Unknown daemon names: {', '.join(unknown)}")
        return 2
    if not args.daemons:
        logger.error("No daemons to launch, use -daemons to name them")
        return 2

    if args.supervisor:
        supervisor = Supervisor(argv, args.daemons, secret=obtain_secret())
        try:
            supervisor.start()
        except ExecutableNotFoundError:
            return 1
        return 0

    secret = read_secret(sys.stdin)
    try:
        run_main_program(args.config, args.daemons, secret, max_workers=args.max_workers)
    except DaemonNotFoundError as e:
        logger.error(f"Cannot start main program: {e}")
        return 1
    return 0
