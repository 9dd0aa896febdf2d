"""
Command line flags of the launcher.

Flags are written Go-style with a single dash, either separated from their value
("-config cfg.json") or joined with it ("-supervisor=false"). The supervisor
rewrites these flags before every launch of the main program, so the helpers here
work on plain token lists as well as parsing them.
"""

import argparse
from typing import Callable

CONFIG_FLAG = "config"  # path to the configuration file
SUPERVISOR_FLAG = "supervisor"  # whether this process runs the supervisor
DAEMONS_FLAG = "daemons"  # comma separated daemon names to launch
MAX_WORKERS_FLAG = "maxworkers"  # advanced: worker concurrency of the main program

_TRUE_VALUES = {"1", "t", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "f", "false", "no", "n", "off"}


def remove_from_flags(condition: Callable[[str], bool], flags: list[str]) -> list[str]:
    """Remove flags matching condition (True to remove) along with their values.

    The input must not contain the leading executable path. A flag given as
    "-flag value" loses both tokens, a flag given as "-flag=value" loses only itself.
    """
    ret = []
    connect_next = False
    deleted = False
    for token in flags:
        if token.startswith("-"):
            connect_next = True
            if condition(token):
                if "=" in token:
                    connect_next = False
                deleted = True
            else:
                ret.append(token)
                deleted = False
        elif (not deleted and connect_next) or (deleted and not connect_next):
            # Either the value of a kept flag, or a token that followed a flag
            # removed in joined form and so never belonged to it.
            ret.append(token)
    return ret


def flag_matches(token: str, name: str) -> bool:
    """Tell whether a flag token names the flag, in either form."""
    return token.startswith("-" + name)


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def split_daemon_names(value: str) -> list[str]:
    """Split a comma separated daemon list, dropping blanks and repeats."""
    names = []
    for name in value.split(","):
        name = name.strip()
        if name and name not in names:
            names.append(name)
    return names


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="launchguard",
        description="Launch and supervise the bundled network daemons.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-" + CONFIG_FLAG,
        dest="config",
        default="",
        help="path to the configuration file",
    )
    parser.add_argument(
        "-" + SUPERVISOR_FLAG,
        dest="supervisor",
        nargs="?",
        const=True,
        default=True,
        type=parse_bool,
        help="run the supervisor that relaunches the main program on crash (default true)",
    )
    parser.add_argument(
        "-" + DAEMONS_FLAG,
        dest="daemons",
        default="",
        help="comma separated names of daemons to launch",
    )
    parser.add_argument(
        "-" + MAX_WORKERS_FLAG,
        dest="max_workers",
        type=int,
        default=0,
        help="maximum number of worker threads per daemon (0 lets the daemon decide)",
    )
    return parser


def parse_flags(argv: list[str]) -> argparse.Namespace:
    """Parse launcher flags. Exits with status 2 on invalid input."""
    args = build_parser().parse_args(argv)
    args.daemons = split_daemon_names(args.daemons)
    return args
