"""
Launch parameters of the main program for each supervision attempt.

Attempt 0 is a normal start. Attempt 1 drops every flag but -config, so advanced
options can no longer alter the environment. Attempts 2 up to the number of
daemons walk down the shed ladder. One attempt later the full daemon set comes
back with minimal flags, and beyond that the original flags and daemons are used
for good.
"""

import logging

from .daemons import SHED_ORDER, plan_shed_ladder
from .flags import CONFIG_FLAG, DAEMONS_FLAG, SUPERVISOR_FLAG, flag_matches, remove_from_flags

logger = logging.getLogger(__name__)


class LaunchParameterResolver:
    """Maps an attempt number to the CLI flags and daemon names to launch with."""

    def __init__(self, cli_flags: list[str], daemon_names: list[str], shed_order=SHED_ORDER):
        # -daemons is regenerated on every launch
        self.cli_flags = tuple(remove_from_flags(lambda f: flag_matches(f, DAEMONS_FLAG), list(cli_flags)))
        self.daemon_names = tuple(daemon_names)
        self.shed_ladder = plan_shed_ladder(self.daemon_names, shed_order)
        logger.debug(f"Daemon shed ladder: {[list(step) for step in self.shed_ladder]}")

    def resolve(self, attempt: int) -> tuple[list[str], list[str]]:
        """Return (cli_flags, daemon_names) for the n-th attempt, counting from 0."""
        if attempt < 0:
            raise ValueError(f"attempt must not be negative, got {attempt}")

        num_daemons = len(self.daemon_names)
        daemon_names = list(self.daemon_names)

        # The main program must never run a supervisor of its own
        baseline_flags = remove_from_flags(lambda f: flag_matches(f, SUPERVISOR_FLAG), list(self.cli_flags))
        cli_flags = list(baseline_flags)
        add_flags = ["-" + SUPERVISOR_FLAG + "=false"]

        if attempt >= 1:
            cli_flags = remove_from_flags(lambda f: not flag_matches(f, CONFIG_FLAG), cli_flags)
        if 2 <= attempt <= num_daemons:
            daemon_names = list(self._shed_step(attempt - 2))
        if attempt > num_daemons + 1:
            # Shedding did not help, stay with the original parameters from now on
            cli_flags = list(baseline_flags)
            daemon_names = list(self.daemon_names)

        cli_flags.extend(add_flags)
        cli_flags.extend(["-" + DAEMONS_FLAG, ",".join(daemon_names)])
        return cli_flags, daemon_names

    def _shed_step(self, index: int) -> tuple[str, ...]:
        # The ladder is shorter than the daemon count when some daemons are not
        # in the shed order; hold on to the smallest set in that case.
        if not self.shed_ladder:
            return self.daemon_names
        return self.shed_ladder[min(index, len(self.shed_ladder) - 1)]
