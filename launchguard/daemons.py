"""
Daemon names and the order in which the supervisor sheds them.

When the main program crashes rapidly and repeatedly, the supervisor relaunches
it with one daemon fewer each time, following SHED_ORDER:

1. System maintenance daemon.
2. Non-essential services that do not require authentication.
3. Non-essential services that require authentication.
4. Heavy services that use a significant amount of resources.
5. Essential services.

The auto-unlock daemon is deliberately absent from SHED_ORDER and is never shed.
It hands the memorised secret to other instances on the network that need it to
unlock their data, so it stays online as the last resort.
"""

DNSD = "dnsd"
HTTPD = "httpd"
INSECURE_HTTPD = "insecurehttpd"
MAINTENANCE = "maintenance"
PLAIN_SOCKET = "plainsocket"
SERIAL_PORT = "serialport"
SIMPLE_IP_SVC = "simpleipsvcd"
SMTPD = "smtpd"
SNMPD = "snmpd"
SOCKD = "sockd"
TELEGRAM = "telegram"
AUTO_UNLOCK = "autounlock"
PHONE_HOME = "phonehome"

LAST_RESORT_DAEMON = AUTO_UNLOCK

ALL_DAEMONS = (
    AUTO_UNLOCK, DNSD, HTTPD, INSECURE_HTTPD, MAINTENANCE, PHONE_HOME,
    PLAIN_SOCKET, SERIAL_PORT, SIMPLE_IP_SVC, SMTPD, SNMPD, SOCKD, TELEGRAM,
)

SHED_ORDER = (
    MAINTENANCE,  # 1
    SERIAL_PORT, SIMPLE_IP_SVC,  # 2
    SNMPD, DNSD,  # 3
    SOCKD, SMTPD, HTTPD,  # 4
    INSECURE_HTTPD, PLAIN_SOCKET, TELEGRAM, PHONE_HOME,  # 5
)


def plan_shed_ladder(daemon_names, shed_order=SHED_ORDER) -> tuple[tuple[str, ...], ...]:
    """Build the sequence of daemon sets to fall back to, one daemon fewer per step.

    Candidates from shed_order that are not running are skipped. The very last
    remaining daemon is never shed.
    """
    ladder = []
    remaining = tuple(daemon_names)
    for to_shed in shed_order:
        if len(remaining) == 1:
            break
        if to_shed in remaining:
            remaining = tuple(name for name in remaining if name != to_shed)
            ladder.append(remaining)
    return tuple(ladder)


def unknown_daemons(names, registered=()) -> list[str]:
    """Return the names that are neither built-in daemons nor registered ones."""
    return [name for name in names if name not in ALL_DAEMONS and name not in registered]
