"""
launchguard - A self-supervising launcher for bundled network daemons.

Relaunches the main program when it crashes, progressively sheds daemons and
advanced flags under rapid repeated crashes, and mails failure reports.
"""

__version__ = "0.1.0"
