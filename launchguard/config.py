"""
Configuration for the launcher.

Loads settings from environment variables with sensible defaults.
Log files are stored in ~/.launchguard/ unless LAUNCHGUARD_DATA_DIR says otherwise.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _split_list(value: str) -> list[str]:
    """Split a comma separated environment value, ignoring blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Config:
    """Launcher configuration."""

    # Paths
    data_dir: Path = Path(os.environ.get("LAUNCHGUARD_DATA_DIR", str(Path.home() / ".launchguard")))
    supervisor_log: Path = None
    main_program_log: Path = None

    # Logging
    log_max_bytes: int = int(os.environ.get("LOG_MAX_BYTES", str(10 * 1024 * 1024)))  # 10MB
    log_backup_count: int = int(os.environ.get("LOG_BACKUP_COUNT", "5"))
    log_level: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Supervision
    failure_threshold_sec: int = int(os.environ.get("FAILURE_THRESHOLD_SEC", str(20 * 60)))
    start_attempt_interval_sec: int = int(os.environ.get("START_ATTEMPT_INTERVAL_SEC", "10"))
    flush_delay_sec: float = float(os.environ.get("FLUSH_DELAY_SEC", "1"))
    output_capacity: int = int(os.environ.get("OUTPUT_CAPACITY", str(4 * 1024)))

    # Failure notification
    max_report_bytes: int = int(os.environ.get("MAX_REPORT_BYTES", str(1024 * 1024)))  # 1MB
    notification_recipients: list[str] = field(
        default_factory=lambda: _split_list(os.environ.get("NOTIFICATION_RECIPIENTS", ""))
    )
    mail_subject_keyword: str = os.environ.get("MAIL_SUBJECT_KEYWORD", "launchguard")
    public_ip_url: str = os.environ.get("PUBLIC_IP_URL", "https://api.ipify.org")

    # SMTP
    smtp_host: str = os.environ.get("SMTP_HOST", "")
    smtp_port: int = int(os.environ.get("SMTP_PORT", "25"))
    smtp_username: str = os.environ.get("SMTP_USERNAME", "")
    smtp_password: str = os.environ.get("SMTP_PASSWORD", "")
    smtp_use_tls: bool = os.environ.get("SMTP_USE_TLS", "false").lower() == "true"
    mail_from: str = os.environ.get("MAIL_FROM", "")

    # Secret handed to the main program through its standard input
    program_secret: str = os.environ.get("LAUNCHGUARD_SECRET", "")

    def __post_init__(self):
        """Initialize derived paths and create directories."""
        self.data_dir = Path(self.data_dir)
        self.supervisor_log = self.data_dir / "launchguard.log"
        self.main_program_log = self.data_dir / "main_program.log"

        # Create directories
        self.data_dir.mkdir(parents=True, exist_ok=True)


config = Config()
