"""
Failure notification.

When the main program fails to start or terminates, the supervisor mails a
report to the configured recipients: the failure, the flags in use, a snapshot
of system health and the latest program output. Delivery is best-effort and
never holds up supervision.
"""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .diagnostics import ByteLogWriter
from .mailer import MailClient
from .metrics import collect_system_metrics, get_public_ip

logger = logging.getLogger(__name__)

templates_dir = Path(__file__).parent / "templates"
templates = Environment(loader=FileSystemLoader(str(templates_dir)), autoescape=False, keep_trailing_newline=True)


def lint_string(text: str, max_bytes: int) -> str:
    """Replace non-printable characters with spaces and cap the UTF-8 size."""
    cleaned = "".join(c if c.isprintable() or c in "\n\t" else " " for c in text)
    encoded = cleaned.encode("utf-8")
    if len(encoded) <= max_bytes:
        return cleaned
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


class FailureNotifier:
    """Builds and sends main program failure reports."""

    def __init__(
        self,
        mail_client: MailClient,
        recipients: list[str],
        stdout: ByteLogWriter,
        stderr: ByteLogWriter,
        subject_keyword: str = "launchguard",
        public_ip_url: str = "",
        max_report_bytes: int = 1024 * 1024,
    ):
        self.mail_client = mail_client
        self.recipients = list(recipients or [])
        self.stdout = stdout
        self.stderr = stderr
        self.subject_keyword = subject_keyword
        self.public_ip_url = public_ip_url
        self.max_report_bytes = max_report_bytes

    def can_notify(self) -> bool:
        return bool(self.recipients) and self.mail_client is not None and self.mail_client.is_configured()

    def build_report(self, cli_flags: list[str], cause, pid: int | None = None) -> str:
        body = templates.get_template("failure_report.txt").render(
            cause=cause,
            cli_flags=cli_flags,
            pid=pid,
            metrics=collect_system_metrics(),
            latest_stdout=self.stdout.retrieve(as_text=True),
            latest_stderr=self.stderr.retrieve(as_text=True),
        )
        return lint_string(body, self.max_report_bytes)

    def notify_failure(self, cli_flags: list[str], cause, pid: int | None = None) -> bool:
        """Mail a failure report. Returns True if the mail was handed over for delivery."""
        if not self.can_notify():
            logger.warning("Will not send failure notification due to missing recipients or mail client config")
            return False

        try:
            subject = f"{self.subject_keyword}-supervisor has detected a failure on {get_public_ip(self.public_ip_url)}"
            body = self.build_report(cli_flags, cause, pid)
            self.mail_client.send(subject, body, *self.recipients)
        except Exception as e:
            logger.warning(f"Failed to send failure notification email: {e}")
            return False
        return True
