"""
Email dispatcher - send one generated certificate through the mail relay

Responsibilities:
1. Read the generated image from the output directory
2. Build a message: fixed subject, empty body, one PNG attachment
3. Authenticate to the relay over TLS and submit

Test points:
- test_send_builds_png_attachment
- test_missing_file_raises_output_error
- test_malformed_address_raises_data_error
- test_auth_failure_raises_transport_error
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import parseaddr
from pathlib import Path

from ..config import get_config
from ..interfaces import DataError, IEmailDispatcher, OutputIOError, TransportError
from ..models import EmailCredentials, EmailJob

logger = logging.getLogger(__name__)


def validate_address(address: str) -> str:
    """Return the bare address or raise DataError"""
    _, parsed = parseaddr(address or "")
    local, _, domain = parsed.partition("@")
    if not local or "." not in domain or " " in parsed:
        raise DataError(f"Malformed email address: {address!r}")
    return parsed


class EmailDispatcher(IEmailDispatcher):
    """smtplib-based mail dispatcher"""

    def __init__(
        self,
        output_dir: str | Path | None = None,
        relay_host: str | None = None,
        relay_port: int | None = None,
    ):
        config = get_config()
        self.output_dir = Path(output_dir or config.output.output_dir)
        self.relay_host = relay_host or config.mail.relay_host
        self.relay_port = relay_port or config.mail.relay_port
        self.security = config.mail.security
        self.subject = config.mail.subject
        self.attachment_name = config.mail.attachment_name
        self.timeout = config.mail.timeout_sec

    def send(self, job: EmailJob) -> None:
        """Mail job.filename to job.to"""
        message = self.build_message(job.credentials, job.filename, job.to)
        self._submit(job.credentials, message)
        logger.info(f"sent {job.filename} to {message['To']}")

    def build_message(
        self, credentials: EmailCredentials, filename: str, to: str
    ) -> EmailMessage:
        if not credentials.is_configured:
            raise DataError("Email credentials are not configured")
        sender = validate_address(credentials.username)
        recipient = validate_address(to)

        path = self.output_dir / filename
        try:
            data = path.read_bytes()
        except OSError as e:
            raise OutputIOError(f"Cannot read attachment {path}: {e}") from e

        message = EmailMessage()
        message["Subject"] = self.subject
        message["From"] = sender
        message["To"] = recipient
        message.set_content("")
        message.add_attachment(
            data, maintype="image", subtype="png", filename=self.attachment_name
        )
        return message

    def _submit(self, credentials: EmailCredentials, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        try:
            if self.security == "starttls":
                with smtplib.SMTP(self.relay_host, self.relay_port, timeout=self.timeout) as server:
                    server.starttls(context=context)
                    server.login(credentials.username, credentials.password)
                    server.send_message(message)
            else:
                with smtplib.SMTP_SSL(
                    self.relay_host, self.relay_port, context=context, timeout=self.timeout
                ) as server:
                    server.login(credentials.username, credentials.password)
                    server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise TransportError(f"Mail relay {self.relay_host} rejected delivery: {e}") from e
