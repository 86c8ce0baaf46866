"""SMTP email client adapter."""

import asyncio
import smtplib
from collections.abc import Callable
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Protocol


class EmailClient(Protocol):
    """Interface for outbound email delivery."""

    async def send_email(self, to: str, subject: str, html: str) -> None:
        """Deliver an HTML email to a single recipient."""


SmtpFactory = Callable[..., smtplib.SMTP]


@dataclass
class SmtpEmailClient:
    """Email client that delivers through an SMTP server."""

    host: str
    port: int
    username: str | None
    password: str | None
    sender: str
    smtp_factory: SmtpFactory
    timeout: float = 10.0

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        host: str,
        port: int,
        username: str | None,
        password: str | None,
        sender: str,
        use_ssl: bool = True,
    ) -> "SmtpEmailClient":
        """Create a client using implicit TLS or STARTTLS."""
        factory: SmtpFactory = smtplib.SMTP_SSL if use_ssl else _starttls_smtp
        return cls(
            host=host,
            port=port,
            username=username,
            password=password,
            sender=sender,
            smtp_factory=factory,
        )

    async def send_email(self, to: str, subject: str, html: str) -> None:
        """Send the message without blocking the event loop."""
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable email client.")
        message.add_alternative(html, subtype="html")
        await asyncio.to_thread(self._deliver, message)

    def _deliver(self, message: EmailMessage) -> None:
        with self.smtp_factory(self.host, self.port, timeout=self.timeout) as smtp:
            if self.username and self.password:
                smtp.login(self.username, self.password)
            smtp.send_message(message)


def _starttls_smtp(host: str, port: int, timeout: float) -> smtplib.SMTP:
    smtp = smtplib.SMTP(host, port, timeout=timeout)
    smtp.starttls()
    return smtp
