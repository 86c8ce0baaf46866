"""Email notifications for expiring food."""

import logging
from dataclasses import dataclass
from html import escape

from fresh_tracker.adapters.smtp_email_client import EmailClient
from fresh_tracker.domain.digest import Digest, DigestLine

logger = logging.getLogger(__name__)

DIGEST_SUBJECT = "[FreshTracker] Some of your food is about to expire"
TEST_SUBJECT = "[FreshTracker] Email binding test"


@dataclass
class NotificationService:
    """Renders notification emails and hands them to the transport."""

    email_client: EmailClient
    digest_subject: str = DIGEST_SUBJECT

    async def send(self, to: str, subject: str, html: str) -> bool:
        """Send an email, returning False instead of raising on failure."""
        try:
            await self.email_client.send_email(to=to, subject=subject, html=html)
        except Exception:
            logger.exception("Failed to send email", extra={"recipient": to})
            return False
        logger.info("Email sent to %s", to)
        return True

    async def send_digest(self, digest: Digest) -> bool:
        """Send the expiring-food digest to its recipient."""
        return await self.send(
            digest.recipient, self.digest_subject, render_digest_html(digest)
        )

    async def send_test_email(self, to: str) -> bool:
        """Send a message confirming the address can receive reminders."""
        return await self.send(to, TEST_SUBJECT, _TEST_EMAIL_HTML)


def render_digest_html(digest: Digest) -> str:
    """Render a digest as a standalone HTML document."""
    items = "".join(_render_line(line) for line in digest.lines)
    return _DIGEST_HTML.format(username=escape(digest.username), items=items)


def _render_line(line: DigestLine) -> str:
    color = "#e74c3c" if line.expired else "#f39c12"
    return (
        '<li style="margin-bottom: 10px; padding: 10px; background: #f9f9f9;">'
        f"<b>{escape(line.name)}</b> "
        f'<span style="color: #666;">({escape(line.category)})</span><br/>'
        f'<span style="color: {color}; font-weight: bold;">{line.status}</span> '
        f'<span style="color: #999;"> - {line.expiration_date.isoformat()}</span>'
        "</li>"
    )


_FOOTER = """<div style="background: #f9f9f9; padding: 15px; text-align: center;
        font-size: 12px; color: #888;">
        <p style="margin: 0;">
          This message was sent automatically, please do not reply.
        </p>
        <p style="margin: 5px 0 0;">FreshTracker</p>
      </div>"""

_DIGEST_HTML = (
    """<!doctype html>
<html>
  <head><meta charset="utf-8" /></head>
  <body style="font-family: Arial, sans-serif; background: #f6f6f6; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; background: #ffffff;">
      <div style="background: #FF9800; color: white; padding: 20px; text-align: center;">
        <h2 style="margin: 0;">Food expiration reminder</h2>
      </div>
      <div style="padding: 30px 20px;">
        <p style="font-size: 16px; color: #333;">Dear {username},</p>
        <p style="font-size: 14px; color: #666;">
          The following items are expiring soon or have expired:
        </p>
        <ul style="padding-left: 0; list-style-type: none;">{items}</ul>
      </div>
      """
    + _FOOTER
    + """
    </div>
  </body>
</html>
"""
)

_TEST_EMAIL_HTML = (
    """<!doctype html>
<html>
  <head><meta charset="utf-8" /></head>
  <body style="font-family: Arial, sans-serif; background: #f6f6f6; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; background: #ffffff;">
      <div style="background: #2196F3; color: white; padding: 20px; text-align: center;">
        <h2 style="margin: 0;">Email binding test</h2>
      </div>
      <div style="padding: 30px 20px; text-align: center;">
        <p style="font-size: 16px; color: #333;">
          Your address is now linked to FreshTracker.
        </p>
        <p style="font-size: 14px; color: #666;">
          You will receive reminders when your food is about to expire.
        </p>
      </div>
      """
    + _FOOTER
    + """
    </div>
  </body>
</html>
"""
)
