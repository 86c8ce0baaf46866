"""Tests for container wiring."""

import asyncio

from fresh_tracker.adapters.smtp_email_client import SmtpEmailClient
from fresh_tracker.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.food_service is not None
    assert container.user_service is not None
    assert container.scheduler.sweep is container.sweep
    assert container.scheduler.run_at == settings.sweep_time
    email_client = container.notification_service.email_client
    assert isinstance(email_client, SmtpEmailClient)
    assert email_client.sender == "bot@example.com"
    asyncio.run(container.close_resources())
