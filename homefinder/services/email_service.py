"""
Simulated Email Service

Renders outgoing account emails with Jinja2 and "sends" them by logging
and recording them in an outbox. No transport is attempted.
"""

import logging
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Deque, Optional

from jinja2 import Environment, FileSystemLoader

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / 'templates'

OUTBOX_LIMIT = 100


@dataclass
class OutgoingEmail:
    to: str
    subject: str
    body: str


class EmailService:
    """Template rendering plus a bounded in-memory outbox of the most recent emails."""

    def __init__(self, templates_dir: Optional[Path] = None, reset_url_base: str = '#/reset-password',
                 outbox_limit: int = OUTBOX_LIMIT):
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            autoescape=False,
            keep_trailing_newline=True,
        )
        self.reset_url_base = reset_url_base
        # Oldest entries drop off once the limit is reached
        self.outbox: Deque[OutgoingEmail] = deque(maxlen=outbox_limit)

    def render_template(self, template_name: str, **context) -> str:
        return self._env.get_template(template_name).render(**context)

    def send_email(self, to: str, subject: str, body: str) -> bool:
        """Record the email. Always succeeds."""
        self.outbox.append(OutgoingEmail(to=to, subject=subject, body=body))
        logger.info(f"Email queued for {to}: {subject}")
        return True

    def send_password_reset(self, to: str, name: str, token: str, expires_at: str) -> bool:
        reset_link = f"{self.reset_url_base}/{token}"
        body = self.render_template(
            'password_reset.txt',
            name=name,
            reset_link=reset_link,
            expires_at=expires_at,
        )
        logger.info(f"Password reset link for {to}: {reset_link}")
        return self.send_email(to, 'Đặt lại mật khẩu / Password reset', body)
