"""Transactional email

Messages are rendered from jinja2 templates and delivered through an HTTP
email relay. In development nothing leaves the process; the message is only
logged.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx
from jinja2 import BaseLoader, Environment, select_autoescape

from careerconnect.core.errors import EmailDeliveryError
from careerconnect.core.monitoring import log_integration_call

_JINJA_ENV = Environment(
    loader=BaseLoader(),
    autoescape=select_autoescape(default_for_string=True),
    trim_blocks=True,
    lstrip_blocks=True,
)

_VERIFICATION_TEMPLATE = """\
<p>Welcome to {{ app_name }}!</p>
<p>Please confirm your email address by opening the link below:</p>
<p><a href="{{ link }}">{{ link }}</a></p>
<p>The link expires in {{ expire_hours }} hour{% if expire_hours != 1 %}s{% endif %}.</p>
"""

_PASSWORD_RESET_TEMPLATE = """\
<p>We received a request to reset your {{ app_name }} password.</p>
<p><a href="{{ link }}">Reset your password</a></p>
<p>If you did not ask for this you can ignore this email. The link expires in
{{ expire_hours }} hour{% if expire_hours != 1 %}s{% endif %}.</p>
"""


def verification_email(link: str, *, app_name: str = "CareerConnect", expire_hours: int = 1) -> str:
    return _JINJA_ENV.from_string(_VERIFICATION_TEMPLATE).render(
        link=link, app_name=app_name, expire_hours=expire_hours
    )


def password_reset_email(link: str, *, app_name: str = "CareerConnect", expire_hours: int = 1) -> str:
    return _JINJA_ENV.from_string(_PASSWORD_RESET_TEMPLATE).render(
        link=link, app_name=app_name, expire_hours=expire_hours
    )


class EmailClient:
    """Send HTML email through a JSON relay endpoint.

    Args:
        endpoint: Relay URL accepting ``{from, to, subject, html}``.
        api_key: Bearer key for the relay.
        sender: ``from`` address.
        development: When true, log the message instead of sending it.
        client: Optional shared ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        endpoint: Optional[str],
        api_key: Optional[str] = None,
        *,
        sender: str = "noreply@careerconnect.com",
        development: bool = False,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._sender = sender
        self._development = development
        self._http = client
        self._logger = logging.getLogger(__name__)

    async def send(self, to: str, subject: str, html: str) -> None:
        if self._development:
            self._logger.info("EMAIL (not sent in development) to=%s subject=%s\n%s", to, subject, html)
            return
        if not self._endpoint:
            raise EmailDeliveryError("EMAIL_ENDPOINT is not configured")

        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        payload = {"from": self._sender, "to": to, "subject": subject, "html": html}

        http = self._http or httpx.AsyncClient(timeout=10.0)
        started = time.perf_counter()
        try:
            response = await http.post(self._endpoint, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            log_integration_call("email", "send", None, (time.perf_counter() - started) * 1000)
            raise EmailDeliveryError(f"Failed to send email: {exc}") from exc
        finally:
            if self._http is None:
                await http.aclose()

        log_integration_call("email", "send", response.status_code, (time.perf_counter() - started) * 1000)
        if not response.is_success:
            raise EmailDeliveryError(
                "Failed to send email", status_code=response.status_code, details=response.text
            )
        self._logger.info("Email sent to %s: %s", to, subject)
