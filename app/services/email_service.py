import asyncio
import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Dict, Optional

import httpx

from app.core.config import Settings, settings
from app.core.errors import SenderUnavailableError

logger = logging.getLogger(__name__)


class SmtpSender:
    """
    A verified set of SMTP coordinates. Each send opens its own connection,
    so one handle can be shared by concurrent requests.
    """

    def __init__(self, host: str, port: int, username: str, password: str,
                 use_ssl: bool = True, from_email: str = "noreply@portfolio.com",
                 timeout: float = 10.0):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_ssl = use_ssl
        self.from_email = from_email
        self.timeout = timeout

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            if not self.use_ssl:
                server.starttls()
            server.login(self.username, self.password)
        except Exception:
            server.close()
            raise
        return server

    def _verify_blocking(self):
        server = self._connect()
        server.quit()

    def _send_blocking(self, msg: MIMEMultipart):
        server = self._connect()
        try:
            server.sendmail(self.from_email, msg["To"], msg.as_string())
        finally:
            server.quit()

    async def verify(self):
        await asyncio.to_thread(self._verify_blocking)

    async def send(self, msg: MIMEMultipart):
        await asyncio.to_thread(self._send_blocking, msg)
        logger.info(f"✅ Email sent to {msg['To']}")


async def provision_test_account(api_url: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> Dict[str, Any]:
    """Ask the Ethereal API for a disposable SMTP account."""
    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            response = await client.post(
                f"{api_url.rstrip('/')}/user",
                json={"requestor": "portfolio-backend", "version": "1.0.0"},
            )
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        raise SenderUnavailableError(f"Could not provision test mail account: {e}") from e

    if data.get("status") != "success":
        raise SenderUnavailableError(f"Test mail account refused: {data.get('error', 'unknown error')}")

    logger.info(f"📧 Sandbox mail account {data['user']}, inbox at {data.get('web', 'https://ethereal.email')}")
    return data


async def create_sender(config: Settings = settings) -> SmtpSender:
    """Build an unverified sender for the configured mail mode."""
    if config.MAIL_MODE == "live":
        if not config.EMAIL_USER or not config.EMAIL_PASS:
            raise SenderUnavailableError("EMAIL_USER or EMAIL_PASS not set for live mail mode")
        return SmtpSender(
            host=config.SMTP_SERVER,
            port=config.SMTP_PORT,
            username=config.EMAIL_USER,
            password=config.EMAIL_PASS,
            use_ssl=config.SMTP_USE_SSL,
            from_email=config.FROM_EMAIL,
            timeout=config.SEND_TIMEOUT_SECONDS,
        )

    account = await provision_test_account(config.ETHEREAL_API_URL)
    smtp = account["smtp"]
    return SmtpSender(
        host=smtp["host"],
        port=int(smtp["port"]),
        username=account["user"],
        password=account["pass"],
        use_ssl=bool(smtp.get("secure", False)),
        from_email=config.FROM_EMAIL,
        timeout=config.SEND_TIMEOUT_SECONDS,
    )


def _html_message(from_email: str, to_email: str, subject: str, body: str) -> MIMEMultipart:
    msg = MIMEMultipart()
    msg['From'] = from_email
    msg['To'] = to_email
    msg['Subject'] = subject
    msg.attach(MIMEText(body, 'html'))
    return msg


def build_admin_alert(name: str, email: str, message: str, config: Settings = settings) -> MIMEMultipart:
    body_html = html.escape(message).replace("\n", "<br>")
    body = f"""
        <h2>New Contact Form Submission</h2>
        <p><strong>Name:</strong> {html.escape(name)}</p>
        <p><strong>Email:</strong> {html.escape(email)}</p>
        <p><strong>Message:</strong></p>
        <p>{body_html}</p>
        <hr>
        <p><em>Sent from portfolio contact form</em></p>
    """
    subject = f"New Contact Message from {' '.join(name.split())}"
    return _html_message(config.FROM_EMAIL, config.ADMIN_EMAIL, subject, body)


def build_auto_reply(name: str, email: str, config: Settings = settings) -> MIMEMultipart:
    owner = html.escape(config.OWNER_NAME)
    body = f"""
        <h2>Thank you for your message!</h2>
        <p>Hi {html.escape(name)},</p>
        <p>Thank you for reaching out! I've received your message and will get back to you as soon as possible.</p>
        <p>Best regards,<br>{owner}</p>
        <hr>
        <p><em>This is an automated response. Please do not reply to this email.</em></p>
    """
    return _html_message(config.FROM_EMAIL, email, f"Thank you for contacting {config.OWNER_NAME}", body)
