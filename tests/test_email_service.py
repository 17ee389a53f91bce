"""
Tests for sender construction per mail mode and the SMTP wrapper.
"""

import copy
import smtplib
from unittest.mock import patch

import httpx
import pytest

from app.core.config import settings
from app.core.errors import SenderUnavailableError
from app.services.email_service import (
    SmtpSender,
    build_auto_reply,
    create_sender,
    provision_test_account,
)

ETHEREAL_ACCOUNT = {
    "status": "success",
    "user": "jane.doe@ethereal.email",
    "pass": "s3cr3t",
    "smtp": {"host": "smtp.ethereal.email", "port": 587, "secure": False},
    "web": "https://ethereal.email",
}


def _config(**overrides):
    config = copy.copy(settings)
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


class TestLiveMode:

    @pytest.mark.asyncio
    async def test_requires_credentials(self):
        config = _config(MAIL_MODE="live", EMAIL_USER="", EMAIL_PASS="")

        with pytest.raises(SenderUnavailableError, match="EMAIL_USER or EMAIL_PASS"):
            await create_sender(config)

    @pytest.mark.asyncio
    async def test_uses_configured_smtp_server(self):
        config = _config(MAIL_MODE="live", SMTP_SERVER="smtp.gmail.com", SMTP_PORT=465, SMTP_USE_SSL=True)

        sender = await create_sender(config)

        assert (sender.host, sender.port, sender.use_ssl) == ("smtp.gmail.com", 465, True)
        assert sender.username == config.EMAIL_USER


class TestSandboxMode:

    @pytest.mark.asyncio
    async def test_provisions_disposable_account(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/user"
            return httpx.Response(200, json=ETHEREAL_ACCOUNT)

        account = await provision_test_account("https://api.nodemailer.com", transport=httpx.MockTransport(handler))

        assert account["user"] == "jane.doe@ethereal.email"

    @pytest.mark.asyncio
    async def test_refused_account_is_unavailable(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"status": "error", "error": "quota"}))

        with pytest.raises(SenderUnavailableError, match="quota"):
            await provision_test_account("https://api.nodemailer.com", transport=transport)

    @pytest.mark.asyncio
    async def test_http_error_is_unavailable(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))

        with pytest.raises(SenderUnavailableError):
            await provision_test_account("https://api.nodemailer.com", transport=transport)

    @pytest.mark.asyncio
    async def test_sandbox_sender_uses_provisioned_credentials(self):
        config = _config(MAIL_MODE="sandbox")

        with patch("app.services.email_service.provision_test_account", return_value=ETHEREAL_ACCOUNT):
            sender = await create_sender(config)

        assert sender.host == "smtp.ethereal.email"
        assert sender.port == 587
        assert sender.use_ssl is False
        assert sender.password == "s3cr3t"


class TestSmtpSender:

    @pytest.mark.asyncio
    async def test_verify_logs_in_and_quits(self):
        sender = SmtpSender("smtp.gmail.com", 465, "user", "pass", use_ssl=True)

        with patch("app.services.email_service.smtplib.SMTP_SSL") as smtp_ssl:
            await sender.verify()

        server = smtp_ssl.return_value
        server.login.assert_called_once_with("user", "pass")
        server.quit.assert_called_once()

    @pytest.mark.asyncio
    async def test_send_uses_starttls_when_not_ssl(self):
        sender = SmtpSender("smtp.ethereal.email", 587, "user", "pass", use_ssl=False, from_email="me@example.com")
        msg = build_auto_reply("Ada", "ada@example.com")

        with patch("app.services.email_service.smtplib.SMTP") as smtp:
            await sender.send(msg)

        server = smtp.return_value
        server.starttls.assert_called_once()
        args = server.sendmail.call_args.args
        assert args[0] == "me@example.com"
        assert args[1] == "ada@example.com"
        server.quit.assert_called_once()

    @pytest.mark.asyncio
    async def test_send_failure_still_closes_connection(self):
        sender = SmtpSender("smtp.gmail.com", 465, "user", "pass")
        msg = build_auto_reply("Ada", "ada@example.com")

        with patch("app.services.email_service.smtplib.SMTP_SSL") as smtp_ssl:
            smtp_ssl.return_value.sendmail.side_effect = OSError("connection reset")
            with pytest.raises(OSError):
                await sender.send(msg)

        smtp_ssl.return_value.quit.assert_called_once()

    @pytest.mark.asyncio
    async def test_failed_login_closes_socket(self):
        sender = SmtpSender("smtp.gmail.com", 465, "user", "wrong")

        with patch("app.services.email_service.smtplib.SMTP_SSL") as smtp_ssl:
            smtp_ssl.return_value.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")
            with pytest.raises(smtplib.SMTPAuthenticationError):
                await sender.verify()

        smtp_ssl.return_value.close.assert_called_once()
        smtp_ssl.return_value.quit.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_starttls_closes_socket(self):
        sender = SmtpSender("smtp.ethereal.email", 587, "user", "pass", use_ssl=False)
        msg = build_auto_reply("Ada", "ada@example.com")

        with patch("app.services.email_service.smtplib.SMTP") as smtp:
            smtp.return_value.starttls.side_effect = smtplib.SMTPNotSupportedError("STARTTLS not supported")
            with pytest.raises(smtplib.SMTPNotSupportedError):
                await sender.send(msg)

        server = smtp.return_value
        server.close.assert_called_once()
        server.login.assert_not_called()
        server.sendmail.assert_not_called()
