import pytest
import sib_api_v3_sdk

from urbannest.core.exceptions import DeliveryError
from urbannest.services.email_service import BrevoEmailSender, build_reset_url, password_reset_email


def test_reset_url_puts_token_in_path():
    assert build_reset_url("abc123") == "http://frontend.test/reset-password/abc123"


def test_reset_email_escapes_user_name():
    body = password_reset_email('<script>alert("x")</script>', build_reset_url("abc123"), 30)
    assert "<script>" not in body
    assert "&lt;script&gt;" in body
    assert 'href="http://frontend.test/reset-password/abc123"' in body
    assert "30 minutes" in body


def test_reset_email_without_name_greets_generically():
    assert "Hi there," in password_reset_email("", build_reset_url("abc123"), 30)


def test_brevo_sender_reports_message_build_errors_as_delivery_errors(monkeypatch):
    def broken_message(**kwargs):
        raise ValueError("Invalid value for `to`")

    monkeypatch.setattr(sib_api_v3_sdk, "SendSmtpEmail", broken_message)
    sender = BrevoEmailSender(api_key="key", sender_name="UrbanNest", sender_email="no-reply@urbannest.com")

    with pytest.raises(DeliveryError):
        sender.send("bob@x.com", "Bob", "Password reset request", "<p>hi</p>")
