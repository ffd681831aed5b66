"""Outbound email for the authentication flows"""

import html
import logging
from abc import ABC, abstractmethod

import sib_api_v3_sdk
from sib_api_v3_sdk.rest import ApiException
from urllib3.exceptions import HTTPError

from urbannest.core.config import settings
from urbannest.core.exceptions import DeliveryError

logger = logging.getLogger(__name__)


class EmailSender(ABC):
    """Abstract transport for transactional email"""

    @abstractmethod
    def send(self, to_email: str, to_name: str, subject: str, html_content: str) -> None:
        """
        Send one email.

        Raises:
            DeliveryError: If the message could not be handed to the transport
        """
        pass


class BrevoEmailSender(EmailSender):
    """Sends transactional email through the Brevo (Sendinblue) API"""

    def __init__(self, api_key: str, sender_name: str, sender_email: str):
        configuration = sib_api_v3_sdk.Configuration()
        configuration.api_key['api-key'] = api_key
        self.api_instance = sib_api_v3_sdk.TransactionalEmailsApi(
            sib_api_v3_sdk.ApiClient(configuration)
        )
        self.sender = {"name": sender_name, "email": sender_email}

    def send(self, to_email: str, to_name: str, subject: str, html_content: str) -> None:
        try:
            send_smtp_email = sib_api_v3_sdk.SendSmtpEmail(
                to=[{"email": to_email, "name": to_name or to_email}],
                sender=self.sender,
                subject=subject,
                html_content=html_content,
            )
            api_response = self.api_instance.send_transac_email(send_smtp_email)
            logger.info("Email '%s' sent to %s: %s", subject, to_email, api_response)
        except ApiException as e:
            logger.error("Brevo rejected email '%s' to %s: %s", subject, to_email, e)
            raise DeliveryError() from e
        except HTTPError as e:
            logger.error("Could not reach Brevo for email '%s' to %s: %s", subject, to_email, e)
            raise DeliveryError() from e
        except ValueError as e:
            logger.error("Could not build email '%s' to %s: %s", subject, to_email, e)
            raise DeliveryError() from e


def build_reset_url(raw_token: str) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/reset-password/{raw_token}"


def password_reset_email(name: str, reset_url: str, expire_minutes: int) -> str:
    return (
        f"<p>Hi {html.escape(name) if name else 'there'},</p>"
        "<p>You are receiving this email because you (or someone else) requested "
        "a password reset for your UrbanNest account.</p>"
        f'<p><a href="{html.escape(reset_url)}">Reset your password</a></p>'
        f"<p>This link expires in {expire_minutes} minutes. If you did not request "
        "a reset, you can ignore this email.</p>"
        "<p>Warm Regards,<br>The UrbanNest Team</p>"
    )
