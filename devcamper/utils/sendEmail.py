import logging
from dataclasses import dataclass

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail as SendGridMail

from devcamper.config import ENVIRONMENT, MAIL_FROM_EMAIL, SENDGRID_API_KEY

logger = logging.getLogger(__name__)


@dataclass
class EmailMessage:
    to: str
    subject: str
    text: str


class Mailer:
    def __init__(self, api_key=SENDGRID_API_KEY, from_email=MAIL_FROM_EMAIL, environment=ENVIRONMENT):
        self.api_key = api_key
        self.from_email = from_email
        self.environment = environment

    def send(self, message: EmailMessage):
        """Deliver ``message``; any provider error propagates to the caller.

        Without an API key the message is only logged, and only in development.
        """
        if not self.api_key:
            if self.environment != "development":
                raise RuntimeError("SendGrid API key is not configured")
            logger.warning(
                f"SendGrid not configured. Email for {message.to}: {message.text}"
            )
            return

        mail = SendGridMail(
            from_email=self.from_email,
            to_emails=message.to,
            subject=message.subject,
            plain_text_content=message.text,
        )
        response = SendGridAPIClient(self.api_key).send(mail)
        logger.info(f"Email sent to {message.to}, status: {response.status_code}")


def get_mailer() -> Mailer:
    return Mailer()
