"""
Transactional email through SendGrid.
"""
import logging
from typing import Dict

from sendgrid.helpers.mail import Mail, From, ReplyTo

from app.config import EMAIL_FROM, EMAIL_FROM_NAME, EMAIL_REPLY_TO
from app.extensions import sendgrid_client

logger = logging.getLogger('services.email')


def send_email(to: str, subject: str, html: str, text: str) -> Dict:
    """
    Send one HTML + plain-text email.

    Never raises: returns {'success': True, 'messageId': ...} or
    {'success': False, 'error': ...}.
    """
    if not sendgrid_client:
        logger.error("SENDGRID_API_KEY not configured — cannot send to %s", to)
        return {'success': False, 'error': 'SENDGRID_API_KEY not configured'}

    message = Mail(
        from_email=From(EMAIL_FROM, EMAIL_FROM_NAME),
        to_emails=to,
        subject=subject,
        plain_text_content=text,
        html_content=html,
    )
    message.reply_to = ReplyTo(EMAIL_REPLY_TO)

    try:
        response = sendgrid_client.send(message)
    except Exception as e:
        logger.error("SendGrid email sending failed for %s: %s", to, e)
        return {'success': False, 'error': f"SendGrid email sending failed: {e}"}

    if response.status_code not in (200, 201, 202):
        logger.error("SendGrid API error %s for %s: %s", response.status_code, to, response.body)
        return {'success': False, 'error': f"SendGrid API error: {response.status_code}"}

    message_id = (response.headers or {}).get('X-Message-Id') or 'unknown'
    logger.info("Email sent to %s (%s), message id %s", to, subject, message_id)
    return {'success': True, 'messageId': message_id}
