"""
Per-record notification emails — body of the send-<kind>-notification functions.

Rendering needs an app context (flask.render_template); the functions endpoint
always runs inside one.
"""
import logging
from typing import Dict

from flask import render_template

from app.config import PLATFORM_URL
from app.errors import RecordNotFound, ValidationError
from app.models.client_need import ClientNeed
from app.models.prospect import Prospect
from app.models.reference import Reference
from app.models.rfp import RFP
from app.models.sales_rep import SalesRep
from app.services.email import send_email
from app.services.records import storage_session

logger = logging.getLogger('services.notifications')

# subject is formatted with the label and the serialized record
NOTIFICATIONS = {
    'rfp': {
        'model': RFP,
        'template': 'email/rfp_notification',
        'subject': 'Nouvel AO assigné : {record[mission]} - {record[client]}',
        'label': lambda record: record['mission'],
    },
    'prospect': {
        'model': Prospect,
        'template': 'email/prospect_notification',
        'subject': 'Nouvelle opportunité de références : {label}',
        'label': lambda record: record['targetAccount'],
    },
    'client_need': {
        'model': ClientNeed,
        'template': 'email/client_need_notification',
        'subject': 'Nouveau profil pour besoin client : {label}',
        'label': lambda record: record['selectedNeedTitle'] or 'Profil candidat',
    },
    'reference': {
        'model': Reference,
        'template': 'email/reference_notification',
        'subject': 'Nouvelle référence : {label}',
        'label': lambda record: record['client'] or 'Client',
    },
}


def _serialize(kind: str, row) -> Dict:
    if kind == 'rfp':
        from app.services.rfps import to_app
    elif kind == 'prospect':
        from app.services.prospects import to_app
    elif kind == 'client_need':
        from app.services.client_needs import to_app
    else:
        from app.services.references import to_app
    return to_app(row)


def send_record_notification(kind: str, body: Dict) -> Dict:
    """
    Email the assigned sales rep about one record.

    Raises ValidationError for an incomplete body and RecordNotFound when the
    sales rep or the record is gone. Returns {success, message, recipient}.
    """
    config = NOTIFICATIONS[kind]
    record_id = body.get('recordId')
    assigned_to = body.get('assignedTo')
    if not record_id or not assigned_to:
        raise ValidationError('recordId and assignedTo are required')

    with storage_session(f'loading {kind} notification data') as session:
        rep = session.get(SalesRep, assigned_to)
        if rep is None:
            raise RecordNotFound('Sales rep not found')
        row = session.get(config['model'], record_id)
        if row is None:
            raise RecordNotFound(f'{kind} not found')
        record = _serialize(kind, row)
        rep_name, rep_email = rep.name, rep.email

        # references name the colleague who asked for them
        created_by_name = None
        if record.get('createdBy'):
            creator = session.query(SalesRep).filter(SalesRep.email == record['createdBy']).first()
            created_by_name = creator.name if creator else None

    label = body.get('label') or config['label'](record)
    context = {
        'rep_name': rep_name,
        'label': label,
        'record': record,
        'has_attachment': bool(body.get('hasAttachment')),
        'created_by_name': created_by_name,
        'platform_url': PLATFORM_URL,
    }
    subject = config['subject'].format(label=label, record=record)
    html = render_template(f"{config['template']}.html", **context)
    text = render_template(f"{config['template']}.txt", **context)

    result = send_email(rep_email, subject, html, text)
    log_ctx = {'kind': kind, 'record_id': record_id, 'sales_rep': body.get('salesRepCode')}
    if not result['success']:
        logger.error("Notification email failed: %s", result['error'], extra=log_ctx)
        return {'success': False, 'message': result['error'], 'recipient': rep_email}

    logger.info("Notification email sent to %s", rep_email, extra=log_ctx)
    return {
        'success': True,
        'message': 'Email sent successfully via SendGrid',
        'recipient': rep_email,
        'messageId': result['messageId'],
    }
