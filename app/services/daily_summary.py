"""
Daily summaries — one email per sales rep listing their pending records.

Run per kind (rfp / prospect / client_need) from the CLI or the functions
endpoint, on an external schedule. A failure for one rep is recorded in its
result entry and the loop moves on.
"""
import logging
from typing import Dict

from flask import render_template

from app.config import PLATFORM_URL, STATUS_TO_PROCESS
from app.models.client_need import ClientNeed
from app.models.prospect import Prospect
from app.models.rfp import RFP
from app.models.sales_rep import SalesRep
from app.services.email import send_email
from app.services.records import storage_session

logger = logging.getLogger('services.daily_summary')


def _plural(n: int, word: str) -> str:
    return f"{word}s" if n > 1 else word


SUMMARIES = {
    'rfp': {
        'model': RFP,
        'template': 'email/daily_rfp_summary',
        'subject': lambda n: f"Récapitulatif quotidien : {n} {_plural(n, 'AO')} à traiter",
        'reason': 'No pending RFPs',
        'message': 'Daily summary process completed',
    },
    'prospect': {
        'model': Prospect,
        'template': 'email/daily_prospects_summary',
        'subject': lambda n: f"Récapitulatif quotidien : {n} {_plural(n, 'prospect')} à traiter",
        'reason': 'No pending prospects',
        'message': 'Daily prospects summary process completed',
    },
    'client_need': {
        'model': ClientNeed,
        'template': 'email/daily_client_needs_summary',
        'subject': lambda n: (f"Récapitulatif quotidien : {n} {_plural(n, 'profil')} "
                              f"pour besoins clients à traiter"),
        'reason': 'No pending client needs',
        'message': 'Daily client needs summary process completed',
    },
}


def _serializer(kind: str):
    if kind == 'rfp':
        from app.services.rfps import to_app
    elif kind == 'prospect':
        from app.services.prospects import to_app
    else:
        from app.services.client_needs import to_app
    return to_app


def _pending_for(kind: str, rep_id: str) -> list:
    model = SUMMARIES[kind]['model']
    serialize = _serializer(kind)
    with storage_session(f'loading pending {kind} records') as session:
        rows = (
            session.query(model)
            .filter(model.assigned_to == rep_id, model.status == STATUS_TO_PROCESS)
            .order_by(model.created_at.desc())
            .all()
        )
        return [serialize(r) for r in rows]


def _summarize_rep(kind: str, rep: Dict) -> Dict:
    config = SUMMARIES[kind]
    entry = {'salesRep': rep['code'], 'email': rep['email'], 'pendingCount': 0, 'emailSent': False}

    pending = _pending_for(kind, rep['id'])
    entry['pendingCount'] = len(pending)
    if not pending:
        logger.info("No pending %s records for %s, skipping email", kind, rep['code'])
        entry['reason'] = config['reason']
        return entry

    first_name = rep['name'].split(' ')[0]
    context = {'first_name': first_name, 'records': pending, 'platform_url': PLATFORM_URL}
    html = render_template(f"{config['template']}.html", **context)
    text = render_template(f"{config['template']}.txt", **context)

    result = send_email(rep['email'], config['subject'](len(pending)), html, text)
    if result['success']:
        entry['emailSent'] = True
        entry['messageId'] = result['messageId']
    else:
        entry['error'] = result['error']
    return entry


def run_daily_summary(kind: str) -> Dict:
    """Email every sales rep with pending records of one kind."""
    config = SUMMARIES[kind]
    with storage_session('loading sales reps for daily summary') as session:
        reps = [
            {'id': r.id, 'code': r.code, 'name': r.name, 'email': r.email}
            for r in session.query(SalesRep).order_by(SalesRep.code).all()
        ]

    logger.info("Daily %s summary: %d sales reps", kind, len(reps))
    if not reps:
        return {'success': True, 'message': 'No sales reps found', 'emailsSent': 0}

    results = []
    for rep in reps:
        try:
            entry = _summarize_rep(kind, rep)
        except Exception as e:
            logger.error("Error processing sales rep %s: %s", rep['code'], e, exc_info=True,
                         extra={'kind': kind, 'sales_rep': rep['code']})
            entry = {'salesRep': rep['code'], 'email': rep['email'], 'pendingCount': 0,
                     'emailSent': False, 'error': str(e)}
        results.append(entry)

    emails_sent = sum(1 for r in results if r['emailSent'])
    logger.info("Daily %s summary completed. Emails sent: %d/%d", kind, emails_sent, len(reps))
    return {
        'success': True,
        'message': config['message'],
        'emailsSent': emails_sent,
        'totalSalesReps': len(reps),
        'results': results,
    }
