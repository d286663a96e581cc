"""
Notification scheduler — delayed, fire-and-forget delivery through RQ.

After a prospect or client-need profile is created, a job is enqueued to run
`delay_minutes` later. The job re-reads the record (so edits made in the
meantime are picked up) and invokes the matching notification function.

Contract: submit and forget. Jobs are never cancelled, never retried, and their
results are not tracked; a record deleted before the job runs means no email.
"""
import logging
from datetime import timedelta
from typing import Dict, Optional

from app.config import NOTIFICATION_DELAY_MINUTES

logger = logging.getLogger('services.scheduler')

QUEUE_NAME = 'notifications'

NOTIFICATION_FUNCTIONS = {
    'prospect': 'send-prospect-notification',
    'client_need': 'send-client-need-notification',
}


# ── Lazy RQ queue (no Redis connection at import time) ───────────────────────

_queue = None

def _get_queue():
    global _queue
    if _queue is None:
        from app.extensions import redis_queue_connection
        from rq import Queue
        _queue = Queue(QUEUE_NAME, connection=redis_queue_connection)
    return _queue


def submit(func, *args, delay_minutes: float = 0):
    """Enqueue func(*args) to run after the delay. Returns the RQ job handle."""
    return _get_queue().enqueue_in(timedelta(minutes=delay_minutes), func, *args)


def schedule_notification(kind: str, payload: Dict,
                          delay_minutes: float = NOTIFICATION_DELAY_MINUTES) -> bool:
    """
    Schedule a notification email for a freshly created record.

    Returns True when the job was accepted by the queue, False otherwise. The
    return value says nothing about whether the email will be sent.
    """
    if kind not in NOTIFICATION_FUNCTIONS:
        logger.error("Unknown notification kind: %s", kind)
        return False
    try:
        job = submit(deliver_notification, kind, payload, delay_minutes=delay_minutes)
    except Exception as e:
        logger.error("Failed to schedule %s notification for %s: %s",
                     kind, payload.get('recordId'), e,
                     extra={'kind': kind, 'record_id': payload.get('recordId')})
        return False

    logger.info("Scheduled %s notification in %.1f min (job %s)",
                kind, delay_minutes, getattr(job, 'id', '?'),
                extra={'kind': kind, 'record_id': payload.get('recordId'),
                       'sales_rep': payload.get('salesRepCode')})
    return True


def _refresh(kind: str, record_id: str) -> Optional[Dict]:
    """Current label + attachment fields of the record, or None if it is gone."""
    from app.services.records import storage_session
    from app.models.prospect import Prospect
    from app.models.client_need import ClientNeed

    model = Prospect if kind == 'prospect' else ClientNeed
    with storage_session(f'refreshing {kind} for notification') as session:
        row = session.get(model, record_id)
        if row is None:
            return None
        label = row.target_account if kind == 'prospect' else row.selected_need_title
        return {
            'label': label or '',
            'fileName': row.file_name,
            'hasAttachment': bool(row.file_name),
        }


def deliver_notification(kind: str, payload: Dict) -> bool:
    """
    Job body: re-read the record and invoke its notification function.

    Every failure is logged and dropped. Returns True only when the function
    reported success.
    """
    from app.services.functions import invoke_function

    record_id = payload.get('recordId')
    ctx = {'kind': kind, 'record_id': record_id, 'sales_rep': payload.get('salesRepCode')}

    try:
        current = _refresh(kind, record_id)
    except Exception as e:
        logger.error("Error re-reading %s %s: %s", kind, record_id, e, extra=ctx)
        return False

    if current is None:
        logger.info("%s %s no longer exists; skipping notification", kind, record_id, extra=ctx)
        return False

    body = {**payload, **current}
    try:
        result = invoke_function(NOTIFICATION_FUNCTIONS[kind], body)
    except Exception as e:
        logger.error("Error invoking %s notification: %s", kind, e, extra=ctx)
        return False

    if not result.get('success'):
        logger.error("%s notification function reported failure: %s",
                     kind, result.get('message'), extra=ctx)
        return False

    logger.info("%s notification sent to %s", kind, result.get('recipient'), extra=ctx)
    return True
