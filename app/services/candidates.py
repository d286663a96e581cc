"""
Shared behaviour of the two candidate-profile kinds (prospects, client-need profiles).

Both carry an optional uploaded CV, the same extracted attributes and a
notification to the assigned sales rep on creation. The kind-specific modules
declare their extra fields and delegate here.
"""
import logging
from typing import Dict, Optional

from app.config import PLACEHOLDER, RECORD_STATUSES, STATUS_TO_PROCESS
from app.errors import ServiceError, ValidationError
from app.services import storage
from app.services.dates import to_display_date
from app.services.records import (
    storage_session, ensure_sales_rep, delete_row, to_columns,
    as_text, as_optional_int, as_bool, one_of,
)
from app.services.scheduler import schedule_notification

logger = logging.getLogger('services.candidates')

FIELDS = {
    'textContent': 'text_content',
    'fileName': 'file_name',
    'fileUrl': 'file_url',
    'fileContent': 'file_content',
    'availability': 'availability',
    'dailyRate': 'daily_rate',
    'salaryExpectations': 'salary_expectations',
    'residence': 'residence',
    'mobility': 'mobility',
    'phone': 'phone',
    'email': 'email',
    'status': 'status',
    'assignedTo': 'assigned_to',
    'comments': 'comments',
    'isRead': 'is_read',
}

EDITABLE = {
    'textContent', 'availability', 'dailyRate', 'salaryExpectations', 'residence',
    'mobility', 'phone', 'email', 'status', 'assignedTo', 'comments',
}

CONVERTERS = {
    'availability': as_text,
    'daily_rate': as_optional_int,
    'salary_expectations': as_optional_int,
    'residence': as_text,
    'mobility': as_text,
    'phone': as_text,
    'email': as_text,
    'status': one_of(RECORD_STATUSES),
    'is_read': as_bool,
}


def to_app(row) -> Dict:
    return {
        'id': row.id,
        'textContent': row.text_content or '',
        'fileName': row.file_name,
        'fileUrl': row.file_url,
        'fileContent': row.file_content,
        'availability': row.availability or PLACEHOLDER,
        'dailyRate': row.daily_rate,
        'salaryExpectations': row.salary_expectations,
        'residence': row.residence or PLACEHOLDER,
        'mobility': row.mobility or PLACEHOLDER,
        'phone': row.phone or PLACEHOLDER,
        'email': row.email or PLACEHOLDER,
        'status': row.status,
        'assignedTo': row.assigned_to,
        'isRead': bool(row.is_read),
        'comments': row.comments or '',
        'createdAt': to_display_date(row.created_at),
    }


def _upload(upload: Optional[Dict]):
    """
    Upload the attached CV. Returns (file columns, storage path).

    A failed upload leaves the record without a file.
    """
    if not upload:
        return {}, None
    try:
        result = storage.upload_file(
            upload['filename'], upload['data'],
            upload.get('content_type') or 'application/octet-stream',
        )
    except ServiceError as e:
        logger.error("File upload failed, continuing without file: %s", e.message)
        return {'file_name': None, 'file_url': None, 'file_content': None}, None
    columns = {
        'file_name': upload['filename'],
        'file_url': result['url'],
        'file_content': result['content'],
    }
    return columns, result['path']


def create_candidate(model, kind: str, data: Dict, fields: Dict, editable: set,
                     converters: Dict, label_column: str, serialize,
                     upload: Optional[Dict] = None) -> Dict:
    """
    Insert a candidate row, then schedule the assignee's notification.

    File columns only ever come from `upload`. The upload runs outside any DB
    session and the stored object is removed again if the insert fails.
    Scheduling never blocks or fails the create.
    """
    if not data.get('assignedTo'):
        raise ValidationError("assignedTo is required", field='assignedTo')

    values = to_columns(data, fields, editable, converters)
    values.setdefault('status', STATUS_TO_PROCESS)
    values['is_read'] = False

    with storage_session(f'checking assignee for {kind}') as session:
        rep = ensure_sales_rep(session, values['assigned_to'])
        rep_id, rep_code = rep.id, rep.code

    file_columns, stored_path = _upload(upload)
    values.update(file_columns)

    try:
        with storage_session(f'creating {kind}') as session:
            row = model(**values)
            session.add(row)
            session.commit()
            record = serialize(row)
            payload = {
                'recordId': row.id,
                'label': getattr(row, label_column) or '',
                'salesRepCode': rep_code,
                'assignedTo': rep_id,
                'hasAttachment': bool(row.file_name),
                'fileName': row.file_name,
            }
    except ServiceError:
        if stored_path:
            _discard_upload(stored_path, kind)
        raise

    logger.info("Created %s %s", kind, record['id'],
                extra={'kind': kind, 'record_id': record['id'], 'sales_rep': rep_code})

    try:
        schedule_notification(kind, payload)
    except Exception as e:
        logger.error("Notification scheduling failed for %s %s: %s", kind, record['id'], e)

    return record


def _discard_upload(path: str, kind: str) -> None:
    try:
        storage.delete_file(path)
    except ServiceError as e:
        logger.error("Could not remove orphaned %s file %s: %s", kind, path, e.message)


def delete_candidate(model, kind: str, record_id: str) -> None:
    """Delete the row, then best-effort delete its stored file."""
    with storage_session(f'loading {kind} before delete') as session:
        row = session.get(model, record_id)
        file_url = row.file_url if row else None

    delete_row(model, record_id, f'deleting {kind}')

    if file_url:
        path = storage.path_from_url(file_url)
        try:
            storage.delete_file(path)
        except Exception as e:
            logger.error("Error deleting file %s for %s %s: %s", path, kind, record_id, e)
