"""
Typed service errors + translation of storage errors.

Every record service either returns or raises one of these. Routes never catch
them — the handler registered in create_app() turns them into JSON.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger('app.errors')

# SQLSTATE / PostgREST codes the app reacts to
SESSION_EXPIRED_CODES = {'PGRST301', '28000'}
PERMISSION_DENIED_CODE = '42501'
UNIQUE_VIOLATION_CODE = '23505'
FOREIGN_KEY_VIOLATION_CODE = '23503'


class ServiceError(Exception):
    """Base class — carries an HTTP status for the API layer."""

    status_code = 500

    def __init__(self, message: str = None):
        self.message = message or self.default_message()
        super().__init__(self.message)

    @classmethod
    def default_message(cls) -> str:
        return 'Unexpected error'

    def to_dict(self) -> dict:
        return {'error': self.message}


class AuthenticationRequired(ServiceError):
    status_code = 401

    @classmethod
    def default_message(cls):
        return 'Authentication required'


class SessionExpired(ServiceError):
    status_code = 401

    @classmethod
    def default_message(cls):
        return 'Session expired, please sign in again'


class PermissionDenied(ServiceError):
    status_code = 403

    @classmethod
    def default_message(cls):
        return 'Insufficient permissions to access this data'


class RecordNotFound(ServiceError):
    status_code = 404

    @classmethod
    def default_message(cls):
        return 'Record not found'


class SalesRepNotFound(ServiceError):
    status_code = 400

    @classmethod
    def default_message(cls):
        return 'Sales rep not found'


class ValidationError(ServiceError):
    status_code = 400

    def __init__(self, message: str = None, field: str = None):
        self.field = field
        super().__init__(message)

    @classmethod
    def default_message(cls):
        return 'Invalid input'

    def to_dict(self):
        d = super().to_dict()
        if self.field:
            d['field'] = self.field
        return d


class StorageError(ServiceError):
    status_code = 500

    @classmethod
    def default_message(cls):
        return 'Error while loading data'


class ExtractionError(ServiceError):
    status_code = 502

    @classmethod
    def default_message(cls):
        return 'Error while analyzing the document'


class FunctionInvocationError(ServiceError):
    status_code = 502

    @classmethod
    def default_message(cls):
        return 'Remote function call failed'


def _error_code(exc) -> str:
    """Pull the SQLSTATE off a DBAPI error (psycopg2 pgcode / psycopg3 sqlstate)."""
    orig = getattr(exc, 'orig', None)
    if orig is None:
        return ''
    return getattr(orig, 'pgcode', None) or getattr(orig, 'sqlstate', None) or ''


def translate_storage_error(exc: Exception) -> ServiceError:
    """Map a storage exception to the typed error the caller should raise."""
    if isinstance(exc, ServiceError):
        return exc

    code = _error_code(exc)
    if code in SESSION_EXPIRED_CODES:
        return SessionExpired()
    if code == PERMISSION_DENIED_CODE:
        return PermissionDenied()
    if code == UNIQUE_VIOLATION_CODE:
        return ValidationError('This entry already exists')
    if code == FOREIGN_KEY_VIOLATION_CODE:
        return ValidationError('This operation is not possible because the data is referenced elsewhere')
    if isinstance(exc, IntegrityError):
        return ValidationError(str(exc.orig) if exc.orig else str(exc))

    if isinstance(exc, SQLAlchemyError):
        orig = getattr(exc, 'orig', None)
        message = str(orig) if orig is not None else str(exc)
    else:
        message = str(exc)
    return StorageError(message or None)
