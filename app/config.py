"""
Centralized configuration — all env vars, status values, placeholders.
"""
import os


# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text')

# ── Redis ─────────────────────────────────────────────────────────────────────
REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

# ── PostgreSQL ────────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///local.db')

# ── Auth ─────────────────────────────────────────────────────────────────────
SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-me')
APP_PASSWORD = os.getenv('APP_PASSWORD')
SESSION_TTL_MINUTES = int(os.getenv('SESSION_TTL_MINUTES', '720'))

# ── OpenAI ────────────────────────────────────────────────────────────────────
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')

# ── Cloudflare R2 ─────────────────────────────────────────────────────────────
R2_ACCESS_KEY_ID = os.getenv('R2_ACCESS_KEY_ID')
R2_SECRET_ACCESS_KEY = os.getenv('R2_SECRET_ACCESS_KEY')
R2_BUCKET_NAME = os.getenv('R2_BUCKET_NAME', 'files')
R2_ENDPOINT_URL = os.getenv('R2_ENDPOINT_URL')
R2_PUBLIC_URL = os.getenv('R2_PUBLIC_URL', '')

# ── SendGrid ──────────────────────────────────────────────────────────────────
SENDGRID_API_KEY = os.getenv('SENDGRID_API_KEY')
EMAIL_FROM = os.getenv('EMAIL_FROM', 'notifications@hito.digital')
EMAIL_FROM_NAME = os.getenv('EMAIL_FROM_NAME', 'GOJO')
EMAIL_REPLY_TO = os.getenv('EMAIL_REPLY_TO', 'noreply@hito.digital')
PLATFORM_URL = os.getenv('PLATFORM_URL', 'https://hito-gojo-platform.netlify.app/')

# ── Functions (notification + daily summary endpoints) ───────────────────────
FUNCTIONS_URL = os.getenv('FUNCTIONS_URL', 'http://localhost:8080/functions')
FUNCTIONS_SECRET = os.getenv('FUNCTIONS_SECRET')
FUNCTIONS_TIMEOUT = int(os.getenv('FUNCTIONS_TIMEOUT', '30'))
NOTIFICATION_DELAY_MINUTES = float(os.getenv('NOTIFICATION_DELAY_MINUTES', '0.5'))

# ── Status values ─────────────────────────────────────────────────────────────
STATUS_TO_PROCESS = 'À traiter'
STATUS_PROCESSED = 'Traité'

RECORD_STATUSES = [STATUS_TO_PROCESS, STATUS_PROCESSED]

# Older RFP rows were tracked with a four-state lifecycle
LEGACY_RFP_STATUSES = ['En cours', 'Refusé']
RFP_STATUSES = RECORD_STATUSES + LEGACY_RFP_STATUSES

NEED_STATUSES = ['Ouvert', 'En cours', 'Pourvu', 'Annulé']
OPEN_NEED_STATUSES = ['Ouvert', 'En cours']

REFERENCE_STATUSES = RECORD_STATUSES

# ── Display placeholders ──────────────────────────────────────────────────────
PLACEHOLDER = '-'
NOT_SPECIFIED = 'Non spécifié'

# ── File uploads ──────────────────────────────────────────────────────────────
UPLOAD_FOLDER = 'cvs'
