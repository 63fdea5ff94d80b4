"""
Global constants for platsync.
"""

# Management API
DEFAULT_API_URL = "https://api.supabase.com"
DEFAULT_HTTP_TIMEOUT = 30.0
USER_AGENT = "platsync/0.1.0"

# Data-plane API; {project_ref} is substituted per project
DEFAULT_DATA_PLANE_URL = "https://{project_ref}.supabase.co"

# Credential cache
CREDENTIAL_FRESHNESS_SECONDS = 3600
SERVICE_ROLE_KEY_NAME = "service_role"
ANON_KEY_NAME = "anon"

# Read responses with these codes mean "feature not configured for this project"
NOT_CONFIGURED_STATUS_CODES = (404, 406)
AUTH_FAILURE_STATUS_CODES = (401, 403)

# Environment
ACCESS_TOKEN_ENV_VAR = "PLATSYNC_ACCESS_TOKEN"
KEYRING_SERVICE = "platsync"

# HTTP Headers
DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "User-Agent": USER_AGENT,
}

# Logging constants
LOG_APP_NAME = "PLATSYNC"
LOG_FILE_NAME = "platsync"
LOG_RETENTION_DAYS = 7
LOG_LINES_TO_SHOW = 20

# Sensitive data keys for sanitization
SENSITIVE_KEYS = (
    "password", "pass", "token", "access_token", "secret", "secrets", "key",
    "api_key", "apikey", "service_role", "authorization", "bearer", "cookie",
)
