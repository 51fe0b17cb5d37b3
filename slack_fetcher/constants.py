"""Shared constants for the Slack message fetcher."""

# Slack Web API
DEFAULT_PAGE_SIZE = 1000
DEFAULT_CHANNEL_TYPES = "public_channel"
CHANNELS_KEY = "channels"
MESSAGES_KEY = "messages"

# Output
DEFAULT_OUTPUT_FILENAME = "allMessages.json"
DEFAULT_BUCKET_DESTINATION = "allMessages.json"
JSON_MIME_TYPE = "application/json"

# Firestore
FIRESTORE_DEFAULT_DATABASE = "(default)"
FIRESTORE_MESSAGES_SUBCOLLECTION = "messages"
FIRESTORE_MAX_BATCH_WRITES = 500
FIRESTORE_AUTO_ID_LENGTH = 20

# Sinks
SINK_FILE = "file"
SINK_BUCKET = "bucket"
SINK_FIRESTORE = "firestore"
VALID_SINKS = (SINK_FILE, SINK_BUCKET, SINK_FIRESTORE)

# Environment variables
ENV_SLACK_TOKEN = "SLACK_TOKEN"
ENV_PROJECT_ID = "GOOGLE_CLOUD_PROJECT"
ENV_CREDENTIALS = "GOOGLE_APPLICATION_CREDENTIALS"
ENV_SINK = "SLACK_FETCHER_SINK"
ENV_BUCKET = "SLACK_FETCHER_BUCKET"
ENV_COLLECTION = "SLACK_FETCHER_COLLECTION"

# Google API scopes
STORAGE_SCOPES = ["https://www.googleapis.com/auth/devstorage.read_write"]
FIRESTORE_SCOPES = ["https://www.googleapis.com/auth/datastore"]

# HTTP status codes
HTTP_OK = 200
HTTP_FORBIDDEN = 403
HTTP_RATE_LIMIT = 429
HTTP_SERVER_ERROR_MIN = 500

# Slack error codes that need a specific hint
SLACK_AUTH_ERRORS = ("invalid_auth", "not_authed", "token_revoked", "account_inactive")
SLACK_SCOPE_ERROR = "missing_scope"
SLACK_RATE_LIMIT_ERROR = "ratelimited"
