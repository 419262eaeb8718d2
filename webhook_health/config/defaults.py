"""Default input values for the health check."""

DEFAULT_API_URL = "https://api.eventdock.app"
DEFAULT_FAIL_THRESHOLD = 90.0
DEFAULT_TIMEOUT_SECONDS = 30.0

# Local-run fallbacks, read when no flag or config file provides a value
API_KEY_ENV = "EVENTDOCK_API_KEY"
API_URL_ENV = "EVENTDOCK_API_URL"
