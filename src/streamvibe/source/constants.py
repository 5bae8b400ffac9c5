"""Upstream source request parameters and retry defaults."""

# Query parameters
ID_PARAM = "id"
REGION_PARAM = "cgeo"
DEFAULT_REGION_HINT = "IN"

# Auth headers
API_KEY_HEADER = "x-rapidapi-key"
API_HOST_HEADER = "x-rapidapi-host"

# Success marker carried in the response body
SUCCESS_STATUS = "OK"

# Retry defaults
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_BASE_DELAY = 1.0  # seconds, multiplied by the attempt number
DEFAULT_CONCURRENCY_LIMIT = 5
DEFAULT_REQUEST_TIMEOUT = 10.0  # seconds, per attempt
