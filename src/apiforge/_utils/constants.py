# Environment variables
ENV_BASE_URL = "APIFORGE_BASE_URL"
ENV_TIMEOUT = "APIFORGE_TIMEOUT"
ENV_RETRIES = "APIFORGE_RETRIES"
ENV_DEBUG = "APIFORGE_DEBUG"

# Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_USER_AGENT = "User-Agent"

# Defaults
DEFAULT_TIMEOUT = 30.0
REDACTED_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie"})
