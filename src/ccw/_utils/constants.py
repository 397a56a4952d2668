# Environment variables
ENV_USERNAME = "CCW_USERNAME"
ENV_PASSWORD = "CCW_PASSWORD"
ENV_CLIENT_ID = "CCW_CLIENT_ID"
ENV_CLIENT_SECRET = "CCW_CLIENT_SECRET"

# Default endpoints
DEFAULT_TOKEN_URL = "https://cloudsso.cisco.com/as/token.oauth2"
DEFAULT_QUOTE_BASE_URL = "https://api.cisco.com/commerce/QUOTING/v1"
DEFAULT_TIMEOUT = 10.0

# Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_ACCEPT = "Accept"
HEADER_CONTENT_TYPE = "Content-Type"
CONTENT_TYPE_XML = "application/xml"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"

# Token refresh margin, in seconds
TOKEN_EXPIRY_MARGIN = 5 * 60

LOGGER_NAME = "ccw"
