"""Explorer API endpoint constants."""

DEFAULT_API_URL = "https://api.etherscan.io/v2/api"
DEFAULT_CHAIN_ID = 1

# At most 5 requests per second
MIN_REQUEST_DELAY_S = 0.2
DEFAULT_REQUEST_TIMEOUT_S = 30

USER_AGENT = "contract-sources/0.1"
