DEFAULT_ENDPOINT = "openapi.tuyaus.com"
API_HOST_PREFIX = "openapi."
ASSET_HOST_PREFIX = "images."

SIGN_METHOD = "HMAC-SHA256"
SIGNATURE_HEADERS = "Signature-Headers"

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_TOKEN_RETRY_ATTEMPTS = 3
TOKEN_EXPIRED_CODE = 1100
SDK_ERROR_CODE = "100000"

TOKEN_PATH = "/v1.0/token"
TOKEN_EXPIRY_MARGIN_SECONDS = 60
