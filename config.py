import json
import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class InvalidCredentials(Exception):
    """Store credentials are missing or cannot be parsed"""


def load_store_credentials(raw) -> dict:
    """
    Parse the document-store credentials.

    Accepts a mapping (inline YAML) or a JSON string, as the service-account
    document is usually handed over through an environment variable.

    Raises:
        InvalidCredentials: if the value is not a JSON object with a project_id
    """
    if isinstance(raw, dict):
        credentials = raw
    else:
        try:
            credentials = json.loads(raw or "")
        except (TypeError, ValueError) as exc:
            raise InvalidCredentials(f"Store credentials are not valid JSON: {exc}") from exc

    if not isinstance(credentials, dict):
        raise InvalidCredentials("Store credentials must be a JSON object")
    if not credentials.get("project_id"):
        raise InvalidCredentials("Store credentials must include a project_id")
    return credentials


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./strata.db")
    STORE_CREDENTIALS = os.environ.get(
        "STORE_CREDENTIALS",
        data.get("STORE_CREDENTIALS", '{"project_id": "strata-local"}'),
    )
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Storage
    MAX_BATCH_SIZE = int(data.get("MAX_BATCH_SIZE", 500))
    READ_RETRY_ATTEMPTS = int(data.get("READ_RETRY_ATTEMPTS", 3))

    # Notification email hand-off
    EMAIL_SERVICE_URL = data.get("EMAIL_SERVICE_URL", "")
    EMAIL_MAX_ATTEMPTS = int(data.get("EMAIL_MAX_ATTEMPTS", 3))
    EMAIL_RETRY_BASE_DELAY = float(data.get("EMAIL_RETRY_BASE_DELAY", 1.0))

    # Subscriptions
    TRIAL_DAYS = int(data.get("TRIAL_DAYS", 30))
    DEFAULT_MONTHLY_RATE = float(data.get("DEFAULT_MONTHLY_RATE", 79.95))
