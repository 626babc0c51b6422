import logging
import sys

import uvicorn
from config import ApplicationConfig, InvalidCredentials, load_store_credentials

try:
    load_store_credentials(ApplicationConfig.STORE_CREDENTIALS)
except InvalidCredentials as exc:
    logging.basicConfig(level=logging.ERROR)
    logging.getLogger("api").error("Failed to parse store credentials: %s", exc)
    sys.exit(1)

from src.api.app import create_app  # noqa: E402

app = create_app(ApplicationConfig)

if __name__ == "__main__":
    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        reload=True,
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )
