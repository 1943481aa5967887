from dotenv import load_dotenv
from pydantic import BaseModel
import os

load_dotenv()


class Settings(BaseModel):
    """Process configuration read from the environment (.env supported)"""

    mongo_uri: str = os.getenv("MONGO_URI", "mongodb://127.0.0.1:27017")
    mongo_db: str = os.getenv("MONGO_DB", "wanderlust")
    mongo_timeout_ms: int = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Empty means console only
    log_dir: str = os.getenv("LOG_DIR", "")


settings = Settings()
