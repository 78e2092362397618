from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Measure Store"

    # Listener; PORT has no default and must be provided at startup
    host: str = "0.0.0.0"
    port: Optional[int] = None

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "test"
    mongo_collection: str = "data"
    mongo_timeout_ms: int = 5000

    # Assets
    template_path: Path = Field(default=PACKAGE_DIR / "templates" / "table.html")
    static_dir: Path = Field(default=PACKAGE_DIR / "static")

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None


settings = Settings()
