"""Application configuration via Pydantic Settings.

NOTE: The store endpoint, credential and database name have no defaults, so a
missing variable fails at import time rather than on the first request.
"""

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    # Store
    db_endpoint: str = Field(validation_alias="DB_ENDPOINT")
    db_key: SecretStr = Field(validation_alias="DB_KEY")
    db_name: str = Field(validation_alias="DB_NAME")
    store_timeout_seconds: float = Field(
        default=8.0, gt=0, validation_alias="STORE_TIMEOUT_SECONDS"
    )
    driver_timeout_seconds: float = Field(
        default=6.0, gt=0, validation_alias="DRIVER_TIMEOUT_SECONDS"
    )

    # Visitor counter
    visit_record_id: str = Field(
        default="portfolio-visits", validation_alias="VISIT_RECORD_ID"
    )
    visit_max_attempts: int = Field(default=5, ge=1, validation_alias="VISIT_MAX_ATTEMPTS")

    # App
    debug: bool = Field(default=False, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @model_validator(mode="after")
    def check_driver_timeout(self) -> "Settings":
        # A statement must fail in the driver before the per-call timer cancels it
        if self.driver_timeout_seconds >= self.store_timeout_seconds:
            raise ValueError("DRIVER_TIMEOUT_SECONDS must be below STORE_TIMEOUT_SECONDS")
        return self

    @property
    def database_url(self) -> URL:
        """Full SQLAlchemy URL assembled from endpoint, credential and name.

        SQLite files take no credential, so the key is ignored for them.
        """
        url = make_url(self.db_endpoint).set(database=self.db_name)
        if url.get_backend_name() == "sqlite":
            return url
        return url.set(password=self.db_key.get_secret_value() or None)


settings = Settings()
