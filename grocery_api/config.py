from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    customers_file: str = Field(default="data/customers.json", alias="CUSTOMERS_FILE")

    # An empty key disables the ApiKey header check.
    api_key: str = Field(default="", alias="API_KEY")
    api_key_header: str = Field(default="ApiKey", alias="API_KEY_HEADER")
    minimum_request_timeout_ms: int = Field(default=100, alias="MINIMUM_REQUEST_TIMEOUT_MS")

    login_username: str = Field(default="user", alias="LOGIN_USERNAME")
    login_password: str = Field(default="a733tc0d3r", alias="LOGIN_PASSWORD")
    jwt_secret: str = Field(default="change-me", alias="JWT_SECRET")
    jwt_cookie_name: str = Field(default="grocery_session", alias="JWT_COOKIE_NAME")
    jwt_exp_minutes: int = Field(default=60 * 24 * 7, alias="JWT_EXP_MINUTES")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    enable_metrics_endpoint: bool = Field(default=True, alias="ENABLE_METRICS_ENDPOINT")

    @property
    def customers_path(self) -> Path:
        return Path(self.customers_file)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
