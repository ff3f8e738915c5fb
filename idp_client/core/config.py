from __future__ import annotations

import os
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "idp_client"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"

    # Transport
    HTTP_TIMEOUT: float = 10.0
    STATE_LENGTH: int = 32

    # Generic OAuth 2.0 provider (endpoints supplied by configuration)
    OAUTH_CLIENT_ID: str | None = None
    OAUTH_CLIENT_SECRET: str | None = None
    OAUTH_REDIRECT_URI: str | None = None
    OAUTH_AUTHORIZE_URL: str | None = None
    OAUTH_TOKEN_URL: str | None = None
    OAUTH_USER_DETAILS_URL: str | None = None
    OAUTH_SCOPES: list[str] = []
    OAUTH_SCOPE_SEPARATOR: str = ","
    OAUTH_HTTP_METHOD: str = "POST"
    OAUTH_RESPONSE_FORMAT: str = "json"
    OAUTH_UID_KEY: str = "uid"

    # Google OAuth 2.0 / OpenID Connect
    GOOGLE_CLIENT_ID: str | None = None
    GOOGLE_CLIENT_SECRET: str | None = None
    GOOGLE_REDIRECT_URI: str | None = None

    @field_validator("OAUTH_HTTP_METHOD", mode="before")
    @classmethod
    def normalize_http_method(cls, v):
        """Accept lowercase method names from the environment."""
        return str(v).upper()

    @field_validator("OAUTH_RESPONSE_FORMAT", mode="before")
    @classmethod
    def normalize_response_format(cls, v):
        return str(v).lower()

    @model_validator(mode="after")
    def _validate_required_fields(self) -> BaseAppSettings:
        if self.OAUTH_HTTP_METHOD not in ("GET", "POST"):
            raise ValueError(f"OAUTH_HTTP_METHOD must be GET or POST, got {self.OAUTH_HTTP_METHOD}")
        if self.OAUTH_RESPONSE_FORMAT not in ("json", "form"):
            raise ValueError(f"OAUTH_RESPONSE_FORMAT must be json or form, got {self.OAUTH_RESPONSE_FORMAT}")

        if self.ENV.lower() == "prod":
            # A client id without its secret can never complete a token exchange
            pairs = (
                ("OAUTH_CLIENT_ID", "OAUTH_CLIENT_SECRET"),
                ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET"),
            )
            missing = [secret for client_id, secret in pairs if getattr(self, client_id) and not getattr(self, secret)]
            if missing:
                raise ValueError(f"Missing required production settings: {', '.join(missing)}")
        return self


class DevSettings(BaseAppSettings):
    ENV: str = "dev"
    LOG_LEVEL: str = "DEBUG"


class TestSettings(BaseAppSettings):
    ENV: str = "test"
    HTTP_TIMEOUT: float = 2.0


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    LOG_FORMAT: str = "json"


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()
