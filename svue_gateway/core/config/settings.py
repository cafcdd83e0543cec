# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gateway configuration loaded from the environment.

Each concern has its own BaseSettings class with an env prefix; Settings
nests them and is built once per process by get_settings(). A ``.env``
file in the working directory is read as well.

Example:
    >>> from svue_gateway.core.config.settings import get_settings
    >>> get_settings().studentvue.endpoint_path
    '/Service/PXPCommunication.asmx'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TokenSettings(BaseSettings):
    """Session token configuration.

    The token key is a base64-encoded 128-bit key shared by every worker
    process. Tokens minted by one process must decrypt in all others, so
    the key is never generated at startup.

    Attributes:
        key: Base64-encoded AES-128 key (``ENKEY``).
        lifetime_hours: Lifetime of a session created from Basic credentials.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOKEN_",
        extra="ignore",
    )

    key: SecretStr | None = Field(
        default=None,
        validation_alias="ENKEY",
    )
    lifetime_hours: int = 24


class StudentVueSettings(BaseSettings):
    """Upstream StudentVue (Edupoint PXP) configuration.

    Attributes:
        district_url: Host of the district StudentVue deployment.
        timeout: Upstream request timeout in seconds.
        version_key: Static ``edupointkeyversion`` value. When unset the key
            is fetched from ``version_key_url`` on every call.
        version_key_url: URL returning the current version key as plain text.
    """

    model_config = SettingsConfigDict(
        env_prefix="STUDENTVUE_",
        extra="ignore",
    )

    district_url: str = "md-mcps-psv.edupoint.com"
    timeout: float = 30.0
    version_key: str | None = None
    version_key_url: str = "https://axum-svue.fly.dev/akey"

    @property
    def endpoint_path(self) -> str:
        """Path of the PXP communication service on a district host."""
        return "/Service/PXPCommunication.asmx"


class CORSSettings(BaseSettings):
    """Cross-origin access for browser clients.

    Attributes:
        origins: Allowed origins, comma separated; ``*`` for any.
        allow_credentials: Whether browsers may send cookies. The gateway
            authenticates by header, so this stays off.
        allow_methods: Methods allowed on preflight.
        allow_headers: Request headers allowed on preflight.
        expose_headers: Response headers scripts may read; must include
            ``set-token``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        extra="ignore",
    )

    origins: str = "*"
    allow_credentials: bool = False
    allow_methods: list[str] = ["GET", "OPTIONS"]
    allow_headers: list[str] = ["Authorization"]
    expose_headers: list[str] = ["set-token"]

    @property
    def origins_list(self) -> list[str]:
        """Split ``origins`` on commas, dropping blanks."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """HTTP server options used by ``python -m svue_gateway``.

    Attributes:
        host: Bind address.
        port: Listen port.
        reload: Restart on code changes.
        gzip_minimum_size: Smallest response body (bytes) to compress.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 2727
    reload: bool = False
    gzip_minimum_size: int = 500


class Settings(BaseSettings):
    """Top-level gateway settings.

    Attributes:
        environment: Deployment stage; production enforces a token key.
        debug: Serves the OpenAPI docs and uses console log output.
        log_level: Level for gateway loggers.
        token: Session token settings.
        studentvue: Upstream service settings.
        cors: CORS settings.
        api: HTTP server settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    token: TokenSettings = Field(default_factory=TokenSettings)
    studentvue: StudentVueSettings = Field(default_factory=StudentVueSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def require_token_key_in_production(self) -> Self:
        """Refuse a production configuration without ``ENKEY``.

        Raises:
            ValueError: If environment is production and no key is set.
        """
        if self.environment == "production" and self.token.key is None:
            raise ValueError(
                "Token key must be configured in production. "
                "Set the ENKEY environment variable."
            )
        return self

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build the settings once and return the same instance afterwards."""
    return Settings()


def clear_settings_cache() -> None:
    """Forget the cached settings so the next get_settings() rereads the environment."""
    get_settings.cache_clear()
