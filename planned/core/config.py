import warnings
from typing import Literal

from pydantic import computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self

_INSECURE_DEFAULT = "changethis"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "planned."
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    API_PREFIX: str = "/api"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"

    # Secrets
    ENCRYPTION_KEY: str = _INSECURE_DEFAULT
    ENCRYPTION_SALT: str = "planned-integration-credentials"
    CRON_SECRET: str | None = None

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./planned.db"
    DATABASE_ECHO: bool = False

    # Asana
    ASANA_API_URL: str = "https://app.asana.com/api/1.0"
    ASANA_TOKEN_URL: str = "https://app.asana.com/-/oauth_token"
    ASANA_CLIENT_ID: str | None = None
    ASANA_CLIENT_SECRET: str | None = None
    ASANA_MIN_REQUEST_INTERVAL_SECONDS: float = 0.1

    # TimeTac
    TIMETAC_API_URL: str = "https://go.timetac.com/api/v3"

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = 30.0
    HTTP_MAX_RETRIES: int = 3
    HTTP_RETRY_BASE_DELAY_SECONDS: float = 1.0

    # Sync windows
    ABSENCE_SYNC_DAYS_AHEAD: int = 90
    TIME_ENTRY_SYNC_DAYS_BACK: int = 7
    SYNC_LOG_RETENTION_DAYS: int = 30

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cron_enabled(self) -> bool:
        return bool(self.CRON_SECRET)

    def _check_default_secret(self, var_name: str, value: str | None) -> None:
        if value == _INSECURE_DEFAULT:
            message = (
                f'The value of {var_name} is "{_INSECURE_DEFAULT}", '
                "for security, please change it, at least for deployments."
            )
            if self.ENVIRONMENT == "local":
                warnings.warn(message, stacklevel=1)
            else:
                raise ValueError(message)

    @model_validator(mode="after")
    def _enforce_non_default_secrets(self) -> Self:
        self._check_default_secret("ENCRYPTION_KEY", self.ENCRYPTION_KEY)
        self._check_default_secret("CRON_SECRET", self.CRON_SECRET)
        return self


settings = Settings()  # type: ignore
