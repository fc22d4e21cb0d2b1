"""
Configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file). Nothing in
the verifier reads these on its own: the host builds a CaptchaSettings and
hands it to RecaptchaVerifier.from_settings().
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from errors import ConfigurationError


class CaptchaSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    recaptcha_public_key: str = ""
    recaptcha_private_key: str = ""

    # Forces every check to pass. Meant for test environments only.
    recaptcha_skip_validation: bool = False

    recaptcha_use_ssl: bool = True
    # Overrides the host picked by recaptcha_use_ssl when set
    recaptcha_verify_url: Optional[str] = None
    recaptcha_timeout_seconds: float = Field(default=5.0, gt=0)

    def require_keys(self) -> "CaptchaSettings":
        if not self.recaptcha_public_key or not self.recaptcha_private_key:
            raise ConfigurationError(
                "reCAPTCHA needs to be configured with a public & private key."
            )
        return self


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"
    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production

    @model_validator(mode="after")
    def _default_format_for_env(self) -> "LoggingSettings":
        if self.is_production and "log_format" not in self.model_fields_set:
            self.log_format = "json"
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
