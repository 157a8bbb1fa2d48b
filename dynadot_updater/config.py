"""Configuration management for the Dynadot updater."""

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dynadot_updater.models import ReconcilePolicy

DEFAULT_ENV_FILE = ".env"
SUBDOMAIN_PREFIX = "SUBDOMAIN"


class EnvironmentSettings(BaseSettings):
    """Fixed environment variables read at startup."""

    model_config = SettingsConfigDict(env_file=DEFAULT_ENV_FILE, extra="ignore")

    api_key: str | None = Field(default=None, validation_alias="DYNADOT_API_KEY")
    domain: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DYNADOT_UPDT_DOMAINS", "DYNADOT_DOMAIN"),
    )
    default_subdomain: str = Field(default="www", validation_alias="DEFAULT_SUBDOMAIN")
    manual_ip: str = Field(default="", validation_alias="MANUAL_IP")
    merge_entries: bool = Field(default=False, validation_alias="MERGE_ENTRIES")
    log_verbose: bool = Field(default=False, validation_alias="LOG_VERBOSE")
    log_api_url: bool = Field(default=False, validation_alias="LOG_API_URL")
    request_timeout: float = Field(default=30.0, validation_alias="REQUEST_TIMEOUT")
    ip_lookup_url: str = Field(
        default="https://api.ipify.org", validation_alias="IP_LOOKUP_URL"
    )

    @field_validator("manual_ip", "default_subdomain", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str | None) -> str | None:
        return v.strip() if isinstance(v, str) else v

    @field_validator("merge_entries", "log_verbose", "log_api_url", mode="before")
    @classmethod
    def empty_flag_is_false(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return False
        return v


class UpdaterConfig(BaseModel):
    """Immutable configuration for one update run."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    domain: str
    default_subdomain: str = "www"
    manual_ip: str = ""
    policy: ReconcilePolicy = ReconcilePolicy.REBUILD
    log_verbose: bool = False
    log_api_url: bool = False
    request_timeout: float = 30.0
    ip_lookup_url: str = "https://api.ipify.org"
    # Raw SUBDOMAIN<n>, SUBDOMAIN<n>_TYPE and SUBDOMAIN<n>_VALUE keys.
    subdomain_env: dict[str, str] = Field(default_factory=dict)


class ConfigurationError(ValueError):
    """Required settings are missing."""


def load_env_settings(env_file: Path | str | None = DEFAULT_ENV_FILE) -> EnvironmentSettings:
    """Load environment settings from .env and environment variables."""
    return EnvironmentSettings(_env_file=env_file)


def collect_subdomain_env(
    environ: Mapping[str, str] | None = None,
    env_file: Path | str | None = DEFAULT_ENV_FILE,
) -> dict[str, str]:
    """Capture the numbered subdomain keys.

    Values from the process environment override those from ``env_file``.
    """
    merged: dict[str, str] = {}
    if env_file is not None and Path(env_file).is_file():
        merged.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    merged.update(os.environ if environ is None else environ)

    return {
        key: value for key, value in merged.items() if key.startswith(SUBDOMAIN_PREFIX)
    }


def load_config(env_file: Path | str | None = DEFAULT_ENV_FILE) -> UpdaterConfig:
    """Build the run configuration once, at startup."""
    settings = load_env_settings(env_file)

    missing = []
    if not settings.api_key:
        missing.append("DYNADOT_API_KEY")
    if not settings.domain:
        missing.append("DYNADOT_UPDT_DOMAINS")
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

    return UpdaterConfig(
        api_key=settings.api_key,
        domain=settings.domain.strip(),
        default_subdomain=settings.default_subdomain or "www",
        manual_ip=settings.manual_ip,
        policy=ReconcilePolicy.MERGE if settings.merge_entries else ReconcilePolicy.REBUILD,
        log_verbose=settings.log_verbose,
        log_api_url=settings.log_api_url,
        request_timeout=settings.request_timeout,
        ip_lookup_url=settings.ip_lookup_url,
        subdomain_env=collect_subdomain_env(env_file=env_file),
    )
