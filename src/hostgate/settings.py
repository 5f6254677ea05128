"""
hostgate.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Describe IP policies, same-host extras and the opaque token table as typed models.
- Hide token material from repr/logging.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class IpPolicySettings(BaseModel):
    # Address literals stay strings here; registries parse them one by one so a single
    # bad entry never fails the whole load.
    include_same_host: bool = False
    allowed_addresses: list[str] = Field(default_factory=list)


class TokenSettings(BaseModel):
    user_id: str = ""
    roles: list[str] = Field(default_factory=list)
    # Empty list = token usable from any origin.
    allowed_addresses: list[str] = Field(default_factory=list)


class Settings(BaseSettings):
    """
    Enterprise pattern:
    - Strict env-driven configuration, with an optional JSON file for the bulky tables
    - Defaults safe for local dev
    - Single settings object injected across layers
    """

    model_config = SettingsConfigDict(
        env_prefix="HOSTGATE_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        json_file="hostgate.json",
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "hostgate"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Realm advertised in the bearer challenge; None = use the request Host header.
    auth_realm: str | None = None

    # Same-host detection extras for hairpin NAT / elastic IP setups.
    additional_same_host_addresses: list[str] = Field(default_factory=list)

    ip_policies: dict[str, IpPolicySettings] = Field(default_factory=dict)

    # Opaque bearer token -> principal table.
    tokens: dict[str, TokenSettings] = Field(default_factory=dict, repr=False)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Env wins over the JSON file so deployments can patch single values.
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls, json_file=_config_file(settings_cls)),
            file_secret_settings,
        )


def _config_file(settings_cls: type[BaseSettings]) -> str | Path | None:
    # Read at load time, not import time, so the variable can be set after import.
    return os.environ.get("HOSTGATE_CONFIG_FILE") or settings_cls.model_config.get("json_file")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars and the JSON file for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Every other module depends on this one; keep field names stable since they double
# as env var names. Dict-valued fields are easiest to pass as JSON, e.g.
# HOSTGATE_IP_POLICIES='{"Partner1": {"allowed_addresses": ["203.0.113.10"]}}'
# (nested env keys would be lower-cased, which breaks case-sensitive policy names).
