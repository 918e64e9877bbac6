"""
talent_sdk/utils/settings.py

WHAT THIS FILE IS FOR
---------------------
This module defines the runtime configuration used to build a
TalentClient without hard-coding credentials
(`TalentClient.from_settings()`).

It is responsible for:
- Defining all supported configuration fields (via Pydantic BaseSettings)
- Loading default values from parameters/parameters.yaml
- Overriding defaults with environment variables (TALENT_SDK_*)
- Validating required settings (credentials and data-center URL)
- Exposing a cached, fully-validated Settings object

LOAD & PRECEDENCE MODEL
-----------------------
Configuration is loaded in the following order (last wins):

1) YAML defaults from:
       parameters/parameters.yaml
   or from the file named by TALENT_SDK_PARAMETERS_PATH
2) Environment variables:
       TALENT_SDK_*

Credentials normally come from the environment. The YAML file is for
non-secret defaults (data-center URL, timeout, geocoding provider).

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- Building the client (see talent_sdk/client.py)
- HTTP calls
- Logging configuration (the host application owns structlog setup)

DESIGN INTENT
-------------
- Direct construction of TalentClient(...) never touches this module;
  settings are one way in, not a requirement
- Any missing required setting fails fast, naming every missing field
- Secrets (service_key, geocode_provider_key) are never logged
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml
from pydantic import AnyHttpUrl, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from talent_sdk.schemas.geocoding import GeocodeProvider

logger = structlog.get_logger(__name__)

PARAMETERS_PATH = Path(__file__).resolve().parents[2] / "parameters" / "parameters.yaml"
PARAMETERS_PATH_ENV = "TALENT_SDK_PARAMETERS_PATH"

REQUIRED_FIELDS = ("account_id", "service_key", "data_center_url")


class Settings(BaseSettings):
    """
    Runtime settings for the talent SDK.

    Load order / precedence:
        1) YAML defaults (parameters/parameters.yaml)
        2) Environment variables (TALENT_SDK_*), overriding YAML
    """

    model_config = SettingsConfigDict(
        env_prefix="TALENT_SDK_",
        extra="ignore",
    )

    # Credentials
    # Optional at the model level to allow partial env loading;
    # enforced explicitly in get_settings().
    account_id: Optional[str] = None
    service_key: Optional[str] = None

    # Data center
    data_center_url: Optional[AnyHttpUrl] = None
    api_version: str = "v10"

    # Default geocoding credentials for parse/geocode calls
    geocode_provider: GeocodeProvider = GeocodeProvider.GOOGLE
    geocode_provider_key: Optional[str] = None

    timeout_seconds: float = 120.0

    show_full_request_body_in_exceptions: bool = Field(
        default=False,
        description=(
            "If true, every TalentError carries the full JSON request body. "
            "Increases memory use; resume payloads can be large."
        ),
    )


def parameters_path() -> Path:
    override = os.environ.get(PARAMETERS_PATH_ENV)
    return Path(override) if override else PARAMETERS_PATH


@lru_cache(maxsize=8)
def _load_yaml_parameters(path: Path) -> Dict[str, Any]:
    """
    Load base configuration from a parameters YAML file.

    A missing, unreadable or non-mapping file yields no defaults.
    """
    if not path.exists():
        logger.warning("parameters_yaml_missing", expected=str(path))
        return {}

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("parameters_yaml_load_error", path=str(path), error=str(exc))
        return {}

    if not isinstance(data, dict):
        logger.warning("parameters_yaml_not_dict", path=str(path), type=type(data).__name__)
        return {}

    logger.info("parameters_yaml_loaded", path=str(path))
    return data


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Construct and return the final validated Settings object.

    Cached per process. Tests that change the environment call
    `get_settings.cache_clear()`.
    """
    path = parameters_path()

    # 1) YAML defaults
    yaml_data = _load_yaml_parameters(path)

    # 2) env overrides (partial)
    try:
        env_data = Settings().model_dump(exclude_unset=True)
        logger.info("settings_loaded_env_only_partial", fields=sorted(env_data.keys()))
    except ValidationError as exc:
        logger.warning("settings_env_validation_error", errors=exc.errors(include_input=False))
        env_data = {}

    # 3) merge
    merged: Dict[str, Any] = {**yaml_data, **env_data}

    # 4) enforce required fields
    missing = [name for name in REQUIRED_FIELDS if not merged.get(name)]
    if missing:
        logger.error("settings_missing_required", missing=missing, yaml_path=str(path))
        raise RuntimeError(
            f"Missing required settings: {', '.join(missing)}. "
            "Set them either in environment variables (TALENT_SDK_*) "
            f"or in {path}."
        )

    # 5) final validation
    settings = Settings.model_validate(merged)

    logger.info(
        "settings_loaded",
        data_center_url=str(settings.data_center_url),
        api_version=settings.api_version,
        geocode_provider=settings.geocode_provider.value,
        timeout_seconds=settings.timeout_seconds,
        show_full_request_body_in_exceptions=settings.show_full_request_body_in_exceptions,
    )

    return settings
