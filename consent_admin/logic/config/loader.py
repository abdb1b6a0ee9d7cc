"""
Configuration loading.

Reads the YAML config file named by --config or CONSENT_ADMIN_CONFIG after
loading .env files from the standard locations. Environment variables never
get overridden by .env contents.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from consent_admin.logic.exceptions import ConfigurationError
from consent_admin.schemas.config import ConsentAdminConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CONSENT_ADMIN_CONFIG"
SECRET_SALT_ENV_VAR = "CONSENT_ADMIN_SECRET_SALT"

# Priority order: ./.env (highest), ~/consent_admin/.env, /etc/consent_admin/.env (lowest)
ENV_FILE_PATHS = [
    Path.cwd() / ".env",
    Path.home() / "consent_admin" / ".env",
    Path("/etc/consent_admin/.env"),
]


def load_env_files() -> None:
    for env_path in ENV_FILE_PATHS:
        if env_path.exists():
            load_dotenv(env_path, override=False)


def config_from_mapping(data: Dict[str, Any]) -> ConsentAdminConfig:
    """
    Validate a raw configuration mapping.

    Raises:
        ConfigurationError: With the offending key(s) when validation fails
    """
    data = dict(data)
    salt = os.environ.get(SECRET_SALT_ENV_VAR)
    if salt:
        data["secret_salt"] = salt
    try:
        return ConsentAdminConfig.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid consent admin configuration: {problems}") from e


def load_config(config_path: Optional[Union[str, Path]] = None) -> ConsentAdminConfig:
    """
    Load and validate the module configuration.

    Args:
        config_path: YAML file; defaults to $CONSENT_ADMIN_CONFIG

    Raises:
        ConfigurationError: If no file is given, it cannot be read, or it is invalid
    """
    load_env_files()

    path_value = config_path or os.environ.get(CONFIG_ENV_VAR)
    if not path_value:
        raise ConfigurationError(f"No configuration file given (use --config or set {CONFIG_ENV_VAR})")

    path = Path(path_value)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Configuration file {path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")

    logger.info(f"Configuration loaded from: {path}")
    return config_from_mapping(data)
