# settings.py
import logging
from typing import List, Optional

from dynaconf import Dynaconf, Validator, ValidationError

from errors import ConfigError
from utils import is_valid_url, is_valid_uuid

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = [
    "firewalla.host",
    "firewalla.api_token",
    "unifi.host",
    "unifi.api_key",
    "unifi.site_id",
]

VALIDATORS = [
    Validator("general.sync_interval_minutes", default=60, is_type_of=int, gte=0,
              messages={"operations": "general.sync_interval_minutes must be a valid number >= 0"}),
    Validator("general.request_timeout", default=30, is_type_of=(int, float), gt=0),
    Validator("unifi.page_size", default=100, is_type_of=int, gt=0),
]

def load_config(settings_files: Optional[List[str]] = None) -> Dynaconf:
    """Loads settings from the TOML file(s), a .env file and NETSYNC_* env vars.

    Nested keys are set from the environment with a double underscore,
    e.g. NETSYNC_UNIFI__api_key.
    """
    return Dynaconf(
        envvar_prefix="NETSYNC",
        settings_files=settings_files or ['config/settings.toml'],
        load_dotenv=True,
    )

def validate_config(config: Dynaconf) -> None:
    """Validates the loaded settings.

    Raises:
        ConfigError: on the first problem found.
    """
    missing = [key for key in REQUIRED_SETTINGS if not config.get(key)]
    if missing:
        raise ConfigError(f"Missing required settings: {', '.join(missing)}")

    for key in ("firewalla.host", "unifi.host"):
        if not is_valid_url(config.get(key)):
            raise ConfigError(f"Invalid host URL for {key}: {config.get(key)}")

    if not is_valid_uuid(config.get("unifi.site_id")):
        raise ConfigError("unifi.site_id must be a valid UUID")

    config.validators.register(*VALIDATORS)
    try:
        config.validators.validate()
    except ValidationError as err:
        raise ConfigError(str(err)) from err
