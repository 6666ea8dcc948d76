"""Read ``config.yaml`` with ``${VAR}`` placeholders resolved from the environment."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.oilpress_admin.runtime.config.config_data import ConfigData

# ${NAME}, ${NAME:-default} or ${NAME:?message}
_PLACEHOLDER = re.compile(r"\$\{(?P<name>[^}:]+)(?:(?P<op>:[-?])(?P<arg>[^}]*))?\}")

# Variables an operator has to set before uploads and logins work for real
REQUIRED_FOR_DEPLOYMENT = {
    "MEDIA_CLOUD_NAME": "Cloud name on the image host",
    "MEDIA_UPLOAD_PRESET": "Unsigned upload preset on the image host",
    "ADMIN_PASSWORD": "Password for the admin dashboard",
}


def _resolve(match: re.Match) -> str:
    name, op, arg = match.group("name"), match.group("op"), match.group("arg")
    value = os.getenv(name)
    if op == ":-":
        return arg if value is None else value
    if value is not None:
        return value
    if op == ":?":
        raise ValueError(f"Required environment variable {name}: {arg}")
    raise ValueError(f"Required environment variable {name} not set")


def substitute_env_vars(text: str) -> str:
    """Replace every placeholder in ``text``.

    ``${NAME}`` and ``${NAME:?message}`` raise ``ValueError`` when the
    variable is unset; ``${NAME:-default}`` falls back to ``default``.
    """
    return _PLACEHOLDER.sub(_resolve, text)


def apply_environment_overrides(env_mode: str) -> list[str]:
    """Copy ``<ENV>_NAME`` variables to ``NAME`` for the active environment."""
    prefix = f"{env_mode.upper()}_"
    promoted = {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix) and len(name) > len(prefix)
    }
    os.environ.update(promoted)
    return sorted(promoted)


def _warn_on_risky_values(config: ConfigData) -> None:
    if config.app.environment != "production":
        return
    if config.admin.password == "change-me":
        logger.warning("Admin password is still the default value in production")
    if not config.admin.enabled:
        logger.warning("Admin credential check is disabled in production")


def load_templated_yaml(file_path: Path, env_mode: str | None = None) -> ConfigData:
    """Parse and validate a configuration file.

    Args:
        file_path: Path to the YAML file
        env_mode: Environment whose prefixed variables take precedence;
            defaults to ``APP_ENVIRONMENT`` or ``development``

    Raises:
        ValueError: If a required variable is missing, the YAML is malformed
            or the values do not validate
        FileNotFoundError: If the file does not exist
    """
    text = Path(file_path).read_text()

    env_mode = env_mode or os.getenv("APP_ENVIRONMENT", "development")
    promoted = apply_environment_overrides(env_mode)
    logger.info("Loading {} configuration from {}", env_mode, file_path)
    if promoted:
        logger.info("Environment-specific overrides: {}", promoted)

    try:
        document = yaml.safe_load(substitute_env_vars(text))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not document:
        raise ValueError("Failed to parse YAML")

    try:
        config = ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    _warn_on_risky_values(config)
    return config


def validate_config_env_vars() -> dict[str, str]:
    """Deployment variables that are unset or empty, with what each one is for."""
    return {
        name: description
        for name, description in REQUIRED_FOR_DEPLOYMENT.items()
        if not os.getenv(name)
    }
