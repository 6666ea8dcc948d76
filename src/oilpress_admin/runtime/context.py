"""Active configuration for the current thread or task.

The configuration loaded at import time is the default; tests and scripts
can swap it, or layer a partial override on top of it, without touching
global state seen by other tasks.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel

from src.oilpress_admin.runtime.config.config_data import ConfigData
from src.oilpress_admin.runtime.config.config_template import load_templated_yaml
from src.oilpress_admin.runtime.settings import EnvironmentVariables


@dataclass
class AppContext:
    config: ConfigData


def load_config_from_environment() -> ConfigData:
    """Load the file named by ``APP_CONFIG_FILE``, or built-in defaults if it is absent."""
    env = EnvironmentVariables()
    path = Path(env.config_file)
    if not path.exists():
        logger.warning("Config file {} not found; using defaults", path)
        return ConfigData()
    return load_templated_yaml(path, env_mode=env.environment)


_app_context: ContextVar[AppContext] = ContextVar(
    "oilpress_app_context", default=AppContext(config=load_config_from_environment())
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    return _app_context.set(context)


def get_config() -> ConfigData:
    """Configuration visible to the caller."""
    return get_context().config


def set_config(config: ConfigData) -> None:
    """Replace the whole configuration for the current context."""
    set_context(replace(get_context(), config=config))


def _explicit_values(model: BaseModel) -> dict[str, Any]:
    """Values assigned on ``model`` or any model nested in it.

    Nested sections appear only when something inside them was assigned,
    so defaults on an override never mask the current configuration.
    """
    values: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_values(value)
            if nested:
                values[name] = nested
            elif name in model.model_fields_set:
                values[name] = value.model_dump()
        elif name in model.model_fields_set:
            values[name] = value
    return values


def _deep_merge(base: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in changes.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def merge_config(base: ConfigData, override: ConfigData) -> ConfigData:
    """``base`` with every value explicitly assigned on ``override`` applied."""
    return ConfigData.model_validate(_deep_merge(base.model_dump(), _explicit_values(override)))


@contextmanager
def with_context(config_override: ConfigData | None = None) -> Iterator[None]:
    """Apply ``config_override`` on top of the current configuration for a block.

    Example:
        override = ConfigData()
        override.compression.threshold_bytes = 1024
        with with_context(override):
            assert get_config().compression.threshold_bytes == 1024
    """
    if config_override is None:
        yield
        return
    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    token = set_context(replace(get_context(), config=merge_config(get_config(), config_override)))
    try:
        yield
    finally:
        _app_context.reset(token)
