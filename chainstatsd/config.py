"""
chainstatsd - configuration validation

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
import json
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chainstatsd.errors import InvalidConfigurationError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8125


class StatsDConfig(BaseModel):
    # unknown keys are most likely typos, refuse them instead of silently ignoring
    model_config = ConfigDict(frozen=True, extra="forbid")

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    prefix: str = ""
    suffix: str = ""
    globalize: bool = False
    dns_cache: bool = False
    mock: bool = False
    global_tags: List[str] = Field(default_factory=list)


def set_and_check_config_defaults(config: Union[Dict[str, Any], StatsDConfig, None]) -> StatsDConfig:
    if isinstance(config, StatsDConfig):
        return config
    try:
        return StatsDConfig(**(config or {}))
    except ValidationError as ex:
        raise InvalidConfigurationError("Invalid statsd configuration: {}".format(ex)) from ex
    except TypeError as ex:
        raise InvalidConfigurationError("Statsd configuration must be a mapping, got {!r}".format(config)) from ex


def read_json_config_file(filename, *, add_defaults=True):
    try:
        with open(filename, "r") as fp:
            config = json.load(fp)
    except FileNotFoundError:
        raise InvalidConfigurationError("Configuration file {!r} does not exist".format(filename))
    except ValueError as ex:
        raise InvalidConfigurationError("Configuration file {!r} does not contain valid JSON: {}".format(filename, str(ex)))
    except OSError as ex:
        raise InvalidConfigurationError(
            "Configuration file {!r} can't be opened: {}".format(filename, ex.__class__.__name__)
        )

    if not add_defaults:
        return config

    return set_and_check_config_defaults(config)
