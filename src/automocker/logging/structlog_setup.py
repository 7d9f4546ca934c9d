# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""structlog setup for automocker's own loggers, driven by ``automocker.logging.*``."""

from __future__ import annotations

import logging
from enum import Enum

import structlog
from pydantic import BaseModel, Field, field_validator

from automocker.core.config import Config, config_properties

ROOT_LOGGER = "automocker"


class LogFormat(str, Enum):
    """How structlog renders an event before handing it to stdlib logging."""

    CONSOLE = "console"
    JSON = "json"


def _level_number(name: str) -> int:
    levels = logging.getLevelNamesMapping()
    try:
        return levels[name.upper()]
    except KeyError:
        raise ValueError(f"unknown log level '{name}', expected one of {sorted(levels)}") from None


@config_properties(prefix="automocker.logging")
class LoggingProperties(BaseModel):
    """Logging settings.

    ``level`` applies to the ``automocker`` logger tree; ``loggers`` overrides
    it for individual loggers such as ``automocker.container``::

        automocker:
          logging:
            level: INFO
            format: json
            loggers:
              automocker.container: DEBUG
    """

    level: str = "WARNING"
    format: LogFormat = LogFormat.CONSOLE
    loggers: dict[str, str] = Field(default_factory=dict)

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        _level_number(value)
        return value.upper()

    @field_validator("loggers")
    @classmethod
    def _check_logger_levels(cls, value: dict[str, str]) -> dict[str, str]:
        for level in value.values():
            _level_number(level)
        return {name: level.upper() for name, level in value.items()}


def configure_logging(config: Config) -> LoggingProperties:
    """Configure structlog and the ``automocker`` stdlib loggers from *config*.

    Only automocker's logger tree gets a level; records still propagate to
    the root logger, so pytest's log capture and ``caplog`` see them.
    Returns the bound settings.
    """
    properties = config.bind(LoggingProperties)

    renderer: structlog.types.Processor
    if properties.format is LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    logging.getLogger(ROOT_LOGGER).setLevel(_level_number(properties.level))
    for name, level in properties.loggers.items():
        logging.getLogger(name).setLevel(_level_number(level))

    return properties
