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
"""Logging for Perigee: structlog events routed through the ``perigee`` stdlib loggers.

Library modules log through :func:`get_logger`. Events are filtered by the
effective level of the matching stdlib logger and handed to stdlib logging
with their key/values as record attributes, so an unconfigured host sees
nothing below its own root level. Global structlog configuration and the
root logger are never touched.

:func:`configure_logging` gives the ``perigee`` hierarchy its own handler::

    perigee:
      logging:
        format: json
        level:
          root: INFO
          perigee.api: DEBUG
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from perigee.config import Config

ROOT_LOGGER = "perigee"

_PROCESSORS: list[structlog.types.Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.stdlib.render_to_log_kwargs,
]

_HANDLER_MARKER = "_perigee_handler"


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger wrapping the stdlib logger *name*."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def set_level(name: str, level: str) -> None:
    """Set the log level for a specific stdlib logger."""
    logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(config: Config) -> logging.Handler:
    """Attach a structlog-formatted handler to the ``perigee`` logger.

    Reads ``perigee.logging.format`` (``console`` or ``json``) and the
    ``perigee.logging.level`` section, where ``root`` names the level of the
    ``perigee`` logger itself. Calling it again replaces the earlier handler.
    Output goes to stderr and stops propagating to the host's root logger.
    """
    levels = dict(config.get_section("perigee.logging.level"))
    root_level = str(levels.pop("root", "INFO"))
    fmt = str(config.get("perigee.logging.format", "console")).lower()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(fmt),
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_MARKER, True)

    logger = logging.getLogger(ROOT_LOGGER)
    for old in [h for h in logger.handlers if getattr(h, _HANDLER_MARKER, False)]:
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.propagate = False

    set_level(ROOT_LOGGER, root_level)
    for module, level in levels.items():
        set_level(module, str(level))
    return handler
