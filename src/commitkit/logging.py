# Copyright 2026 Google LLC
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
#
# SPDX-License-Identifier: Apache-2.0

"""Structured logging for commitkit.

Configures `structlog <https://www.structlog.org/>`_ with two output modes:

- **Console** (default): colored when stderr is a TTY, human-readable.
- **JSON** (``json_log=True``): one JSON object per line.

Both modes write to stderr. The parser itself never calls
:func:`configure_logging`; it only emits to the logger it is given::

    from commitkit.commit_parsing import Parser, with_logger
    from commitkit.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    parser = Parser(with_logger(get_logger('commitkit.parser')))
    parser.parse(b'feat: add OAuth2')
"""

from __future__ import annotations

import logging
import sys

import structlog

# Added to every parse event before rendering.
_EVENT_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt='iso'),
)


def _level(*, verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Route commitkit's structlog events to stderr.

    At ``INFO`` every recognised production is logged; ``verbose`` adds
    body lines, ``quiet`` keeps only ``parse failed`` errors. Calling
    it again replaces the previous setup.

    Args:
        verbose: Enable debug-level output.
        quiet: Only warnings and errors.
        json_log: One JSON object per line instead of console output.
    """
    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        ),
    )
    logging.basicConfig(handlers=[handler], level=_level(verbose=verbose, quiet=quiet), force=True)

    structlog.configure(
        processors=[*_EVENT_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = 'commitkit') -> structlog.stdlib.BoundLogger:
    """Return a structlog logger suitable for :func:`~commitkit.commit_parsing.with_logger`."""
    return structlog.get_logger(name)


__all__ = [
    'configure_logging',
    'get_logger',
]
