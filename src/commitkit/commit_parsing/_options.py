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

"""Parser options.

A parser is configured once, before first use, by applying option
functions in order to a private mutable builder. The result is a frozen
:class:`ParserConfig` snapshot::

    cfg = build_config(with_types(TypeConfig.CONVENTIONAL), with_best_effort())
    assert cfg == ParserConfig(types=TypeConfig.CONVENTIONAL, best_effort=True)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import structlog

from commitkit.commit_parsing._types import TypeConfig


class ParseMode(Enum):
    """How far the grammar engine scans."""

    FULL = 'full'
    HEADER = 'header'


@dataclass(frozen=True)
class ParserConfig:
    """Immutable parser settings.

    Attributes:
        types: The header type vocabulary.
        best_effort: Return the partial message along with the error
            when the header was fully captured before the failure.
        mode: ``FULL`` for header, body and footers; ``HEADER`` to stop
            at the first line terminator.
        logger: Optional structlog logger receiving parse events.
    """

    types: TypeConfig = TypeConfig.MINIMAL
    best_effort: bool = False
    mode: ParseMode = ParseMode.FULL
    logger: structlog.stdlib.BoundLogger | None = None


class ParserOptions:
    """Mutable builder that option functions act upon."""

    def __init__(self, base: ParserConfig | None = None) -> None:
        """Start from ``base`` or from the defaults."""
        base = base or ParserConfig()
        self.types = base.types
        self.best_effort = base.best_effort
        self.mode = base.mode
        self.logger = base.logger

    def freeze(self) -> ParserConfig:
        """Return the immutable snapshot of the current settings."""
        return ParserConfig(
            types=self.types,
            best_effort=self.best_effort,
            mode=self.mode,
            logger=self.logger,
        )


ParserOption = Callable[[ParserOptions], None]


def with_best_effort() -> ParserOption:
    """Enable best-effort mode."""

    def apply(options: ParserOptions) -> None:
        options.best_effort = True

    return apply


def with_types(types: TypeConfig) -> ParserOption:
    """Select the header type vocabulary."""

    def apply(options: ParserOptions) -> None:
        options.types = types

    return apply


def with_logger(log: structlog.stdlib.BoundLogger | None) -> ParserOption:
    """Send parse events to ``log``."""

    def apply(options: ParserOptions) -> None:
        options.logger = log

    return apply


def with_mode(mode: ParseMode) -> ParserOption:
    """Select full-message or header-only recognition."""

    def apply(options: ParserOptions) -> None:
        options.mode = mode

    return apply


def build_config(*options: ParserOption, base: ParserConfig | None = None) -> ParserConfig:
    """Apply ``options`` in order to ``base`` (or the defaults) and freeze."""
    builder = ParserOptions(base)
    for option in options:
        option(builder)
    return builder.freeze()
