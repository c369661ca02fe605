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

r"""Conventional Commits parser with best-effort recovery.

:class:`Parser` drives the grammar engine and decides what to hand back
when it fails:

- **strict** (default): only the :class:`~commitkit.errors.ParseError`.
- **best-effort**: if the type and the description were both captured
  before the failure, the partial :class:`CommitMessage` *and* the
  error; otherwise only the error.

Example::

    parser = Parser(with_best_effort())
    message, error = parser.parse(b'fix: description\nno blank line')
    assert message.description == 'description'
    assert error.kind is ErrorKind.UNEXPECTED_CONTINUATION

A parser may be reused for many parse calls. Its configuration is an
immutable snapshot; the setters replace the snapshot of that instance
only, and each call reads the snapshot once when it starts.
"""

from __future__ import annotations

import dataclasses
from typing import NamedTuple

import structlog

from commitkit.commit_parsing._machine import Machine
from commitkit.commit_parsing._options import (
    ParseMode,
    ParserConfig,
    ParserOption,
    build_config,
)
from commitkit.commit_parsing._types import CommitMessage, TypeConfig
from commitkit.errors import ParseError


class ParseResult(NamedTuple):
    """Outcome of :meth:`Parser.parse`.

    Unpacks as ``(message, error)``. Both are set only for best-effort
    partial results; otherwise exactly one is.
    """

    message: CommitMessage | None
    error: ParseError | None

    @property
    def ok(self) -> bool:
        """Whether the whole input was recognised."""
        return self.error is None

    def unwrap(self) -> CommitMessage:
        """Return the message, or raise the error if parsing failed.

        Raises:
            ParseError: If parsing failed, even when a partial message exists.
            ValueError: If the result holds neither a message nor an error.
        """
        if self.error is not None:
            raise self.error
        if self.message is None:
            raise ValueError('ParseResult holds neither a message nor an error')
        return self.message


class Parser:
    """Parses commit messages under one configuration.

    Args:
        *options: Option functions applied in order, e.g.
            :func:`with_types` or :func:`with_best_effort`.
        config: A base configuration the options are applied to.
    """

    def __init__(self, *options: ParserOption, config: ParserConfig | None = None) -> None:
        """Freeze the configuration built from ``options``."""
        self._config = build_config(*options, base=config)

    @classmethod
    def from_config(cls, config: ParserConfig) -> Parser:
        """Build a parser from an existing configuration."""
        return cls(config=config)

    @property
    def config(self) -> ParserConfig:
        """The current configuration snapshot."""
        return self._config

    @property
    def best_effort(self) -> bool:
        """Whether best-effort mode is on."""
        return self._config.best_effort

    def with_best_effort(self) -> Parser:
        """Turn best-effort mode on for this instance."""
        self._config = dataclasses.replace(self._config, best_effort=True)
        return self

    def with_types(self, types: TypeConfig) -> Parser:
        """Select the type vocabulary for this instance."""
        self._config = dataclasses.replace(self._config, types=types)
        return self

    def with_logger(self, log: structlog.stdlib.BoundLogger | None) -> Parser:
        """Set the log sink for this instance."""
        self._config = dataclasses.replace(self._config, logger=log)
        return self

    def with_mode(self, mode: ParseMode) -> Parser:
        """Select full-message or header-only recognition for this instance."""
        self._config = dataclasses.replace(self._config, mode=mode)
        return self

    def parse(self, data: bytes | str) -> ParseResult:
        """Parse one commit message.

        Args:
            data: The raw message. A ``str`` is encoded as UTF-8.

        Returns:
            A :class:`ParseResult`; see the module docstring for when
            each half is set.
        """
        config = self._config
        if isinstance(data, str):
            data = data.encode('utf-8')
        machine = Machine(data, config)
        try:
            machine.run()
        except ParseError as err:
            if config.logger is not None:
                config.logger.error(
                    'parse failed',
                    kind=err.kind.value,
                    offset=err.offset,
                    line=err.line,
                    column=err.column,
                    reason=err.message,
                )
            if config.best_effort and machine.draft.minimal():
                return ParseResult(machine.freeze(), err)
            return ParseResult(None, err)
        return ParseResult(machine.freeze(), None)
