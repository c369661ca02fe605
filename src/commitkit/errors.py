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

"""Structured error system for commitkit.

Every error has a unique ``CK-NAMED-KEY`` code, a human-readable message,
and an optional hint with a suggested fix. Grammar failures additionally
carry the exact position of the offending byte.

Code categories::

    CK-EMPTY-INPUT, CK-INVALID-TYPE, ...   Grammar errors (ErrorKind)
    CK-CONFIG-*                            Configuration errors (ErrorCode)

Usage::

    from commitkit.errors import ErrorKind, ParseError

    result = parser.parse(b'feat:')
    assert result.error.kind is ErrorKind.EMPTY_DESCRIPTION
    print(result.error.line, result.error.column)
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.console import Console
from rich.markup import escape as rich_escape


class ErrorKind(str, Enum):
    """The grammar production that failed to match."""

    EMPTY_INPUT = 'CK-EMPTY-INPUT'
    INVALID_TYPE = 'CK-INVALID-TYPE'
    MALFORMED_SCOPE = 'CK-MALFORMED-SCOPE'
    MISPLACED_EXCLAMATION = 'CK-MISPLACED-EXCLAMATION'
    MISSING_COLON = 'CK-MISSING-COLON'
    MISSING_WHITESPACE_AFTER_COLON = 'CK-MISSING-WHITESPACE-AFTER-COLON'
    EMPTY_DESCRIPTION = 'CK-EMPTY-DESCRIPTION'
    MALFORMED_FOOTER_TOKEN = 'CK-MALFORMED-FOOTER-TOKEN'
    UNEXPECTED_CONTINUATION = 'CK-UNEXPECTED-CONTINUATION'


class ErrorCode(str, Enum):
    """Diagnostic codes outside the grammar."""

    CONFIG_INVALID_KEY = 'CK-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'CK-CONFIG-INVALID-VALUE'
    CONFIG_PARSE_ERROR = 'CK-CONFIG-PARSE-ERROR'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error code.

    Attributes:
        code: The ``CK-NAMED-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorKind | ErrorCode
    message: str
    hint: str = ''


@dataclass(frozen=True)
class Position:
    """Where a failure occurred.

    Attributes:
        offset: 0-based byte offset into the input.
        line: 1-based line number.
        column: 1-based column within the line, in bytes.
    """

    offset: int
    line: int
    column: int

    @classmethod
    def at(cls, data: bytes, offset: int) -> Position:
        """Compute the line and column of ``offset`` in ``data``."""
        line_start = data.rfind(b'\n', 0, offset) + 1
        return cls(
            offset=offset,
            line=data.count(b'\n', 0, offset) + 1,
            column=offset - line_start + 1,
        )


class CommitKitError(Exception):
    """Base exception for all commitkit errors.

    Args:
        code: The error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(self, code: ErrorKind | ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorKind | ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def message(self) -> str:
        """The human-readable message, without the code prefix."""
        return self.info.message

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


class ParseError(CommitKitError):
    """A grammar failure at a precise position.

    Args:
        kind: The failing production.
        message: What was expected and what was found.
        position: The offending byte.
        hint: Optional fix suggestion; defaults to the catalog hint.
    """

    def __init__(self, kind: ErrorKind, message: str, position: Position, hint: str = '') -> None:
        """Initialize with a kind, message, and position."""
        if not hint and kind in ERRORS:
            hint = ERRORS[kind].hint
        self.position = position
        super().__init__(kind, f'{message}: line={position.line}, col={position.column}', hint)

    @property
    def kind(self) -> ErrorKind:
        """The failing production."""
        return ErrorKind(self.info.code)

    @property
    def offset(self) -> int:
        """0-based byte offset of the failure."""
        return self.position.offset

    @property
    def line(self) -> int:
        """1-based line of the failure."""
        return self.position.line

    @property
    def column(self) -> int:
        """1-based column of the failure."""
        return self.position.column


ERRORS: dict[ErrorKind | ErrorCode, ErrorInfo] = {
    ErrorKind.EMPTY_INPUT: ErrorInfo(
        code=ErrorKind.EMPTY_INPUT,
        message='The commit message is empty.',
        hint='Write a header such as "fix: describe the change".',
    ),
    ErrorKind.INVALID_TYPE: ErrorInfo(
        code=ErrorKind.INVALID_TYPE,
        message='The header type is not part of the configured vocabulary.',
        hint='Start the header with an allowed type, e.g. "feat" or "fix".',
    ),
    ErrorKind.MALFORMED_SCOPE: ErrorInfo(
        code=ErrorKind.MALFORMED_SCOPE,
        message='The scope is empty, nested, multi-line, or not closed.',
        hint='Use a single-line scope in parentheses, e.g. "feat(api): ...".',
    ),
    ErrorKind.MISPLACED_EXCLAMATION: ErrorInfo(
        code=ErrorKind.MISPLACED_EXCLAMATION,
        message='The breaking-change marker is not directly before the colon.',
        hint='Write "type(scope)!: description" with a single "!".',
    ),
    ErrorKind.MISSING_COLON: ErrorInfo(
        code=ErrorKind.MISSING_COLON,
        message='The type (and scope) must be followed by a colon.',
        hint='Separate the type from the description with ": ".',
    ),
    ErrorKind.MISSING_WHITESPACE_AFTER_COLON: ErrorInfo(
        code=ErrorKind.MISSING_WHITESPACE_AFTER_COLON,
        message='The colon must be followed by exactly one space.',
        hint='Write "type: description", not "type:description".',
    ),
    ErrorKind.EMPTY_DESCRIPTION: ErrorInfo(
        code=ErrorKind.EMPTY_DESCRIPTION,
        message='The description is missing or starts with whitespace.',
        hint='Add a short summary right after ": ".',
    ),
    ErrorKind.MALFORMED_FOOTER_TOKEN: ErrorInfo(
        code=ErrorKind.MALFORMED_FOOTER_TOKEN,
        message='A line in the footer block is not a "token: value" or "token #value" trailer.',
        hint='Move free text above the trailers, or fix the trailer token.',
    ),
    ErrorKind.UNEXPECTED_CONTINUATION: ErrorInfo(
        code=ErrorKind.UNEXPECTED_CONTINUATION,
        message='The header is followed by text without a blank line.',
        hint='Insert a blank line between the header and the body.',
    ),
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='Unknown key in the commitkit configuration.',
        hint='Valid keys are "types", "best_effort" and "mode".',
    ),
    E.CONFIG_INVALID_VALUE: ErrorInfo(
        code=E.CONFIG_INVALID_VALUE,
        message='A commitkit configuration key has a value of the wrong type or an unknown choice.',
        hint='"types" and "mode" take a string choice; "best_effort" takes true or false.',
    ),
    E.CONFIG_PARSE_ERROR: ErrorInfo(
        code=E.CONFIG_PARSE_ERROR,
        message='The configuration file could not be read or is not valid TOML.',
        hint='Check the file permissions and the TOML syntax.',
    ),
}


def explain(code: str) -> str | None:
    """Return a detailed explanation for an error code.

    Args:
        code: The error code string, e.g. ``"CK-MISSING-COLON"``.

    Returns:
        A formatted explanation string, or ``None`` if the code is unknown.
    """
    error_code: ErrorKind | ErrorCode
    try:
        error_code = ErrorKind(code)
    except ValueError:
        try:
            error_code = ErrorCode(code)
        except ValueError:
            return None

    info = ERRORS.get(error_code)
    if info is None:
        return f'{code}: No detailed explanation available.'

    lines = [f'{code}: {info.message}']
    if info.hint:
        lines.append(f'  Hint: {info.hint}')
    return '\n'.join(lines)


def _source_excerpt(error: ParseError, source: bytes) -> tuple[str, str]:
    """Return the failing line and a caret marker under the failing byte."""
    start = source.rfind(b'\n', 0, error.offset) + 1
    end = source.find(b'\n', start)
    if end == -1:
        end = len(source)
    text = source[start:end].decode('utf-8', errors='replace')
    return text, ' ' * (error.column - 1) + '^'


def render_error(
    exc: CommitKitError,
    *,
    source: bytes | str | None = None,
    file: TextIO | None = None,
) -> None:
    """Render an error in Rust-compiler style with color.

    Output format::

        error[CK-MISSING-COLON]: expecting colon (':') character, got '>' character: line=1, col=4
          |
        1 | fix> typo
          |    ^
          = hint: Separate the type from the description with ": ".

    Args:
        exc: The error to render.
        source: The parsed input; when given for a :class:`ParseError`,
            the failing line is shown with a caret.
        file: Output stream (defaults to ``sys.stderr``).
    """
    out = file or sys.stderr
    excerpt: tuple[str, str] | None = None
    gutter = ''
    if isinstance(exc, ParseError) and source is not None:
        data = source.encode('utf-8') if isinstance(source, str) else source
        excerpt = _source_excerpt(exc, data)
        gutter = str(exc.line)
    pad = ' ' * len(gutter)

    if out.isatty():
        console = Console(file=out, highlight=False)
        msg = rich_escape(exc.info.message)
        console.print(
            f'[bold red]error[/bold red][bold red]\\[{exc.code.value}][/bold red][bold]: {msg}[/bold]',
        )
        if excerpt is not None:
            console.print(f' {pad} [dim]|[/dim]')
            console.print(f' [dim]{gutter} |[/dim] {rich_escape(excerpt[0])}')
            console.print(f' {pad} [dim]|[/dim] [bold red]{excerpt[1]}[/bold red]')
        if exc.hint:
            hint = rich_escape(exc.hint)
            console.print(f' {pad} [dim]|[/dim]')
            console.print(f' {pad} [dim]=[/dim] [cyan]hint[/cyan]: {hint}')
        console.print()
    else:
        print(f'error[{exc.code.value}]: {exc.info.message}', file=out)  # noqa: T201 - diagnostic output
        if excerpt is not None:
            print(f' {pad} |', file=out)  # noqa: T201 - diagnostic output
            print(f' {gutter} | {excerpt[0]}', file=out)  # noqa: T201 - diagnostic output
            print(f' {pad} | {excerpt[1]}', file=out)  # noqa: T201 - diagnostic output
        if exc.hint:
            print(f' {pad} |', file=out)  # noqa: T201 - diagnostic output
            print(f' {pad} = hint: {exc.hint}', file=out)  # noqa: T201 - diagnostic output
        print(file=out)  # noqa: T201 - diagnostic output


__all__ = [
    'E',
    'ERRORS',
    'CommitKitError',
    'ErrorCode',
    'ErrorInfo',
    'ErrorKind',
    'ParseError',
    'Position',
    'explain',
    'render_error',
]
