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

r"""Grammar engine for Conventional Commits v1.0.0.

A single-pass, left-to-right scanner over the raw bytes of one commit
message::

    message     := header (BLANKLINE body)? (BLANKLINE footers)?
    header      := type scope? "!"? ":" SP description
    scope       := "(" [^()\n]+ ")"
    body        := paragraphs separated by blank lines
    footers     := footer (NEWLINE footer)*
    footer      := token (": " | " #") value | "BREAKING CHANGE: " value
    token       := word-run | "BREAKING-CHANGE"

Productions commit into a mutable :class:`Draft` as soon as they match;
nothing is ever un-committed. The first mismatch raises
:class:`~commitkit.errors.ParseError` positioned at the byte where no
production can continue, leaving the draft as it was at that point so
the caller can decide whether to salvage it.

Disambiguation between body and footers: a line opens the footer block
only if it starts a paragraph and reads ``<token>: `` or ``<token> #``.
From then on every non-blank line must be a footer.

In ``HEADER`` mode the engine stops after the description, without
looking at the rest of the input.

Pure implementation: the only side effect is emitting events to the
optional structlog logger from the parser configuration.
"""

from __future__ import annotations

from commitkit.commit_parsing._options import ParseMode, ParserConfig
from commitkit.commit_parsing._types import BREAKING_CHANGE_TOKEN, CommitMessage, Footers, TypeConfig
from commitkit.commit_parsing._vocabulary import TYPE_CHARS, vocabulary_for
from commitkit.errors import ErrorKind, ParseError, Position

NEWLINE = 0x0A
SPACE = 0x20
TAB = 0x09
COLON = ord(':')
BANG = ord('!')
LPAREN = ord('(')
RPAREN = ord(')')

# Footer tokens share the type character class.
TOKEN_CHARS = TYPE_CHARS

BREAKING_CHANGE_SPACED = b'BREAKING CHANGE'
FOOTER_SEPARATORS: tuple[bytes, ...] = (b': ', b' #')
# The spaced breaking-change token only takes the colon form.
BREAKING_CHANGE_SEPARATORS: tuple[bytes, ...] = (b': ',)


def show(byte: int) -> str:
    """Render a single byte for an error message."""
    if byte == NEWLINE:
        return '\\n'
    if 0x20 <= byte < 0x7F:
        return chr(byte)
    return f'\\x{byte:02x}'


class Draft:
    """The commit message under construction.

    Mutable on purpose: fields are filled in as productions match and
    the draft is frozen into a :class:`CommitMessage` once scanning
    stops, successfully or not.
    """

    def __init__(self) -> None:
        """Start empty."""
        self.type = ''
        self.description = ''
        self.scope: str | None = None
        self.exclamation = False
        self.body: str | None = None
        self.footers: list[tuple[str, list[str]]] = []
        self.footer_index: dict[str, int] = {}

    def minimal(self) -> bool:
        """Whether both type and description were captured."""
        return self.type != '' and self.description != ''

    def add_footer(self, token: str, value: str) -> None:
        """Append ``value`` under ``token``, keeping first-seen token order."""
        if token in self.footer_index:
            self.footers[self.footer_index[token]][1].append(value)
        else:
            self.footer_index[token] = len(self.footers)
            self.footers.append((token, [value]))

    def add_body_line(self, line: str, blank_lines: int) -> None:
        """Append a body line preceded by ``blank_lines`` empty lines."""
        if self.body is None:
            self.body = line
        else:
            self.body += '\n' * (blank_lines + 1) + line

    def freeze(self, type_config: TypeConfig) -> CommitMessage:
        """Return the immutable message."""
        return CommitMessage(
            type=self.type,
            description=self.description,
            scope=self.scope,
            exclamation=self.exclamation,
            body=self.body,
            footers=Footers(self.footers),
            type_config=type_config,
        )


class Machine:
    """Scanner state for one parse call.

    Each call to :meth:`Parser.parse` builds its own machine, so the
    cursor, the draft and the error state are never shared.

    Args:
        data: The raw commit message.
        config: The parser configuration snapshot for this call.
    """

    def __init__(self, data: bytes, config: ParserConfig) -> None:
        """Prepare to scan ``data``."""
        self.data = data
        self.n = len(data)
        self.p = 0
        self.config = config
        self.vocabulary = vocabulary_for(config.types)
        self.log = config.logger
        self.draft = Draft()

    def text(self, start: int, end: int) -> str:
        """Decode ``data[start:end]``."""
        return self.data[start:end].decode('utf-8', errors='replace')

    def error(self, kind: ErrorKind, message: str, offset: int) -> ParseError:
        """Build a positioned error."""
        return ParseError(kind, message, Position.at(self.data, offset))

    def got(self, offset: int) -> str:
        """Describe what sits at ``offset`` for an error message."""
        if offset >= self.n:
            return 'end of input'
        return f"'{show(self.data[offset])}' character"

    def emit(self, event: str, **fields: object) -> None:
        """Send an info event to the configured logger, if any."""
        if self.log is not None:
            self.log.info(event, **fields)

    def freeze(self) -> CommitMessage:
        """Freeze whatever the draft holds."""
        return self.draft.freeze(self.config.types)

    def run(self) -> None:
        """Scan the whole input.

        Raises:
            ParseError: At the first byte no production accepts.
        """
        if self.n == 0:
            raise self.error(ErrorKind.EMPTY_INPUT, 'empty input', 0)
        self.header()
        if self.config.mode is ParseMode.HEADER:
            return
        if self.header_end():
            self.blocks()

    # Header

    def header(self) -> None:
        """Match ``type scope? "!"? ":" SP description``."""
        self.type_token()
        self.scope()
        self.exclamation()
        self.colon()
        self.separator()
        self.description()

    def type_token(self) -> None:
        """Match the longest run that is still a prefix of a legal type."""
        data, start = self.data, self.p
        bounded = self.vocabulary.types is not None
        p = start
        while p < self.n and data[p] in TYPE_CHARS:
            if bounded and not self.vocabulary.could_start(self.text(start, p + 1)):
                break
            p += 1
        token = self.text(start, p)
        if token not in self.vocabulary:
            if p == self.n:
                raise self.error(
                    ErrorKind.INVALID_TYPE,
                    f"incomplete commit message type after '{show(data[p - 1])}' character",
                    p,
                )
            raise self.error(
                ErrorKind.INVALID_TYPE,
                f"illegal '{show(data[p])}' character in commit message type",
                p,
            )
        self.p = p
        self.draft.type = token.lower()
        self.emit('valid commit message type', type=self.draft.type)

    def scope(self) -> None:
        """Match an optional ``(scope)`` right after the type."""
        data = self.data
        if self.p >= self.n or data[self.p] != LPAREN:
            return
        start = p = self.p + 1
        while p < self.n and SPACE <= data[p] < 0x7F and data[p] not in (LPAREN, RPAREN):
            p += 1
        if p == self.n:
            raise self.error(
                ErrorKind.MALFORMED_SCOPE,
                "expecting closing parentheses (')') character, got end of input",
                p,
            )
        if data[p] != RPAREN:
            raise self.error(ErrorKind.MALFORMED_SCOPE, f"illegal '{show(data[p])}' character in scope", p)
        if p == start:
            raise self.error(ErrorKind.MALFORMED_SCOPE, 'empty scope', p)
        self.draft.scope = self.text(start, p)
        self.p = p + 1
        self.emit('valid commit message scope', scope=self.draft.scope)

    def exclamation(self) -> None:
        """Match an optional ``!`` marker."""
        if self.p < self.n and self.data[self.p] == BANG:
            self.draft.exclamation = True
            self.p += 1
            self.emit('valid commit message exclamation', exclamation=True)

    def colon(self) -> None:
        """Match the mandatory ``:``."""
        p = self.p
        if p < self.n and self.data[p] != COLON:
            if self.data[p] == BANG:
                raise self.error(
                    ErrorKind.MISPLACED_EXCLAMATION,
                    "breaking-change marker ('!') may appear only once",
                    p,
                )
            if self.data[p] == LPAREN and self.draft.exclamation and self.draft.scope is None:
                raise self.error(
                    ErrorKind.MISPLACED_EXCLAMATION,
                    "breaking-change marker ('!') must follow the scope",
                    p,
                )
        if p >= self.n or self.data[p] != COLON:
            raise self.error(ErrorKind.MISSING_COLON, f"expecting colon (':') character, got {self.got(p)}", p)
        self.p = p + 1

    def separator(self) -> None:
        """Match the single space after the colon."""
        p = self.p
        if p >= self.n or self.data[p] == NEWLINE:
            raise self.error(
                ErrorKind.EMPTY_DESCRIPTION,
                f"expecting a description text after ':' character, got {self.got(p)}",
                p,
            )
        if self.data[p] != SPACE:
            raise self.error(
                ErrorKind.MISSING_WHITESPACE_AFTER_COLON,
                f"expecting a white-space (' ') character, got {self.got(p)}",
                p,
            )
        self.p = p + 1

    def description(self) -> None:
        """Match the rest of the header line."""
        start = self.p
        end = self.data.find(b'\n', start)
        if end == -1:
            end = self.n
        if start == end:
            if start == self.n:
                message = "expecting a description text after ' ' character, got end of input"
            else:
                message = 'illegal newline, expecting a description text'
            raise self.error(ErrorKind.EMPTY_DESCRIPTION, message, start)
        if self.data[start] in (SPACE, TAB):
            raise self.error(
                ErrorKind.EMPTY_DESCRIPTION,
                f"expecting a description text, got '{show(self.data[start])}' character",
                start,
            )
        self.draft.description = self.text(start, end)
        self.p = end
        self.emit('valid commit message description', description=self.draft.description)

    def header_end(self) -> bool:
        """Consume the header terminator.

        Returns:
            Whether a blank line follows, so body or footers may come.
        """
        p = self.p
        if p >= self.n:
            return False
        # data[p] is the header's newline.
        p += 1
        if p == self.n:
            self.p = p
            return False
        if self.data[p] != NEWLINE:
            raise self.error(
                ErrorKind.UNEXPECTED_CONTINUATION,
                'missing a blank line after the header',
                p,
            )
        self.p = p + 1
        return True

    # Body and footers

    def blocks(self) -> None:
        """Match the body paragraphs and the footer block, line by line."""
        data, n = self.data, self.n
        p = self.p
        blank_lines = 0
        paragraph_start = True
        in_footers = False
        seen_content = False

        while p < n:
            end = data.find(b'\n', p)
            if end == -1:
                end = n
            if end == p:
                blank_lines += 1
                paragraph_start = True
                p = end + 1
                continue
            if in_footers or (paragraph_start and self.scan_footer(p, end)[0] is not None):
                in_footers = True
                self.footer(p, end)
            else:
                line = self.text(p, end)
                self.draft.add_body_line(line, blank_lines if seen_content else 0)
                if self.log is not None:
                    self.log.debug('valid commit message body content', body=line)
            seen_content = True
            blank_lines = 0
            paragraph_start = False
            p = end + 1

        self.p = n
        if not in_footers and (blank_lines > 0 or not seen_content):
            raise self.error(
                ErrorKind.MALFORMED_FOOTER_TOKEN,
                'expecting a footer trailer after blank line, got end of input',
                n,
            )

    def scan_footer(self, start: int, end: int) -> tuple[tuple[str, str] | None, int, str]:
        """Try to read ``token: value`` or ``token #value`` from one line.

        Returns:
            ``((token, value), start, '')`` on a match, otherwise
            ``(None, offset, message)`` describing the first bad byte.
        """
        data = self.data
        if data.startswith(BREAKING_CHANGE_SPACED, start, end):
            q = start + len(BREAKING_CHANGE_SPACED)
            token = BREAKING_CHANGE_TOKEN
            separators = BREAKING_CHANGE_SEPARATORS
        else:
            q = start
            while q < end and data[q] in TOKEN_CHARS:
                q += 1
            if q == start:
                return None, q, f"illegal '{show(data[q])}' character in footer token"
            token = self.text(start, q).lower()
            separators = FOOTER_SEPARATORS

        for sep in separators:
            if data.startswith(sep, q, end):
                value_start = q + len(sep)
                break
        else:
            found = 'end of line' if q == end else f"'{show(data[q])}' character"
            expected = ' or '.join(f"'{sep.decode()}'" for sep in separators)
            return None, q, f'expecting {expected} after footer token, got {found}'

        if value_start == end:
            return None, value_start, f"expecting a value for footer token '{token}', got end of line"
        return (token, self.text(value_start, end)), start, ''

    def footer(self, start: int, end: int) -> None:
        """Match one footer line strictly."""
        match, offset, message = self.scan_footer(start, end)
        if match is None:
            raise self.error(ErrorKind.MALFORMED_FOOTER_TOKEN, message, offset)
        token, value = match
        self.draft.add_footer(token, value)
        self.emit('valid commit message footer trailer', token=token, value=value)
