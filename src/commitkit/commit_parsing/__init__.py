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

r"""Commit message parsing.

This subpackage recognises `Conventional Commits v1.0.0
<https://www.conventionalcommits.org/en/v1.0.0/>`_ messages (header,
body and footers) under a selectable type vocabulary, and reports
the exact position of the first grammar violation.

Usage::

    from commitkit.commit_parsing import (
        Parser,
        TypeConfig,
        VersionBump,
        parse_commit_message,
        with_best_effort,
        with_types,
    )

    # Using the convenience function (minimal vocabulary, strict):
    message, error = parse_commit_message(b'feat(api)!: drop v1')
    assert message.scope == 'api'
    assert message.version_bump() == VersionBump.MAJOR

    # Conventional vocabulary, best-effort:
    parser = Parser(with_types(TypeConfig.CONVENTIONAL), with_best_effort())
    message, error = parser.parse(b'docs: typo\nno blank line')
    assert message.type == 'docs'
    assert error.line == 2

    # Multi-value trailers:
    message, _ = parse_commit_message(b'fix: x\n\nRefs #1\nRefs #2')
    assert message.footers['refs'] == ('1', '2')
"""

from commitkit.commit_parsing._options import (
    ParseMode,
    ParserConfig,
    ParserOption,
    ParserOptions,
    build_config,
    with_best_effort,
    with_logger,
    with_mode,
    with_types,
)
from commitkit.commit_parsing._parser import ParseResult, Parser
from commitkit.commit_parsing._types import (
    BREAKING_CHANGE_TOKEN,
    BUMP_PRECEDENCE,
    CommitMessage,
    Footers,
    TypeConfig,
    VersionBump,
    VersionBumpStrategy,
    aggregate_bump,
    conventional_strategy,
    default_strategy,
    max_bump,
)
from commitkit.commit_parsing._vocabulary import (
    CONVENTIONAL_TYPES,
    FALCO_TYPES,
    MINIMAL_TYPES,
    Vocabulary,
    vocabulary_for,
)

# Module-level singleton for convenience.
_DEFAULT_PARSER = Parser()


def parse_commit_message(data: bytes | str, *options: ParserOption) -> ParseResult:
    """Parse a single commit message.

    Convenience wrapper around :meth:`Parser.parse`. Without options it
    reuses a shared strict parser with the minimal vocabulary.

    Args:
        data: The raw commit message.
        *options: Option functions for a one-off parser.

    Returns:
        The :class:`ParseResult`.
    """
    parser = Parser(*options) if options else _DEFAULT_PARSER
    return parser.parse(data)


__all__ = [
    'BREAKING_CHANGE_TOKEN',
    'BUMP_PRECEDENCE',
    'CONVENTIONAL_TYPES',
    'CommitMessage',
    'FALCO_TYPES',
    'Footers',
    'MINIMAL_TYPES',
    'ParseMode',
    'ParseResult',
    'Parser',
    'ParserConfig',
    'ParserOption',
    'ParserOptions',
    'TypeConfig',
    'VersionBump',
    'VersionBumpStrategy',
    'Vocabulary',
    'aggregate_bump',
    'build_config',
    'conventional_strategy',
    'default_strategy',
    'max_bump',
    'parse_commit_message',
    'vocabulary_for',
    'with_best_effort',
    'with_logger',
    'with_mode',
    'with_types',
]
