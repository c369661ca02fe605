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

r"""Type vocabularies for the commit header.

Each :class:`~commitkit.commit_parsing.TypeConfig` selects a fixed
allowlist of header types:

.. list-table::
   :header-rows: 1

   * - Config
     - Types
   * - ``MINIMAL``
     - ``feat``, ``fix``
   * - ``CONVENTIONAL``
     - commitlint's config-conventional: ``build``, ``ci``, ``chore``,
       ``docs``, ``feat``, ``fix``, ``perf``, ``refactor``, ``revert``,
       ``style``, ``test``
   * - ``FALCO``
     - Falco's release-note types: ``build``, ``ci``, ``chore``, ``docs``,
       ``feat``, ``fix``, ``perf``, ``new``, ``revert``, ``update``,
       ``test``, ``rule``
   * - ``FREE_FORM``
     - any non-empty run of type characters

Types are matched case-insensitively and stored lower-cased.

Pure implementation: no I/O, no logging, no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass

from commitkit.commit_parsing._types import TypeConfig

MINIMAL_TYPES: frozenset[str] = frozenset({'feat', 'fix'})

CONVENTIONAL_TYPES: frozenset[str] = frozenset({
    'build',
    'ci',
    'chore',
    'docs',
    'feat',
    'fix',
    'perf',
    'refactor',
    'revert',
    'style',
    'test',
})

FALCO_TYPES: frozenset[str] = frozenset({
    'build',
    'ci',
    'chore',
    'docs',
    'feat',
    'fix',
    'perf',
    'new',
    'revert',
    'update',
    'test',
    'rule',
})

# ASCII letters, digits, "_" and "-".
TYPE_CHARS: frozenset[int] = frozenset(b'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-')


def _prefixes(words: frozenset[str]) -> frozenset[str]:
    return frozenset(word[:i] for word in words for i in range(1, len(word) + 1))


@dataclass(frozen=True)
class Vocabulary:
    """A set of legal header types.

    Attributes:
        config: The selector this vocabulary was built from.
        types: The allowlist, or ``None`` when any type is accepted.
    """

    config: TypeConfig
    types: frozenset[str] | None
    prefixes: frozenset[str] | None = None

    def __contains__(self, token: object) -> bool:
        if not isinstance(token, str) or not token:
            return False
        if self.types is None:
            return all(ord(c) in TYPE_CHARS for c in token)
        return token.lower() in self.types

    def could_start(self, prefix: str) -> bool:
        """Whether some legal type starts with ``prefix`` (case-insensitive)."""
        if self.prefixes is None:
            return True
        return prefix.lower() in self.prefixes


def _make(config: TypeConfig, types: frozenset[str] | None) -> Vocabulary:
    return Vocabulary(config=config, types=types, prefixes=None if types is None else _prefixes(types))


VOCABULARIES: dict[TypeConfig, Vocabulary] = {
    TypeConfig.MINIMAL: _make(TypeConfig.MINIMAL, MINIMAL_TYPES),
    TypeConfig.CONVENTIONAL: _make(TypeConfig.CONVENTIONAL, CONVENTIONAL_TYPES),
    TypeConfig.FALCO: _make(TypeConfig.FALCO, FALCO_TYPES),
    TypeConfig.FREE_FORM: _make(TypeConfig.FREE_FORM, None),
}


def vocabulary_for(config: TypeConfig) -> Vocabulary:
    """Return the vocabulary selected by ``config``."""
    return VOCABULARIES[config]
