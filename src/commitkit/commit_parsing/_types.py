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

"""Pure types for commit message parsing.

This module has **zero** runtime dependencies beyond the standard library.
Everything here is a frozen dataclass, enum, or pure function: no I/O, no
logging, no side effects.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

# Canonical key for both "BREAKING CHANGE" and "BREAKING-CHANGE" trailers.
BREAKING_CHANGE_TOKEN = 'breaking-change'


class TypeConfig(Enum):
    """The vocabulary of header types a parser accepts."""

    MINIMAL = 'minimal'
    CONVENTIONAL = 'conventional'
    FALCO = 'falco'
    FREE_FORM = 'free-form'


class VersionBump(Enum):
    """Semver impact of a single commit.

    Unlike a changelog bump, a commit that is neither a feature, a fix
    nor a breaking change mandates ``UNKNOWN``: the caller decides.
    """

    UNKNOWN = 'unknown'
    PATCH = 'patch'
    MINOR = 'minor'
    MAJOR = 'major'


# Bump precedence: lower index = higher precedence.
BUMP_PRECEDENCE: list[VersionBump] = [
    VersionBump.MAJOR,
    VersionBump.MINOR,
    VersionBump.PATCH,
    VersionBump.UNKNOWN,
]


def max_bump(a: VersionBump, b: VersionBump) -> VersionBump:
    """Return the higher-precedence bump.

    >>> max_bump(VersionBump.MINOR, VersionBump.PATCH)
    <VersionBump.MINOR: 'minor'>
    >>> max_bump(VersionBump.UNKNOWN, VersionBump.MAJOR)
    <VersionBump.MAJOR: 'major'>
    """
    a_idx = BUMP_PRECEDENCE.index(a)
    b_idx = BUMP_PRECEDENCE.index(b)
    return BUMP_PRECEDENCE[min(a_idx, b_idx)]


class Footers(Mapping[str, tuple[str, ...]]):
    """Immutable, ordered trailer block: token -> values.

    Stored as an ordered tuple of ``(token, values)`` pairs with a
    side index for lookup, so both the order of distinct tokens and
    the order of values under one token follow the input. Equality
    with another :class:`Footers` is order-sensitive.

    Example::

        footers = Footers((('refs', ('1', '2')), ('reviewed-by', ('Z',))))
        assert footers['refs'] == ('1', '2')
        assert list(footers) == ['refs', 'reviewed-by']
    """

    __slots__ = ('_index', '_items')

    def __init__(self, items: Iterable[tuple[str, Iterable[str]]] = ()) -> None:
        """Build from ``(token, values)`` pairs, merging repeated tokens."""
        merged: list[tuple[str, list[str]]] = []
        index: dict[str, int] = {}
        for token, values in items:
            if token in index:
                merged[index[token]][1].extend(values)
            else:
                index[token] = len(merged)
                merged.append((token, list(values)))
        self._items: tuple[tuple[str, tuple[str, ...]], ...] = tuple((token, tuple(values)) for token, values in merged)
        self._index: dict[str, int] = index

    def __getitem__(self, token: str) -> tuple[str, ...]:
        return self._items[self._index[token]][1]

    def __iter__(self) -> Iterator[str]:
        return (token for token, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, token: object) -> bool:
        return token in self._index

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Footers):
            return self._items == other._items
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f'Footers({dict(self._items)!r})'

    def pairs(self) -> tuple[tuple[str, tuple[str, ...]], ...]:
        """Return the ordered ``(token, values)`` pairs."""
        return self._items


@dataclass(frozen=True)
class CommitMessage:
    """A parsed Conventional Commit.

    Produced by :class:`~commitkit.commit_parsing.Parser`, either complete
    (successful parse) or partial (best-effort parse that stopped after
    the header was captured).

    Attributes:
        type: The commit type, lower-cased (e.g. ``"feat"``). Empty only
            in messages that are not well-formed.
        description: The header text after ``": "``.
        scope: The scope between parentheses, or ``None``.
        exclamation: Whether the header carried the ``!`` marker.
        body: The free text between header and footers, or ``None``.
        footers: The trailer block; tokens are lower-cased and both
            breaking-change spellings share the ``breaking-change`` key.
        type_config: The vocabulary used to parse the message.
    """

    type: str = ''
    description: str = ''
    scope: str | None = None
    exclamation: bool = False
    body: str | None = None
    footers: Footers = field(default_factory=Footers)
    type_config: TypeConfig = TypeConfig.MINIMAL

    @property
    def ok(self) -> bool:
        """Whether the message is minimally well-formed (type and description)."""
        return self.type != '' and self.description != ''

    @property
    def is_breaking_change(self) -> bool:
        """Whether the header has ``!`` or a breaking-change trailer exists."""
        return self.exclamation or BREAKING_CHANGE_TOKEN in self.footers

    @property
    def is_feat(self) -> bool:
        """Whether the message introduces a feature.

        Falco's ``new`` type counts as a feature.
        """
        if self.type_config is TypeConfig.FALCO and self.type == 'new':
            return True
        return self.type == 'feat'

    @property
    def is_fix(self) -> bool:
        """Whether the message is a bug fix."""
        return self.type == 'fix'

    @property
    def has_footer(self) -> bool:
        """Whether the message has at least one trailer."""
        return len(self.footers) > 0

    @property
    def breaking_description(self) -> str:
        """The reason for the breaking change, or ``''``.

        Taken from the first breaking-change trailer, falling back to
        the description when only ``!`` marks the break.
        """
        values = self.footers.get(BREAKING_CHANGE_TOKEN)
        if values:
            return values[0]
        if self.exclamation:
            return self.description
        return ''

    def version_bump(self, strategy: VersionBumpStrategy | None = None) -> VersionBump:
        """Return the version bump this message mandates.

        Args:
            strategy: A pure function mapping a message to a bump.
                Defaults to :func:`default_strategy`.
        """
        if strategy is None:
            return default_strategy(self)
        return strategy(self)


VersionBumpStrategy = Callable[[CommitMessage], VersionBump]


def default_strategy(message: CommitMessage) -> VersionBump:
    """Breaking wins, then features, then fixes."""
    if message.is_breaking_change:
        return VersionBump.MAJOR
    if message.is_feat:
        return VersionBump.MINOR
    if message.is_fix:
        return VersionBump.PATCH
    return VersionBump.UNKNOWN


# Types that bump the patch version under the conventional strategy.
CONVENTIONAL_PATCH_TYPES: frozenset[str] = frozenset({'fix', 'perf'})


def conventional_strategy(message: CommitMessage) -> VersionBump:
    """Like :func:`default_strategy`, but ``perf`` is a patch too."""
    if message.is_breaking_change:
        return VersionBump.MAJOR
    if message.is_feat:
        return VersionBump.MINOR
    if message.type in CONVENTIONAL_PATCH_TYPES:
        return VersionBump.PATCH
    return VersionBump.UNKNOWN


def aggregate_bump(
    messages: Iterable[CommitMessage],
    strategy: VersionBumpStrategy | None = None,
) -> VersionBump:
    """Return the strongest bump mandated by a series of commits.

    >>> aggregate_bump([])
    <VersionBump.UNKNOWN: 'unknown'>
    """
    result = VersionBump.UNKNOWN
    for message in messages:
        result = max_bump(result, message.version_bump(strategy))
        if result is VersionBump.MAJOR:
            break
    return result
