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

"""Configuration reader for commitkit.

Reads parser settings from ``commitkit.toml`` (flat keys) or from the
``[tool.commitkit]`` table of ``pyproject.toml`` and returns a validated
:class:`~commitkit.commit_parsing.ParserConfig`.

Supported keys::

    types       = "conventional"   # minimal | conventional | falco | free-form
    best_effort = true             # return partial messages with the error
    mode        = "full"           # full | header

Unknown keys fail with ``CK-CONFIG-INVALID-KEY`` and a "did you mean"
hint; bad values with ``CK-CONFIG-INVALID-VALUE``.

Usage::

    from commitkit.config import load_config
    from commitkit.commit_parsing import Parser

    parser = Parser.from_config(load_config(Path('/path/to/repo')))
"""

from __future__ import annotations

import difflib
from enum import Enum
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from commitkit.commit_parsing import (
    ParseMode,
    ParserConfig,
    ParserOption,
    TypeConfig,
    build_config,
    with_best_effort,
    with_mode,
    with_types,
)
from commitkit.errors import E, CommitKitError
from commitkit.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = 'commitkit.toml'
PYPROJECT_FILENAME = 'pyproject.toml'

VALID_KEYS: frozenset[str] = frozenset({'types', 'best_effort', 'mode'})


def _suggest_key(unknown: str) -> str | None:
    """Return the closest valid key for a typo, or None."""
    matches = difflib.get_close_matches(unknown, VALID_KEYS, n=1, cutoff=0.6)
    return matches[0] if matches else None


def _parse_enum(key: str, value: Any, enum: type[Enum], context: str) -> Any:  # noqa: ANN401 - dynamic config values
    """Convert a config string into a member of ``enum``."""
    allowed = sorted(str(member.value) for member in enum)
    if not isinstance(value, str):
        raise CommitKitError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be str, got {type(value).__name__}",
            hint=f'Check the value of {key} in {context}.',
        )
    normalized = value.strip().lower().replace('_', '-')
    if normalized == 'freeform':
        normalized = 'free-form'
    for member in enum:
        if member.value == normalized:
            return member
    raise CommitKitError(
        code=E.CONFIG_INVALID_VALUE,
        message=f"{key} must be one of {allowed}, got '{value}'",
        hint=f'Use one of {", ".join(allowed)}.',
    )


def config_from_mapping(raw: dict[str, Any], *, context: str = CONFIG_FILENAME) -> ParserConfig:  # noqa: ANN401
    """Validate a plain mapping of settings into a :class:`ParserConfig`.

    Raises:
        CommitKitError: On unknown keys or invalid values.
    """
    for key in raw:
        if key not in VALID_KEYS:
            suggestion = _suggest_key(key)
            if suggestion:
                hint = f"Did you mean '{suggestion}'?"
            else:
                hint = 'Valid keys are: ' + ', '.join(sorted(VALID_KEYS))
            raise CommitKitError(
                code=E.CONFIG_INVALID_KEY,
                message=f"Unknown key '{key}' in {context}",
                hint=hint,
            )

    options: list[ParserOption] = []
    if 'types' in raw:
        options.append(with_types(_parse_enum('types', raw['types'], TypeConfig, context)))
    if 'mode' in raw:
        options.append(with_mode(_parse_enum('mode', raw['mode'], ParseMode, context)))
    if 'best_effort' in raw:
        value = raw['best_effort']
        if not isinstance(value, bool):
            raise CommitKitError(
                code=E.CONFIG_INVALID_VALUE,
                message=f"'best_effort' must be bool, got {type(value).__name__}",
                hint=f'Check the value of best_effort in {context}.',
            )
        if value:
            options.append(with_best_effort())
    return build_config(*options)


def _read_toml(path: Path) -> dict[str, Any]:  # noqa: ANN401
    """Read and parse a TOML file into plain Python values."""
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as exc:
        raise CommitKitError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to read {path}: {exc}',
        ) from exc
    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise CommitKitError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to parse {path}: {exc}',
        ) from exc
    return doc.unwrap()


def load_config(root: Path) -> ParserConfig:
    """Load parser settings from ``root``.

    ``root`` may be a directory or a file. For a directory,
    ``commitkit.toml`` wins over the ``[tool.commitkit]`` table of
    ``pyproject.toml``. When neither provides settings, the defaults
    are returned.

    Args:
        root: A directory, a ``commitkit.toml``, or a ``pyproject.toml``.

    Returns:
        A validated :class:`ParserConfig`.

    Raises:
        CommitKitError: If the file is unreadable or contains invalid config.
    """
    if root.is_dir():
        candidates = [root / CONFIG_FILENAME, root / PYPROJECT_FILENAME]
    else:
        candidates = [root]

    for path in candidates:
        if not path.is_file():
            continue
        data = _read_toml(path)
        if path.name == PYPROJECT_FILENAME:
            table = data.get('tool', {}).get('commitkit')
            if table is None:
                logger.debug('no_commitkit_table', path=str(path))
                continue
            context = f'[tool.commitkit] in {path.name}'
        else:
            table = data
            context = path.name
        cfg = config_from_mapping(table, context=context)
        logger.debug('loaded_commitkit_config', path=str(path), types=cfg.types.value, mode=cfg.mode.value)
        return cfg

    logger.debug('no_commitkit_config', path=str(root))
    return ParserConfig()


__all__ = [
    'CONFIG_FILENAME',
    'PYPROJECT_FILENAME',
    'VALID_KEYS',
    'config_from_mapping',
    'load_config',
]
