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

"""commitkit: Conventional Commits parsing for changelogs, version bumps and CI checks."""

from commitkit.commit_parsing import (
    CommitMessage,
    Footers,
    ParseMode,
    ParseResult,
    Parser,
    ParserConfig,
    TypeConfig,
    VersionBump,
    parse_commit_message,
    with_best_effort,
    with_logger,
    with_mode,
    with_types,
)
from commitkit.errors import CommitKitError, ErrorKind, ParseError, Position

__version__ = '0.1.0'

__all__ = [
    'CommitKitError',
    'CommitMessage',
    'ErrorKind',
    'Footers',
    'ParseError',
    'ParseMode',
    'ParseResult',
    'Parser',
    'ParserConfig',
    'Position',
    'TypeConfig',
    'VersionBump',
    '__version__',
    'parse_commit_message',
    'with_best_effort',
    'with_logger',
    'with_mode',
    'with_types',
]
