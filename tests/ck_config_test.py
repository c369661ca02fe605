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

"""Tests for commitkit.config and parser options."""

from __future__ import annotations

from pathlib import Path

import pytest
from commitkit.commit_parsing import (
    ParseMode,
    Parser,
    ParserConfig,
    TypeConfig,
    build_config,
    with_best_effort,
    with_mode,
    with_types,
)
from commitkit.config import CONFIG_FILENAME, VALID_KEYS, config_from_mapping, load_config
from commitkit.errors import E, CommitKitError


class TestBuildConfig:
    """Tests for option functions."""

    def test_defaults(self) -> None:
        """No options give the defaults."""
        assert build_config() == ParserConfig()

    def test_options_apply_in_order(self) -> None:
        """Later options override earlier ones."""
        cfg = build_config(with_types(TypeConfig.FALCO), with_types(TypeConfig.CONVENTIONAL))
        assert cfg.types is TypeConfig.CONVENTIONAL

    def test_base_is_not_mutated(self) -> None:
        """Options start from a copy of the base."""
        base = ParserConfig()
        cfg = build_config(with_best_effort(), with_mode(ParseMode.HEADER), base=base)
        assert cfg.best_effort
        assert cfg.mode is ParseMode.HEADER
        assert not base.best_effort

    def test_frozen(self) -> None:
        """ParserConfig is immutable."""
        cfg = ParserConfig()
        with pytest.raises(AttributeError):
            cfg.best_effort = True  # type: ignore[misc]


class TestConfigFromMapping:
    """Tests for config_from_mapping()."""

    def test_valid_keys(self) -> None:
        """All supported keys are known."""
        assert VALID_KEYS == {'types', 'best_effort', 'mode'}

    def test_all_keys(self) -> None:
        """Each key maps onto the snapshot."""
        cfg = config_from_mapping({'types': 'conventional', 'best_effort': True, 'mode': 'header'})
        assert cfg == ParserConfig(types=TypeConfig.CONVENTIONAL, best_effort=True, mode=ParseMode.HEADER)

    @pytest.mark.parametrize('value', ['free-form', 'free_form', 'FreeForm', 'FREE-FORM'])
    def test_free_form_spellings(self, value: str) -> None:
        """Free-form accepts common spellings."""
        assert config_from_mapping({'types': value}).types is TypeConfig.FREE_FORM

    def test_unknown_key_suggests(self) -> None:
        """A typo gets a "did you mean" hint."""
        with pytest.raises(CommitKitError) as exc_info:
            config_from_mapping({'typs': 'falco'})
        assert exc_info.value.code is E.CONFIG_INVALID_KEY
        assert "Did you mean 'types'?" in exc_info.value.hint

    def test_unknown_key_without_suggestion(self) -> None:
        """Unrelated keys list the valid ones."""
        with pytest.raises(CommitKitError) as exc_info:
            config_from_mapping({'zzz': 1})
        assert 'Valid keys are' in exc_info.value.hint

    def test_invalid_type_value(self) -> None:
        """Unknown vocabularies are rejected."""
        with pytest.raises(CommitKitError) as exc_info:
            config_from_mapping({'types': 'angular'})
        assert exc_info.value.code is E.CONFIG_INVALID_VALUE

    def test_non_string_enum_value(self) -> None:
        """Enum keys need strings."""
        with pytest.raises(CommitKitError) as exc_info:
            config_from_mapping({'mode': 1})
        assert exc_info.value.code is E.CONFIG_INVALID_VALUE

    def test_best_effort_must_be_bool(self) -> None:
        """Strings are not booleans."""
        with pytest.raises(CommitKitError) as exc_info:
            config_from_mapping({'best_effort': 'yes'})
        assert exc_info.value.code is E.CONFIG_INVALID_VALUE


class TestLoadConfig:
    """Tests for load_config()."""

    def test_no_files_gives_defaults(self, tmp_path: Path) -> None:
        """An empty directory yields the defaults."""
        assert load_config(tmp_path) == ParserConfig()

    def test_commitkit_toml(self, tmp_path: Path) -> None:
        """Flat keys in commitkit.toml."""
        (tmp_path / CONFIG_FILENAME).write_text('types = "falco"\nbest_effort = true\n', encoding='utf-8')
        cfg = load_config(tmp_path)
        assert cfg.types is TypeConfig.FALCO
        assert cfg.best_effort

    def test_pyproject_table(self, tmp_path: Path) -> None:
        """The [tool.commitkit] table of pyproject.toml."""
        (tmp_path / 'pyproject.toml').write_text(
            '[project]\nname = "x"\n\n[tool.commitkit]\nmode = "header"\n',
            encoding='utf-8',
        )
        assert load_config(tmp_path).mode is ParseMode.HEADER

    def test_pyproject_without_table(self, tmp_path: Path) -> None:
        """A pyproject.toml without the table is ignored."""
        (tmp_path / 'pyproject.toml').write_text('[project]\nname = "x"\n', encoding='utf-8')
        assert load_config(tmp_path) == ParserConfig()

    def test_commitkit_toml_wins(self, tmp_path: Path) -> None:
        """commitkit.toml takes precedence over pyproject.toml."""
        (tmp_path / CONFIG_FILENAME).write_text('types = "conventional"\n', encoding='utf-8')
        (tmp_path / 'pyproject.toml').write_text('[tool.commitkit]\ntypes = "falco"\n', encoding='utf-8')
        assert load_config(tmp_path).types is TypeConfig.CONVENTIONAL

    def test_file_path(self, tmp_path: Path) -> None:
        """A file path is read directly."""
        path = tmp_path / 'custom.toml'
        path.write_text('types = "free-form"\n', encoding='utf-8')
        assert load_config(path).types is TypeConfig.FREE_FORM

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML is a parse error."""
        (tmp_path / CONFIG_FILENAME).write_text('types = \n', encoding='utf-8')
        with pytest.raises(CommitKitError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.code is E.CONFIG_PARSE_ERROR

    def test_invalid_key_in_pyproject(self, tmp_path: Path) -> None:
        """The context names the pyproject table."""
        (tmp_path / 'pyproject.toml').write_text('[tool.commitkit]\nbest-effort = true\n', encoding='utf-8')
        with pytest.raises(CommitKitError) as exc_info:
            load_config(tmp_path)
        assert '[tool.commitkit]' in exc_info.value.message
        assert "Did you mean 'best_effort'?" in exc_info.value.hint

    def test_loaded_config_drives_parser(self, tmp_path: Path) -> None:
        """A loaded configuration configures a parser."""
        (tmp_path / CONFIG_FILENAME).write_text('types = "conventional"\n', encoding='utf-8')
        message, error = Parser.from_config(load_config(tmp_path)).parse(b'docs: readme')
        assert error is None
        assert message is not None
        assert message.type == 'docs'
