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

"""Tests for commitparser.errors module."""

from __future__ import annotations

import dataclasses
import io

import pytest
from commitparser.errors import (
    ERRORS,
    CommitParserError,
    E,
    ErrorCode,
    ErrorInfo,
    InvalidInputError,
    explain,
    render_error,
)


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_all_codes_have_cp_prefix(self) -> None:
        """Every error code must start with 'CP-'."""
        for code in ErrorCode:
            assert code.value.startswith('CP-'), f'{code.name} does not start with CP-'

    def test_no_duplicate_values(self) -> None:
        """Error code values must be unique."""
        values = [c.value for c in ErrorCode]
        assert len(values) == len(set(values)), 'Duplicate error code values found'

    def test_e_alias(self) -> None:
        """E should be an alias for ErrorCode."""
        assert E is ErrorCode
        assert E.INPUT_EMPTY is ErrorCode.INPUT_EMPTY


class TestErrorInfo:
    """Tests for ErrorInfo dataclass."""

    def test_frozen(self) -> None:
        """ErrorInfo instances should be immutable."""
        assert dataclasses.is_dataclass(ErrorInfo)
        info = ErrorInfo(code=E.INPUT_EMPTY, message='test')
        with pytest.raises(dataclasses.FrozenInstanceError):
            info.__setattr__('message', 'changed')

    def test_default_hint(self) -> None:
        """Hint should default to empty string."""
        assert ErrorInfo(code=E.INPUT_EMPTY, message='test').hint == ''


class TestCommitParserError:
    """Tests for CommitParserError exception."""

    def test_message_includes_code(self) -> None:
        """Exception message should include the CP code."""
        err = CommitParserError(code=E.CONFIG_INVALID_KEY, message='bad key')
        assert 'CP-CONFIG-INVALID-KEY' in str(err)
        assert 'bad key' in str(err)

    def test_code_and_hint(self) -> None:
        """Code and hint properties expose the ErrorInfo."""
        err = CommitParserError(code=E.CONFIG_PARSE_ERROR, message='broken', hint='fix the toml')
        assert err.code is E.CONFIG_PARSE_ERROR
        assert err.hint == 'fix the toml'
        assert isinstance(err.info, ErrorInfo)


class TestInvalidInputError:
    """Tests for InvalidInputError."""

    def test_fixed_code(self) -> None:
        """InvalidInputError always carries CP-INPUT-EMPTY."""
        err = InvalidInputError()
        assert err.code is E.INPUT_EMPTY
        assert 'Expected a raw commit' in str(err)

    def test_hierarchy(self) -> None:
        """It is both a CommitParserError and a ValueError."""
        err = InvalidInputError('empty')
        assert isinstance(err, CommitParserError)
        assert isinstance(err, ValueError)


class TestErrorCatalog:
    """Tests for the ERRORS catalog."""

    def test_every_code_is_cataloged(self) -> None:
        """Every ErrorCode has a catalog entry."""
        assert set(ERRORS) == set(ErrorCode)

    def test_catalog_codes_match(self) -> None:
        """ErrorInfo.code should match the key in the ERRORS dict."""
        for code, info in ERRORS.items():
            assert info.code is code
            assert info.message, f'{code.value} has empty message'


class TestExplain:
    """Tests for the explain() function."""

    def test_known_code(self) -> None:
        """Explain should return a message for known codes."""
        result = explain('CP-CONFIG-INVALID-KEY')
        assert result is not None
        assert result.startswith('CP-CONFIG-INVALID-KEY: ')
        assert 'Hint:' in result

    def test_unknown_code(self) -> None:
        """Explain should return None for unknown codes."""
        assert explain('CP-NOPE') is None
        assert explain('INVALID') is None


class TestRenderError:
    """Tests for render_error() on a non-TTY stream."""

    def test_plain_output(self) -> None:
        """Non-TTY output is plain text with the code and hint."""
        out = io.StringIO()
        render_error(
            CommitParserError(code=E.CONFIG_INVALID_KEY, message="Unknown key 'x'", hint="Did you mean 'y'?"),
            file=out,
        )
        text = out.getvalue()
        assert "error[CP-CONFIG-INVALID-KEY]: Unknown key 'x'" in text
        assert "= hint: Did you mean 'y'?" in text

    def test_no_hint(self) -> None:
        """Without a hint only the error line is printed."""
        out = io.StringIO()
        render_error(InvalidInputError(), file=out)
        assert out.getvalue() == 'error[CP-INPUT-EMPTY]: Expected a raw commit\n\n'
