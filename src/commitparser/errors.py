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

"""Structured error system for commitparser.

Every error has a unique ``CP-NAMED-KEY`` code, a human-readable message,
and an optional hint with a suggested fix.

The parsing core only ever raises :class:`InvalidInputError`. Everything
else it encounters (patterns that do not match, empty keyword lists) is
absorbed into ``None``/empty fields. The remaining codes belong to the
outer surfaces: option resolution, the TOML config reader and the CLI.

Code categories::

    CP-INPUT-*        Raw commit text problems
    CP-CONFIG-*       Option / configuration errors

Usage::

    from commitparser.errors import CommitParserError, E

    raise CommitParserError(
        code=E.CONFIG_INVALID_KEY,
        message="Unknown key 'header_patern' in commitparser.toml",
        hint="Did you mean 'header_pattern'?",
    )
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.console import Console
from rich.markup import escape as rich_escape


class ErrorCode(str, Enum):
    """Enumeration of all commitparser diagnostic codes."""

    # Input
    INPUT_EMPTY = 'CP-INPUT-EMPTY'
    INPUT_READ_FAILED = 'CP-INPUT-READ-FAILED'

    # Configuration
    CONFIG_INVALID_KEY = 'CP-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'CP-CONFIG-INVALID-VALUE'
    CONFIG_PARSE_ERROR = 'CP-CONFIG-PARSE-ERROR'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error code.

    Attributes:
        code: The ``CP-NAMED-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class CommitParserError(Exception):
    """Base exception for all commitparser errors.

    Args:
        code: The error code from :class:`ErrorCode`.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


class InvalidInputError(CommitParserError, ValueError):
    """Raised when the raw commit text is missing or blank.

    This is the only failure the parsing core can produce.
    """

    def __init__(self, message: str = 'Expected a raw commit', hint: str = '') -> None:
        """Initialize with the fixed ``CP-INPUT-EMPTY`` code."""
        super().__init__(code=E.INPUT_EMPTY, message=message, hint=hint)


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.INPUT_EMPTY: ErrorInfo(
        code=E.INPUT_EMPTY,
        message='The raw commit message is missing or contains only whitespace.',
        hint='Pass the full commit message text (header, body and footer).',
    ),
    E.INPUT_READ_FAILED: ErrorInfo(
        code=E.INPUT_READ_FAILED,
        message='A commit message file could not be read.',
        hint='Check that the path exists and is readable, or pipe the message on stdin.',
    ),
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='An unknown parser option was supplied.',
        hint="Option names are snake_case, e.g. 'header_pattern' or 'note_keywords'.",
    ),
    E.CONFIG_INVALID_VALUE: ErrorInfo(
        code=E.CONFIG_INVALID_VALUE,
        message='A parser option has the wrong type or an uncompilable pattern.',
        hint='Patterns must be valid Python regular expressions; lists may be comma-separated strings.',
    ),
    E.CONFIG_PARSE_ERROR: ErrorInfo(
        code=E.CONFIG_PARSE_ERROR,
        message='commitparser.toml could not be read or is not valid TOML.',
        hint='Validate the file with any TOML linter.',
    ),
}


def explain(code: str) -> str | None:
    """Return a detailed explanation for an error code.

    Args:
        code: The error code string, e.g. ``"CP-INPUT-EMPTY"``.

    Returns:
        A formatted explanation string, or ``None`` if the code is unknown.
    """
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


def render_error(exc: CommitParserError, *, file: TextIO | None = None) -> None:
    """Render an error in Rust-compiler style with color.

    Output format::

        error[CP-CONFIG-INVALID-KEY]: Unknown key 'header_patern'.
          |
          = hint: Did you mean 'header_pattern'?

    Args:
        exc: The error to render.
        file: Output stream (defaults to ``sys.stderr``).
    """
    out = file or sys.stderr

    if out.isatty():
        console = Console(file=out, highlight=False)
        msg = rich_escape(exc.info.message)
        console.print(
            f'[bold red]error[/bold red][bold red]\\[{exc.code.value}][/bold red][bold]: {msg}[/bold]',
        )
        if exc.hint:
            hint = rich_escape(exc.hint)
            console.print('  [dim]|[/dim]')
            console.print(f'  [dim]=[/dim] [cyan]hint[/cyan]: {hint}')
        console.print()
    else:
        print(f'error[{exc.code.value}]: {exc.info.message}', file=out)  # noqa: T201 - CLI output
        if exc.hint:
            print('  |', file=out)  # noqa: T201 - CLI output
            print(f'  = hint: {exc.hint}', file=out)  # noqa: T201 - CLI output
        print(file=out)  # noqa: T201 - CLI output


__all__ = [
    'E',
    'ERRORS',
    'CommitParserError',
    'ErrorCode',
    'ErrorInfo',
    'InvalidInputError',
    'explain',
    'render_error',
]
