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

"""Configurable commit message parser.

Turns a free-form commit message into a structured record: header,
body, footer, notes, issue references, mentions, revert metadata and
user-defined fields. What counts as a note, a reference or a header part
is driven by patterns and keyword lists, so one parser covers plain
Conventional Commits, GitHub/GitLab merge commits and custom keyword
sets.

Usage::

    from commitparser import CommitMessageParser, parse

    # Using the convenience function (default options):
    commit = parse('feat(auth): add OAuth2\\n\\nCloses #42')
    assert commit['type'] == 'feat'
    assert commit.references[0].issue == '42'

    # Using a parser instance (options resolved and compiled once):
    parser = CommitMessageParser(issue_prefixes=['#', 'gh-'])
    commit = parser.parse('fix: null pointer\\n\\nfixes gh-7')
"""

from collections.abc import Mapping
from typing import Any

from commitparser._types import FIXED_FIELDS, Commit, Note, Reference, layer_fields
from commitparser.errors import CommitParserError, InvalidInputError
from commitparser.options import ParserOptions, resolve_options
from commitparser.parser import SCISSOR, CommitMessageParser, parse_commit
from commitparser.regex import ParsingRegex, compile_regex

__version__ = '0.1.0'


def parse(
    raw: str | None,
    options: ParserOptions | Mapping[str, Any] | None = None,  # noqa: ANN401 - dynamic option values
    **overrides: Any,  # noqa: ANN401 - dynamic option values
) -> Commit:
    """Parse a single raw commit message.

    Args:
        raw: The full commit message.
        options: Resolved or partial options (see
            :func:`~commitparser.options.resolve_options`).
        **overrides: Option values applied on top of *options*.

    Returns:
        The parsed :class:`Commit`.

    Raises:
        InvalidInputError: If *raw* is missing or blank.
        CommitParserError: If the options cannot be resolved.
    """
    resolved = resolve_options(options, **overrides)
    return parse_commit(raw, resolved, compile_regex(resolved))


__all__ = [
    'FIXED_FIELDS',
    'SCISSOR',
    'Commit',
    'CommitMessageParser',
    'CommitParserError',
    'InvalidInputError',
    'Note',
    'ParserOptions',
    'ParsingRegex',
    'Reference',
    '__version__',
    'compile_regex',
    'layer_fields',
    'parse',
    'parse_commit',
    'resolve_options',
]
