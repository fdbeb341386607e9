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

"""Parser options and the option-resolution step.

The parsing core only ever sees a fully resolved :class:`ParserOptions`.
:func:`resolve_options` is the step in front of it: it lays a partial
mapping (or keyword overrides) over the defaults, splits comma-separated
lists, and compiles string patterns.

Defaults::

    header_pattern         ^(\\w*)(?:\\(([\\w$.\\-*/ ]*)\\))?: (.*)$
    header_correspondence  type, scope, subject
    reference_actions      close, closes, closed, fix, fixes, fixed,
                           resolve, resolves, resolved
    issue_prefixes         #
    note_keywords          BREAKING CHANGE
    field_pattern          ^-(.*?)-$
    revert_pattern         ^Revert\\s"([\\s\\S]*)"\\s*This reverts commit (\\w*)\\.
    revert_correspondence  header, hash
    merge_pattern          (none)
    comment_char           (none)

An explicit ``None`` switches a dimension off: ``note_keywords=None``
disables note detection, ``reference_actions=None`` treats every line as
one actionless sentence, ``field_pattern=None`` disables other fields.

Usage::

    from commitparser.options import resolve_options

    opts = resolve_options({'note_keywords': 'BREAKING CHANGE, BREAKING-CHANGE'})
    opts = resolve_options(merge_pattern=r"^Merge branch '(\\w+)'$", merge_correspondence='source')
"""

from __future__ import annotations

import dataclasses
import difflib
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from commitparser.errors import E, CommitParserError

# A pattern option as accepted from callers.
PatternLike = str | re.Pattern[str] | None

# A list option as accepted from callers: a list or a comma-separated string.
ListLike = str | Iterable[str] | None

DEFAULT_HEADER_PATTERN: re.Pattern[str] = re.compile(r'^(\w*)(?:\(([\w$.\-*/ ]*)\))?: (.*)$', re.ASCII)
DEFAULT_HEADER_CORRESPONDENCE: tuple[str, ...] = ('type', 'scope', 'subject')
DEFAULT_REFERENCE_ACTIONS: tuple[str, ...] = (
    'close',
    'closes',
    'closed',
    'fix',
    'fixes',
    'fixed',
    'resolve',
    'resolves',
    'resolved',
)
DEFAULT_ISSUE_PREFIXES: tuple[str, ...] = ('#',)
DEFAULT_NOTE_KEYWORDS: tuple[str, ...] = ('BREAKING CHANGE',)
DEFAULT_FIELD_PATTERN: re.Pattern[str] = re.compile(r'^-(.*?)-$')
DEFAULT_REVERT_PATTERN: re.Pattern[str] = re.compile(r'^Revert\s"([\s\S]*)"\s*This reverts commit (\w*)\.', re.ASCII)
DEFAULT_REVERT_CORRESPONDENCE: tuple[str, ...] = ('header', 'hash')


@dataclass(frozen=True)
class ParserOptions:
    """Fully resolved, immutable parser configuration.

    Instances are hashable, so the compiled matcher bundle can be cached
    per distinct options value.

    Attributes:
        merge_pattern: Pattern matching a merge header (GitHub/GitLab
            merge commits). When it matches, the next non-blank line is
            parsed as the header.
        merge_correspondence: Field names for ``merge_pattern``'s groups.
        header_pattern: Pattern decomposing the header line.
        header_correspondence: Field names for ``header_pattern``'s groups.
        reference_actions: Action keywords (``closes``, ``fixes``) that
            start a reference sentence. Case-insensitive.
        issue_prefixes: Issue prefixes (``#``, ``gh-``).
        issue_prefixes_case_sensitive: Whether prefixes match case
            sensitively.
        note_keywords: Keywords that open an important note.
            Case-insensitive.
        field_pattern: Pattern whose first group names an other field.
        revert_pattern: Pattern matched against the whole message to
            detect a revert.
        revert_correspondence: Field names for ``revert_pattern``'s groups.
        comment_char: Lines starting with this character are dropped.
    """

    merge_pattern: re.Pattern[str] | None = None
    merge_correspondence: tuple[str, ...] | None = None
    header_pattern: re.Pattern[str] | None = DEFAULT_HEADER_PATTERN
    header_correspondence: tuple[str, ...] | None = DEFAULT_HEADER_CORRESPONDENCE
    reference_actions: tuple[str, ...] | None = DEFAULT_REFERENCE_ACTIONS
    issue_prefixes: tuple[str, ...] | None = DEFAULT_ISSUE_PREFIXES
    issue_prefixes_case_sensitive: bool = False
    note_keywords: tuple[str, ...] | None = DEFAULT_NOTE_KEYWORDS
    field_pattern: re.Pattern[str] | None = DEFAULT_FIELD_PATTERN
    revert_pattern: re.Pattern[str] | None = DEFAULT_REVERT_PATTERN
    revert_correspondence: tuple[str, ...] | None = DEFAULT_REVERT_CORRESPONDENCE
    comment_char: str | None = None

    def __post_init__(self) -> None:
        """Compile pattern strings and freeze list options into tuples."""
        for key in PATTERN_KEYS:
            value = getattr(self, key)
            if value is not None and not isinstance(value, re.Pattern):
                object.__setattr__(self, key, compile_pattern(value, key))
        for key in LIST_KEYS:
            value = getattr(self, key)
            if value is not None and not isinstance(value, tuple):
                object.__setattr__(self, key, split_list(value, key))


PATTERN_KEYS: frozenset[str] = frozenset({
    'field_pattern',
    'header_pattern',
    'merge_pattern',
    'revert_pattern',
})

LIST_KEYS: frozenset[str] = frozenset({
    'header_correspondence',
    'issue_prefixes',
    'merge_correspondence',
    'note_keywords',
    'reference_actions',
    'revert_correspondence',
})

VALID_KEYS: frozenset[str] = frozenset(f.name for f in dataclasses.fields(ParserOptions))


def split_list(value: ListLike, key: str = 'value') -> tuple[str, ...] | None:
    """Coerce a list option into a tuple of strings.

    A string is split on commas. Entries are kept verbatim (the regex
    compiler trims them), so correspondence names keep their spelling.

    >>> split_list('type, scope,subject')
    ('type', ' scope', 'subject')
    >>> split_list(['#', 'gh-'])
    ('#', 'gh-')
    >>> split_list(None) is None
    True
    """
    if value is None:
        return None
    if isinstance(value, str):
        return tuple(value.split(','))
    items = tuple(value)
    for item in items:
        if not isinstance(item, str):
            raise CommitParserError(
                code=E.CONFIG_INVALID_VALUE,
                message=f"'{key}' items must be strings, got {type(item).__name__}: {item!r}",
                hint=f'Pass {key} as a list of strings or a comma-separated string.',
            )
    return items


def compile_pattern(value: PatternLike, key: str = 'pattern') -> re.Pattern[str] | None:
    """Compile a pattern option, passing compiled patterns through."""
    if value is None or isinstance(value, re.Pattern):
        return value
    if not isinstance(value, str):
        raise CommitParserError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be a regular expression string, got {type(value).__name__}",
        )
    try:
        return re.compile(value)
    except re.error as exc:
        raise CommitParserError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' is not a valid regular expression: {exc}",
            hint=f'Check the value of {key}: {value!r}',
        ) from exc


def suggest_key(unknown: str) -> str | None:
    """Return the closest valid key for a typo, or None."""
    matches = difflib.get_close_matches(unknown, VALID_KEYS, n=1, cutoff=0.6)
    return matches[0] if matches else None


def check_keys(keys: Iterable[str], *, context: str | None = None) -> None:
    """Raise on the first key that is not an option name.

    Raises:
        CommitParserError: ``CP-CONFIG-INVALID-KEY`` with a did-you-mean hint.
    """
    for key in keys:
        if key not in VALID_KEYS:
            suggestion = suggest_key(key)
            where = f' in {context}' if context else ''
            raise CommitParserError(
                code=E.CONFIG_INVALID_KEY,
                message=f"Unknown key '{key}'{where}",
                hint=f"Did you mean '{suggestion}'?" if suggestion else 'Check the commitparser docs for valid keys.',
            )


def _coerce(key: str, value: Any) -> Any:  # noqa: ANN401 - dynamic option values
    """Coerce one raw option value into its resolved form."""
    if key in PATTERN_KEYS:
        return compile_pattern(value, key)
    if key in LIST_KEYS:
        return split_list(value, key)
    if key == 'issue_prefixes_case_sensitive':
        if not isinstance(value, bool):
            raise CommitParserError(
                code=E.CONFIG_INVALID_VALUE,
                message=f"'{key}' must be bool, got {type(value).__name__}",
            )
        return value
    if key == 'comment_char':
        if value is not None and not isinstance(value, str):
            raise CommitParserError(
                code=E.CONFIG_INVALID_VALUE,
                message=f"'{key}' must be a string, got {type(value).__name__}",
            )
        return value or None
    return value


def resolve_options(
    options: ParserOptions | Mapping[str, Any] | None = None,  # noqa: ANN401 - dynamic option values
    **overrides: Any,  # noqa: ANN401 - dynamic option values
) -> ParserOptions:
    """Merge partial options with the defaults.

    Args:
        options: A resolved :class:`ParserOptions` (used as the base), a
            partial mapping of snake_case option names, or ``None``.
        **overrides: Option values applied on top of *options*.

    Returns:
        A fully resolved :class:`ParserOptions`.

    Raises:
        CommitParserError: On an unknown option name, a wrongly typed
            value, or a pattern string that does not compile.
    """
    if isinstance(options, ParserOptions):
        base = options
        raw: dict[str, Any] = {}  # noqa: ANN401
    else:
        base = ParserOptions()
        raw = dict(options or {})
    raw.update(overrides)

    check_keys(raw)

    resolved = {key: _coerce(key, value) for key, value in raw.items()}
    if not resolved:
        return base
    return dataclasses.replace(base, **resolved)


__all__ = [
    'DEFAULT_FIELD_PATTERN',
    'DEFAULT_HEADER_CORRESPONDENCE',
    'DEFAULT_HEADER_PATTERN',
    'DEFAULT_ISSUE_PREFIXES',
    'DEFAULT_NOTE_KEYWORDS',
    'DEFAULT_REFERENCE_ACTIONS',
    'DEFAULT_REVERT_CORRESPONDENCE',
    'DEFAULT_REVERT_PATTERN',
    'LIST_KEYS',
    'PATTERN_KEYS',
    'VALID_KEYS',
    'ParserOptions',
    'check_keys',
    'compile_pattern',
    'resolve_options',
    'split_list',
    'suggest_key',
]
