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

"""Line classification engine.

Walks a commit message once, line by line, and sorts every line into
the header, body, footer, notes, references or an other field.

Pipeline::

    raw ──► trim outer newlines ──► split lines ──► cut at scissor
        ──► drop comments ──► merge line? ──► header ──► classify rest
        ──► mentions / revert (whole text) ──► trim ──► Commit

Per-line precedence (first rule that applies wins)::

    a. field pattern line       start capturing an other field
    b. capturing a field        append to that field
    c. note keyword line        open a note, switch to footer
    d. line has references      collect them, switch to footer
    e. inside a note            append to the note and the footer
    f. still in the body        append to the body
    g. otherwise                append to the footer

Pure implementation: no I/O, no logging.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from commitparser._types import Commit, Field, Note, Reference
from commitparser.errors import InvalidInputError
from commitparser.options import ParserOptions, resolve_options
from commitparser.references import get_references
from commitparser.regex import ParsingRegex, compile_regex

# The line ``git commit --verbose`` puts above the diff.
SCISSOR = '# ------------------------ >8 ------------------------'

_OUTER_NEWLINES = re.compile(r'^(?:\r\n|\n|\r)+|(?:\r\n|\n|\r)+\Z')
_LINE_BREAK = re.compile(r'\r?\n')


def trim_off_newlines(text: str) -> str:
    r"""Strip leading and trailing runs of line breaks, nothing else.

    >>> trim_off_newlines('\n\n  body \n\r\n')
    '  body '
    """
    return _OUTER_NEWLINES.sub('', text)


def append(src: str | None, line: str) -> str:
    """Append *line* to an accumulated value.

    An empty accumulator is replaced rather than joined, so blank lines
    never pile up in front of the first real line.

    >>> append(None, 'a')
    'a'
    >>> append('', '')
    ''
    >>> append('a', 'b')
    'a\\nb'
    """
    if src:
        return src + '\n' + line
    return line


def truncate_to_scissor(lines: list[str]) -> list[str]:
    """Drop the scissor line and everything after it."""
    try:
        return lines[: lines.index(SCISSOR)]
    except ValueError:
        return lines


def _group(match: re.Match[str], index: int) -> str | None:
    """Return group *index* (1-based) or ``None`` when it does not exist."""
    if index > (match.re.groups or 0):
        return None
    return match.group(index)


def _trimmed(names: tuple[str, ...] | None) -> list[str]:
    return [name.strip() for name in names or ()]


@dataclass
class _State:
    """Mutable state of one pass over the message lines."""

    is_body: bool = True
    continue_note: bool = False
    current_field: str | None = None
    body: str = ''
    footer: str = ''
    note_titles: list[str] = field(default_factory=list)
    note_texts: list[str] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)
    other_fields: dict[str, str] = field(default_factory=dict)


def _empty_commit(options: ParserOptions) -> Commit:
    """The record for a message with no lines left after filtering."""
    return Commit(
        header_parts=dict.fromkeys(_trimmed(options.header_correspondence)),
        merge_parts=dict.fromkeys(_trimmed(options.merge_correspondence)),
    )


def _merge_parts(match: re.Match[str] | None, names: list[str]) -> dict[str, Field]:
    """Map merge groups onto names; missing or unmatched groups are ``None``."""
    if match is None:
        return dict.fromkeys(names)
    return {name: _group(match, index) for index, name in enumerate(names, start=1)}


def _header_parts(match: re.Match[str] | None, names: list[str]) -> dict[str, Field]:
    """Map header groups onto names.

    Empty or unmatched groups give ``None``. Names past the last group of
    the pattern are left out entirely.
    """
    if match is None:
        return dict.fromkeys(names)
    group_count = match.re.groups
    return {
        name: match.group(index) or None
        for index, name in enumerate(names, start=1)
        if index <= group_count
    }


def _revert(match: re.Match[str] | None, names: list[str]) -> dict[str, Field] | None:
    """Map revert groups onto names; empty or missing groups are ``None``."""
    if match is None:
        return None
    return {name: _group(match, index) or None for index, name in enumerate(names, start=1)}


def _classify(line: str, state: _State, options: ParserOptions, regex: ParsingRegex) -> None:
    """Sort one body/footer line into the state."""
    if options.field_pattern is not None:
        field_match = options.field_pattern.search(line)
        if field_match:
            state.current_field = _group(field_match, 1)
            return
        if state.current_field:
            name = state.current_field
            state.other_fields[name] = append(state.other_fields.get(name), line)
            return

    notes_match = regex.notes.search(line)
    if notes_match:
        state.continue_note = True
        state.is_body = False
        state.footer = append(state.footer, line)
        state.note_titles.append(notes_match.group(1))
        state.note_texts.append(notes_match.group(2))
        return

    line_references = get_references(line, regex)
    if line_references:
        state.is_body = False
        state.continue_note = False
        state.references.extend(line_references)
        state.footer = append(state.footer, line)
        return

    if state.continue_note:
        state.note_texts[-1] = append(state.note_texts[-1], line)
        state.footer = append(state.footer, line)
        return

    if state.is_body:
        state.body = append(state.body, line)
    else:
        state.footer = append(state.footer, line)


def parse_commit(raw: str | None, options: ParserOptions, regex: ParsingRegex) -> Commit:
    """Parse a raw commit message with resolved options and matchers.

    Args:
        raw: The full commit message.
        options: Fully resolved parser options.
        regex: The matcher bundle compiled from *options*.

    Returns:
        The parsed :class:`Commit`.

    Raises:
        InvalidInputError: If *raw* is missing or blank.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidInputError()

    text = trim_off_newlines(raw)
    lines = truncate_to_scissor(_LINE_BREAK.split(text))
    if options.comment_char:
        lines = [line for line in lines if line[:1] != options.comment_char]

    if not lines:
        return _empty_commit(options)

    header_names = _trimmed(options.header_correspondence)
    merge_names = _trimmed(options.merge_correspondence)

    first = lines.pop(0)
    merge_match = options.merge_pattern.search(first) if options.merge_pattern is not None else None
    header: str | None
    if merge_match:
        merge: str | None = merge_match.group(0)
        header = None
        while lines:
            candidate = lines.pop(0)
            if candidate.strip():
                header = candidate
                break
    else:
        merge = None
        header = first
    merge_parts = _merge_parts(merge_match, merge_names)

    header_match = None
    if header is not None and options.header_pattern is not None:
        header_match = options.header_pattern.search(header)
    header_parts = _header_parts(header_match, header_names)

    state = _State()
    if header is not None:
        state.references.extend(get_references(header, regex))

    for line in lines:
        _classify(line, state, options, regex)

    mentions = [match.group(1) for match in regex.mentions.finditer(text)]

    revert_match = options.revert_pattern.search(text) if options.revert_pattern is not None else None
    revert = _revert(revert_match, _trimmed(options.revert_correspondence))

    notes = [
        Note(title=title, text=trim_off_newlines(note_text))
        for title, note_text in zip(state.note_titles, state.note_texts, strict=True)
    ]
    body = trim_off_newlines(state.body) or None
    footer = trim_off_newlines(state.footer) or None

    return Commit(
        merge=merge,
        header=header,
        body=body,
        footer=footer,
        notes=notes,
        references=state.references,
        mentions=mentions,
        revert=revert,
        header_parts=header_parts,
        merge_parts=merge_parts,
        other_fields=state.other_fields,
    )


class CommitMessageParser:
    """Reusable parser bound to one set of options.

    Example::

        parser = CommitMessageParser({'issue_prefixes': ['#', 'gh-']})
        commit = parser.parse('fix(core): handle nulls\\n\\nCloses gh-12')
        assert commit['type'] == 'fix'
        assert commit.references[0].issue == '12'
    """

    def __init__(self, options: ParserOptions | dict[str, object] | None = None, **overrides: object) -> None:
        """Resolve *options* and compile the matcher bundle once."""
        self.options = resolve_options(options, **overrides)
        self.regex = compile_regex(self.options)

    def parse(self, raw: str | None) -> Commit:
        """Parse one raw commit message.

        Raises:
            InvalidInputError: If *raw* is missing or blank.
        """
        return parse_commit(raw, self.options, self.regex)


__all__ = [
    'SCISSOR',
    'CommitMessageParser',
    'append',
    'parse_commit',
    'trim_off_newlines',
    'truncate_to_scissor',
]
