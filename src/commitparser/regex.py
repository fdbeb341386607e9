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

"""Compile resolved options into the matchers used at parse time.

Pure implementation: depends only on ``re`` and :mod:`.options`.

Keyword, action and prefix lists are joined into regex alternations
without escaping, so entries may themselves be regex fragments. Nothing
is validated: a very large or heavily overlapping list compiles fine but
may backtrack slowly. Keeping those lists sane is the caller's job.

Absent configuration maps onto explicit matcher variants rather than
sentinel regexes:

- :data:`NEVER_MATCH` stands in for the notes and reference-part
  matchers when no keywords / prefixes are configured.
- :class:`CatchAllSentenceMatcher` stands in for the sentence matcher
  when no actions are configured. It treats the whole span as one
  actionless sentence.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from commitparser.options import ParserOptions

# Built-in matchers read \w and \d as ASCII only.
MENTIONS_PATTERN: re.Pattern[str] = re.compile(r'@([\w-]+)', re.ASCII)


@runtime_checkable
class LineMatcher(Protocol):
    """The slice of :class:`re.Pattern` the parser relies on.

    Compiled patterns satisfy this protocol as-is.
    """

    def search(self, string: str) -> re.Match[str] | None:
        """Return the first match in *string*, or ``None``."""
        ...

    def finditer(self, string: str) -> Iterator[re.Match[str]]:
        """Yield non-overlapping matches left to right."""
        ...


class NeverMatcher:
    """A matcher that matches nothing.

    Used when a keyword or prefix list is absent or empty, which turns
    that detection off instead of defaulting it.
    """

    def search(self, string: str) -> re.Match[str] | None:  # noqa: ARG002 - protocol signature
        """Never match."""
        return None

    def finditer(self, string: str) -> Iterator[re.Match[str]]:  # noqa: ARG002 - protocol signature
        """Yield nothing."""
        return iter(())

    def __repr__(self) -> str:
        """Return a short debug representation."""
        return 'NeverMatcher()'


NEVER_MATCH = NeverMatcher()


@runtime_checkable
class SentenceMatcher(Protocol):
    """Splits a span into ``(action, sentence)`` pairs."""

    def has_sentences(self, text: str) -> bool:
        """Whether at least one sentence starts in *text*."""
        ...

    def sentences(self, text: str) -> Iterator[tuple[str | None, str]]:
        """Yield ``(action, sentence)`` pairs left to right."""
        ...


@dataclass(frozen=True)
class ActionSentenceMatcher:
    """Sentences introduced by one of the configured action keywords.

    Each sentence runs from after the keyword up to the next keyword or
    the end of the span.
    """

    pattern: re.Pattern[str]

    def has_sentences(self, text: str) -> bool:
        """Whether an action keyword followed by whitespace occurs in *text*."""
        return self.pattern.search(text) is not None

    def sentences(self, text: str) -> Iterator[tuple[str | None, str]]:
        """Yield ``(keyword, sentence)`` pairs."""
        for match in self.pattern.finditer(text):
            yield match.group(1), match.group(2)


class CatchAllSentenceMatcher:
    """The whole span is one sentence with no action."""

    _ANY = re.compile(r'.+')

    def has_sentences(self, text: str) -> bool:
        """Whether *text* holds anything to scan."""
        return self._ANY.search(text) is not None

    def sentences(self, text: str) -> Iterator[tuple[str | None, str]]:
        """Yield ``(None, run)`` for each run of non-newline characters."""
        for match in self._ANY.finditer(text):
            yield None, match.group(0)

    def __repr__(self) -> str:
        """Return a short debug representation."""
        return 'CatchAllSentenceMatcher()'


CATCH_ALL = CatchAllSentenceMatcher()


@dataclass(frozen=True)
class ParsingRegex:
    """The matcher bundle consumed by the parser.

    Attributes:
        notes: Matches a note line, capturing ``(keyword, text)``.
        reference_parts: Matches one issue reference, capturing
            ``(owner/repo, prefix, issue)``.
        references: Splits a span into action sentences.
        mentions: Matches ``@name``, capturing ``name``.
    """

    notes: LineMatcher
    reference_parts: LineMatcher
    references: SentenceMatcher
    mentions: re.Pattern[str]


def join(items: Iterable[str] | None, joiner: str = '|') -> str:
    """Trim entries, drop empty ones, and join the rest.

    >>> join([' fix', '', 'close '])
    'fix|close'
    >>> join(None)
    ''
    """
    if not items:
        return ''
    return joiner.join(item.strip() for item in items if item.strip())


def get_notes_regex(note_keywords: Iterable[str] | None) -> LineMatcher:
    """Build the note matcher: ``KEYWORD: text`` after optional ``*``/space."""
    keywords = join(note_keywords)
    if not keywords:
        return NEVER_MATCH
    return re.compile(r'^[\s|*]*(' + keywords + r')[:\s]+(.*)', re.IGNORECASE)


def get_reference_parts_regex(
    issue_prefixes: Iterable[str] | None,
    issue_prefixes_case_sensitive: bool = False,
) -> LineMatcher:
    """Build the matcher for a single ``[owner/]repo<prefix><issue>`` token."""
    prefixes = join(issue_prefixes)
    if not prefixes:
        return NEVER_MATCH
    flags = re.ASCII if issue_prefixes_case_sensitive else re.ASCII | re.IGNORECASE
    return re.compile(r'(?:.*?)??\s*([\w.\/-]*?)??(' + prefixes + r')([\w-]*\d+)', flags)


def get_references_regex(reference_actions: Iterable[str] | None) -> SentenceMatcher:
    """Build the sentence matcher for the configured action keywords."""
    actions = join(reference_actions)
    if not actions:
        return CATCH_ALL
    return ActionSentenceMatcher(
        re.compile(r'(' + actions + r')(?:\s+(.*?))(?=(?:' + actions + r')|$)', re.IGNORECASE),
    )


@functools.lru_cache(maxsize=64)
def compile_regex(options: ParserOptions) -> ParsingRegex:
    """Compile the matcher bundle for *options*.

    Deterministic and side-effect free; results are cached per options
    value.

    Args:
        options: Fully resolved parser options.

    Returns:
        The :class:`ParsingRegex` bundle.
    """
    return ParsingRegex(
        notes=get_notes_regex(options.note_keywords),
        reference_parts=get_reference_parts_regex(
            options.issue_prefixes,
            options.issue_prefixes_case_sensitive,
        ),
        references=get_references_regex(options.reference_actions),
        mentions=MENTIONS_PATTERN,
    )


__all__ = [
    'CATCH_ALL',
    'MENTIONS_PATTERN',
    'NEVER_MATCH',
    'ActionSentenceMatcher',
    'CatchAllSentenceMatcher',
    'LineMatcher',
    'NeverMatcher',
    'ParsingRegex',
    'SentenceMatcher',
    'compile_regex',
    'get_notes_regex',
    'get_reference_parts_regex',
    'get_references_regex',
    'join',
]
