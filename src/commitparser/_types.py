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

"""Pure types for parsed commit records.

This module has **zero** runtime dependencies beyond the standard library.
Everything here is a frozen dataclass or a pure function. No I/O, no
logging, no side effects.

A :class:`Commit` is a fixed-shape record plus three side mappings whose
keys come from configuration (header/merge correspondence) or from the
message itself (other fields). The flattened view layers them::

    header_parts  <  merge_parts  <  fixed fields  <  other_fields

Later layers win on a name collision, so an other field called ``body``
replaces the parsed body in :meth:`Commit.to_dict`.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

# A single parsed field value.
Field = str | None

# The names of the fixed commit fields, in output order.
FIXED_FIELDS: tuple[str, ...] = (
    'merge',
    'header',
    'body',
    'footer',
    'notes',
    'references',
    'mentions',
    'revert',
)


@dataclass(frozen=True)
class Note:
    """An important note found in the footer.

    Attributes:
        title: The note keyword as written (e.g. ``"BREAKING CHANGE"``).
        text: The note text, continuation lines joined by newlines.
    """

    title: str
    text: str

    def to_dict(self) -> dict[str, str]:
        """Return the note as a plain mapping."""
        return {'title': self.title, 'text': self.text}


@dataclass(frozen=True)
class Reference:
    """An issue reference such as ``closes owner/repo#12``.

    Attributes:
        action: The action keyword (``"closes"``), or ``None``.
        owner: The repository owner, or ``None``.
        repository: The repository name, or ``None``.
        issue: The issue id (always ends in a digit).
        raw: The exact matched text, including any separator text swept
            in since the previous reference in the same sentence.
        prefix: The matched issue prefix (``"#"``, ``"gh-"``).
    """

    action: str | None
    owner: str | None
    repository: str | None
    issue: str
    raw: str
    prefix: str

    def to_dict(self) -> dict[str, str | None]:
        """Return the reference as a plain mapping."""
        return {
            'action': self.action,
            'owner': self.owner,
            'repository': self.repository,
            'issue': self.issue,
            'raw': self.raw,
            'prefix': self.prefix,
        }


def layer_fields(*layers: Mapping[str, Any]) -> dict[str, Any]:  # noqa: ANN401 - heterogeneous field values
    """Merge field mappings so that later layers win on name collisions.

    Keys keep the position of their first appearance, values come from
    the last layer that defines them. A key missing from every layer is
    missing from the result (it is never filled in with ``None``).

    >>> layer_fields({'type': 'feat', 'scope': None}, {'scope': 'x'}, {'body': None})
    {'type': 'feat', 'scope': 'x', 'body': None}
    """
    merged: dict[str, Any] = {}  # noqa: ANN401
    for layer in layers:
        for name, value in layer.items():
            merged[name] = value
    return merged


@dataclass(frozen=True)
class Commit:
    """A parsed commit message.

    Attributes:
        merge: The merge header line, or ``None``.
        header: The header line, or ``None``.
        body: The body text, or ``None``.
        footer: The footer text, or ``None``.
        notes: Important notes, in order of appearance.
        references: Issue references, header references first.
        mentions: ``@name`` mentions (without ``@``), duplicates kept.
        revert: Fields of the reverted commit, or ``None``.
        header_parts: Header correspondence fields.
        merge_parts: Merge correspondence fields.
        other_fields: Fields introduced by the field pattern.
    """

    merge: Field = None
    header: Field = None
    body: Field = None
    footer: Field = None
    notes: list[Note] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)
    mentions: list[str] = field(default_factory=list)
    revert: dict[str, Field] | None = None
    header_parts: dict[str, Field] = field(default_factory=dict)
    merge_parts: dict[str, Field] = field(default_factory=dict)
    other_fields: dict[str, str] = field(default_factory=dict)

    def fixed_fields(self) -> dict[str, Any]:  # noqa: ANN401 - heterogeneous field values
        """Return the fixed fields as a mapping, in output order."""
        return {
            'merge': self.merge,
            'header': self.header,
            'body': self.body,
            'footer': self.footer,
            'notes': self.notes,
            'references': self.references,
            'mentions': self.mentions,
            'revert': self.revert,
        }

    def fields(self) -> dict[str, Any]:  # noqa: ANN401 - heterogeneous field values
        """Return the flattened record with the layering precedence applied."""
        return layer_fields(self.header_parts, self.merge_parts, self.fixed_fields(), self.other_fields)

    def to_dict(self) -> dict[str, Any]:  # noqa: ANN401 - JSON-like output
        """Return the flattened record as plain, JSON-serializable data."""
        result = self.fields()
        if result.get('notes') is self.notes:
            result['notes'] = [note.to_dict() for note in self.notes]
        if result.get('references') is self.references:
            result['references'] = [ref.to_dict() for ref in self.references]
        if result.get('mentions') is self.mentions:
            result['mentions'] = list(self.mentions)
        if self.revert is not None and result.get('revert') is self.revert:
            result['revert'] = dict(self.revert)
        return result

    def __getitem__(self, name: str) -> Any:  # noqa: ANN401 - heterogeneous field values
        """Look up a field in the flattened record."""
        return self.fields()[name]

    def __contains__(self, name: object) -> bool:
        """Whether the flattened record has a field called *name*."""
        return name in self.fields()

    def __iter__(self) -> Iterator[str]:
        """Iterate over the flattened field names."""
        return iter(self.fields())

    def get(self, name: str, default: Any = None) -> Any:  # noqa: ANN401 - heterogeneous field values
        """Look up a field in the flattened record with a default."""
        return self.fields().get(name, default)


__all__ = [
    'FIXED_FIELDS',
    'Commit',
    'Field',
    'Note',
    'Reference',
    'layer_fields',
]
