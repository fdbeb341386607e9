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

"""Issue reference extraction.

Given ``handle #33, Closes #100, Handled #3 kills repo#77`` with the
actions ``handle/handled/kills``, the span splits into sentences and each
sentence is scanned for issue tokens::

    handle  │ #33, Closes #100,   →  #33         , Closes #100
    Handled │ #3                  →  #3
    kills   │ repo#77             →  repo#77

``raw`` keeps whatever text the scan swept up since the previous token
in the same sentence, so the second reference above has
``raw == ', Closes #100'``.
"""

from __future__ import annotations

from commitparser._types import Reference
from commitparser.regex import CATCH_ALL, ParsingRegex


def split_owner_repository(token: str | None) -> tuple[str | None, str | None]:
    """Split an ``owner/repo`` token into its two parts.

    >>> split_owner_repository('angular/angular.js')
    ('angular', 'angular.js')
    >>> split_owner_repository('org/group/project')
    ('org', 'group/project')
    >>> split_owner_repository('repo')
    (None, 'repo')
    >>> split_owner_repository(None)
    (None, None)
    """
    repository = token or ''
    owner = None
    segments = repository.split('/')
    if len(segments) > 1:
        owner = segments[0]
        repository = '/'.join(segments[1:])
    return owner, repository or None


def get_references(text: str, regex: ParsingRegex) -> list[Reference]:
    """Extract issue references from *text*, in scan order.

    Args:
        text: A header or a single message line.
        regex: The compiled matcher bundle.

    Returns:
        One :class:`Reference` per issue token found.
    """
    sentence_matcher = regex.references if regex.references.has_sentences(text) else CATCH_ALL

    references: list[Reference] = []
    for action, sentence in sentence_matcher.sentences(text):
        for match in regex.reference_parts.finditer(sentence):
            owner, repository = split_owner_repository(match.group(1))
            references.append(
                Reference(
                    action=action or None,
                    owner=owner,
                    repository=repository,
                    issue=match.group(3),
                    raw=match.group(0),
                    prefix=match.group(2),
                ),
            )
    return references


__all__ = [
    'get_references',
    'split_owner_repository',
]
