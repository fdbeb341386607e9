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

"""Configuration reader for commitparser.

Reads ``commitparser.toml`` and returns resolved :class:`ParserOptions`.
The file uses flat top-level keys named like the options themselves.

Validation Pipeline::

    commitparser.toml
    ┌────────────────────┐
    │ note_keyowrds = …  │  ← typo!
    └─────────┬──────────┘
              │
              ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 1. Unknown key   │────→│ CP-CONFIG-INVALID-KEY:       │
    │    detection     │     │ hint: "Did you mean          │
    └────────┬─────────┘     │       'note_keywords'?"      │
             │               └──────────────────────────────┘
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 2. Type check    │────→│ CP-CONFIG-INVALID-VALUE:     │
    │    each value    │     │ Expected str, got int        │
    └────────┬─────────┘     └──────────────────────────────┘
             │
             ▼
    ┌──────────────────┐
    │ resolve_options  │  ← patterns compiled, lists split
    └──────────────────┘

Supported keys in ``commitparser.toml``::

    header_pattern                = '^(\\w*)(?:\\((.*)\\))?: (.*)$'
    header_correspondence         = ["type", "scope", "subject"]
    merge_pattern                 = '^Merge pull request #(\\d+) from (.*)$'
    merge_correspondence          = "id, source"
    reference_actions             = ["closes", "fixes"]
    issue_prefixes                = ["#", "gh-"]
    issue_prefixes_case_sensitive = false
    note_keywords                 = ["BREAKING CHANGE"]
    field_pattern                 = '^-(.*?)-$'
    revert_pattern                = '^Revert\\s"([\\s\\S]*)"\\s*This reverts commit (\\w*)\\.'
    revert_correspondence         = ["header", "hash"]
    comment_char                  = "#"

TOML has no null, so a dimension cannot be switched off from the file;
use an empty list (keywords/actions/prefixes) instead, which compiles to
a matcher that never matches.

Usage::

    from commitparser.config import load_config

    opts = load_config(Path('.'))
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from commitparser.errors import E, CommitParserError
from commitparser.logging import get_logger
from commitparser.options import LIST_KEYS, PATTERN_KEYS, ParserOptions, check_keys, resolve_options

logger = get_logger(__name__)

# The config file name looked up in a directory.
CONFIG_FILENAME = 'commitparser.toml'

_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    **dict.fromkeys(PATTERN_KEYS, str),
    **dict.fromkeys(LIST_KEYS, (str, list)),
    'issue_prefixes_case_sensitive': bool,
    'comment_char': str,
}


def _validate_value_type(
    key: str,
    value: Any,  # noqa: ANN401 - dynamic config values
    *,
    context: str = CONFIG_FILENAME,
) -> None:
    """Raise if a config value has the wrong type."""
    expected = _TYPE_MAP.get(key)
    if expected is None:
        return
    if not isinstance(value, expected):
        type_name = expected.__name__ if isinstance(expected, type) else ' or '.join(t.__name__ for t in expected)
        raise CommitParserError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be {type_name}, got {type(value).__name__}",
            hint=f'Check the value of {key} in {context}.',
        )


def parse_config(text: str, *, context: str = CONFIG_FILENAME) -> ParserOptions:
    """Parse and validate the contents of a config file.

    Args:
        text: TOML document text.
        context: Name used in error messages.

    Returns:
        Resolved :class:`ParserOptions`.

    Raises:
        CommitParserError: If the document is invalid.
    """
    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise CommitParserError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to parse {context}: {exc}',
        ) from exc

    raw: dict[str, Any] = doc.unwrap()  # noqa: ANN401

    check_keys(raw, context=context)

    for key, value in raw.items():
        _validate_value_type(key, value, context=context)

    return resolve_options(raw)


def load_config_file(path: Path) -> ParserOptions:
    """Load options from an explicit config file path.

    Raises:
        CommitParserError: If the file cannot be read or is invalid.
    """
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as exc:
        raise CommitParserError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to read {path}: {exc}',
        ) from exc

    options = parse_config(text, context=str(path))
    logger.debug('loaded_config', path=str(path))
    return options


def load_config(root: Path) -> ParserOptions:
    """Load options from ``commitparser.toml`` in *root*.

    Args:
        root: Directory that may contain ``commitparser.toml``.

    Returns:
        Resolved :class:`ParserOptions`; the defaults if there is no file.

    Raises:
        CommitParserError: If the file exists but is invalid.
    """
    config_path = root / CONFIG_FILENAME

    if not config_path.is_file():
        logger.debug('no_commitparser_config', path=str(config_path))
        return ParserOptions()

    return load_config_file(config_path)


__all__ = [
    'CONFIG_FILENAME',
    'load_config',
    'load_config_file',
    'parse_config',
]
