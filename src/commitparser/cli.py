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

"""CLI entry point for commitparser.

Subcommands::

    commitparser parse    Parse commit messages into JSON
    commitparser explain  Explain an error code

Usage::

    # Parse one message from stdin:
    git log -1 --format=%B | commitparser parse

    # Parse many messages, NUL-separated:
    git log -z --format=%B | commitparser parse

    # Parse a file with a custom separator and extra options:
    commitparser parse log.txt --separator '==END==' --issue-prefixes '#,gh-'

    # Explain an error:
    commitparser explain CP-CONFIG-INVALID-KEY
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from rich_argparse import RichHelpFormatter

from commitparser import __version__
from commitparser.config import load_config, load_config_file
from commitparser.errors import E, CommitParserError, explain, render_error
from commitparser.logging import configure_logging, get_logger
from commitparser.options import ParserOptions, resolve_options
from commitparser.parser import CommitMessageParser

logger = get_logger(__name__)

# Default separator between commits in one input stream (``git log -z``).
DEFAULT_SEPARATOR = '\x00'

# Option names that have a value-taking CLI flag.
_OPTION_FLAGS: tuple[str, ...] = (
    'header_pattern',
    'header_correspondence',
    'merge_pattern',
    'merge_correspondence',
    'reference_actions',
    'issue_prefixes',
    'note_keywords',
    'field_pattern',
    'revert_pattern',
    'revert_correspondence',
    'comment_char',
)


def _resolve_cli_options(args: argparse.Namespace) -> ParserOptions:
    """Load the config file and apply per-option flags on top."""
    if args.config:
        base = load_config_file(Path(args.config))
    else:
        base = load_config(Path.cwd())

    overrides: dict[str, Any] = {}  # noqa: ANN401
    for option in _OPTION_FLAGS:
        value = getattr(args, option, None)
        if value is not None:
            overrides[option] = value
    if args.issue_prefixes_case_sensitive:
        overrides['issue_prefixes_case_sensitive'] = True

    return resolve_options(base, **overrides)


def _read_inputs(files: list[str]) -> list[str]:
    """Read every input file, or stdin when no files are given."""
    if not files:
        return [sys.stdin.read()]

    texts: list[str] = []
    for name in files:
        try:
            texts.append(Path(name).read_text(encoding='utf-8'))
        except OSError as exc:
            raise CommitParserError(
                code=E.INPUT_READ_FAILED,
                message=f'Failed to read {name}: {exc}',
            ) from exc
    return texts


def split_commits(text: str, separator: str = DEFAULT_SEPARATOR) -> list[str]:
    """Split an input stream into individual commit messages."""
    if not separator:
        return [text]
    return text.split(separator)


def _cmd_parse(args: argparse.Namespace) -> int:
    """Handle the ``parse`` subcommand."""
    parser = CommitMessageParser(_resolve_cli_options(args))

    results: list[dict[str, Any]] = []  # noqa: ANN401
    for index, chunk in enumerate(
        chunk for text in _read_inputs(args.files) for chunk in split_commits(text, args.separator)
    ):
        if not chunk.strip():
            if args.strict:
                raise CommitParserError(
                    code=E.INPUT_EMPTY,
                    message=f'Commit #{index + 1} is empty',
                    hint='Drop --strict to skip empty commits.',
                )
            logger.warning('skipped_empty_commit', index=index)
            continue
        results.append(parser.parse(chunk).to_dict())

    logger.debug('parsed_commits', count=len(results))
    indent = 2 if args.pretty else None
    print(json.dumps(results, indent=indent, ensure_ascii=False))  # noqa: T201 - CLI output
    return 0


def _cmd_explain(args: argparse.Namespace) -> int:
    """Handle the ``explain`` subcommand."""
    result = explain(args.code)
    if result is None:
        print(f'Unknown error code: {args.code}')  # noqa: T201 - CLI output
        return 1
    print(result)  # noqa: T201 - CLI output
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    RichHelpFormatter.styles['argparse.groups'] = 'bold yellow'
    parser = argparse.ArgumentParser(
        prog='commitparser',
        description='Parse commit messages into structured records.',
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging.')
    parser.add_argument('--quiet', '-q', action='store_true', help='Only log warnings and errors.')
    parser.add_argument('--json-log', action='store_true', help='Emit logs as JSON lines on stderr.')

    subparsers = parser.add_subparsers(dest='command')

    parse_parser = subparsers.add_parser(
        'parse',
        help='Parse commit messages from files or stdin and print JSON.',
        formatter_class=RichHelpFormatter,
    )
    parse_parser.add_argument(
        'files',
        nargs='*',
        metavar='FILE',
        help='Files holding commit messages. Reads stdin when omitted.',
    )
    parse_parser.add_argument(
        '--separator',
        '-s',
        default=DEFAULT_SEPARATOR,
        help='Text separating commits in one input (default: NUL, as written by git log -z).',
    )
    parse_parser.add_argument(
        '--config',
        '-c',
        metavar='PATH',
        default=None,
        help='Path to a commitparser.toml. Defaults to ./commitparser.toml if present.',
    )
    parse_parser.add_argument('--strict', action='store_true', help='Fail on empty commits instead of skipping them.')
    parse_parser.add_argument('--pretty', action='store_true', help='Indent the JSON output.')

    options_group = parse_parser.add_argument_group('parser options')
    options_group.add_argument('--header-pattern', metavar='REGEX', help='Pattern decomposing the header.')
    options_group.add_argument(
        '--header-correspondence',
        metavar='NAMES',
        help='Comma-separated field names for the header pattern groups.',
    )
    options_group.add_argument('--merge-pattern', metavar='REGEX', help='Pattern matching a merge header.')
    options_group.add_argument(
        '--merge-correspondence',
        metavar='NAMES',
        help='Comma-separated field names for the merge pattern groups.',
    )
    options_group.add_argument(
        '--reference-actions',
        metavar='WORDS',
        help='Comma-separated action keywords, e.g. "closes,fixes".',
    )
    options_group.add_argument(
        '--issue-prefixes',
        metavar='PREFIXES',
        help='Comma-separated issue prefixes, e.g. "#,gh-".',
    )
    options_group.add_argument(
        '--issue-prefixes-case-sensitive',
        action='store_true',
        help='Match issue prefixes case sensitively.',
    )
    options_group.add_argument(
        '--note-keywords',
        metavar='WORDS',
        help='Comma-separated note keywords, e.g. "BREAKING CHANGE".',
    )
    options_group.add_argument('--field-pattern', metavar='REGEX', help='Pattern introducing an other field.')
    options_group.add_argument('--revert-pattern', metavar='REGEX', help='Pattern detecting a revert commit.')
    options_group.add_argument(
        '--revert-correspondence',
        metavar='NAMES',
        help='Comma-separated field names for the revert pattern groups.',
    )
    options_group.add_argument('--comment-char', metavar='CHAR', help='Drop lines starting with this character.')

    explain_parser = subparsers.add_parser(
        'explain',
        help='Explain an error code.',
    )
    explain_parser.add_argument(
        'code',
        help='Error code to explain (e.g., CP-CONFIG-INVALID-KEY).',
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Arguments to parse (defaults to ``sys.argv[1:]``).

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    try:
        command = args.command
        if command == 'parse':
            return _cmd_parse(args)
        if command == 'explain':
            return _cmd_explain(args)

        parser.print_help()  # noqa: T201 - CLI output
        print(  # noqa: T201 - CLI output
            f'\n{parser.prog}: error: please provide a command',
            file=sys.stderr,
        )
        return 2

    except CommitParserError as exc:
        render_error(exc)
        return 1
    except KeyboardInterrupt:
        logger.info('interrupted')
        return 130


def _main() -> None:
    """Wrapper for pyproject.toml [project.scripts] entry point."""
    sys.exit(main())


__all__ = [
    'build_parser',
    'main',
    'split_commits',
]
