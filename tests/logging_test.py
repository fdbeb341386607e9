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

"""Tests for commitparser.logging module."""

from __future__ import annotations

import json
import logging

import pytest
from commitparser.logging import configure_logging, get_logger


class TestLevels:
    """The CLI flags map onto stdlib levels."""

    def test_default_level_is_info(self) -> None:
        """Default logging level should be INFO."""
        configure_logging()
        assert logging.root.level == logging.INFO

    def test_verbose_sets_debug(self) -> None:
        """Verbose flag should set DEBUG level."""
        configure_logging(verbose=True)
        assert logging.root.level == logging.DEBUG

    def test_quiet_wins_over_verbose(self) -> None:
        """Quiet takes precedence when both flags are set."""
        configure_logging(verbose=True, quiet=True)
        assert logging.root.level == logging.WARNING


class TestOutput:
    """Log lines go to stderr and never to stdout."""

    def test_console_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Console mode renders key=value pairs on stderr, without colors off a TTY."""
        configure_logging()
        get_logger('commitparser.cli').warning('skipped_empty_commit', index=3)
        out, err = capsys.readouterr()
        assert out == ''
        assert 'skipped_empty_commit' in err
        assert 'index=3' in err
        assert '\x1b[' not in err

    def test_json_lines(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON mode writes one object per event with level and logger name."""
        configure_logging(json_log=True)
        get_logger('commitparser.config').info('loaded_config', path='commitparser.toml')
        out, err = capsys.readouterr()
        assert out == ''
        event = json.loads(err.strip().splitlines()[-1])
        assert event['event'] == 'loaded_config'
        assert event['path'] == 'commitparser.toml'
        assert event['level'] == 'info'
        assert event['logger'] == 'commitparser.config'
        assert 'timestamp' in event

    def test_quiet_drops_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Debug events are filtered out in quiet mode."""
        configure_logging(quiet=True)
        get_logger().debug('no_commitparser_config', path='x')
        assert capsys.readouterr().err == ''
