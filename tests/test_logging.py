"""Tests for logging configuration."""

from __future__ import annotations

import logging

import msgspec
import pytest
import structlog
from lazy_result import Ok, pure, traced
from lazy_result._logging import configure_logging, get_logger


@pytest.mark.usefixtures('restore_logging')
class TestConfigureLogging:
    """configure_logging() installs one structured handler on the root logger."""

    def test_installs_processor_formatter(self) -> None:
        configure_logging(level='DEBUG')

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert root.level == logging.DEBUG

    def test_unknown_level_defaults_to_info(self) -> None:
        configure_logging(level='chatty')
        assert logging.getLogger().level == logging.INFO

    def test_structlog_events_render_as_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level='INFO', json_output=True)

        get_logger('lazy_result.test').info('hello', request_id='r-1')

        line = capsys.readouterr().err.strip().splitlines()[-1]
        entry = msgspec.json.decode(line)
        assert entry['event'] == 'hello'
        assert entry['request_id'] == 'r-1'
        assert entry['level'] == 'info'
        assert entry['logger'] == 'lazy_result.test'

    def test_stdlib_records_share_the_renderer(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level='INFO', json_output=True)

        logging.getLogger('third.party').warning('from stdlib')

        entry = msgspec.json.decode(capsys.readouterr().err.strip().splitlines()[-1])
        assert entry['event'] == 'from stdlib'
        assert entry['level'] == 'warning'

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level='INFO', json_output=False)

        get_logger('lazy_result.test').info('plain text')

        assert 'plain text' in capsys.readouterr().err

    def test_default_logger_name(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level='INFO')

        get_logger().info('named')

        entry = msgspec.json.decode(capsys.readouterr().err.strip().splitlines()[-1])
        assert entry['logger'] == 'lazy_result'

    def test_trace_level_is_independent_of_root(self) -> None:
        configure_logging(level='WARNING', trace_level='DEBUG')

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger('lazy_result').level == logging.DEBUG

    def test_trace_level_defaults_to_inherit(self) -> None:
        configure_logging(level='WARNING', trace_level='DEBUG')
        configure_logging(level='WARNING')

        assert logging.getLogger('lazy_result').level == logging.NOTSET

    @pytest.mark.asyncio
    async def test_traced_debug_events_pass_a_quiet_root(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level='WARNING', trace_level='DEBUG')

        assert await traced(pure(1), 'lookup') == Ok(1)

        events = [msgspec.json.decode(line)['event'] for line in capsys.readouterr().err.strip().splitlines()]
        assert events == ['task_result.start', 'task_result.ok']
