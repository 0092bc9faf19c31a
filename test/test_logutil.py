"""
chainstatsd - test logging setup

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
import logging
from unittest.mock import patch

import pytest

from chainstatsd import logutil


@pytest.mark.parametrize("short_log,log_format", [(False, logutil.LOG_FORMAT), (True, logutil.LOG_FORMAT_SHORT)])
def test_configure_logging_ignores_systemd(monkeypatch, capsys, short_log, log_format):
    monkeypatch.setenv("NOTIFY_SOCKET", "/run/systemd/notify")
    with patch("chainstatsd.logutil.logging.basicConfig") as basic_config:
        logutil.configure_logging(level=logging.INFO, short_log=short_log)
    basic_config.assert_called_once_with(level=logging.INFO, format=log_format)
    assert capsys.readouterr().out == ""
