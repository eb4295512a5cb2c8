import logging

import pytest

from eth_alive.logger import setup_logging


@pytest.fixture
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_setup_logging_quiets_http_clients(restore_root_level) -> None:
    setup_logging("DEBUG")
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_unknown_level_falls_back_to_info(restore_root_level, monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "BASIC_FORMAT")
    setup_logging()
    assert logging.getLogger().level == logging.INFO
