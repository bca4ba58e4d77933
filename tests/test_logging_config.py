import logging
import sys

import pytest

from StockMarket.API.logging_config import configure_logging


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_logs_to_file_and_stderr_only(tmp_path, restore_root_logging):
    log_file = tmp_path / "financial-mcp.log"

    configure_logging(str(log_file), verbose=True)
    logging.getLogger("StockMarket.test").debug("hello from the test")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    streams = [h.stream for h in root.handlers if type(h) is logging.StreamHandler]
    assert streams == [sys.stderr]
    assert "[DEBUG] StockMarket.test: hello from the test" in log_file.read_text(encoding="utf-8")


def test_default_level_is_info(restore_root_logging):
    configure_logging()
    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
