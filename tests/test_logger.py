import logging
from logging.handlers import QueueHandler, RotatingFileHandler

import pytest

from khorbase.logger import OFF, TRACE, level_from_name, prepare_logger


@pytest.fixture
def logger_name(request):
    name = f"khorbase-test-{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _config(name, **section):
    return {"log": {name: section}}


def _flush(logger):
    for handler in logger.handlers:
        handler.flush()


@pytest.mark.parametrize(
    "name, level",
    [
        ("DEBUG", logging.DEBUG),
        ("INFO", logging.INFO),
        ("ERROR", logging.ERROR),
        ("CRITICAL", logging.CRITICAL),
        ("WARNING", logging.WARNING),
        ("whatever", logging.WARNING),
        ("debug", logging.WARNING),
    ],
)
def test_level_from_name(name, level):
    assert level_from_name(name) == level


def test_trace_and_off_levels():
    assert level_from_name("TRACE") == TRACE
    assert level_from_name("TRACE") < logging.DEBUG
    assert level_from_name("OFF") == OFF
    assert level_from_name("OFF") > logging.CRITICAL


def test_sync_logger_writes_file(tmp_path, logger_name):
    log_file = tmp_path / "app.log"
    config = _config(logger_name, file_name=str(log_file), level="DEBUG", **{"async": False})
    logger = prepare_logger(config, logger_name)
    logger.debug("hello from debug")
    _flush(logger)
    text = log_file.read_text(encoding="utf-8")
    assert "hello from debug" in text
    assert "Logger prepare successful. level = DEBUG" in text
    assert logger.level == logging.DEBUG


def test_default_level_is_warning(tmp_path, logger_name):
    log_file = tmp_path / "app.log"
    config = _config(logger_name, file_name=str(log_file), **{"async": False})
    logger = prepare_logger(config, logger_name)
    logger.info("not shown")
    logger.warning("shown")
    _flush(logger)
    text = log_file.read_text(encoding="utf-8")
    assert logger.level == logging.WARNING
    assert "not shown" not in text
    assert "shown" in text


def test_pattern_and_rotation_settings(tmp_path, logger_name):
    log_file = tmp_path / "app.log"
    config = _config(
        logger_name,
        file_name=str(log_file),
        pattern="%(levelname)s|%(message)s",
        level="ERROR",
        max_file_size=4096,
        max_files=3,
        **{"async": False},
    )
    logger = prepare_logger(config, logger_name)
    logger.error("boom")
    _flush(logger)
    rotating = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(rotating) == 1
    assert rotating[0].maxBytes == 4096
    assert rotating[0].backupCount == 3
    assert log_file.read_text(encoding="utf-8").splitlines() == ["ERROR|boom"]


def test_off_disables_everything(tmp_path, logger_name):
    log_file = tmp_path / "app.log"
    config = _config(logger_name, file_name=str(log_file), level="OFF", **{"async": False})
    logger = prepare_logger(config, logger_name)
    logger.critical("silent")
    _flush(logger)
    assert not logger.isEnabledFor(logging.CRITICAL)
    assert "silent" not in log_file.read_text(encoding="utf-8")


def test_async_logger_delivers_through_queue(tmp_path, logger_name):
    log_file = tmp_path / "app.log"
    config = _config(logger_name, file_name=str(log_file), level="INFO")
    logger = prepare_logger(config, logger_name)
    assert [type(h) for h in logger.handlers] == [QueueHandler]
    logger.info("queued message")

    # Preparing again stops the listener, which drains the queue first.
    other_file = tmp_path / "other.log"
    prepare_logger(
        _config(logger_name, file_name=str(other_file), **{"async": False}), logger_name
    )
    assert "queued message" in log_file.read_text(encoding="utf-8")
    assert len(logger.handlers) == 2


def test_prepare_again_replaces_handlers(tmp_path, logger_name):
    config = _config(logger_name, file_name=str(tmp_path / "a.log"), **{"async": False})
    logger = prepare_logger(config, logger_name)
    prepare_logger(config, logger_name)
    assert len(logger.handlers) == 2
    assert logger.propagate is False