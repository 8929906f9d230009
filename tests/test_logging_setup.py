"""Root logger initialisation."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

import logging_setup


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_init_logging_writes_to_the_log_dir(clean_root, tmp_path):
    path = logging_setup.init_logging("DEBUG", log_dir=tmp_path)
    assert path == tmp_path / "app.log"
    assert clean_root.level == logging.DEBUG

    logging.getLogger("tests").debug("hello from the test")
    for handler in clean_root.handlers:
        handler.flush()
    assert "hello from the test" in path.read_text(encoding="utf-8")


def test_init_logging_is_idempotent(clean_root, tmp_path):
    logging_setup.init_logging(log_dir=tmp_path)
    logging_setup.init_logging(log_dir=tmp_path)
    files = [h for h in clean_root.handlers if isinstance(h, RotatingFileHandler)]
    assert len(files) == 1


def test_default_log_dir_override(monkeypatch, tmp_path):
    monkeypatch.setenv("ALGOVIZ_LOG_DIR", str(tmp_path))
    assert logging_setup._default_log_dir() == tmp_path


def test_unknown_level_falls_back_to_info():
    assert logging_setup._resolve_level("chatty") == logging.INFO
    assert logging_setup._resolve_level("warning") == logging.WARNING


def test_set_console_level(clean_root, tmp_path):
    logging_setup.init_logging(log_dir=tmp_path)
    logging_setup.set_console_level(logging.ERROR)
    consoles = [
        h for h in clean_root.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]
    assert consoles
    assert all(h.level == logging.ERROR for h in consoles)
