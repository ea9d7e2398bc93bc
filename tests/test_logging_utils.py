from __future__ import annotations

import logging

import pytest

from oobe.logging_utils import configure_logging


@pytest.fixture
def root_logger(monkeypatch):
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    monkeypatch.setattr(root, "_oobe_configured", False, raising=False)
    yield root
    for h in root.handlers[len(before):]:
        root.removeHandler(h)
        h.close()
    root.setLevel(level)
    if hasattr(root, "_oobe_log_path"):
        delattr(root, "_oobe_log_path")


def test_unwritable_log_falls_back_to_cwd(tmp_path, monkeypatch, root_logger):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    chosen = configure_logging(log_path=str(blocker / "oobe.log"), also_console=False)

    assert chosen == str(tmp_path / "oobe.log")
    assert configure_logging(log_path="/elsewhere.log") == chosen


def test_password_stays_out_of_the_log(tmp_path, config, root_logger):
    log = tmp_path / "oobe.log"
    configure_logging(log_path=str(log), also_console=False)

    logging.getLogger("oobe.test").info("config %r", config)
    for h in root_logger.handlers:
        h.flush()

    text = log.read_text(encoding="utf-8")
    assert config.user in text
    assert config.pwd not in text
