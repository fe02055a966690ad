import logging

from defendant_census.setup_logging import NOISY_LOGGERS, setup_logging


def test_setup_logging_adds_one_handler(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    setup_logging("debug")
    setup_logging("debug")  # reload: no second handler

    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
