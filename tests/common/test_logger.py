import json
import logging

import pytest

from minkwright.common.logger import setup_logging
from minkwright.util.file_utils import from_json_or_yaml


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    disabled = {
        name: logger.disabled
        for name, logger in logging.root.manager.loggerDict.items()
        if isinstance(logger, logging.Logger)
    }
    yield
    for name, was_disabled in disabled.items():
        logging.getLogger(name).disabled = was_disabled
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_default_config_skips_file_handler(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    setup_logging()

    root = logging.getLogger()
    assert not any(isinstance(handler, logging.FileHandler) for handler in root.handlers)
    assert not (tmp_path / "minkwright.log").exists()


def test_log_file_override_and_verbose(tmp_path):
    log_path = tmp_path / "logs" / "probe.log"
    logger = setup_logging(log_file_path=log_path, verbose=True)

    logging.getLogger("minkwright.driver").debug("driver event=started")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert logger.name == "minkwright.common.logger"
    assert logging.getLogger().level == logging.DEBUG
    assert "driver event=started" in log_path.read_text(encoding="utf-8")


def test_json_config_is_accepted(tmp_path):
    config = {"version": 1, "root": {"level": "WARNING", "handlers": []}}
    path = tmp_path / "logging.json"
    path.write_text(json.dumps(config), encoding="utf-8")

    setup_logging(config_file_path=path)

    assert logging.getLogger().level == logging.WARNING


def test_unknown_config_suffix(tmp_path):
    path = tmp_path / "logging.ini"
    path.write_text("[loggers]", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported"):
        from_json_or_yaml(path)
    with pytest.raises(FileNotFoundError):
        from_json_or_yaml(tmp_path / "missing.yaml")
