# logger.py
import logging
import logging.config
from pathlib import Path

from minkwright.util.file_utils import from_json_or_yaml

DEFAULT_LOGGING_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "logging_config.yaml"


def setup_logging(
    config_file_path=None,
    log_file_path=None,
    verbose=False,
):
    """
    Loads logging config from 'config_file_path' (YAML or JSON) and sets up logging.
    Optionally override file handler's filename, and set root logger to DEBUG if 'verbose'.
    """
    config = from_json_or_yaml(config_file_path or DEFAULT_LOGGING_CONFIG)

    # A custom log path replaces the file handler's filename and keeps it enabled.
    handlers = config.get("handlers", {})
    if log_file_path and "file_handler" in handlers:
        handlers["file_handler"]["filename"] = str(log_file_path)
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
        root = config.setdefault("root", {})
        root_handlers = root.setdefault("handlers", [])
        if "file_handler" not in root_handlers:
            root_handlers.append("file_handler")
    elif "file_handler" in handlers:
        handlers.pop("file_handler")

    logging.config.dictConfig(config)

    if verbose:
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)
        for handler in root_logger.handlers:
            handler.setLevel(logging.DEBUG)

    return logging.getLogger(__name__)
