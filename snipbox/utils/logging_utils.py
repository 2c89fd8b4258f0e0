"""Simple logging utilities for snipbox.

Standard Logger Initialization Pattern
--------------------------------------
For most modules, use the standard Python pattern:

    import logging
    logger = logging.getLogger(__name__)

Configuration is done once at the application level: the panel calls
`setup_tui_logging()` so that log output goes to a file and never draws over
the terminal UI, the CLI calls `snipbox.error_handling.setup_logging()`.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _log_dir() -> Path:
    # Inline lookup instead of importing config to keep logging importable early
    log_dir = Path(
        os.environ.get("SNIPBOX_CONFIG_DIR", str(Path.home() / ".config" / "snipbox"))
    ).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _level_from_env() -> int:
    name = os.environ.get("SNIPBOX_LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)


def setup_tui_logging(module_name: str) -> logging.Logger:
    """
    Set up file logging for the panel.

    The root logger is set to WARNING to avoid noise from third-party libs
    (textual, urllib3). snipbox's own loggers are set from SNIPBOX_LOG_LEVEL.

    Returns:
        The logger for module_name.
    """
    try:
        log_file = _log_dir() / "panel.log"

        if not logging.getLogger().handlers:
            handler = RotatingFileHandler(
                log_file, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT
            )
            handler.setFormatter(logging.Formatter(_FORMAT))
            logging.basicConfig(level=logging.WARNING, handlers=[handler])

        logging.getLogger("snipbox").setLevel(_level_from_env())
        return logging.getLogger(module_name)

    except Exception as e:
        # We can't log this failure since logging is what's failing
        print(f"Warning: panel logging setup failed: {e}", file=sys.stderr)
        return logging.getLogger(module_name)
