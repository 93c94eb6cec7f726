"""
Logging configuration for the campaign story service.

One log file per calendar day, named after the process start time:
<log_dir>/campaign_story_YYYYMMDD_<START_HHMMSS>.log
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "campaign_story"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Shared by every daily file this process writes
_PROCESS_START_TIME: Optional[str] = None


def _today() -> str:
    return datetime.now().strftime("%Y%m%d")


def _process_start_time() -> str:
    global _PROCESS_START_TIME
    if _PROCESS_START_TIME is None:
        _PROCESS_START_TIME = datetime.now().strftime("%H%M%S")
    return _PROCESS_START_TIME


class DailyRotatingFileHandler(logging.FileHandler):
    """
    File handler that switches files at midnight.

    Only the date part of the file name changes; the HHMMSS suffix stays
    the process start time.
    """

    def __init__(self, log_dir: str = "logs", encoding: str = "utf-8"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._start_hhmmss = _process_start_time()
        self._current_date = _today()
        super().__init__(self._path_for(self._current_date), mode="a", encoding=encoding)

    def _path_for(self, date_str: str) -> str:
        return str(self.log_dir / f"{LOGGER_NAME}_{date_str}_{self._start_hhmmss}.log")

    def emit(self, record: logging.LogRecord) -> None:
        today = _today()
        if today != self._current_date:
            self.close()
            self._current_date = today
            self.baseFilename = self._path_for(today)
            self.stream = self._open()
        super().emit(record)


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = "logs") -> logging.Logger:
    """
    Configure the campaign_story logger and return it.

    Args:
        log_level (str): Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir (Optional[str]): Directory for daily log files. None disables file logging.

    Returns:
        logging.Logger: Configured logger instance
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated setup replaces handlers instead of stacking them
    for old in list(logger.handlers):
        old.close()
        logger.removeHandler(old)

    handlers = [logging.StreamHandler()]
    if log_dir:
        handlers.append(DailyRotatingFileHandler(log_dir=log_dir))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_dir:
        logger.info(f"Logging started - level: {log_level}, file: {handlers[-1].baseFilename}")
    else:
        logger.info(f"Logging started - level: {log_level}, console only")

    return logger
