"""
Central Logging
===============
Console on stderr (stdout belongs to the tool protocol), optional rotating
files when a log directory is configured:
- all.log, errors.log, mcp.log, api.log
"""
import logging
import sys
from functools import lru_cache
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

FMT = "%(asctime)s|%(levelname)-8s|%(name)-22s|%(message)s"
FMT_DETAIL = "%(asctime)s|%(levelname)-8s|%(name)-22s|%(filename)s:%(lineno)d|%(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"
MAX_BYTES, BACKUP = 10 * 1024 * 1024, 5

_init = {"central": False}


class ColorFormatter(logging.Formatter):
    """Formatter with ANSI colors for console."""
    C = {10: '\033[36m', 20: '\033[32m', 30: '\033[33m', 40: '\033[31m', 50: '\033[35m'}
    R = '\033[0m'

    def format(self, r):
        return f"{self.C.get(r.levelno, '')}{super().format(r)}{self.R}"


@lru_cache(maxsize=16)
def _handler(path: str, level: int = logging.DEBUG) -> RotatingFileHandler:
    """Cached rotating file handler factory."""
    h = RotatingFileHandler(path, maxBytes=MAX_BYTES, backupCount=BACKUP, encoding='utf-8')
    h.setLevel(level)
    h.setFormatter(logging.Formatter(FMT_DETAIL, DATE_FMT))
    return h


def _level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def setup_central_logging(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[str] = None,
    stream=None,
) -> None:
    """Initialize logging once per process. Later calls are no-ops."""
    if _init["central"]:
        return

    console_level = _level(level)
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if log_dir else console_level)
    root.handlers.clear()

    stream = stream or sys.stderr
    console = logging.StreamHandler(stream)
    console.setLevel(console_level)
    use_color = hasattr(stream, "isatty") and stream.isatty()
    console.setFormatter(ColorFormatter(FMT, DATE_FMT) if use_color else logging.Formatter(FMT, DATE_FMT))
    root.addHandler(console)

    if log_dir:
        target = Path(log_dir)
        target.mkdir(parents=True, exist_ok=True)
        root.addHandler(_handler(str(target / "all.log")))
        root.addHandler(_handler(str(target / "errors.log"), logging.ERROR))
        for name, file in [("shipstation.mcp", "mcp.log"), ("shipstation.api", "api.log")]:
            logging.getLogger(name).addHandler(_handler(str(target / file)))

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    _init["central"] = True
    root.debug("Logging ready | level=%s | dir=%s", logging.getLevelName(console_level), log_dir or "-")


def get_logger(name: str) -> logging.Logger:
    """Get logger with shipstation prefix."""
    return logging.getLogger(name if name.startswith("shipstation") else f"shipstation.{name}")
