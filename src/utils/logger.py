"""
Structured console logger

One line per event plus an indented tree of key/value details:

    [14:23:45] OUTPUT    ⚠ Frame cut short by backpressure
               ├─ pixels_written: 17
               └─ buffered: 1031

Modules bind a category once at import time:

    log = get_logger().for_category(LogCategory.OUTPUT)
    log.warn("Frame cut short by backpressure", pixels_written=17)
"""

import sys
import traceback
from datetime import datetime
from typing import Dict, List, Optional, TextIO, Tuple
from models.enums import LogLevel, LogCategory


class Colors:
    """ANSI escape codes"""
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS: Dict[LogCategory, str] = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.HARDWARE: Colors.BRIGHT_BLUE,
    LogCategory.OUTPUT: Colors.BRIGHT_CYAN,
    LogCategory.PATTERN: Colors.BRIGHT_YELLOW,
    LogCategory.ENGINE: Colors.BRIGHT_GREEN,
    LogCategory.API: Colors.BRIGHT_MAGENTA,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
    LogCategory.SHUTDOWN: Colors.MAGENTA,
}

# level -> (rank, symbol, color)
LEVEL_STYLES: Dict[LogLevel, Tuple[int, str, str]] = {
    LogLevel.DEBUG: (0, '·', Colors.DIM),
    LogLevel.INFO: (1, '✓', Colors.GREEN),
    LogLevel.WARN: (2, '⚠', Colors.YELLOW),
    LogLevel.ERROR: (3, '✗', Colors.RED),
}

DETAIL_INDENT = " " * 11


class Logger:
    """
    Process-wide logger. Use get_logger() rather than creating instances;
    configure_logger() changes the shared one in place.
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True,
                 stream: Optional[TextIO] = None):
        self.min_level = min_level
        self.use_colors = use_colors
        # None -> whatever sys.stdout is when the line is written
        self.stream = stream

    def enabled_for(self, level: LogLevel) -> bool:
        return LEVEL_STYLES[level][0] >= LEVEL_STYLES[self.min_level][0]

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{Colors.RESET}" if self.use_colors else text

    def _emit(self, line: str) -> None:
        print(line, file=self.stream or sys.stdout)

    def _header(self, category: LogCategory, level: LogLevel, message: str) -> str:
        _, symbol, color = LEVEL_STYLES[level]
        stamp = datetime.now().strftime('[%H:%M:%S]')
        cat = self._paint(category.name.ljust(9), CATEGORY_COLORS.get(category, Colors.WHITE))
        return f"{stamp} {cat} {self._paint(symbol, color)} {self._paint(message, color)}"

    def _detail_lines(self, details: List[str]) -> List[str]:
        lines = []
        for i, detail in enumerate(details):
            branch = "└─" if i == len(details) - 1 else "├─"
            lines.append(f"{DETAIL_INDENT}{self._paint(branch, Colors.DIM)} {detail}")
        return lines

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        exc_info: bool = False,
        **kwargs
    ):
        """
        Write one event.

        Args:
            category: Subsystem the event belongs to
            message: Headline
            level: Severity; events below min_level are dropped
            details: Extra preformatted detail lines
            exc_info: Append the traceback of the exception being handled
            **kwargs: Rendered as "key: value" detail lines, in order
        """
        if not self.enabled_for(level):
            return

        lines = [self._header(category, level, message)]
        lines += self._detail_lines(list(details or []) + [f"{k}: {v}" for k, v in kwargs.items()])

        if exc_info and sys.exc_info()[0] is not None:
            lines.append(self._paint(traceback.format_exc().rstrip(), Colors.DIM))

        for line in lines:
            self._emit(line)

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Logger with a fixed category"""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self.category = category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, **kw):
        self._base.log(self.category, message, level, **kw)

    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        """Sibling logger sharing the same sink."""
        return BoundLogger(self._base, category)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True,
                     stream: Optional[TextIO] = None):
    """
    Reconfigure the shared logger in place.

    Module-level BoundLoggers hold a reference to it, so it is never replaced.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
    if stream is not None:
        _logger.stream = stream
