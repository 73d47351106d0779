"""Thread-safe logging with contextual metadata."""

from __future__ import annotations
from typing import Any, Dict, Optional
from contextlib import suppress
import threading
import logging
import logging.handlers
import sys


class Log:
    """
    Thread-safe logger with contextual metadata.

    One instance per logger name. Contextual key-value pairs set with
    ``ctx()`` are prefixed to every message from the calling thread
    until ``clear()``.

    Thread-safe: Yes
    """

    _instances: Dict[str, "Log"] = {}
    _lock = threading.RLock()

    def __new__(cls, name: str) -> "Log":
        with cls._lock:
            if name not in cls._instances:
                inst = super().__new__(cls)
                inst._initialised = False
                cls._instances[name] = inst
            return cls._instances[name]

    def __init__(self, name: str):
        if getattr(self, "_initialised", False):
            return

        with self._lock:
            if getattr(self, "_initialised", False):
                return
            self._initialised = True
            self.name = name
            self.log = logging.getLogger(name)
            self.log.setLevel(logging.DEBUG)
            self.log.handlers.clear()
            self.log.propagate = False
            self._ctx = threading.local()
            self.console: logging.Handler = logging.StreamHandler(sys.stderr)
            self.file_handler: Optional[logging.Handler] = None
            self._setup()

    def _setup(self) -> None:
        """Set up the console handler."""
        self.console.setLevel(logging.WARNING)
        self.console.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        self.log.addHandler(self.console)

    def file_logging(self) -> bool:
        """
        Attach a rotating file handler under ``Cfg.LOG_DIR``.

        Library use never writes log files; the CLI opts in. Calling this
        again is a no-op.

        Returns:
            True if a file handler is attached
        """
        from stig_mapper.core.config import Cfg

        with self._lock:
            if self.file_handler is not None:
                return True
            # A read-only home leaves us with console logging only
            with suppress(Exception):
                Cfg.init()
                handler = logging.handlers.RotatingFileHandler(
                    str(Cfg.LOG_DIR / f"{self.name}.log"),
                    maxBytes=10 * 1024 * 1024,
                    backupCount=Cfg.KEEP_LOGS,
                    encoding="utf-8",
                    delay=True,
                )
                handler.setLevel(Cfg.LOG_LEVEL)
                handler.setFormatter(
                    logging.Formatter(
                        "[%(asctime)s] [%(levelname)-8s] %(message)s",
                        "%Y-%m-%d %H:%M:%S",
                    )
                )
                self.log.addHandler(handler)
                self.file_handler = handler
            return self.file_handler is not None

    def verbose(self, enabled: bool = True) -> None:
        """Lower the console threshold to DEBUG (or restore WARNING)."""
        self.console.setLevel(logging.DEBUG if enabled else logging.WARNING)

    def ctx(self, **kw: Any) -> None:
        """Add contextual metadata to log messages."""
        if not hasattr(self._ctx, "data"):
            self._ctx.data = {}
        self._ctx.data.update(kw)

    def clear(self) -> None:
        """Clear contextual metadata."""
        if hasattr(self._ctx, "data"):
            self._ctx.data.clear()

    def _context_str(self) -> str:
        data = getattr(self._ctx, "data", None)
        if data:
            return "[" + ", ".join(f"{k}={v}" for k, v in data.items()) + "] "
        return ""

    def _log(self, level: str, message: str, exc: bool = False) -> None:
        getattr(self.log, level)(self._context_str() + str(message), exc_info=exc)

    def d(self, msg: str) -> None:
        """Log debug message."""
        self._log("debug", msg)

    def i(self, msg: str) -> None:
        """Log info message."""
        self._log("info", msg)

    def w(self, msg: str) -> None:
        """Log warning message."""
        self._log("warning", msg)

    def e(self, msg: str, exc: bool = False) -> None:
        """Log error message."""
        self._log("error", msg, exc)

    def c(self, msg: str, exc: bool = False) -> None:
        """Log critical message."""
        self._log("critical", msg, exc)


# Module-level logger instance
LOG = Log("stig_mapper")
