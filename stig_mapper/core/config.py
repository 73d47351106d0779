"""
STIG Mapper Configuration.

Application directories, processing limits and environment overrides.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from contextlib import suppress
from pathlib import Path
from typing import List, Optional

from stig_mapper.core.constants import IS_WINDOWS, MAX_FILE_SIZE, MAX_MERGE_FILES


class Cfg:
    """
    Application configuration and directory management.

    Provides:
    - Application directory (``STIG_MAPPER_HOME`` or ``~/.stig_mapper``)
    - Log directory
    - File size and merge limits
    - Log level (``STIG_MAPPER_LOG_LEVEL``)

    Thread-safe: Yes (uses RLock for initialization)
    """

    IS_WIN = IS_WINDOWS

    HOME_ENV = "STIG_MAPPER_HOME"
    LEVEL_ENV = "STIG_MAPPER_LOG_LEVEL"

    # Directory paths (initialized on first use)
    APP_DIR: Optional[Path] = None
    LOG_DIR: Optional[Path] = None

    # Limits
    MAX_FILE = MAX_FILE_SIZE
    MAX_MERGE = MAX_MERGE_FILES
    KEEP_LOGS = 5

    LOG_LEVEL = logging.INFO

    _lock = threading.RLock()
    _done = False

    @classmethod
    def init(cls) -> None:
        """Resolve and create the application directories.

        The first writable candidate wins: ``$STIG_MAPPER_HOME``,
        ``~/.stig_mapper``, then a directory under the system temp dir.
        """
        with cls._lock:
            if cls._done:
                return

            candidates: List[Path] = []
            override = os.environ.get(cls.HOME_ENV)
            if override:
                candidates.append(Path(override).expanduser())
            with suppress(Exception):
                candidates.append(Path.home() / ".stig_mapper")
            candidates.append(Path(tempfile.gettempdir()) / "stig_mapper")

            attempted: List[str] = []
            for candidate in candidates:
                attempted.append(str(candidate))
                try:
                    (candidate / "logs").mkdir(parents=True, exist_ok=True)
                    marker = candidate / f".write_test_{os.getpid()}"
                    marker.write_text("ok", encoding="utf-8")
                    marker.unlink()
                except OSError:
                    continue
                cls.APP_DIR = candidate
                break

            if cls.APP_DIR is None:
                raise RuntimeError(
                    f"Cannot find writable application directory. Tried: {', '.join(attempted)}. "
                    f"Set ${cls.HOME_ENV} to a writable directory."
                )

            cls.LOG_DIR = cls.APP_DIR / "logs"

            level_name = os.environ.get(cls.LEVEL_ENV, "").strip().upper()
            if level_name:
                level = logging.getLevelName(level_name)
                if isinstance(level, int):
                    cls.LOG_LEVEL = level

            cls._done = True

    @classmethod
    def reset(cls) -> None:
        """Forget resolved directories so the next ``init()`` re-resolves them."""
        with cls._lock:
            cls.APP_DIR = None
            cls.LOG_DIR = None
            cls.LOG_LEVEL = logging.INFO
            cls._done = False


CFG = Cfg
