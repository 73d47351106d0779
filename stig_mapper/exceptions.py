"""Custom exception classes for STIG Mapper.

All exceptions in the application inherit from StigError base class
to provide consistent error handling and context propagation.
"""

from __future__ import annotations
from typing import Optional, Dict, Any


class StigError(Exception):
    """Base exception with context.

    All STIG Mapper exceptions inherit from this class, which provides
    contextual information about where and why the error occurred.

    Attributes:
        msg: The error message
        ctx: Optional dictionary of contextual information (e.g., file paths, offsets)
    """

    def __init__(self, msg: str, ctx: Optional[Dict[str, Any]] = None):
        super().__init__(msg)
        self.msg = msg
        self.ctx = ctx or {}

    def __str__(self) -> str:
        if self.ctx:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.ctx.items())
            return f"{self.msg} [{ctx_str}]"
        return self.msg


class ValidationError(StigError):
    """Raised when an argument or path fails validation."""


class FileError(StigError):
    """Raised when file operations fail."""


class ParseError(StigError):
    """Raised when XML parsing fails.

    ``ctx`` carries ``offset`` (byte offset where parsing stopped) and,
    when known, ``line``, ``column`` and ``source``.
    """

    @property
    def offset(self) -> Optional[int]:
        return self.ctx.get("offset")


class MergeError(StigError):
    """Raised when checklists cannot be merged."""
