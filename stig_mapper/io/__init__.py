"""File I/O operations.

Provides encoding-aware reading and atomic writes.
"""

from __future__ import annotations

from stig_mapper.io.file_ops import FO

__all__ = ["FO"]
