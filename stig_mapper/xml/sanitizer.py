"""Input sanitization and output escaping utilities.

Philosophy:
- Fail fast: Raise ValidationError on invalid paths, never silently accept them
- No silent coercion of document data: parsed values are stored as found
- Output escaping covers all five XML entities (&, <, >, ", ')
"""

from __future__ import annotations
import os
import re
from pathlib import Path
from typing import Any, Union

from stig_mapper.core.config import Cfg
from stig_mapper.core.constants import IS_WINDOWS
from stig_mapper.exceptions import ValidationError


class San:
    """Path validation and XML text escaping.

    Thread-safe: Yes (stateless utility class)
    """

    # Characters not allowed in XML 1.0 text
    CTRL = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")

    # Platform-specific path length limits
    MAX_PATH = 260 if IS_WINDOWS else 4096

    @staticmethod
    def path(
        value: Union[str, Path],
        *,
        exist: bool = False,
        file: bool = False,
        mkpar: bool = False,
    ) -> Path:
        """Validate and resolve a file system path.

        Args:
            value: Path string or Path object to validate
            exist: If True, path must exist
            file: If True, path must be a regular file (if it exists)
            mkpar: If True, create parent directories

        Returns:
            Resolved Path object

        Raises:
            ValidationError: If the path is empty, contains a null byte,
                           is too long, or doesn't meet the requirements
        """
        if not value or (isinstance(value, str) and not value.strip()):
            raise ValidationError("Empty path")

        as_str = str(value).strip()
        if "\x00" in as_str:
            raise ValidationError("Null byte in path")

        path = Path(as_str).expanduser().resolve(strict=False)

        if len(str(path)) > San.MAX_PATH:
            raise ValidationError(f"Path too long: {len(str(path))}", {"path": path})

        if mkpar:
            path.parent.mkdir(parents=True, exist_ok=True)

        if exist and not path.exists():
            raise ValidationError(f"Not found: {path}")

        if file and path.exists() and not path.is_file():
            raise ValidationError(f"Not a file: {path}")

        if path.is_file():
            size = path.stat().st_size
            if size > Cfg.MAX_FILE:
                raise ValidationError(f"File too large: {size}", {"path": path})
            if not os.access(path, os.R_OK):
                raise ValidationError(f"File not readable: {path}")

        return path

    @staticmethod
    def xml(value: Any) -> str:
        """Escape a value for use as XML text content.

        Removes characters XML 1.0 cannot carry, escapes the five predefined
        entities and writes carriage returns as ``&#13;``.

        Returns:
            Escaped string, or empty string if value is None
        """
        if value is None:
            return ""
        if not isinstance(value, str):
            value = str(value)

        value = San.CTRL.sub("", value)

        return (
            value.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
            .replace("'", "&apos;")
            .replace("\r", "&#13;")
        )
