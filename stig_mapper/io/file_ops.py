"""
File operations module.

Reading with encoding detection and atomic writes. These are the only
places the package touches the file system; the parsers, aggregator and
serializer work on already-loaded text and structures.
"""

from __future__ import annotations
import codecs
import os
import re
import tempfile
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import Generator, IO, List, Optional, Union

from stig_mapper.core.config import Cfg
from stig_mapper.core.constants import BOMS, ENCODINGS, LARGE_FILE_THRESHOLD, SAMPLE_SIZE
from stig_mapper.core.logging import LOG
from stig_mapper.exceptions import FileError, ValidationError
from stig_mapper.xml.sanitizer import San

_DECLARED = re.compile(rb"""^\s*<\?xml[^>]*?\bencoding\s*=\s*["']([A-Za-z][A-Za-z0-9._:-]*)["']""")


class FO:
    """Safe file operations with atomic writes and encoding detection."""

    @staticmethod
    def _candidates(raw: bytes) -> List[str]:
        """Encodings to try, most trusted first.

        A BOM is conclusive. Otherwise an encoding named in the XML
        declaration is tried before the ``ENCODINGS`` fallbacks.
        """
        for bom, encoding in BOMS:
            if raw.startswith(bom):
                return [encoding]

        found: List[str] = []
        match = _DECLARED.match(raw[:SAMPLE_SIZE])
        if match:
            with suppress(LookupError):
                name = codecs.lookup(match.group(1).decode("ascii")).name
                # A declaration readable as ASCII cannot be UTF-16/32 text
                if not name.startswith(("utf-16", "utf-32")):
                    found.append(name)
        for encoding in ENCODINGS:
            name = codecs.lookup(encoding).name
            if name not in found:
                found.append(name)
        return found

    @staticmethod
    def read(path: Union[str, Path]) -> str:
        """Read file with automatic encoding detection.

        For large files the encoding is detected from a sample first.

        Args:
            path: File path to read

        Returns:
            File contents as string, without a leading BOM

        Raises:
            FileError: If the file cannot be read or decoded
        """
        try:
            path = San.path(path, exist=True, file=True)
        except ValidationError as exc:
            raise FileError(f"Cannot read file: {exc.msg}", {"path": path}) from exc

        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise FileError(f"Cannot read file: {exc}", {"path": path}) from exc

        encodings = FO._candidates(raw)
        if len(raw) > LARGE_FILE_THRESHOLD:
            for encoding in encodings:
                # Incremental decode so a character cut at the sample edge is not an error
                try:
                    codecs.getincrementaldecoder(encoding)().decode(raw[:SAMPLE_SIZE], final=False)
                except UnicodeDecodeError:
                    continue
                encodings = [encoding] + [e for e in encodings if e != encoding]
                break

        for encoding in encodings:
            try:
                data = raw.decode(encoding)
            except UnicodeError:
                continue
            if data.startswith("\ufeff"):
                data = data[1:]
            LOG.d(f"Read {path.name} ({len(raw)} bytes, {encoding})")
            return data

        raise FileError(f"Unable to decode file with any known encoding: {path}")

    @staticmethod
    @contextmanager
    def atomic(target: Union[str, Path], mode: str = "w", enc: str = "utf-8") -> Generator[IO, None, None]:
        """Atomic file write.

        Writes go to a temporary file in the target directory which replaces
        the target only after a successful flush and fsync.

        Args:
            target: Target file path
            mode: File mode (w or wb)
            enc: Encoding for text mode

        Yields:
            File handle for writing

        Raises:
            FileError: On write failure (the target is left untouched)
        """
        try:
            target = San.path(target, mkpar=True)
        except (ValidationError, OSError) as exc:
            raise FileError(f"Invalid output path: {exc}", {"path": target}) from exc

        tmp_path: Optional[Path] = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=str(target.parent),
                prefix=f".stig_tmp_{os.getpid()}_",
                suffix=".tmp",
            )
            tmp_path = Path(tmp_name)

            if "b" in mode:
                fh = os.fdopen(fd, mode)
            else:
                fh = os.fdopen(fd, mode, encoding=enc, newline="\n")

            with fh:
                yield fh
                fh.flush()
                os.fsync(fh.fileno())

            if Cfg.IS_WIN and target.exists():
                target.unlink()
            tmp_path.replace(target)
            tmp_path = None
        except FileError:
            raise
        except Exception as exc:
            raise FileError(f"Atomic write failed: {exc}", {"path": target}) from exc
        finally:
            if tmp_path and tmp_path.exists():
                with suppress(OSError):
                    tmp_path.unlink()


__all__ = ["FO"]
