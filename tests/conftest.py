"""
Pytest configuration and shared fixtures for STIG Mapper tests.

Points the application directory at a throwaway location before the
package is imported so log files never land in the real home directory.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

os.environ.setdefault("STIG_MAPPER_HOME", tempfile.mkdtemp(prefix="stig_mapper_home_"))

from tests.samples import SAMPLE_CCI, SAMPLE_CKL  # noqa: E402


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    tmp = Path(tempfile.mkdtemp(prefix="stig_test_"))
    try:
        yield tmp
    finally:
        if tmp.exists():
            shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_ckl_file(temp_dir: Path) -> Path:
    """Sample checklist written to disk."""
    path = temp_dir / "sample.ckl"
    path.write_text(SAMPLE_CKL, encoding="utf-8")
    return path


@pytest.fixture
def sample_cci_file(temp_dir: Path) -> Path:
    """Sample CCI list written to disk."""
    path = temp_dir / "U_CCI_List.xml"
    path.write_text(SAMPLE_CCI, encoding="utf-8")
    return path
