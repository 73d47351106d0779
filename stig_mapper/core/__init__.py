"""Core infrastructure modules.

Provides constants and enumerations, configuration, and logging used
throughout the STIG Mapper package.
"""

from __future__ import annotations

from stig_mapper.core.constants import (
    VERSION,
    BUILD_DATE,
    APP_NAME,
    STIG_VIEWER_VERSION,
    Status,
    Severity,
    ComplianceStatus,
    RiskLevel,
    NOT_APPLICABLE,
    ENCODINGS,
    MAX_FILE_SIZE,
    MAX_MERGE_FILES,
    LARGE_FILE_THRESHOLD,
)
from stig_mapper.core.config import Cfg, CFG
from stig_mapper.core.logging import Log, LOG

__all__ = [
    "VERSION",
    "BUILD_DATE",
    "APP_NAME",
    "STIG_VIEWER_VERSION",
    "Status",
    "Severity",
    "ComplianceStatus",
    "RiskLevel",
    "NOT_APPLICABLE",
    "ENCODINGS",
    "MAX_FILE_SIZE",
    "MAX_MERGE_FILES",
    "LARGE_FILE_THRESHOLD",
    "Cfg",
    "CFG",
    "Log",
    "LOG",
]
