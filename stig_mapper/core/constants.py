"""STIG Mapper constants module.

This module defines application constants and enumerations. The status and
severity values must match what DISA STIG Viewer writes into checklists; the
compliance and risk values form part of the persisted mapping format.
"""

from __future__ import annotations

import codecs
import platform
from enum import Enum
from typing import FrozenSet, Optional


# ──────────────────────────────────────────────────────────────────────────────
# VERSION INFORMATION
# ──────────────────────────────────────────────────────────────────────────────

VERSION = "1.0.0"
BUILD_DATE = "2026-10-19"
APP_NAME = "STIG Mapper"
STIG_VIEWER_VERSION = "2.18"


# ──────────────────────────────────────────────────────────────────────────────
# PLATFORM DETECTION
# ──────────────────────────────────────────────────────────────────────────────

IS_WINDOWS = platform.system() == "Windows"


# ──────────────────────────────────────────────────────────────────────────────
# FILE OPERATION CONSTANTS
# ──────────────────────────────────────────────────────────────────────────────

LARGE_FILE_THRESHOLD = 50 * 1024 * 1024  # 50MB - encoding sniffed from a sample
SAMPLE_SIZE = 8192  # Bytes read when sniffing encoding
MAX_FILE_SIZE = 500 * 1024 * 1024  # 500MB maximum input size
MAX_MERGE_FILES = 100  # Maximum number of checklists merged at once


# ──────────────────────────────────────────────────────────────────────────────
# CHARACTER ENCODINGS
# ──────────────────────────────────────────────────────────────────────────────

# Tried in order when the file has no BOM and no usable XML declaration.
# UTF-16/32 are only chosen from a BOM.
ENCODINGS = [
    "utf-8",
    "latin-1",
]

# Longest first: the UTF-32 LE mark starts with the UTF-16 LE one
BOMS = (
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


# ──────────────────────────────────────────────────────────────────────────────
# ENUMERATIONS
# ──────────────────────────────────────────────────────────────────────────────


class Status(str, Enum):
    """STIG finding status values.

    STIG Viewer writes ``Not_Applicable``; some tools emit ``NotApplicable``.
    Both spellings are accepted as not-applicable, see ``NOT_APPLICABLE``.
    """

    NOT_A_FINDING = "NotAFinding"
    OPEN = "Open"
    NOT_REVIEWED = "Not_Reviewed"
    NOT_APPLICABLE = "Not_Applicable"


NOT_APPLICABLE: FrozenSet[str] = frozenset(["Not_Applicable", "NotApplicable"])


class Severity(str, Enum):
    """STIG severity levels (CAT I/II/III).

    - HIGH = CAT I (critical findings)
    - MEDIUM = CAT II (significant findings)
    - LOW = CAT III (minor findings)
    """

    HIGH = "high"      # CAT I
    MEDIUM = "medium"  # CAT II
    LOW = "low"        # CAT III

    @classmethod
    def parse(cls, value: str) -> Optional["Severity"]:
        """Case-insensitive lookup; unknown values return None."""
        return cls._value2member_map_.get((value or "").strip().lower())


class ComplianceStatus(str, Enum):
    """Per-control compliance verdict, ordered by ``rank`` (worst wins)."""

    NOT_REVIEWED = "not-reviewed"
    NOT_APPLICABLE = "not-applicable"
    COMPLIANT = "compliant"
    NON_COMPLIANT = "non-compliant"

    @property
    def rank(self) -> int:
        return _COMPLIANCE_RANK[self]

    @classmethod
    def from_status(cls, status: str) -> "ComplianceStatus":
        """Verdict contributed by a single finding status."""
        if status == Status.OPEN.value:
            return cls.NON_COMPLIANT
        if status == Status.NOT_A_FINDING.value:
            return cls.COMPLIANT
        if status in NOT_APPLICABLE:
            return cls.NOT_APPLICABLE
        return cls.NOT_REVIEWED


_COMPLIANCE_RANK = {
    ComplianceStatus.NOT_REVIEWED: 0,
    ComplianceStatus.NOT_APPLICABLE: 1,
    ComplianceStatus.COMPLIANT: 2,
    ComplianceStatus.NON_COMPLIANT: 3,
}


class RiskLevel(str, Enum):
    """Per-control risk verdict."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]

    @classmethod
    def from_severity(cls, severity: str) -> "RiskLevel":
        sev = Severity.parse(severity)
        return cls(sev.value) if sev is not None else cls.LOW


_RISK_RANK = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}
