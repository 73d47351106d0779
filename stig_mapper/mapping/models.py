"""
Mapping result dataclasses.

``MappingResult`` is the structure handed to persistence as a single JSON
document. Its key names (``checklist``, ``cci_mappings``,
``mapped_controls``, ``summary`` and everything nested below them) are
read by other subsystems and must stay stable.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List

from stig_mapper.catalog.models import CCIMapping
from stig_mapper.checklist.models import STIGChecklist, STIGVulnerability
from stig_mapper.core.constants import ComplianceStatus, RiskLevel
from stig_mapper.exceptions import ValidationError


@dataclass
class MappedControl:
    """
    Findings correlated to one NIST SP 800-53 control.

    ``ccis`` and ``stigs`` are insertion-ordered and deduplicated (stigs by
    ``vuln_num``). Findings are shared with the checklist and with any other
    control they correlate to.

    The verdicts depend only on which statuses and severities occur among
    the findings, never on the order they were added:

    - compliance: non-compliant (any Open) > compliant (any NotAFinding)
      > not-applicable > not-reviewed
    - risk: highest severity among all findings, whatever their status
    """

    nist_control: str
    ccis: List[str] = field(default_factory=list)
    stigs: List[STIGVulnerability] = field(default_factory=list)
    compliance_status: ComplianceStatus = ComplianceStatus.NOT_REVIEWED
    risk_level: RiskLevel = RiskLevel.LOW

    @property
    def findings_count(self) -> int:
        return len(self.stigs)

    def add(self, cci: str, vuln: STIGVulnerability) -> None:
        """Record that ``vuln`` reaches this control through ``cci``."""
        if cci not in self.ccis:
            self.ccis.append(cci)
        if not any(s.vuln_num == vuln.vuln_num for s in self.stigs):
            self.stigs.append(vuln)
        self._raise_compliance(ComplianceStatus.from_status(vuln.status))
        self._raise_risk(RiskLevel.from_severity(vuln.severity))

    def absorb(self, other: "MappedControl") -> None:
        """Fold in state for the same control computed over other findings."""
        if other.nist_control != self.nist_control:
            raise ValidationError(
                "Cannot combine different controls",
                {"control": self.nist_control, "other": other.nist_control},
            )
        for cci in other.ccis:
            if cci not in self.ccis:
                self.ccis.append(cci)
        known = {s.vuln_num for s in self.stigs}
        for vuln in other.stigs:
            if vuln.vuln_num not in known:
                self.stigs.append(vuln)
                known.add(vuln.vuln_num)
        self._raise_compliance(other.compliance_status)
        self._raise_risk(other.risk_level)

    def _raise_compliance(self, verdict: ComplianceStatus) -> None:
        if verdict.rank > self.compliance_status.rank:
            self.compliance_status = verdict

    def _raise_risk(self, level: RiskLevel) -> None:
        if level.rank > self.risk_level.rank:
            self.risk_level = level

    def as_dict(self) -> Dict[str, Any]:
        return {
            "nist_control": self.nist_control,
            "ccis": list(self.ccis),
            "stigs": [s.as_dict() for s in self.stigs],
            "compliance_status": self.compliance_status.value,
            "risk_level": self.risk_level.value,
            "findings_count": self.findings_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MappedControl":
        if not isinstance(data, dict):
            raise ValidationError("Mapped control payload must be object")
        try:
            compliance = ComplianceStatus(data.get("compliance_status", ComplianceStatus.NOT_REVIEWED.value))
            risk = RiskLevel(data.get("risk_level", RiskLevel.LOW.value))
        except ValueError as exc:
            raise ValidationError(f"Invalid verdict: {exc}", {"control": data.get("nist_control")}) from exc
        return cls(
            nist_control=str(data.get("nist_control", "")),
            ccis=[str(c) for c in data.get("ccis") or ()],
            stigs=[STIGVulnerability.from_dict(s) for s in data.get("stigs") or ()],
            compliance_status=compliance,
            risk_level=risk,
        )


@dataclass(frozen=True)
class MappingSummary:
    """Control counts per verdict and Open finding counts per severity."""

    total_controls: int = 0
    compliant_controls: int = 0
    non_compliant_controls: int = 0
    not_applicable_controls: int = 0
    not_reviewed_controls: int = 0
    high_risk_findings: int = 0
    medium_risk_findings: int = 0
    low_risk_findings: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MappingSummary":
        if not isinstance(data, dict):
            raise ValidationError("Summary payload must be object")
        return cls(**{f.name: int(data.get(f.name, 0) or 0) for f in fields(cls)})


@dataclass
class MappingResult:
    """Checklist, catalog records used, mapped controls and summary."""

    checklist: STIGChecklist
    cci_mappings: List[CCIMapping] = field(default_factory=list)
    mapped_controls: List[MappedControl] = field(default_factory=list)
    summary: MappingSummary = field(default_factory=MappingSummary)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "checklist": self.checklist.as_dict(),
            "cci_mappings": [m.as_dict() for m in self.cci_mappings],
            "mapped_controls": [c.as_dict() for c in self.mapped_controls],
            "summary": self.summary.as_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MappingResult":
        if not isinstance(data, dict):
            raise ValidationError("Mapping result payload must be object")
        return cls(
            checklist=STIGChecklist.from_dict(data.get("checklist") or {}),
            cci_mappings=[CCIMapping.from_dict(m) for m in data.get("cci_mappings") or ()],
            mapped_controls=[MappedControl.from_dict(c) for c in data.get("mapped_controls") or ()],
            summary=MappingSummary.from_dict(data.get("summary") or {}),
        )

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.as_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "MappingResult":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid mapping JSON: {exc}") from exc
        return cls.from_dict(data)
