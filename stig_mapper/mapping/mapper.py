"""
STIG -> NIST SP 800-53 control aggregation.

Findings reach controls through their CCI references:

    finding --CCI_REF--> CCI --NIST SP 800-53 reference--> control

The reduction is order-independent; ``MappedControl.add`` only ever raises
a verdict, so any permutation of the findings yields the same controls.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from stig_mapper.catalog.models import CCIMapping
from stig_mapper.checklist.models import STIGChecklist, STIGVulnerability
from stig_mapper.core.constants import ComplianceStatus, Severity, Status
from stig_mapper.core.logging import LOG
from stig_mapper.mapping.models import MappedControl, MappingResult, MappingSummary


def build_cci_index(cci_mappings: Sequence[CCIMapping]) -> Dict[str, Sequence[str]]:
    """CCI id -> NIST control ids. A repeated id keeps its last record."""
    return {m.id: m.nist_controls for m in cci_mappings}


def map_stig_to_nist_controls(
    checklist: STIGChecklist,
    cci_mappings: Sequence[CCIMapping],
) -> List[MappedControl]:
    """
    Correlate every finding to the NIST controls behind its CCIs.

    CCI references with no catalog entry are skipped.

    Returns:
        Mapped controls sorted by control id
    """
    index = build_cci_index(cci_mappings)
    controls: Dict[str, MappedControl] = {}
    unmatched = set()

    for vuln in checklist.vulnerabilities:
        for cci in vuln.cci_refs:
            nist_controls = index.get(cci)
            if nist_controls is None:
                unmatched.add(cci)
                continue
            for nist_control in nist_controls:
                control = controls.get(nist_control)
                if control is None:
                    control = controls[nist_control] = MappedControl(nist_control)
                control.add(cci, vuln)

    if unmatched:
        LOG.d(f"{len(unmatched)} CCI reference(s) not found in the CCI list")

    return sorted(controls.values(), key=lambda c: c.nist_control)


def _open_by_severity(vulnerabilities: Sequence[STIGVulnerability], severity: Severity) -> int:
    return sum(
        1
        for v in vulnerabilities
        if v.status == Status.OPEN.value and Severity.parse(v.severity) is severity
    )


def summarize(
    mapped_controls: Sequence[MappedControl],
    vulnerabilities: Sequence[STIGVulnerability],
) -> MappingSummary:
    """
    Count controls per verdict, and Open findings per severity.

    Finding counts come from the raw finding list, not the controls, so a
    finding mapped to several controls is counted once.
    """
    def controls_with(verdict: ComplianceStatus) -> int:
        return sum(1 for c in mapped_controls if c.compliance_status is verdict)

    return MappingSummary(
        total_controls=len(mapped_controls),
        compliant_controls=controls_with(ComplianceStatus.COMPLIANT),
        non_compliant_controls=controls_with(ComplianceStatus.NON_COMPLIANT),
        not_applicable_controls=controls_with(ComplianceStatus.NOT_APPLICABLE),
        not_reviewed_controls=controls_with(ComplianceStatus.NOT_REVIEWED),
        high_risk_findings=_open_by_severity(vulnerabilities, Severity.HIGH),
        medium_risk_findings=_open_by_severity(vulnerabilities, Severity.MEDIUM),
        low_risk_findings=_open_by_severity(vulnerabilities, Severity.LOW),
    )


def create_mapping_result(
    checklist: STIGChecklist,
    cci_mappings: Sequence[CCIMapping],
) -> MappingResult:
    """Map a checklist and bundle it with its summary for persistence."""
    LOG.ctx(op="create_mapping_result")
    try:
        mapped = map_stig_to_nist_controls(checklist, cci_mappings)
        summary = summarize(mapped, checklist.vulnerabilities)
        LOG.i(
            f"Mapped {summary.total_controls} NIST controls "
            f"({summary.non_compliant_controls} non-compliant, {summary.compliant_controls} compliant)"
        )
        return MappingResult(
            checklist=checklist,
            cci_mappings=list(cci_mappings),
            mapped_controls=mapped,
            summary=summary,
        )
    finally:
        LOG.clear()
