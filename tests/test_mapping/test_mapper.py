"""Tests for STIG to NIST control aggregation."""

import itertools
import unittest

from stig_mapper.catalog.models import CCIMapping
from stig_mapper.catalog.parser import parse_cci_list
from stig_mapper.checklist.models import STIGChecklist, STIGVulnerability
from stig_mapper.checklist.parser import parse_checklist
from stig_mapper.core.constants import ComplianceStatus, RiskLevel
from stig_mapper.exceptions import ValidationError
from stig_mapper.mapping.mapper import (
    build_cci_index,
    create_mapping_result,
    map_stig_to_nist_controls,
    summarize,
)
from stig_mapper.mapping.models import MappedControl
from tests.samples import SAMPLE_CCI, SAMPLE_CKL


def _vuln(num, status, severity, ccis):
    return STIGVulnerability(vuln_num=num, status=status, severity=severity, cci_refs=tuple(ccis))


def _checklist(*vulns):
    return STIGChecklist(vulnerabilities=tuple(vulns))


class TestScenario(unittest.TestCase):
    """One open high finding and one closed low finding on the same control."""

    def setUp(self):
        self.catalog = [CCIMapping(id="CCI-000001", nist_controls=("AC-2",))]
        self.v1 = _vuln("V-1", "Open", "high", ["CCI-000001"])
        self.v2 = _vuln("V-2", "NotAFinding", "low", ["CCI-000001"])
        self.checklist = _checklist(self.v1, self.v2)

    def test_mapped_control(self):
        """Test that one open high and one closed low finding give a non-compliant high-risk control."""
        [control] = map_stig_to_nist_controls(self.checklist, self.catalog)
        self.assertEqual(control.nist_control, "AC-2")
        self.assertEqual(control.ccis, ["CCI-000001"])
        self.assertEqual(control.stigs, [self.v1, self.v2])
        self.assertIs(control.compliance_status, ComplianceStatus.NON_COMPLIANT)
        self.assertIs(control.risk_level, RiskLevel.HIGH)
        self.assertEqual(control.findings_count, 2)

    def test_summary(self):
        """Test the summary for the two-finding scenario."""
        result = create_mapping_result(self.checklist, self.catalog)
        summary = result.summary
        self.assertEqual(summary.total_controls, 1)
        self.assertEqual(summary.non_compliant_controls, 1)
        self.assertEqual(summary.compliant_controls, 0)
        self.assertEqual(summary.high_risk_findings, 1)
        self.assertEqual(summary.medium_risk_findings, 0)
        self.assertEqual(summary.low_risk_findings, 0)


class TestVerdicts(unittest.TestCase):
    """Compliance and risk reduction."""

    catalog = [CCIMapping(id="CCI-1", nist_controls=("AC-1",))]

    def _control(self, *vulns):
        [control] = map_stig_to_nist_controls(_checklist(*vulns), self.catalog)
        return control

    def test_compliant(self):
        """Test that only NotAFinding findings give a compliant control."""
        control = self._control(_vuln("V-1", "NotAFinding", "medium", ["CCI-1"]))
        self.assertIs(control.compliance_status, ComplianceStatus.COMPLIANT)
        self.assertIs(control.risk_level, RiskLevel.MEDIUM)

    def test_compliant_beats_not_applicable(self):
        """Test that a compliant finding outranks not applicable."""
        control = self._control(
            _vuln("V-1", "Not_Applicable", "low", ["CCI-1"]),
            _vuln("V-2", "NotAFinding", "low", ["CCI-1"]),
        )
        self.assertIs(control.compliance_status, ComplianceStatus.COMPLIANT)

    def test_not_applicable_spellings(self):
        """Test that both not-applicable spellings are recognised."""
        for status in ("Not_Applicable", "NotApplicable"):
            control = self._control(_vuln("V-1", status, "low", ["CCI-1"]))
            self.assertIs(control.compliance_status, ComplianceStatus.NOT_APPLICABLE)

    def test_not_reviewed(self):
        """Test that an unreviewed finding leaves the control not reviewed."""
        control = self._control(_vuln("V-1", "Not_Reviewed", "low", ["CCI-1"]))
        self.assertIs(control.compliance_status, ComplianceStatus.NOT_REVIEWED)

    def test_not_applicable_beats_not_reviewed(self):
        """Test that not applicable outranks not reviewed."""
        control = self._control(
            _vuln("V-1", "Not_Reviewed", "low", ["CCI-1"]),
            _vuln("V-2", "NotApplicable", "low", ["CCI-1"]),
        )
        self.assertIs(control.compliance_status, ComplianceStatus.NOT_APPLICABLE)

    def test_risk_ignores_status(self):
        """Test that risk is the highest severity whatever the status."""
        control = self._control(
            _vuln("V-1", "NotAFinding", "high", ["CCI-1"]),
            _vuln("V-2", "Open", "low", ["CCI-1"]),
        )
        self.assertIs(control.risk_level, RiskLevel.HIGH)

    def test_severity_case_insensitive(self):
        """Test that severity matching ignores case."""
        control = self._control(_vuln("V-1", "Open", "HIGH", ["CCI-1"]))
        self.assertIs(control.risk_level, RiskLevel.HIGH)

    def test_order_independent(self):
        """Test that verdicts do not depend on finding order."""
        vulns = [
            _vuln("V-1", "Open", "low", ["CCI-1"]),
            _vuln("V-2", "NotAFinding", "high", ["CCI-1"]),
            _vuln("V-3", "Not_Applicable", "medium", ["CCI-1"]),
            _vuln("V-4", "Not_Reviewed", "low", ["CCI-1"]),
        ]
        verdicts = set()
        for perm in itertools.permutations(vulns):
            control = self._control(*perm)
            verdicts.add((control.compliance_status, control.risk_level, frozenset(s.vuln_num for s in control.stigs)))
        self.assertEqual(
            verdicts,
            {(ComplianceStatus.NON_COMPLIANT, RiskLevel.HIGH, frozenset({"V-1", "V-2", "V-3", "V-4"}))},
        )


class TestCorrelation(unittest.TestCase):
    """Finding to control correlation."""

    def test_deduplication(self):
        """Test that repeated CCIs and findings are listed once."""
        catalog = [
            CCIMapping(id="CCI-1", nist_controls=("AC-1",)),
            CCIMapping(id="CCI-2", nist_controls=("AC-1",)),
        ]
        vuln = _vuln("V-1", "Open", "medium", ["CCI-1", "CCI-1", "CCI-2"])
        [control] = map_stig_to_nist_controls(_checklist(vuln), catalog)
        self.assertEqual(control.ccis, ["CCI-1", "CCI-2"])
        self.assertEqual(control.stigs, [vuln])

    def test_finding_shared_across_controls(self):
        """Test that one finding is attached to every control its CCI maps to."""
        catalog = [CCIMapping(id="CCI-1", nist_controls=("AC-1", "AU-2"))]
        vuln = _vuln("V-1", "Open", "high", ["CCI-1"])
        controls = map_stig_to_nist_controls(_checklist(vuln), catalog)
        self.assertEqual([c.nist_control for c in controls], ["AC-1", "AU-2"])
        self.assertIs(controls[0].stigs[0], controls[1].stigs[0])

    def test_unknown_cci_skipped(self):
        """Test that CCIs missing from the catalog are skipped."""
        catalog = [CCIMapping(id="CCI-1", nist_controls=("AC-1",))]
        vuln = _vuln("V-1", "Open", "high", ["CCI-404", "CCI-1"])
        [control] = map_stig_to_nist_controls(_checklist(vuln), catalog)
        self.assertEqual(control.ccis, ["CCI-1"])

    def test_cci_without_controls(self):
        """Test that a CCI with no controls yields nothing."""
        catalog = [CCIMapping(id="CCI-1")]
        self.assertEqual(map_stig_to_nist_controls(_checklist(_vuln("V-1", "Open", "high", ["CCI-1"])), catalog), [])

    def test_empty_inputs(self):
        """Test mapping and summarizing empty inputs."""
        self.assertEqual(map_stig_to_nist_controls(_checklist(), []), [])
        summary = summarize([], [])
        self.assertEqual(summary.total_controls, 0)
        self.assertEqual(summary.high_risk_findings, 0)

    def test_sorted_by_control(self):
        """Test that controls are sorted by identifier."""
        catalog = [CCIMapping(id="CCI-1", nist_controls=("SI-4", "AC-2", "AU-12"))]
        controls = map_stig_to_nist_controls(_checklist(_vuln("V-1", "Open", "low", ["CCI-1"])), catalog)
        self.assertEqual([c.nist_control for c in controls], ["AC-2", "AU-12", "SI-4"])

    def test_index_last_record_wins(self):
        """Test that a later catalog record replaces an earlier one with the same id."""
        index = build_cci_index([
            CCIMapping(id="CCI-1", nist_controls=("AC-1",)),
            CCIMapping(id="CCI-1", nist_controls=("AC-9",)),
        ])
        self.assertEqual(index["CCI-1"], ("AC-9",))


class TestSummary(unittest.TestCase):
    """Finding counts come from the raw finding list."""

    def test_finding_counted_once(self):
        """Test that risk counts come from open findings, not from controls."""
        catalog = [CCIMapping(id="CCI-1", nist_controls=("AC-1", "AC-2", "AC-3"))]
        checklist = _checklist(
            _vuln("V-1", "Open", "high", ["CCI-1"]),
            _vuln("V-2", "Open", "Medium", ["CCI-1"]),
            _vuln("V-3", "NotAFinding", "high", ["CCI-1"]),
            _vuln("V-4", "Open", "low", []),
        )
        summary = summarize(map_stig_to_nist_controls(checklist, catalog), checklist.vulnerabilities)
        self.assertEqual(summary.total_controls, 3)
        self.assertEqual(summary.non_compliant_controls, 3)
        self.assertEqual(summary.high_risk_findings, 1)
        self.assertEqual(summary.medium_risk_findings, 1)
        self.assertEqual(summary.low_risk_findings, 1)


class TestSampleDocuments(unittest.TestCase):
    """End-to-end over the sample checklist and CCI list."""

    def test_sample_mapping(self):
        """Test mapping the sample checklist against the sample CCI list."""
        result = create_mapping_result(parse_checklist(SAMPLE_CKL), parse_cci_list(SAMPLE_CCI))
        by_control = {c.nist_control: c for c in result.mapped_controls}
        self.assertEqual(
            [c.nist_control for c in result.mapped_controls],
            ["AC-1 a", "AC-1 a 1", "AC-1.1 (i and ii)", "AC-2", "AU-12"],
        )
        ac2 = by_control["AC-2"]
        self.assertEqual(ac2.ccis, ["CCI-000002", "CCI-000003"])
        self.assertEqual([s.vuln_num for s in ac2.stigs], ["V-1001", "V-1002"])
        self.assertIs(ac2.compliance_status, ComplianceStatus.NON_COMPLIANT)
        self.assertIs(ac2.risk_level, RiskLevel.HIGH)

        au12 = by_control["AU-12"]
        self.assertIs(au12.compliance_status, ComplianceStatus.COMPLIANT)
        self.assertIs(au12.risk_level, RiskLevel.LOW)

        self.assertEqual(result.summary.non_compliant_controls, 4)
        self.assertEqual(result.summary.compliant_controls, 1)
        self.assertEqual(result.summary.high_risk_findings, 1)
        self.assertEqual(len(result.cci_mappings), 3)


class TestAbsorb(unittest.TestCase):
    """Combining partial results computed over disjoint shards."""

    def test_sharded_equals_whole(self):
        """Test that absorbing shard results matches mapping the whole checklist."""
        catalog = [CCIMapping(id="CCI-1", nist_controls=("AC-1",)), CCIMapping(id="CCI-2", nist_controls=("AC-1",))]
        vulns = [
            _vuln("V-1", "NotAFinding", "low", ["CCI-1"]),
            _vuln("V-2", "Open", "medium", ["CCI-2"]),
            _vuln("V-3", "Not_Applicable", "high", ["CCI-1"]),
        ]
        [whole] = map_stig_to_nist_controls(_checklist(*vulns), catalog)
        [left] = map_stig_to_nist_controls(_checklist(vulns[0]), catalog)
        [right] = map_stig_to_nist_controls(_checklist(*vulns[1:]), catalog)
        left.absorb(right)
        self.assertEqual(left.compliance_status, whole.compliance_status)
        self.assertEqual(left.risk_level, whole.risk_level)
        self.assertEqual(set(left.ccis), set(whole.ccis))
        self.assertEqual({s.vuln_num for s in left.stigs}, {s.vuln_num for s in whole.stigs})

    def test_absorb_deduplicates(self):
        """Test that absorb does not duplicate CCIs or findings."""
        vuln = _vuln("V-1", "Open", "low", ["CCI-1"])
        a = MappedControl("AC-1")
        a.add("CCI-1", vuln)
        b = MappedControl("AC-1")
        b.add("CCI-1", vuln)
        a.absorb(b)
        self.assertEqual(a.ccis, ["CCI-1"])
        self.assertEqual(a.findings_count, 1)

    def test_absorb_other_control_rejected(self):
        """Test that absorbing a different control raises ValidationError."""
        with self.assertRaises(ValidationError):
            MappedControl("AC-1").absorb(MappedControl("AC-2"))


if __name__ == "__main__":
    unittest.main()
