"""
Checklist dataclasses.

A ``STIGChecklist`` is the parsed form of one CKL document (or several
merged ones): the target asset, the benchmark (STIG_INFO) metadata and the
ordered list of findings. All models are immutable; edits are expressed
with ``dataclasses.replace`` and re-serialized.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple

from stig_mapper.exceptions import ValidationError


def _text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _opt_text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return None if value in (None, "") else str(value)


@dataclass(frozen=True)
class AssetInfo:
    """Target asset described by the ASSET block."""

    role: str = ""
    asset_type: str = ""
    marking: str = ""
    host_name: str = ""
    host_ip: str = ""
    host_mac: str = ""
    host_fqdn: str = ""
    target_comment: str = ""
    tech_area: str = ""
    target_key: str = ""
    web_or_database: bool = False
    web_db_site: str = ""
    web_db_instance: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetInfo":
        if not isinstance(data, dict):
            raise ValidationError("Asset payload must be object")
        values: Dict[str, Any] = {
            f.name: _text(data, f.name) for f in fields(cls) if f.name != "web_or_database"
        }
        values["web_or_database"] = bool(data.get("web_or_database", False))
        return cls(**values)


@dataclass(frozen=True)
class STIGInfo:
    """Benchmark metadata from the STIG_INFO block.

    Keys missing from the document are empty strings.
    """

    version: str = ""
    classification: str = ""
    custom_name: str = ""
    stig_id: str = ""
    description: str = ""
    file_name: str = ""
    release_info: str = ""
    title: str = ""
    uuid: str = ""
    notice: str = ""
    source: str = ""

    @property
    def stig_ref(self) -> str:
        """Value written to each VULN's STIGRef pair."""
        return f"{self.title} :: {self.release_info}"

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "STIGInfo":
        if not isinstance(data, dict):
            raise ValidationError("STIG info payload must be object")
        return cls(**{f.name: _text(data, f.name) for f in fields(cls)})


@dataclass(frozen=True)
class STIGVulnerability:
    """
    One finding (VULN block).

    Attributes:
        vuln_num: Natural key (e.g. "V-12345")
        severity: high/medium/low as written (compare case-insensitively)
        rule_ver: Rule version; ``stig_id`` carries the same value
        cci_refs: CCI references in document order, duplicates kept
        status: Open, NotAFinding, Not_Applicable or Not_Reviewed
        severity_override: None when the element is empty or absent

    Thread-safe: Yes (immutable after creation)
    """

    vuln_num: str = ""
    severity: str = ""
    group_title: str = ""
    rule_id: str = ""
    rule_ver: str = ""
    rule_title: str = ""
    vuln_discuss: str = ""
    check_content: str = ""
    fix_text: str = ""
    cci_refs: Tuple[str, ...] = field(default_factory=tuple)
    status: str = ""
    finding_details: str = ""
    comments: str = ""
    severity_override: Optional[str] = None
    severity_justification: Optional[str] = None
    stig_id: str = ""

    def as_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["cci_refs"] = list(self.cci_refs)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "STIGVulnerability":
        if not isinstance(data, dict):
            raise ValidationError("Vulnerability payload must be object")
        skip = {"cci_refs", "severity_override", "severity_justification"}
        values: Dict[str, Any] = {f.name: _text(data, f.name) for f in fields(cls) if f.name not in skip}
        values["cci_refs"] = tuple(str(c) for c in data.get("cci_refs") or ())
        values["severity_override"] = _opt_text(data, "severity_override")
        values["severity_justification"] = _opt_text(data, "severity_justification")
        return cls(**values)


@dataclass(frozen=True)
class STIGChecklist:
    """Asset + benchmark metadata + ordered findings."""

    asset: AssetInfo = field(default_factory=AssetInfo)
    stig_info: STIGInfo = field(default_factory=STIGInfo)
    vulnerabilities: Tuple[STIGVulnerability, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "asset": self.asset.as_dict(),
            "stig_info": self.stig_info.as_dict(),
            "vulnerabilities": [v.as_dict() for v in self.vulnerabilities],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "STIGChecklist":
        if not isinstance(data, dict):
            raise ValidationError("Checklist payload must be object")
        return cls(
            asset=AssetInfo.from_dict(data.get("asset") or {}),
            stig_info=STIGInfo.from_dict(data.get("stig_info") or {}),
            vulnerabilities=tuple(
                STIGVulnerability.from_dict(v) for v in data.get("vulnerabilities") or ()
            ),
        )
