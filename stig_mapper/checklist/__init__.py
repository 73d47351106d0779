"""CKL checklist models, parser, merger and serializer."""

from __future__ import annotations

from stig_mapper.checklist.models import AssetInfo, STIGInfo, STIGVulnerability, STIGChecklist
from stig_mapper.checklist.parser import parse_checklist, load_checklist
from stig_mapper.checklist.merger import MergePolicy, merge_checklists, merge_parsed
from stig_mapper.checklist.writer import generate_ckl_xml, export_checklist

__all__ = [
    "AssetInfo",
    "STIGInfo",
    "STIGVulnerability",
    "STIGChecklist",
    "parse_checklist",
    "load_checklist",
    "MergePolicy",
    "merge_checklists",
    "merge_parsed",
    "generate_ckl_xml",
    "export_checklist",
]
