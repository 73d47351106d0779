"""
CKL serializer.

Inverse of the checklist parser. The layout is written line by line in a
fixed order rather than through an element tree so that the output matches
what DISA STIG Viewer itself writes: tab indentation, every ASSET field,
all eleven STIG_INFO pairs and 26 STIG_DATA pairs per VULN followed by its
CCI_REF pairs and status elements.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Union

from stig_mapper.checklist.models import STIGChecklist, STIGVulnerability
from stig_mapper.core.logging import LOG
from stig_mapper.io.file_ops import FO
from stig_mapper.xml.sanitizer import San
from stig_mapper.xml.schema import Sch

XML_DECL = '<?xml version="1.0" encoding="UTF-8"?>'


def _element(lines: List[str], depth: int, tag: str, value: object) -> None:
    pad = "\t" * depth
    lines.append(f"{pad}<{tag}>{San.xml(value)}</{tag}>")


def _pair(lines: List[str], depth: int, wrapper: str, name_tag: str, data_tag: str, name: str, value: str) -> None:
    pad = "\t" * depth
    lines.append(f"{pad}<{wrapper}>")
    _element(lines, depth + 1, name_tag, name)
    _element(lines, depth + 1, data_tag, value)
    lines.append(f"{pad}</{wrapper}>")


def _vuln_values(vuln: STIGVulnerability, checklist: STIGChecklist) -> Dict[str, str]:
    values = {key: getattr(vuln, attr) for key, attr in Sch.VULN.items()}
    values[Sch.STIG_REF] = checklist.stig_info.stig_ref
    values[Sch.TARGET_KEY] = checklist.asset.target_key
    return values


def generate_ckl_xml(checklist: STIGChecklist) -> str:
    """
    Render a checklist as CKL document text.

    Round-trips through ``parse_checklist`` for every field the format
    can carry.
    """
    lines: List[str] = [XML_DECL, f"<!--{Sch.COMMENT}-->", f"<{Sch.ROOT}>"]

    lines.append(f"\t<{Sch.ASSET_BLOCK}>")
    for tag, attr in Sch.ASSET.items():
        value = getattr(checklist.asset, attr)
        if isinstance(value, bool):
            value = "true" if value else "false"
        _element(lines, 2, tag, value)
    lines.append(f"\t</{Sch.ASSET_BLOCK}>")

    lines.append(f"\t<{Sch.STIGS}>")
    lines.append(f"\t\t<{Sch.ISTIG}>")
    lines.append(f"\t\t\t<{Sch.STIG_INFO}>")
    for key, attr in Sch.STIG.items():
        _pair(lines, 4, Sch.SI_DATA, Sch.SID_NAME, Sch.SID_DATA, key, getattr(checklist.stig_info, attr))
    lines.append(f"\t\t\t</{Sch.STIG_INFO}>")

    for vuln in checklist.vulnerabilities:
        lines.append(f"\t\t\t<{Sch.VULN_BLOCK}>")
        values = _vuln_values(vuln, checklist)
        for name in Sch.VULN_ORDER:
            value = values.get(name, Sch.DEFS.get(name, ""))
            _pair(lines, 4, Sch.STIG_DATA, Sch.VULN_ATTRIBUTE, Sch.ATTRIBUTE_DATA, name, value)
        for cci in vuln.cci_refs:
            _pair(lines, 4, Sch.STIG_DATA, Sch.VULN_ATTRIBUTE, Sch.ATTRIBUTE_DATA, Sch.CCI_REF, cci)
        for tag, attr in Sch.STATUS.items():
            _element(lines, 4, tag, getattr(vuln, attr) or "")
        lines.append(f"\t\t\t</{Sch.VULN_BLOCK}>")

    lines.append(f"\t\t</{Sch.ISTIG}>")
    lines.append(f"\t</{Sch.STIGS}>")
    lines.append(f"</{Sch.ROOT}>")
    return "\n".join(lines) + "\n"


def export_checklist(checklist: STIGChecklist, path: Union[str, Path]) -> Path:
    """Write a checklist to ``path`` atomically.

    Raises:
        FileError: If the file cannot be written
    """
    xml_text = generate_ckl_xml(checklist)
    with FO.atomic(path, mode="w") as handle:
        handle.write(xml_text)
    LOG.i(f"Checklist exported to {path} ({len(checklist.vulnerabilities)} vulnerabilities)")
    return Path(path)
