"""
CKL checklist parser.

The document is read as a tag stream by a small state machine. Exactly one
of four contexts is active at a time:

    NONE -> ASSET -> NONE
    NONE -> STIG_INFO -> NONE
    NONE -> VULN -> NONE

Each context owns its own accumulator, which is projected onto the target
dataclass when the context is left. Unknown elements are ignored.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from stig_mapper.checklist.models import AssetInfo, STIGChecklist, STIGInfo, STIGVulnerability
from stig_mapper.core.logging import LOG
from stig_mapper.io.file_ops import FO
from stig_mapper.xml.schema import Sch
from stig_mapper.xml.stream import iter_events


class _Ctx(Enum):
    NONE = "none"
    ASSET = "asset"
    STIG_INFO = "stig_info"
    VULN = "vuln"


_ENTER = {
    Sch.ASSET_BLOCK: _Ctx.ASSET,
    Sch.STIG_INFO: _Ctx.STIG_INFO,
    Sch.VULN_BLOCK: _Ctx.VULN,
}


class _Reader:
    """Per-document parse state. Never shared between calls."""

    def __init__(self) -> None:
        self.ctx = _Ctx.NONE
        self.asset = AssetInfo()
        self.stig_info = STIGInfo()
        self.vulns: List[STIGVulnerability] = []
        self._reset()

    def _reset(self) -> None:
        self.pairs: Dict[str, str] = {}
        self.direct: Dict[str, str] = {}
        self.cci_refs: List[str] = []
        self.pending: Optional[str] = None

    # ------------------------------------------------------------------ events
    def start(self, tag: str) -> None:
        if self.ctx is _Ctx.NONE and tag in _ENTER:
            self.ctx = _ENTER[tag]
            self._reset()

    def end(self, tag: str, text: str) -> None:
        if self.ctx is _Ctx.NONE:
            return
        if _ENTER.get(tag) is self.ctx:
            self._flush()
            self.ctx = _Ctx.NONE
            return

        if self.ctx is _Ctx.ASSET:
            if tag in Sch.ASSET:
                self.direct[tag] = text
        elif self.ctx is _Ctx.STIG_INFO:
            self._pair(tag, text, Sch.SID_NAME, Sch.SID_DATA, lower=True)
        else:
            if tag in Sch.STATUS:
                self.direct[tag] = text
            else:
                self._pair(tag, text, Sch.VULN_ATTRIBUTE, Sch.ATTRIBUTE_DATA)

    def _pair(self, tag: str, text: str, name_tag: str, data_tag: str, lower: bool = False) -> None:
        if tag == name_tag:
            self.pending = text.lower() if lower else text
        elif tag == data_tag and self.pending is not None:
            if self.pending == Sch.CCI_REF:
                if text:
                    self.cci_refs.append(text)
            else:
                self.pairs[self.pending] = text
            self.pending = None

    # ---------------------------------------------------------------- flushing
    def _flush(self) -> None:
        if self.ctx is _Ctx.ASSET:
            self.asset = self._build_asset()
        elif self.ctx is _Ctx.STIG_INFO:
            self.stig_info = STIGInfo(
                **{attr: self.pairs.get(key, "") for key, attr in Sch.STIG.items()}
            )
        elif self.ctx is _Ctx.VULN:
            self.vulns.append(self._build_vuln())
        self._reset()

    def _build_asset(self) -> AssetInfo:
        values: Dict[str, object] = {}
        for tag, attr in Sch.ASSET.items():
            text = self.direct.get(tag, "")
            values[attr] = text.lower() == "true" if attr == "web_or_database" else text
        return AssetInfo(**values)

    def _build_vuln(self) -> STIGVulnerability:
        values: Dict[str, object] = {
            attr: self.pairs.get(key, "") for key, attr in Sch.VULN.items()
        }
        for tag, attr in Sch.STATUS.items():
            text = self.direct.get(tag, "")
            if attr in ("severity_override", "severity_justification"):
                values[attr] = text or None
            else:
                values[attr] = text
        values["cci_refs"] = tuple(self.cci_refs)
        values["stig_id"] = values["rule_ver"]
        return STIGVulnerability(**values)

    def result(self) -> STIGChecklist:
        return STIGChecklist(
            asset=self.asset,
            stig_info=self.stig_info,
            vulnerabilities=tuple(self.vulns),
        )


def parse_checklist(text: str, source: Optional[str] = None) -> STIGChecklist:
    """
    Parse CKL document text.

    Args:
        text: Checklist XML
        source: Name used in log and error context

    Returns:
        The parsed checklist

    Raises:
        ParseError: If the document is not well-formed XML
    """
    reader = _Reader()
    for event, tag, elem in iter_events(text, source):
        if event == "start":
            reader.start(tag)
            continue
        reader.end(tag, (elem.text or "").strip())
        if tag == Sch.VULN_BLOCK:
            elem.clear()

    checklist = reader.result()
    LOG.i(
        f"Parsed checklist {source or 'text'}: "
        f"{len(checklist.vulnerabilities)} vulnerabilities, host={checklist.asset.host_name or '-'}"
    )
    return checklist


def load_checklist(path: Union[str, Path]) -> STIGChecklist:
    """Read and parse a CKL file."""
    path = Path(path)
    LOG.ctx(op="load_checklist", file=path.name)
    try:
        return parse_checklist(FO.read(path), source=path.name)
    finally:
        LOG.clear()
