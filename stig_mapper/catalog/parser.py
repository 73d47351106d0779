"""
CCI list parser.

Walks the DISA CCI list as a tag stream. Each ``cci_item`` becomes one
``CCIMapping``; its NIST controls come from ``reference`` entries whose
title names NIST SP 800-53. Items without an ``id`` are dropped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from stig_mapper.catalog.models import CCIMapping
from stig_mapper.core.logging import LOG
from stig_mapper.io.file_ops import FO
from stig_mapper.xml.schema import Sch
from stig_mapper.xml.stream import iter_events


def derive_title(definition: str) -> str:
    """Leading sentence of a definition, or its first 100 characters."""
    if "." in definition:
        return definition.split(".", 1)[0]
    return definition[: Sch.TITLE_LIMIT]


class _Item:
    """Accumulator for the cci_item being read."""

    def __init__(self, cci_id: str):
        self.id = cci_id
        self.text: Dict[str, str] = {}
        self.controls: List[str] = []

    def add_reference(self, title: str, index: str) -> None:
        if Sch.NIST_TITLE not in title:
            return
        index = index.strip()
        if index and index not in self.controls:
            self.controls.append(index)

    def build(self) -> CCIMapping:
        definition = self.text.get("definition", "")
        return CCIMapping(
            id=self.id,
            title=derive_title(definition),
            definition=definition,
            nist_controls=tuple(self.controls),
            cci_type=self.text.get("cci_type", ""),
            status=self.text.get("status", ""),
            publish_date=self.text.get("publish_date", ""),
        )


def parse_cci_list(text: str, source: Optional[str] = None) -> List[CCIMapping]:
    """
    Parse CCI list document text.

    Args:
        text: CCI list XML
        source: Name used in log and error context

    Returns:
        CCI records in document order

    Raises:
        ParseError: If the document is not well-formed XML
    """
    mappings: List[CCIMapping] = []
    current: Optional[_Item] = None
    in_references = False
    dropped = 0

    for event, tag, elem in iter_events(text, source):
        if event == "start":
            if tag == Sch.CCI_ITEM:
                current = _Item(elem.get(Sch.CCI_ID_ATTR, "").strip())
            elif tag == Sch.CCI_REFERENCES:
                in_references = True
            continue

        if current is not None:
            if tag in Sch.CCI_TEXT:
                current.text[Sch.CCI_TEXT[tag]] = (elem.text or "").strip()
            elif tag == Sch.CCI_REFERENCE and in_references:
                current.add_reference(
                    elem.get(Sch.CCI_TITLE_ATTR, ""),
                    elem.get(Sch.CCI_INDEX_ATTR, ""),
                )

        if tag == Sch.CCI_REFERENCES:
            in_references = False
        elif tag == Sch.CCI_ITEM:
            if current is not None and current.id:
                mappings.append(current.build())
            else:
                dropped += 1
            current = None
            elem.clear()

    if dropped:
        LOG.d(f"Dropped {dropped} cci_item(s) without an id")
    LOG.i(f"Parsed {len(mappings)} CCI mappings from {source or 'text'}")
    return mappings


def load_cci_list(path: Union[str, Path]) -> List[CCIMapping]:
    """Read and parse a CCI list file."""
    path = Path(path)
    LOG.ctx(op="load_cci_list", file=path.name)
    try:
        return parse_cci_list(FO.read(path), source=path.name)
    finally:
        LOG.clear()
