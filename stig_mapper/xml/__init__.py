"""
XML processing modules.

Element-name schema, output escaping and the defusedxml-backed tag stream
shared by the CKL and CCI list parsers.
"""

from __future__ import annotations

from stig_mapper.xml.schema import Sch
from stig_mapper.xml.sanitizer import San
from stig_mapper.xml.stream import iter_events

__all__ = [
    "Sch",
    "San",
    "iter_events",
]
