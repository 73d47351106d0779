"""CCI list (Control Correlation Identifier catalog) parsing."""

from __future__ import annotations

from stig_mapper.catalog.models import CCIMapping
from stig_mapper.catalog.parser import parse_cci_list, load_cci_list, derive_title

__all__ = [
    "CCIMapping",
    "parse_cci_list",
    "load_cci_list",
    "derive_title",
]
