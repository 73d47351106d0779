"""CCI-based mapping of STIG findings to NIST SP 800-53 controls."""

from __future__ import annotations

from stig_mapper.mapping.models import MappedControl, MappingSummary, MappingResult
from stig_mapper.mapping.mapper import (
    build_cci_index,
    map_stig_to_nist_controls,
    summarize,
    create_mapping_result,
)

__all__ = [
    "MappedControl",
    "MappingSummary",
    "MappingResult",
    "build_cci_index",
    "map_stig_to_nist_controls",
    "summarize",
    "create_mapping_result",
]
