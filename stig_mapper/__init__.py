"""STIG Mapper - STIG checklist to NIST SP 800-53 traceability engine.

Parses DISA STIG checklists (CKL) and the DISA CCI list, correlates
findings to NIST SP 800-53 controls through their CCI references, and
derives per-control compliance and risk status. Checklists can be
re-emitted in the CKL format consumed by DISA STIG Viewer.

Package Structure:
    core/           - Constants, configuration, logging
    xml/            - Element names, escaping, defusedxml tag stream
    io/             - File reading and atomic writes
    catalog/        - CCI list parser
    checklist/      - CKL parser, merger and serializer
    mapping/        - CCI -> NIST control aggregation and summary
    ui/             - Command-line interface
"""

from __future__ import annotations

from stig_mapper.core.constants import VERSION, BUILD_DATE, APP_NAME, STIG_VIEWER_VERSION
from stig_mapper.exceptions import (
    StigError,
    ValidationError,
    FileError,
    ParseError,
    MergeError,
)
from stig_mapper.catalog import CCIMapping, parse_cci_list, load_cci_list
from stig_mapper.checklist import (
    AssetInfo,
    STIGInfo,
    STIGVulnerability,
    STIGChecklist,
    MergePolicy,
    parse_checklist,
    load_checklist,
    merge_checklists,
    generate_ckl_xml,
    export_checklist,
)
from stig_mapper.mapping import (
    MappedControl,
    MappingSummary,
    MappingResult,
    map_stig_to_nist_controls,
    summarize,
    create_mapping_result,
)

__version__ = VERSION
__build_date__ = BUILD_DATE
__app_name__ = APP_NAME
__stig_viewer_version__ = STIG_VIEWER_VERSION

__all__ = [
    "VERSION",
    "BUILD_DATE",
    "APP_NAME",
    "STIG_VIEWER_VERSION",
    "StigError",
    "ValidationError",
    "FileError",
    "ParseError",
    "MergeError",
    "CCIMapping",
    "parse_cci_list",
    "load_cci_list",
    "AssetInfo",
    "STIGInfo",
    "STIGVulnerability",
    "STIGChecklist",
    "MergePolicy",
    "parse_checklist",
    "load_checklist",
    "merge_checklists",
    "generate_ckl_xml",
    "export_checklist",
    "MappedControl",
    "MappingSummary",
    "MappingResult",
    "map_stig_to_nist_controls",
    "summarize",
    "create_mapping_result",
]
