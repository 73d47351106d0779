"""
STIG Mapper XML Schema Definitions.

Element names, field orders and default values for the two DISA document
families handled by the package:

- CKL checklists (CHECKLIST / ASSET / STIGS / iSTIG / STIG_INFO / VULN)
- The CCI list (cci_list / cci_items / cci_item / references / reference)

The tuples below fix the order in which the serializer writes fields;
STIG Viewer expects exactly this layout.
"""

from __future__ import annotations
from typing import Dict, Tuple

from stig_mapper.core.constants import STIG_VIEWER_VERSION


class Sch:
    """
    XML schema definitions for CKL and CCI list processing.

    Thread-safe: Yes (immutable class constants)
    """

    # Root element and version comment
    ROOT = "CHECKLIST"
    COMMENT = f"DISA STIG Viewer :: {STIG_VIEWER_VERSION}"

    # Block elements
    ASSET_BLOCK = "ASSET"
    STIGS = "STIGS"
    ISTIG = "iSTIG"
    STIG_INFO = "STIG_INFO"
    VULN_BLOCK = "VULN"

    # Key/value pair element names
    SI_DATA = "SI_DATA"
    SID_NAME = "SID_NAME"
    SID_DATA = "SID_DATA"
    STIG_DATA = "STIG_DATA"
    VULN_ATTRIBUTE = "VULN_ATTRIBUTE"
    ATTRIBUTE_DATA = "ATTRIBUTE_DATA"

    # Asset elements -> AssetInfo attribute, in document order
    ASSET: Dict[str, str] = {
        "ROLE": "role",
        "ASSET_TYPE": "asset_type",
        "MARKING": "marking",
        "HOST_NAME": "host_name",
        "HOST_IP": "host_ip",
        "HOST_MAC": "host_mac",
        "HOST_FQDN": "host_fqdn",
        "TARGET_COMMENT": "target_comment",
        "TECH_AREA": "tech_area",
        "TARGET_KEY": "target_key",
        "WEB_OR_DATABASE": "web_or_database",
        "WEB_DB_SITE": "web_db_site",
        "WEB_DB_INSTANCE": "web_db_instance",
    }

    # SID_NAME keys -> STIGInfo attribute, in document order
    STIG: Dict[str, str] = {
        "version": "version",
        "classification": "classification",
        "customname": "custom_name",
        "stigid": "stig_id",
        "description": "description",
        "filename": "file_name",
        "releaseinfo": "release_info",
        "title": "title",
        "uuid": "uuid",
        "notice": "notice",
        "source": "source",
    }

    # VULN_ATTRIBUTE names read into STIGVulnerability
    VULN: Dict[str, str] = {
        "Vuln_Num": "vuln_num",
        "Severity": "severity",
        "Group_Title": "group_title",
        "Rule_ID": "rule_id",
        "Rule_Ver": "rule_ver",
        "Rule_Title": "rule_title",
        "Vuln_Discuss": "vuln_discuss",
        "Check_Content": "check_content",
        "Fix_Text": "fix_text",
    }

    CCI_REF = "CCI_REF"
    STIG_REF = "STIGRef"
    TARGET_KEY = "TargetKey"

    # Full STIG_DATA order written for every VULN (CCI_REF pairs follow)
    VULN_ORDER: Tuple[str, ...] = (
        "Vuln_Num",
        "Severity",
        "Group_Title",
        "Rule_ID",
        "Rule_Ver",
        "Rule_Title",
        "Vuln_Discuss",
        "IA_Controls",
        "Check_Content",
        "Fix_Text",
        "False_Positives",
        "False_Negatives",
        "Documentable",
        "Mitigations",
        "Potential_Impact",
        "Third_Party_Tools",
        "Mitigation_Control",
        "Responsibility",
        "Security_Override_Guidance",
        "Check_Content_Ref",
        "Weight",
        "Class",
        "STIGRef",
        "TargetKey",
        "STIG_UUID",
        "LEGACY_ID",
    )

    # Direct VULN children -> STIGVulnerability attribute, in document order
    STATUS: Dict[str, str] = {
        "STATUS": "status",
        "FINDING_DETAILS": "finding_details",
        "COMMENTS": "comments",
        "SEVERITY_OVERRIDE": "severity_override",
        "SEVERITY_JUSTIFICATION": "severity_justification",
    }

    # Written for STIG_DATA attributes the model has no slot for
    DEFS: Dict[str, str] = {
        "Check_Content_Ref": "M",
        "Weight": "10.0",
        "Class": "Unclass",
        "Documentable": "false",
    }

    # CCI list element and attribute names
    CCI_ITEM = "cci_item"
    CCI_REFERENCES = "references"
    CCI_REFERENCE = "reference"
    CCI_ID_ATTR = "id"
    CCI_TITLE_ATTR = "title"
    CCI_INDEX_ATTR = "index"
    NIST_TITLE = "NIST SP 800-53"

    # cci_item children -> CCIMapping attribute
    CCI_TEXT: Dict[str, str] = {
        "definition": "definition",
        "type": "cci_type",
        "status": "status",
        "publishdate": "publish_date",
    }

    TITLE_LIMIT = 100

    @staticmethod
    def strip_ns(tag: str) -> str:
        """
        Remove namespace prefix from tag.

        Example:
            >>> Sch.strip_ns("{http://iase.disa.mil/cci}cci_item")
            'cci_item'
            >>> Sch.strip_ns("VULN")
            'VULN'
        """
        if '}' in tag:
            return tag.split('}', 1)[1]
        return tag
