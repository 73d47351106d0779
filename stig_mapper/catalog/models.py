"""CCI list record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from stig_mapper.exceptions import ValidationError


@dataclass(frozen=True)
class CCIMapping:
    """
    One Control Correlation Identifier from the DISA CCI list.

    Attributes:
        id: CCI identifier (e.g. "CCI-000001")
        title: Leading sentence of the definition (at most 100 chars
            when the definition has no sentence break)
        definition: Full definition text
        nist_controls: NIST SP 800-53 control indexes, deduplicated,
            in document order
        cci_type: Item type (e.g. "policy", "technical")
        status: Lifecycle status (e.g. "draft", "published")
        publish_date: Publish date as written in the list

    Thread-safe: Yes (immutable after creation)
    """

    id: str
    title: str = ""
    definition: str = ""
    nist_controls: Tuple[str, ...] = field(default_factory=tuple)
    cci_type: str = ""
    status: str = ""
    publish_date: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "definition": self.definition,
            "nist_controls": list(self.nist_controls),
            "cci_type": self.cci_type,
            "status": self.status,
            "publish_date": self.publish_date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CCIMapping":
        if not isinstance(data, dict):
            raise ValidationError("CCI mapping payload must be object")
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            definition=str(data.get("definition", "")),
            nist_controls=tuple(data.get("nist_controls") or ()),
            cci_type=str(data.get("cci_type", "")),
            status=str(data.get("status", "")),
            publish_date=str(data.get("publish_date", "")),
        )
