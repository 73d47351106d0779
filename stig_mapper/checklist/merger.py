"""
Checklist merging.

Several CKL files (typically one per host or per STIG) are combined into
one logical checklist by concatenating their findings in input order. The
first document's asset and STIG_INFO metadata is kept.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

from stig_mapper.checklist.models import STIGChecklist, STIGVulnerability
from stig_mapper.checklist.parser import load_checklist
from stig_mapper.core.config import Cfg
from stig_mapper.core.logging import LOG
from stig_mapper.exceptions import MergeError


class MergePolicy(str, Enum):
    """What to do when a later checklist's metadata differs from the first."""

    FIRST = "first"    # keep the first document's metadata, warn
    STRICT = "strict"  # raise MergeError


def _differences(base: STIGChecklist, other: STIGChecklist) -> List[str]:
    diffs: List[str] = []
    if base.asset != other.asset:
        diffs.append("asset")
    if base.stig_info != other.stig_info:
        diffs.append("stig_info")
    return diffs


def merge_parsed(
    checklists: Iterable[STIGChecklist],
    policy: MergePolicy = MergePolicy.FIRST,
    names: Optional[List[str]] = None,
) -> STIGChecklist:
    """
    Merge already-parsed checklists.

    Args:
        checklists: Checklists in merge order
        policy: Metadata mismatch policy
        names: Optional display names, parallel to ``checklists``

    Raises:
        MergeError: If no checklist is given, or on a metadata mismatch
                    under ``MergePolicy.STRICT``
    """
    items = list(checklists)
    if not items:
        raise MergeError("No checklist files provided.")

    base = items[0]
    vulns: List[STIGVulnerability] = list(base.vulnerabilities)
    for idx, other in enumerate(items[1:], 1):
        label = names[idx] if names and idx < len(names) else f"#{idx + 1}"
        diffs = _differences(base, other)
        if diffs:
            if policy is MergePolicy.STRICT:
                raise MergeError(
                    "Checklist metadata differs from the first checklist",
                    {"checklist": label, "fields": ",".join(diffs)},
                )
            LOG.w(f"Checklist {label}: {', '.join(diffs)} differ from the first checklist; keeping the first")
        vulns.extend(other.vulnerabilities)

    return replace(base, vulnerabilities=tuple(vulns))


def merge_checklists(
    paths: Iterable[Union[str, Path]],
    policy: MergePolicy = MergePolicy.FIRST,
) -> STIGChecklist:
    """
    Parse and merge CKL files.

    Args:
        paths: One or more checklist paths, in merge order
        policy: Metadata mismatch policy

    Returns:
        One checklist holding every document's findings

    Raises:
        MergeError: If ``paths`` is empty, exceeds ``Cfg.MAX_MERGE``, or
                    on a strict-policy metadata mismatch
        FileError, ParseError: From the first file that fails
    """
    path_list = [Path(p) for p in paths]
    if not path_list:
        raise MergeError("No checklist files provided.")
    if len(path_list) > Cfg.MAX_MERGE:
        raise MergeError(f"Too many checklist files (limit {Cfg.MAX_MERGE})", {"count": len(path_list)})

    LOG.i(f"Merging {len(path_list)} checklist(s)")
    parsed = [load_checklist(p) for p in path_list]
    merged = merge_parsed(parsed, policy, [p.name for p in path_list])
    LOG.i(f"Merged {len(merged.vulnerabilities)} vulnerabilities")
    return merged
